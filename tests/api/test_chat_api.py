"""Tests for the chat endpoints."""

from tests.helpers.scripted import CHAT_RESPONSE


class TestChatSessions:

    def test_conversation(self, client):
        created = client.post("/api/v1/chat/sessions")
        assert created.status_code == 201
        session_id = created.json()["session_id"]

        reply = client.post(f"/api/v1/chat/sessions/{session_id}/messages", json={"text": "Lighting tips?"})
        assert reply.json()["reply"] == CHAT_RESPONSE

        messages = client.get(f"/api/v1/chat/sessions/{session_id}").json()["messages"]
        assert [m["role"] for m in messages] == ["model", "user", "model"]
        assert messages[0]["text"] == created.json()["greeting"]

    def test_closed_session(self, client):
        session_id = client.post("/api/v1/chat/sessions").json()["session_id"]
        assert client.delete(f"/api/v1/chat/sessions/{session_id}").json()["closed"] is True

        response = client.get(f"/api/v1/chat/sessions/{session_id}")
        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "CHAT_SESSION_NOT_FOUND"
