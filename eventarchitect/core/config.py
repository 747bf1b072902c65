# config.py

"""Configuration for EventArchitect."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_ROOT = Path(os.getenv("EVENTARCHITECT_DATA_ROOT", str(PROJECT_ROOT / "data")))

# --- STORAGE ---
# sqlite | file | memory
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sqlite").lower()
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{DATA_ROOT / 'eventarchitect.db'}",
)
STORAGE_FILE = Path(os.getenv("STORAGE_FILE", str(DATA_ROOT / "projects.json")))

# --- GENERATIVE SERVICE ---
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL",
    "https://generativelanguage.googleapis.com/v1beta",
)

MODEL_TEXT = os.getenv("MODEL_TEXT", "gemini-3-flash-preview")
MODEL_PRO = os.getenv("MODEL_PRO", "gemini-3-pro-preview")
MODEL_IMAGE = os.getenv("MODEL_IMAGE", "gemini-2.5-flash-image")
MODEL_IMAGE_PRO = os.getenv("MODEL_IMAGE_PRO", "gemini-3-pro-image-preview")
MODEL_AUDIO = os.getenv("MODEL_AUDIO", "gemini-3-flash-preview")

# Transient failures are retried AI_MAX_RETRIES more times, delay doubling each attempt
AI_MAX_RETRIES = int(os.getenv("AI_MAX_RETRIES", "2"))
AI_RETRY_BASE_DELAY = float(os.getenv("AI_RETRY_BASE_DELAY", "2.0"))
AI_TIMEOUT = float(os.getenv("AI_TIMEOUT", "120"))

# Language used for client-facing summaries produced by the models
CLIENT_LANGUAGE = os.getenv("CLIENT_LANGUAGE", "Portuguese")

# --- LOGGING ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

# --- API ---
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))


class Settings:
    """Settings class for configuration."""

    def __init__(self):
        self.PROJECT_ROOT = PROJECT_ROOT
        self.DATA_ROOT = DATA_ROOT
        self.STORAGE_BACKEND = STORAGE_BACKEND
        self.DATABASE_URL = DATABASE_URL
        self.STORAGE_FILE = STORAGE_FILE
        self.GEMINI_API_KEY = GEMINI_API_KEY
        self.GEMINI_BASE_URL = GEMINI_BASE_URL
        self.MODEL_TEXT = MODEL_TEXT
        self.MODEL_PRO = MODEL_PRO
        self.MODEL_IMAGE = MODEL_IMAGE
        self.MODEL_IMAGE_PRO = MODEL_IMAGE_PRO
        self.MODEL_AUDIO = MODEL_AUDIO
        self.AI_MAX_RETRIES = AI_MAX_RETRIES
        self.AI_RETRY_BASE_DELAY = AI_RETRY_BASE_DELAY
        self.AI_TIMEOUT = AI_TIMEOUT
        self.CLIENT_LANGUAGE = CLIENT_LANGUAGE
        self.LOG_LEVEL = LOG_LEVEL
        self.LOG_FORMAT = LOG_FORMAT
        self.API_HOST = API_HOST
        self.API_PORT = API_PORT


# Global settings instance
settings = Settings()
