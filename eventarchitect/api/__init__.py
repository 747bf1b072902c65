"""HTTP API for EventArchitect."""
