"""EventArchitect: event-design planning with AI-assisted proposals."""

__version__ = "0.1.0"
