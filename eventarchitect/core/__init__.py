"""
Core infrastructure for EventArchitect.

Shared components used across all modules:
- Configuration management
- Logging setup and per-task log context
"""

from eventarchitect.core.config import settings, Settings
from eventarchitect.core.logging import ContextFilter, configure_logging, log_context

__all__ = [
    "settings",
    "Settings",
    "ContextFilter",
    "configure_logging",
    "log_context",
]
