"""Ambient services: settings, structured logging, tracing."""
from .config import Settings, get_settings
from .logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from .tracing import traced, tracing_enabled

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "unbind_context",
    "traced",
    "tracing_enabled",
]
