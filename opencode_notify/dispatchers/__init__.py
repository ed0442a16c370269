"""Event dispatchers for the OpenCode notification plugin."""
from .event_router import (
    EventRouter,
    NotificationPlugin,
    PluginContext,
    notification_plugin,
)

__all__ = [
    "EventRouter",
    "NotificationPlugin",
    "PluginContext",
    "notification_plugin",
]
