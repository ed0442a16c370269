"""
OpenCode notification plugin.

Shows a desktop notification when a main agent session goes idle or a
permission prompt is raised.

Usage:
    from opencode_notify import notification_plugin

    plugin = await notification_plugin({"client": client})
    await plugin.event({"type": "session.idle", "properties": {"sessionID": sid}})
"""
from opencode_notify.dispatchers import (
    EventRouter,
    NotificationPlugin,
    PluginContext,
    notification_plugin,
)

__version__ = "0.1.0"

__all__ = [
    "EventRouter",
    "NotificationPlugin",
    "PluginContext",
    "notification_plugin",
]
