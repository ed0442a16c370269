"""
Event Router - Turn OpenCode runtime events into desktop notifications.

Event types:
- session.idle: Notify when a main session finishes; subagent sessions are skipped
- permission.asked: Always notify, no session check
- anything else: Ignored

Each event is handled on its own; nothing is remembered between events.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from opencode_notify.config import NotificationText, resolve_icon_path
from opencode_notify.hook_sdk import PermissionAsked, SessionIdle, decode_event
from opencode_notify.hook_utils.commands import CommandExecutor, SubprocessExecutor
from opencode_notify.hook_utils.logging import log_event
from opencode_notify.hook_utils.notify import NotificationBackendSelector
from opencode_notify.hook_utils.session import ClientSessionLookup, SessionClassifier


class EventRouter:
    """Routes runtime events to the notification backend."""

    ROUTER_NAME = "event_router"

    def __init__(self, classifier: SessionClassifier, notifier: NotificationBackendSelector):
        self.classifier = classifier
        self.notifier = notifier
        self.handlers = {
            SessionIdle: self.handle_session_idle,
            PermissionAsked: self.handle_permission_asked,
        }

    async def on_event(self, raw: Any) -> None:
        """Handle one runtime event.

        Raises:
            CommandError: If the notification command fails
        """
        event = None
        try:
            event = decode_event(raw)
            handler = self.handlers.get(type(event))
            if handler is not None:
                await handler(event)
        except Exception as e:
            log_event(self.ROUTER_NAME, "dispatch_failed", {
                "event": getattr(event, "type", None),
                "type": type(e).__name__,
                "msg": str(e),
            }, "error")
            raise

    async def handle_session_idle(self, event: SessionIdle) -> None:
        if not await self.classifier.is_main_session(event.session_id):
            log_event(self.ROUTER_NAME, "skipped_subagent", {"session_id": event.session_id}, "debug")
            return
        await self.notifier.send(NotificationText.APP_TITLE, NotificationText.IDLE_MESSAGE)
        log_event(self.ROUTER_NAME, "notified", {"event": event.type, "session_id": event.session_id})

    async def handle_permission_asked(self, event: PermissionAsked) -> None:
        # Permission prompts notify even for subagent sessions
        await self.notifier.send(NotificationText.APP_TITLE, NotificationText.PERMISSION_MESSAGE)
        log_event(self.ROUTER_NAME, "notified", {"event": event.type})


# =============================================================================
# Plugin boundary
# =============================================================================

@dataclass
class PluginContext:
    """What the host hands the plugin factory."""
    client: Any
    executor: CommandExecutor | None = None


class NotificationPlugin:
    """Object returned to the host; exposes the event hook."""

    def __init__(self, router: EventRouter):
        self.router = router

    async def event(self, event: Any) -> None:
        await self.router.on_event(event)


def _context_value(ctx: Any, name: str) -> Any:
    if isinstance(ctx, Mapping):
        return ctx.get(name)
    return getattr(ctx, name, None)


async def notification_plugin(ctx: Any, icon_path: Path | None = None) -> NotificationPlugin:
    """Plugin factory.

    Args:
        ctx: PluginContext, or any mapping/object with "client" and
            optionally "executor"
        icon_path: Notification icon; resolved from config when omitted

    Returns:
        NotificationPlugin for the host to feed events into
    """
    executor = _context_value(ctx, "executor") or SubprocessExecutor()
    classifier = SessionClassifier(ClientSessionLookup(_context_value(ctx, "client")))
    notifier = NotificationBackendSelector(executor, icon_path or resolve_icon_path())
    log_event(EventRouter.ROUTER_NAME, "loaded", {"icon": str(notifier.icon_path)})
    return NotificationPlugin(EventRouter(classifier, notifier))
