"""
Cross-platform notification backends.

Supports Windows (BurntToast via PowerShell), WSL (wsl-notify-send bridge
with notify-send fallback) and other Unix systems (notify-send).

Each backend is a NotificationSink that turns a NotificationRequest into one
argv and runs it through the injected CommandExecutor. The selector picks
backends from an ordered table per PlatformKind: candidates that name a
required binary are used only if that binary is on PATH, and the last
candidate always runs.

Failures of the chosen notification command are not caught here.
"""
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from opencode_notify.config import NotificationText
from opencode_notify.hook_utils.commands import CommandExecutor
from opencode_notify.hook_utils.logging import log_event, log_once
from opencode_notify.hook_utils.platform import PlatformKind, detect_platform


def _escape_powershell_single(text: str) -> str:
    """Escape text for a PowerShell single-quoted string literal.

    Single-quoted strings are verbatim in PowerShell except for the quote
    itself, which is doubled.
    """
    return text.replace("'", "''")


@dataclass(frozen=True)
class NotificationRequest:
    """A single desktop notification."""
    title: str
    message: str
    icon: Path


class NotificationSink(Protocol):
    """One OS-native notification mechanism."""
    name: str
    # Binary that must be on PATH before this sink is chosen over a fallback
    required_binary: str | None

    async def send(self, request: NotificationRequest) -> None:
        ...


class CommandSink:
    """Base sink that renders an argv and runs it through the executor."""
    name = "command"
    required_binary: str | None = None

    def __init__(self, executor: CommandExecutor, app_name: str = NotificationText.APP_NAME):
        self.executor = executor
        self.app_name = app_name

    def build_command(self, request: NotificationRequest) -> list[str]:
        raise NotImplementedError

    async def send(self, request: NotificationRequest) -> None:
        await self.executor.run(self.build_command(request))


class BurntToastSink(CommandSink):
    """Windows toast notification via the BurntToast PowerShell module."""
    name = "burnt_toast"

    def build_command(self, request: NotificationRequest) -> list[str]:
        title = _escape_powershell_single(request.title)
        message = _escape_powershell_single(request.message)
        icon = _escape_powershell_single(str(request.icon))
        script = (
            f"New-BurntToastNotification -Text '{title}','{message}' "
            f"-AppLogo '{icon}'"
        )
        return ["pwsh", "-NoProfile", "-Command", script]


class WslBridgeSink(CommandSink):
    """Windows toast from inside WSL via wsl-notify-send.exe."""
    name = "wsl_notify_send"
    required_binary = "wsl-notify-send.exe"

    def build_command(self, request: NotificationRequest) -> list[str]:
        return [
            "wsl-notify-send.exe",
            "--appId", self.app_name,
            "--category", request.title,
            "--icon", str(request.icon),
            request.message,
        ]


class NotifySendSink(CommandSink):
    """Freedesktop notification via notify-send."""
    name = "notify_send"

    def build_command(self, request: NotificationRequest) -> list[str]:
        return [
            "notify-send",
            "--app-name", self.app_name,
            "--icon", str(request.icon),
            request.title,
            request.message,
        ]


SinkFactory = Callable[[CommandExecutor], NotificationSink]

# Ordered candidates per platform; the last entry is the unconditional fallback
BACKENDS: dict[PlatformKind, tuple[SinkFactory, ...]] = {
    PlatformKind.WSL: (WslBridgeSink, NotifySendSink),
    PlatformKind.WINDOWS: (BurntToastSink,),
    PlatformKind.OTHER_UNIX: (NotifySendSink,),
}


class NotificationBackendSelector:
    """Picks the notification backend for the host and sends through it.

    The platform is re-detected on every send. A preferred backend missing
    from PATH falls through to the next candidate; a failing final command
    raises to the caller.

    Example:
        selector = NotificationBackendSelector(SubprocessExecutor(), icon_path)
        await selector.send("OpenCode", "Agent Complete")
    """

    def __init__(
        self,
        executor: CommandExecutor,
        icon_path: Path,
        detect: Callable[[], PlatformKind] = detect_platform,
        backends: dict[PlatformKind, tuple[SinkFactory, ...]] | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ):
        self.executor = executor
        self.icon_path = icon_path
        self.detect = detect
        self.backends = BACKENDS if backends is None else backends
        self.which = which

    def _on_path(self, binary: str) -> bool:
        """Check that binary is on the search path; never raises."""
        try:
            found = self.which(binary)
        except Exception as e:
            log_once.warning("notify", "lookup_failed", str(e), binary=binary)
            return False
        if not found:
            log_once.warning("notify", "backend_missing", f"{binary} not on PATH", binary=binary)
            return False
        return True

    async def select(self, kind: PlatformKind) -> NotificationSink:
        """Choose the first usable candidate for the platform kind."""
        candidates = [factory(self.executor) for factory in self.backends[kind]]
        for sink in candidates[:-1]:
            if sink.required_binary is None or self._on_path(sink.required_binary):
                return sink
        return candidates[-1]

    async def send(self, title: str, message: str, icon: Path | None = None) -> None:
        """Send one desktop notification.

        Raises:
            CommandError: If the chosen notification command fails
        """
        request = NotificationRequest(title=title, message=message, icon=icon or self.icon_path)
        kind = self.detect()
        sink = await self.select(kind)
        log_event("notify", "sending", {"platform": kind.value, "backend": sink.name})
        await sink.send(request)
