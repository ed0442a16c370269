"""
External command execution.

CommandExecutor is the port the notification backends run their commands
through. SubprocessExecutor is the default implementation: it spawns the
command with asyncio, waits for it, and raises CommandError on a non-zero
exit, a spawn failure, or an expired timeout.

Arguments are passed as an argv list, never through a shell.
"""
import asyncio
from typing import Protocol, Sequence

from opencode_notify.config import Timeouts


class NotifyError(Exception):
    """Base error for the notification plugin."""


class CommandError(NotifyError):
    """An external command failed to spawn, exited non-zero, or timed out."""

    def __init__(self, argv: Sequence[str], returncode: int | None = None, stderr: str = "", reason: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        self.reason = reason
        detail = reason or f"exit code {returncode}"
        if stderr:
            detail = f"{detail}: {stderr.strip()}"
        super().__init__(f"{self.argv[0] if self.argv else '<empty>'} failed ({detail})")


class CommandExecutor(Protocol):
    """Runs an external command to completion."""

    async def run(self, argv: Sequence[str]) -> None:
        """Run argv; raise CommandError unless it exits zero."""
        ...


async def _kill(proc: asyncio.subprocess.Process) -> None:
    """Kill proc and reap it; a child that already exited is fine."""
    try:
        proc.kill()
    except ProcessLookupError:
        pass
    await proc.wait()


class SubprocessExecutor:
    """CommandExecutor backed by asyncio subprocesses."""

    def __init__(self, timeout: float | None = Timeouts.COMMAND_TIMEOUT_S):
        self.timeout = timeout

    async def run(self, argv: Sequence[str]) -> None:
        if not argv:
            raise CommandError(argv, reason="empty command")
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise CommandError(argv, reason=str(e)) from e

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            await _kill(proc)
            raise CommandError(argv, reason=f"timed out after {self.timeout}s") from e
        except asyncio.CancelledError:
            await _kill(proc)
            raise

        if proc.returncode != 0:
            raise CommandError(
                argv,
                returncode=proc.returncode,
                stderr=(stderr or b"").decode(errors="replace"),
            )

