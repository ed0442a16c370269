"""
Pytest configuration for opencode_notify tests.

Points the log directory at a temp dir before the package configures
loguru, and provides a recording command executor.
"""
import os
import tempfile

os.environ.setdefault("OPENCODE_NOTIFY_DATA_DIR", tempfile.mkdtemp(prefix="opencode-notify-"))

import pytest

from opencode_notify.hook_utils.commands import CommandError


class RecordingExecutor:
    """CommandExecutor double that records argv and fails on request."""

    def __init__(self, failing: set[str] | None = None):
        self.failing = failing or set()
        self.calls: list[list[str]] = []

    async def run(self, argv):
        self.calls.append(list(argv))
        if argv[0] in self.failing:
            raise CommandError(argv, returncode=1)

    def commands(self) -> list[str]:
        """First argv element of every call."""
        return [call[0] for call in self.calls]


@pytest.fixture
def executor():
    return RecordingExecutor()
