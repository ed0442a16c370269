"""
Centralized configuration for the OpenCode notification plugin.

All configurable constants in one place for easy tuning.
Individual modules import from here for consistency.

Categories:
- Paths: Data directory, log file, notification icon
- NotificationText: Titles and messages shown to the user
- Timeouts: Command timeout and log suppression window
- Platforms: WSL detection inputs
"""
import os
from pathlib import Path

# =============================================================================
# Paths
# =============================================================================

DATA_DIR = Path(os.environ.get(
    "OPENCODE_NOTIFY_DATA_DIR",
    Path.home() / ".local/share/opencode-notify",
))
LOG_FILE = DATA_DIR / "notify-events.jsonl"

DEFAULT_ICON_RELPATH = ".config/opencode/images/opencode-logo-light.png"


def resolve_icon_path(home: Path | None = None) -> Path:
    """Resolve the notification icon path.

    OPENCODE_NOTIFY_ICON wins when set; otherwise the OpenCode logo under
    the user's home directory.
    """
    override = os.environ.get("OPENCODE_NOTIFY_ICON")
    if override:
        return Path(override).expanduser()
    return (home or Path.home()) / DEFAULT_ICON_RELPATH


# =============================================================================
# Notification Text
# =============================================================================

class NotificationText:
    """Text used for desktop notifications."""
    APP_NAME = "OpenCode"
    APP_TITLE = "OpenCode"
    IDLE_MESSAGE = "Agent Complete"
    PERMISSION_MESSAGE = "Agent Complete"


# =============================================================================
# Timeouts
# =============================================================================

def _parse_timeout_ms(raw: str | None) -> float | None:
    """Parse a millisecond timeout; unset, non-positive or invalid means none."""
    if not raw:
        return None
    try:
        value = float(raw) / 1000.0
    except (ValueError, TypeError):
        return None
    return value if value > 0 else None


class Timeouts:
    """Timeout and interval settings (seconds)."""
    # Notification commands; None waits indefinitely
    COMMAND_TIMEOUT_S = _parse_timeout_ms(os.environ.get("OPENCODE_NOTIFY_COMMAND_TIMEOUT"))

    # Duplicate warning suppression window
    LOG_ONCE_PERIOD = 300


# =============================================================================
# Platform Detection
# =============================================================================

class Platforms:
    """Inputs for host environment detection."""
    PROC_VERSION = Path("/proc/version")
    # Lowercase markers found in /proc/version under WSL1 and WSL2
    WSL_SIGNATURES = ("microsoft", "wsl")
