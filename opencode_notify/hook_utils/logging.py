"""
Plugin logging.

Every component writes structured JSON records to the plugin's own log
file; the host's stderr is left alone. LogOnce keeps a missing WSL bridge
from writing the same warning on every idle or permission event.
"""
import time

from loguru import logger

from opencode_notify.config import DATA_DIR, LOG_FILE, Timeouts


# =============================================================================
# Log-Once - one warning per backend problem per window
# =============================================================================

class LogOnce:
    """Drops repeats of the same (component, event, message) within period_sec.

    The next record after the window carries a "suppressed" count.

    Usage:
        if shutil.which("wsl-notify-send.exe") is None:
            log_once.warning("notify", "backend_missing", "wsl-notify-send.exe not on PATH")
    """

    def __init__(self, period_sec: int = 300):
        self.period_sec = period_sec
        self._cache: dict[tuple, tuple[float, int]] = {}  # key -> (first_seen, count)

    def _should_log(self, key: tuple) -> tuple[bool, int]:
        """Record one occurrence of key.

        Returns:
            (should_log, suppressed_count) - whether to log and how many were suppressed
        """
        now = time.time()

        if key in self._cache:
            first_seen, count = self._cache[key]
            if now - first_seen < self.period_sec:
                self._cache[key] = (first_seen, count + 1)
                return False, 0
            suppressed = count - 1
            self._cache[key] = (now, 1)
            return True, suppressed

        self._cache[key] = (now, 1)
        return True, 0

    def _log(self, level: str, component: str, event_type: str, message: str, extra: dict):
        key = (component, event_type, message)
        should_log, suppressed = self._should_log(key)

        if should_log:
            data = {"msg": message, **extra}
            if suppressed > 0:
                data["suppressed"] = suppressed
            log_event(component, event_type, data, level)

    def error(self, component: str, event_type: str, message: str, **extra):
        """Log an error, suppressing duplicates within the time window."""
        self._log("error", component, event_type, message, extra)

    def warning(self, component: str, event_type: str, message: str, **extra):
        """Log a warning, suppressing duplicates within the time window."""
        self._log("warning", component, event_type, message, extra)


log_once = LogOnce(period_sec=Timeouts.LOG_ONCE_PERIOD)

# One serialized file sink: 10MB rotation, 3 files kept.
# The host owns stderr, so the default handler goes.
logger.remove()
DATA_DIR.mkdir(parents=True, exist_ok=True)
logger.add(
    LOG_FILE,
    format="{message}",
    serialize=True,
    rotation="10 MB",
    retention=3,
    compression="gz",
    enqueue=True,
    catch=True,
)


def log_event(component: str, event_type: str, data: dict = None, level: str = "info"):
    """
    Write one record to the plugin log.

    Args:
        component: Emitting component ("event_router", "notify", "session")
        event_type: What happened (e.g., "notified", "backend_missing")
        data: Additional context data
        level: Log level (debug, info, warning, error)
    """
    try:
        log_func = getattr(logger, level, logger.info)
        log_func(event_type, component=component, **(data or {}))
    except Exception:
        pass  # Never raise
