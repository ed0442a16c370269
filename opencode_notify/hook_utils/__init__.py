"""
Hook utilities package - building blocks of the notification plugin.

Usage:
    from opencode_notify.hook_utils import log_event, detect_platform
    # or
    from opencode_notify.hook_utils.notify import NotificationBackendSelector
"""
from .logging import (
    LogOnce,
    log_event,
    log_once,
)

from .commands import (
    NotifyError,
    CommandError,
    CommandExecutor,
    SubprocessExecutor,
)

from .platform import (
    PlatformKind,
    PlatformProfile,
    detect_platform,
    detect_profile,
)

from .notify import (
    BACKENDS,
    NotificationRequest,
    NotificationSink,
    BurntToastSink,
    WslBridgeSink,
    NotifySendSink,
    NotificationBackendSelector,
)

from .session import (
    SessionLookupError,
    SessionRecord,
    SessionLookup,
    ClientSessionLookup,
    SessionClassifier,
    normalize_session,
)

__all__ = [
    # Logging
    "LogOnce",
    "log_event",
    "log_once",
    # Commands
    "NotifyError",
    "CommandError",
    "CommandExecutor",
    "SubprocessExecutor",
    # Platform
    "PlatformKind",
    "PlatformProfile",
    "detect_platform",
    "detect_profile",
    # Backends
    "BACKENDS",
    "NotificationRequest",
    "NotificationSink",
    "BurntToastSink",
    "WslBridgeSink",
    "NotifySendSink",
    "NotificationBackendSelector",
    # Sessions
    "SessionLookupError",
    "SessionRecord",
    "SessionLookup",
    "ClientSessionLookup",
    "SessionClassifier",
    "normalize_session",
]
