"""
Host environment detection.

Classifies the process as running under Windows, Linux inside the Windows
Subsystem for Linux, or any other Unix-like system. Nothing is cached:
every call re-reads the OS identifier and the kernel version descriptor.
"""
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from opencode_notify.config import Platforms


class PlatformKind(Enum):
    """Host environment classes that select a notification backend."""
    WINDOWS = "windows"
    WSL = "wsl"
    OTHER_UNIX = "other_unix"


@dataclass(frozen=True)
class PlatformProfile:
    """Detected environment: the kind plus the raw OS identifier."""
    kind: PlatformKind
    system: str


def _read_kernel_version(version_file: Path) -> str | None:
    try:
        return version_file.read_text(errors="replace")
    except OSError:
        return None


def _is_wsl_kernel(version_file: Path) -> bool:
    """True if the kernel descriptor carries a WSL signature.

    An unreadable descriptor is treated as "not WSL".
    """
    contents = _read_kernel_version(version_file)
    if contents is None:
        return False
    lowered = contents.lower()
    return any(sig in lowered for sig in Platforms.WSL_SIGNATURES)


def detect_profile(system: str | None = None, version_file: Path | None = None) -> PlatformProfile:
    """Detect the host environment.

    Args:
        system: OS identifier; defaults to sys.platform
        version_file: Kernel version descriptor; defaults to /proc/version

    Returns:
        PlatformProfile for the current host
    """
    system = sys.platform if system is None else system
    version_file = Platforms.PROC_VERSION if version_file is None else version_file

    if system.startswith("win"):
        kind = PlatformKind.WINDOWS
    elif system.startswith("linux") and _is_wsl_kernel(version_file):
        kind = PlatformKind.WSL
    else:
        kind = PlatformKind.OTHER_UNIX
    return PlatformProfile(kind=kind, system=system)


def detect_platform(system: str | None = None, version_file: Path | None = None) -> PlatformKind:
    """Detect the host environment kind."""
    return detect_profile(system, version_file).kind
