"""Host platform detection."""

from __future__ import annotations

import platform

from ffmpeg_locator.core.models import PlatformKey


def is_windows_name(os_name: str) -> bool:
    """Return True if the OS name belongs to the Windows family."""
    return "windows" in os_name.lower()


def detect_platform(os_name: str | None = None, arch: str | None = None) -> PlatformKey:
    """Build the platform key for the running process.

    Both values default to what the interpreter reports. The architecture
    is kept verbatim; no normalisation or allow-list is applied.
    """
    if os_name is None:
        os_name = platform.system()
    if arch is None:
        arch = platform.machine()
    return PlatformKey(
        os_family="windows" if is_windows_name(os_name) else "unix",
        arch=arch,
    )
