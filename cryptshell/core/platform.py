# core/platform.py - SINGLE SOURCE OF TRUTH for platform detection
"""
Platform-specific detection and capability checks.

This module provides:
- get_platform(): Get normalized platform name
- have(): Check if a command is on the search path
- is_mount_point(): Check if a directory is an active mount point
- detach_command(): Host utility that detaches a FUSE mount

No heuristics. Direct OS checks only.
"""

import os
import platform as _platform
import shutil
from pathlib import Path
from typing import List, Optional

from cryptshell.core.constants import DetachCommands


def get_platform() -> str:
    """
    Get normalized platform name.

    Returns:
        One of: "windows", "darwin", "linux", or the raw system name lowercase.
    """
    return _platform.system().lower()


def is_macos() -> bool:
    """Check if running on macOS."""
    return get_platform() == "darwin"


def have(cmd: str) -> bool:
    """Check if a command is available in PATH."""
    return shutil.which(cmd) is not None


def is_mount_point(path: Path) -> bool:
    """
    Check whether ``path`` is currently an active mount point.

    A FUSE mount whose daemon died raises on stat; os.path.ismount treats
    that as "not mounted".
    """
    return os.path.ismount(str(path))


def detach_command(target: Path) -> List[str]:
    """
    Build the command that detaches the FUSE mount at ``target``.

    Linux: fusermount -u <target>
    macOS: umount <target>
    """
    base = DetachCommands.DARWIN if is_macos() else DetachCommands.LINUX
    return [*base, str(target)]


def detach_utility() -> Optional[str]:
    """Name of the detach utility if it is installed, else None."""
    name = (DetachCommands.DARWIN if is_macos() else DetachCommands.LINUX)[0]
    return name if have(name) else None
