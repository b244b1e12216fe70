# core/dependencies.py - SINGLE SOURCE OF TRUTH for dependency checking
"""
System tool checking and installation guidance for CryptShell.

Provides clear OS-specific remediation hints when the mount provider or the
detach utility is missing. Only presence is checked here; the provider's
version is checked by scripts.provider_cli.check_provider.
"""

import sys
from dataclasses import dataclass
from typing import Optional


def _get_platform_name() -> str:
    """Get platform name without importing the platform module.

    This avoids shadowing issues with core/platform.py.
    """
    plat = sys.platform.lower()
    if plat.startswith("darwin"):
        return "Darwin"
    elif plat.startswith("linux"):
        return "Linux"
    else:
        return plat.capitalize()


@dataclass
class DependencyInfo:
    """Information about a dependency and how to install it."""

    name: str
    required_for: str  # e.g., "mounting the store"
    install_linux: str  # Linux installation instructions (Debian/Ubuntu first)
    install_macos: str  # macOS installation instructions
    url: Optional[str] = None  # Download URL for more info


# Required system tools, keyed by executable name
REQUIRED_SYSTEM_TOOLS = {
    "gocryptfs": DependencyInfo(
        name="gocryptfs",
        required_for="encrypting and mounting the store",
        install_linux="Ubuntu/Debian: sudo apt install gocryptfs\nFedora: sudo dnf install gocryptfs\nArch: sudo pacman -S gocryptfs",
        install_macos="brew install gocryptfs\n(requires macFUSE: brew install --cask macfuse)",
        url="https://nuetzlich.net/gocryptfs/",
    ),
    "fusermount": DependencyInfo(
        name="fusermount (FUSE utilities)",
        required_for="unmounting the cleartext view",
        install_linux="Ubuntu/Debian: sudo apt install fuse3\nFedora: sudo dnf install fuse3\nArch: sudo pacman -S fuse3",
        install_macos="umount is part of macOS; install macFUSE: brew install --cask macfuse",
        url="https://github.com/libfuse/libfuse",
    ),
    "umount": DependencyInfo(
        name="umount",
        required_for="unmounting the cleartext view",
        install_linux="Ubuntu/Debian: sudo apt install mount",
        install_macos="umount is part of the base system",
    ),
}


def get_platform_instructions(dep: DependencyInfo) -> str:
    """
    Get OS-appropriate installation instructions.

    Args:
        dep: DependencyInfo for the dependency

    Returns:
        Installation instructions string for current platform
    """
    if _get_platform_name() == "Darwin":
        return dep.install_macos
    return dep.install_linux


def install_hint(tool_name: str) -> str:
    """
    One-line remedy for a missing tool.

    Unknown tools get a generic hint. Multi-line platform instructions are
    folded onto one line so the diagnostic stays a single line.
    """
    dep = REQUIRED_SYSTEM_TOOLS.get(tool_name)
    if dep is None:
        return f"Install '{tool_name}' and make sure it is on your PATH"
    instructions = "; ".join(line.strip() for line in get_platform_instructions(dep).splitlines() if line.strip())
    hint = f"Install {dep.name} ({instructions})"
    if dep.url:
        hint += f" - {dep.url}"
    return hint
