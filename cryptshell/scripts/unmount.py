"""
CryptShell detach helper

Detaches the cleartext view of a mounted store. Used by MountSession during
cleanup, so it reports failure through its return value and never raises.

Dependencies (runtime):
- Linux: fusermount (FUSE utilities) in PATH
- macOS: umount
"""

import logging
import subprocess
from pathlib import Path

from cryptshell.core.errors import DetachUtilityMissingError
from cryptshell.core.dependencies import install_hint
from cryptshell.core.limits import Limits
from cryptshell.core.platform import detach_command, detach_utility
from cryptshell.scripts.cli_output import get_output

_unmount_logger = logging.getLogger("cryptshell.unmount")


def require_detach_utility() -> str:
    """
    Make sure a detach utility is installed before anything is mounted.

    Returns:
        The utility's executable name

    Raises:
        DetachUtilityMissingError: If it is not on the search path
    """
    name = detach_utility()
    if name is None:
        tool = detach_command(Path("."))[0]
        raise DetachUtilityMissingError(f"{tool} not found in PATH", remedy=install_hint(tool))
    return name


def detach(target: Path) -> bool:
    """
    Unmount the FUSE mount at ``target``.

    Args:
        target: Mount point to detach

    Returns:
        True if the utility exited 0, False otherwise.
    """
    out = get_output()
    args = detach_command(target)
    out.log(f"Unmounting {target}...")
    _unmount_logger.debug(f"Running: {' '.join(args)}")

    try:
        result = subprocess.run(args, capture_output=True, text=True, timeout=Limits.DETACH_TIMEOUT)
    except FileNotFoundError:
        out.warn(f"{args[0]} not found; {target} is still mounted")
        return False
    except subprocess.TimeoutExpired:
        out.warn(f"{args[0]} timed out after {Limits.DETACH_TIMEOUT}s; {target} may still be mounted")
        return False

    if result.returncode == 0:
        out.info(f"{target} unmounted")
        return True

    stderr = (result.stderr or "").strip()[: Limits.DIAGNOSTIC_OUTPUT_MAX_CHARS]
    out.warn(f"Unmount failed (exit {result.returncode}): {stderr or 'no output'}")
    out.remedy(f"Close programs using {target}, then run: {' '.join(args)}")
    return False
