# core/paths.py - SINGLE SOURCE OF TRUTH for all filesystem paths
"""
All filesystem paths MUST be resolved here as Path objects.

RULES:
- All paths are Path objects internally
- Convert to str() ONLY at I/O boundaries (subprocess, print)
- Mount targets are always absolute and symlink-free before use
"""

import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from cryptshell.core.constants import Defaults, EnvKeys
from cryptshell.core.limits import Limits


class Paths:
    """
    Centralized path resolution.

    Usage:
        from cryptshell.core.paths import Paths
        target = Paths.create_ephemeral_target()
    """

    # ==========================================================================
    # Store location
    # ==========================================================================

    @staticmethod
    def default_store() -> Path:
        """Default encrypted store location (~ expanded)."""
        return Path(Defaults.STORE_PATH).expanduser()

    @staticmethod
    def expand(raw: str) -> Path:
        """Expand ~ in a user-supplied path. Does not touch the filesystem."""
        return Path(raw).expanduser()

    # ==========================================================================
    # Mount targets
    # ==========================================================================

    @staticmethod
    def ephemeral_parent(environ: Optional[Mapping[str, str]] = None) -> Path:
        """
        Directory that holds ephemeral mount targets.

        Prefers $XDG_RUNTIME_DIR (RAM-backed, private to the user) and falls
        back to the system temp directory.
        """
        environ = os.environ if environ is None else environ
        runtime_dir = environ.get(EnvKeys.XDG_RUNTIME_DIR, "")
        if runtime_dir:
            candidate = Path(runtime_dir)
            if candidate.is_dir() and os.access(candidate, os.W_OK):
                return candidate
        return Path(tempfile.gettempdir())

    @staticmethod
    def create_ephemeral_target(parent: Optional[Path] = None) -> Path:
        """Create a fresh, uniquely named, owner-only mount target."""
        parent = parent or Paths.ephemeral_parent()
        created = tempfile.mkdtemp(prefix=Defaults.EPHEMERAL_PREFIX, dir=str(parent))
        return Path(created).resolve()

    @staticmethod
    def ensure_user_target(mount_point: Path) -> Path:
        """Create a user-designated mount target if missing and resolve it."""
        mount_point = Path(mount_point).expanduser()
        mount_point.mkdir(parents=True, exist_ok=True)
        return mount_point.resolve()

    @staticmethod
    def ensure_private_dir(path: Path) -> Path:
        """Create a directory (with parents) readable only by its owner."""
        path = Path(path)
        path.mkdir(mode=Limits.PRIVATE_DIR_MODE, parents=True, exist_ok=True)
        # mkdir's mode is filtered by the umask
        os.chmod(path, Limits.PRIVATE_DIR_MODE)
        return path
