"""
CryptShell mount session

Mounts the encrypted store, runs the session command inside the cleartext
view, then unmounts:

    Unresolved -> Resolved -> Attached -> Detached

1. Resolve: the store must exist; the mount target is either the
   configured mount point (created if missing, never removed) or a fresh
   ephemeral directory (removed at the end).
2. Register cleanup (MountSession) BEFORE the target is created, so an
   interrupt at any point leaves nothing behind.
3. Attach: `<provider> <mount options...> <store> <target>`.
4. Run the session command with the target as working directory. Its exit
   status is not ours: the session still ends with exit 0.
5. Detach and remove the ephemeral target, on every exit path.

Dependencies (runtime):
- gocryptfs (or the configured provider) in PATH
- fusermount (Linux) / umount (macOS)
"""

import logging
from pathlib import Path
from typing import Tuple

from cryptshell.core.config import SessionConfig
from cryptshell.core.constants import Branding, ExitCodes
from cryptshell.core.errors import StoreNotFoundError
from cryptshell.core.paths import Paths
from cryptshell.core.session import MountSession, SignalGuard, run_foreground
from cryptshell.scripts.cli_output import CLIOutput, get_output
from cryptshell.scripts.provider_cli import attach_store
from cryptshell.scripts.unmount import detach, require_detach_utility

_mount_logger = logging.getLogger("cryptshell.mount")


def require_store(store: Path) -> Path:
    """
    Return the store path if it is an existing directory.

    Raises:
        StoreNotFoundError: With a remedy pointing at `init`
    """
    if not store.is_dir():
        raise StoreNotFoundError(
            f"No such store: {store}",
            remedy=f"Run '{Branding.PROGRAM_NAME} init' first to create it",
        )
    return store


def resolve_mount_target(config: SessionConfig) -> Tuple[Path, bool]:
    """
    Pick and create the mount target.

    Returns:
        (absolute symlink-free target, ephemeral flag)
    """
    if config.uses_ephemeral_target:
        target = Paths.create_ephemeral_target()
        _mount_logger.debug(f"Ephemeral target {target}")
        return target, True

    target = Paths.ensure_user_target(config.mount_point)
    _mount_logger.debug(f"User-designated target {target}")
    return target, False


def run_session_command(command: str, target: Path, guard: SignalGuard = None) -> int:
    """
    Run the session command line through the shell inside ``target``.

    Returns:
        The command's exit status (informational only)
    """
    _mount_logger.debug(f"Session command: {command!r} in {target}")
    return run_foreground(command, cwd=target, shell=True, guard=guard)


def run_mount(config: SessionConfig, out: CLIOutput = None) -> int:
    """
    Run one complete mount session.

    Returns:
        ExitCodes.OK once the session command has finished and cleanup ran

    Raises:
        StoreNotFoundError: Store missing; nothing was created or invoked
        DetachUtilityMissingError: No way to unmount; nothing was created
        ProviderOperationError: Attach failed (after cleanup)
        SessionInterrupted: A signal ended the session (after cleanup)
    """
    out = out or get_output()

    store = require_store(config.store_path)
    require_detach_utility()

    with MountSession(detach=detach) as session:
        target = session.acquire_target(lambda: resolve_mount_target(config))
        out.log(f"Mounting {store} on {target}")
        attach_store(config, store, target, guard=session.guard)
        session.mark_attached()
        out.info(f"Mounted at {target}")

        out.log(f"Starting session: {config.session_command} (exit it to unmount)")
        status = run_session_command(config.session_command, target, guard=session.guard)
        if status != 0:
            _mount_logger.info(f"Session command exited with status {status}")

    return ExitCodes.OK
