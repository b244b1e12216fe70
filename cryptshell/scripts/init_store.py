"""
CryptShell store initialization

Creates a new encrypted store:
- Refuses a non-empty store path without touching it
- Creates a missing store directory owner-only (0700), with parents
- Delegates the encryption setup to `<provider> -init`

A failed -init is NOT rolled back: the directory keeps whatever the
provider wrote, which may include key material needed for diagnosis.
"""

import logging
from pathlib import Path

from cryptshell.core.config import SessionConfig
from cryptshell.core.constants import Branding, EnvKeys, ExitCodes
from cryptshell.core.errors import StoreNotEmptyError
from cryptshell.core.paths import Paths
from cryptshell.scripts.cli_output import CLIOutput, get_output
from cryptshell.scripts.provider_cli import initialize_store

_init_logger = logging.getLogger("cryptshell.init")


def is_empty_dir(path: Path) -> bool:
    """True if ``path`` is a directory with no entries."""
    return path.is_dir() and next(path.iterdir(), None) is None


def check_store_empty(store: Path) -> None:
    """
    Raise unless ``store`` is absent or an empty directory.

    Raises:
        StoreNotEmptyError: Store path holds files or is not a directory
    """
    if not store.exists():
        return
    if not store.is_dir():
        raise StoreNotEmptyError(
            f"{store} exists and is not a directory",
            remedy=f"Point {EnvKeys.STORE} at an empty or missing directory",
        )
    if not is_empty_dir(store):
        raise StoreNotEmptyError(
            f"Store {store} is not empty",
            remedy=f"Point {EnvKeys.STORE} at an empty or missing directory",
        )


def run_init(config: SessionConfig, out: CLIOutput = None) -> int:
    """
    Initialize a new store at config.store_path.

    Returns:
        ExitCodes.OK on success

    Raises:
        StoreNotEmptyError: Precondition failed; nothing was touched
        ProviderOperationError: -init exited non-zero
    """
    out = out or get_output()
    store = config.store_path

    check_store_empty(store)

    if not store.exists():
        _init_logger.debug(f"Creating {store}")
        Paths.ensure_private_dir(store)

    out.log(f"Initializing encrypted store in {store}")
    initialize_store(config, store)

    out.info(f"Store created at {store}")
    out.log(f"Run '{Branding.PROGRAM_NAME} mount' (or just '{Branding.PROGRAM_NAME}') to open it")
    return ExitCodes.OK
