"""
CryptShell password change

Thin pass-through to `<provider> -passwd <store>`. Works on the store at
rest; nothing is mounted.
"""

from cryptshell.core.config import SessionConfig
from cryptshell.core.constants import ExitCodes
from cryptshell.scripts.cli_output import CLIOutput, get_output
from cryptshell.scripts.mount import require_store
from cryptshell.scripts.provider_cli import change_password


def run_passwd(config: SessionConfig, out: CLIOutput = None) -> int:
    """
    Change the store's password interactively.

    Raises:
        StoreNotFoundError: Store directory missing
        ProviderOperationError: -passwd exited non-zero
    """
    out = out or get_output()
    store = require_store(config.store_path)

    out.log(f"Changing password of {store}")
    change_password(config, store)
    out.info("Password changed")
    return ExitCodes.OK
