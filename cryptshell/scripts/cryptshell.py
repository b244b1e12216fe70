#!/usr/bin/env python3
"""
CryptShell - Command Dispatcher
===============================

Usage:
    cryptshell [mount]    Mount the store, run the session command, unmount
    cryptshell init       Create a new encrypted store
    cryptshell passwd     Change the store password
    cryptshell version    Print the version
    cryptshell help       Show help

Configuration comes from CRYPTSHELL_* environment variables (see help).
Exit codes: 0 on success or help, 1 on any failure.
"""

import logging
import sys
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cryptshell.core.config import SessionConfig
from cryptshell.core.constants import Branding, CLIOperations, Defaults, EnvKeys, ExitCodes
from cryptshell.core.errors import CryptShellError
from cryptshell.core.version import MIN_PROVIDER_VERSION, VERSION
from cryptshell.scripts.cli_output import CLIOutput, get_output, setup_logging
from cryptshell.scripts.init_store import run_init
from cryptshell.scripts.mount import run_mount
from cryptshell.scripts.provider_cli import check_provider
from cryptshell.scripts.rekey import run_passwd

_cli_logger = logging.getLogger("cryptshell.cli")

# Environment variables shown in help: (key, description)
ENV_HELP = [
    (EnvKeys.STORE, f"Encrypted store directory (default: {Defaults.STORE_PATH})"),
    (EnvKeys.MOUNT_POINT, "Fixed mount point, kept after the session (default: fresh temp dir)"),
    (EnvKeys.COMMAND, f"Command run inside the mount (default: $SHELL or {Defaults.SESSION_COMMAND})"),
    (EnvKeys.INIT_OPTS, "Extra options for '<provider> -init'"),
    (EnvKeys.MOUNT_OPTS, "Extra options for mounting"),
    (EnvKeys.PROVIDER, f"Provider executable (default: {Defaults.PROVIDER})"),
    (EnvKeys.DEBUG, "Set to 1 for debug logging"),
]


# ============================================================
# HELP / VERSION (stdout)
# ============================================================


def show_help(console: Optional[Console] = None) -> int:
    """Render help text to stdout."""
    console = console or Console(highlight=False)
    name = Branding.PROGRAM_NAME

    console.print(f"[bold]{Branding.PRODUCT_NAME}[/bold] {VERSION} - {Branding.PRODUCT_DESCRIPTION}")
    console.print()
    console.print(escape(f"Usage: {name} [COMMAND]"))
    console.print()

    commands = Table(show_header=False, box=None, padding=(0, 2))
    for op_id in CLIOperations.HELP_ORDER:
        commands.add_row(f"[cyan]{op_id}[/cyan]", CLIOperations.OPERATIONS[op_id]["summary"])
    console.print("Commands:")
    console.print(commands)
    console.print()

    env = Table(show_header=False, box=None, padding=(0, 2))
    for key, description in ENV_HELP:
        env.add_row(f"[cyan]{key}[/cyan]", description)
    console.print("Environment:")
    console.print(env)
    console.print()
    console.print(f"Requires {Defaults.PROVIDER} {MIN_PROVIDER_VERSION} or newer.")
    return ExitCodes.OK


def show_version() -> int:
    """Print the version string to stdout."""
    print(f"{Branding.PROGRAM_NAME} {VERSION}")
    return ExitCodes.OK


# ============================================================
# DISPATCH
# ============================================================


def get_operation_handler(op_id: str) -> Optional[Callable[[SessionConfig, CLIOutput], int]]:
    """
    Get the handler for a provider-backed operation.

    Returns None for unknown operations.
    """
    handlers: Dict[str, Callable[[SessionConfig, CLIOutput], int]] = {
        CLIOperations.OP_MOUNT: run_mount,
        CLIOperations.OP_INIT: run_init,
        CLIOperations.OP_PASSWD: run_passwd,
    }
    return handlers.get(op_id)


def report(out: CLIOutput, error: CryptShellError) -> None:
    """One-line cause, then one-line remedy if there is one."""
    out.error(error.message)
    if error.remedy:
        out.remedy(error.remedy)


def dispatch(argv: List[str], config: SessionConfig, out: CLIOutput) -> int:
    """
    Run the command named by argv[0] (mount when argv is empty).

    Returns:
        Process exit code
    """
    op_id = CLIOperations.resolve(argv[0]) if argv else CLIOperations.DEFAULT

    if op_id == CLIOperations.OP_HELP:
        return show_help()
    if op_id == CLIOperations.OP_VERSION:
        return show_version()

    handler = get_operation_handler(op_id)
    if handler is None:
        out.error(f"Unknown command: {argv[0]}")
        out.remedy(f"Run '{Branding.PROGRAM_NAME} help' to list commands")
        return ExitCodes.FAILURE

    if len(argv) > 1:
        out.error(f"Unexpected argument: {argv[1]}")
        out.remedy(f"Run '{Branding.PROGRAM_NAME} help' for usage")
        return ExitCodes.FAILURE

    try:
        if CLIOperations.requires_provider(op_id):
            check_provider(config.provider)
        return handler(config, out)
    except CryptShellError as e:
        _cli_logger.debug(f"{op_id} failed: {e!r}")
        report(out, e)
        return ExitCodes.FAILURE


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Builds the configuration once from the environment and dispatches.
    """
    argv = sys.argv[1:] if argv is None else argv
    out = get_output()

    config = SessionConfig.from_environment()

    setup_logging(config.debug)
    _cli_logger.debug(f"{Branding.PROGRAM_NAME} {VERSION} argv={argv}")

    try:
        return dispatch(argv, config, out)
    except KeyboardInterrupt:
        out.error("Aborted by user.")
        return ExitCodes.FAILURE


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
