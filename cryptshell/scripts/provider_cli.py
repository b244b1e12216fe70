#!/usr/bin/env python3
"""
Mount Provider CLI Wrapper

Wraps the external mount provider's command-line interface (gocryptfs by
default):
- Capability detection (installed + minimum version)
- Store initialization (-init)
- Attach (mount the store on a target)
- Password change (-passwd)

The provider is an opaque collaborator: only its exit status and, for the
version query, one token on stdout are interpreted. Option strings from the
configuration are passed through as-is.
"""

import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from cryptshell.core.config import SessionConfig
from cryptshell.core.constants import ProviderFlags
from cryptshell.core.dependencies import install_hint
from cryptshell.core.errors import (
    ProviderIncompatibleError,
    ProviderNotFoundError,
    ProviderOperationError,
    ProviderVersionUnknownError,
)
from cryptshell.core.limits import Limits
from cryptshell.core.session import SignalGuard, run_foreground
from cryptshell.core.version import MIN_PROVIDER_VERSION, version_satisfies

_provider_logger = logging.getLogger("cryptshell.provider")


# ===========================================================================
# Capability Detection
# ===========================================================================


def version_pattern(name: str) -> "re.Pattern":
    """
    Pattern for the "<name> <MAJOR.MINOR.PATCH>" token in --version output.

    Case-insensitive. An optional "v" before the number is accepted
    ("gocryptfs v2.4.0; go-fuse v2.4.0; ...").
    """
    return re.compile(rf"(?<![\w-]){re.escape(name)}\s+v?(\d+\.\d+\.\d+)", re.IGNORECASE)


def parse_version_output(output: str, name: str) -> Optional[str]:
    """
    Extract the provider's version from its --version output.

    Args:
        output: Captured stdout
        name: Provider name as it appears in the output

    Returns:
        "MAJOR.MINOR.PATCH", or None if no token matches
    """
    match = version_pattern(name).search(output or "")
    return match.group(1) if match else None


def find_provider(name: str) -> Optional[Path]:
    """Resolve the provider executable on the search path."""
    found = shutil.which(name)
    return Path(found) if found else None


def query_version(exe: Path) -> str:
    """
    Run ``<exe> --version`` and return its stdout.

    Raises:
        ProviderNotFoundError: If the executable vanished or cannot run
        ProviderVersionUnknownError: If the query timed out
    """
    args = [str(exe), ProviderFlags.VERSION]
    _provider_logger.debug(f"Running: {' '.join(args)}")
    try:
        result = subprocess.run(args, capture_output=True, text=True, timeout=Limits.VERSION_QUERY_TIMEOUT)
    except OSError as e:
        raise ProviderNotFoundError(f"Cannot run {exe}: {e}", remedy=install_hint(exe.name))
    except subprocess.TimeoutExpired:
        raise ProviderVersionUnknownError(
            f"{exe.name} {ProviderFlags.VERSION} did not answer within {Limits.VERSION_QUERY_TIMEOUT}s",
            remedy=f"Check that '{exe} {ProviderFlags.VERSION}' works from a terminal",
        )
    _provider_logger.debug(f"Version query exit {result.returncode}: {result.stdout.strip()!r}")
    return result.stdout or ""


def check_provider(name: str, min_version: str = MIN_PROVIDER_VERSION) -> str:
    """
    Confirm the provider is installed and at least ``min_version``.

    Args:
        name: Provider executable name (or path)
        min_version: Required MAJOR.MINOR.PATCH

    Returns:
        The provider's version string

    Raises:
        ProviderNotFoundError: Not on the search path
        ProviderVersionUnknownError: No parsable version token on stdout
        ProviderIncompatibleError: Version below min_version
    """
    short_name = Path(name).name

    exe = find_provider(name)
    if exe is None:
        raise ProviderNotFoundError(f"{short_name} not found in PATH", remedy=install_hint(short_name))

    output = query_version(exe)
    found = parse_version_output(output, short_name)
    if found is None:
        snippet = output.strip()[: Limits.DIAGNOSTIC_OUTPUT_MAX_CHARS] or "no output"
        raise ProviderVersionUnknownError(
            f"Could not determine the {short_name} version (got: {snippet})",
            remedy=f"Make sure '{exe}' is {short_name}, version {min_version} or newer",
        )

    if not version_satisfies(found, min_version):
        raise ProviderIncompatibleError(
            f"{short_name} {found} is too old; {min_version} or newer is required",
            found=found,
            required=min_version,
            remedy=install_hint(short_name),
        )

    _provider_logger.debug(f"{short_name} {found} satisfies >= {min_version}")
    return found


# ===========================================================================
# Provider Operations
# ===========================================================================


def run_provider(args: List[str], operation: str, guard: Optional[SignalGuard] = None, remedy: str = None) -> None:
    """
    Run an interactive provider command in the foreground.

    Raises:
        ProviderOperationError: On a non-zero exit
        ProviderNotFoundError: If the executable cannot be started
    """
    _provider_logger.debug(f"Running: {' '.join(args)}")
    try:
        returncode = run_foreground(args, guard=guard)
    except FileNotFoundError as e:
        name = Path(args[0]).name
        raise ProviderNotFoundError(f"Cannot run {name}: {e}", remedy=install_hint(name))
    if returncode != 0:
        raise ProviderOperationError(operation, returncode, remedy=remedy)


def init_command(config: SessionConfig, store: Path) -> List[str]:
    """<provider> -init <init options...> <store>"""
    return [config.provider, ProviderFlags.INIT, *config.init_args, str(store)]


def attach_command(config: SessionConfig, store: Path, target: Path) -> List[str]:
    """<provider> <mount options...> <store> <target>"""
    return [config.provider, *config.mount_args, str(store), str(target)]


def passwd_command(config: SessionConfig, store: Path) -> List[str]:
    """<provider> -passwd <store>"""
    return [config.provider, ProviderFlags.PASSWD, str(store)]


def initialize_store(config: SessionConfig, store: Path) -> None:
    """Ask the provider to create its encrypted layout in ``store``."""
    run_provider(init_command(config, store), "Initialization")


def attach_store(config: SessionConfig, store: Path, target: Path, guard: Optional[SignalGuard] = None) -> None:
    """Ask the provider to mount ``store`` on ``target``."""
    run_provider(
        attach_command(config, store, target),
        "Mount",
        guard=guard,
        remedy="Check the password and the mount options",
    )


def change_password(config: SessionConfig, store: Path) -> None:
    """Ask the provider to change the store's password (interactive)."""
    run_provider(passwd_command(config, store), "Password change")
