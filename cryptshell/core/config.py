# core/config.py - Session configuration, built once per process
"""
SINGLE SOURCE OF TRUTH for configuration handling.

A SessionConfig is created ONCE at process start (normally from the
environment) and passed explicitly into every operation. No other module
reads CRYPTSHELL_* variables.

Option strings are opaque: they are split into argv words with shell
word-splitting and handed to the provider untouched.
"""

import logging
import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

from cryptshell.core.constants import TRUTHY_VALUES, Defaults, EnvKeys
from cryptshell.core.errors import CryptShellError
from cryptshell.core.paths import Paths

_config_logger = logging.getLogger("cryptshell.config")


def _get(environ: Mapping[str, str], key: str) -> str:
    """Read a variable, treating blank values as unset."""
    return (environ.get(key) or "").strip()


def _split_options(key: str, value: str) -> List[str]:
    """Shell word-splitting of an option string. Contents are not validated."""
    try:
        return shlex.split(value)
    except ValueError as e:
        raise CryptShellError(f"Cannot parse {key}: {e}", remedy="Check the quoting in the option string")


@dataclass(frozen=True)
class SessionConfig:
    """
    Immutable configuration for one CryptShell invocation.

    Attributes:
        store_path: Encrypted store directory
        mount_point: User-designated mount target, or None for ephemeral
        init_options: Extra provider arguments for -init (opaque)
        mount_options: Extra provider arguments for mounting (opaque)
        session_command: Command line run inside the mounted view
        provider: Provider executable name
        debug: Enable DEBUG logging
    """

    store_path: Path
    mount_point: Optional[Path] = None
    init_options: str = ""
    mount_options: str = ""
    session_command: str = Defaults.SESSION_COMMAND
    provider: str = Defaults.PROVIDER
    debug: bool = False

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "SessionConfig":
        """
        Build the configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            SessionConfig with defaults applied for unset variables
        """
        environ = os.environ if environ is None else environ

        store_raw = _get(environ, EnvKeys.STORE)
        store_path = Paths.expand(store_raw) if store_raw else Paths.default_store()

        mount_raw = _get(environ, EnvKeys.MOUNT_POINT)
        mount_point = Paths.expand(mount_raw) if mount_raw else None

        session_command = (
            _get(environ, EnvKeys.COMMAND) or _get(environ, EnvKeys.SHELL) or Defaults.SESSION_COMMAND
        )

        config = cls(
            store_path=store_path,
            mount_point=mount_point,
            init_options=_get(environ, EnvKeys.INIT_OPTS),
            mount_options=_get(environ, EnvKeys.MOUNT_OPTS),
            session_command=session_command,
            provider=_get(environ, EnvKeys.PROVIDER) or Defaults.PROVIDER,
            debug=_get(environ, EnvKeys.DEBUG).lower() in TRUTHY_VALUES,
        )
        _config_logger.debug(f"Config loaded: {config}")
        return config

    @property
    def init_args(self) -> List[str]:
        """init_options split into argv words."""
        return _split_options(EnvKeys.INIT_OPTS, self.init_options)

    @property
    def mount_args(self) -> List[str]:
        """mount_options split into argv words."""
        return _split_options(EnvKeys.MOUNT_OPTS, self.mount_options)

    @property
    def uses_ephemeral_target(self) -> bool:
        """True when no mount point is configured."""
        return self.mount_point is None
