# core/constants.py - SINGLE SOURCE OF TRUTH for all shared string literals
"""
All shared string constants MUST be defined here.
No other module may define these values.

Categories:
- ConsoleStyle: Unicode vs ASCII-safe output mode
- EnvKeys: Environment variables read by core.config
- Defaults: Fallback configuration values
- ProviderFlags / DetachCommands: External command-line contracts
- ExitCodes: Process exit statuses
- CLIOperations: Dispatcher commands and their help metadata
- Branding: Product name and program name
"""

import os

# =============================================================================
# Console Style - Unicode vs ASCII-safe output
# =============================================================================


class ConsoleStyle:
    """
    Console output style selection for unicode vs ASCII-safe rendering.

    Usage:
        style = ConsoleStyle.detect()
        print(style.SUCCESS + " Operation completed")
    """

    # Unicode mode (default)
    UNICODE = "unicode"
    # ASCII-safe mode (for dumb terminals and redirected output)
    ASCII = "ascii"

    # Symbol mappings by mode
    _SYMBOLS = {
        UNICODE: {
            "SUCCESS": "✓",
            "FAILURE": "✗",
            "WARNING": "⚠",
            "ARROW": "→",
        },
        ASCII: {
            "SUCCESS": "[OK]",
            "FAILURE": "[X]",
            "WARNING": "[!]",
            "ARROW": "->",
        },
    }

    def __init__(self, mode: str = None):
        """Initialize with specified mode or auto-detect."""
        self._mode = mode or self.detect_mode()

    @classmethod
    def detect_mode(cls) -> str:
        """
        Auto-detect console style based on environment.

        Returns ASCII mode if:
        - CRYPTSHELL_ASCII is set to a truthy value
        - TERM is 'dumb'
        - stderr cannot encode the unicode symbols
        """
        if os.environ.get(EnvKeys.ASCII, "").lower() in TRUTHY_VALUES:
            return cls.ASCII

        if os.environ.get("TERM", "").lower() == "dumb":
            return cls.ASCII

        import sys

        encoding = getattr(sys.stderr, "encoding", None) or ""
        if encoding and "utf" not in encoding.lower():
            return cls.ASCII

        return cls.UNICODE

    @classmethod
    def detect(cls) -> "ConsoleStyle":
        """Factory method to create ConsoleStyle with auto-detection."""
        return cls(cls.detect_mode())

    @property
    def mode(self) -> str:
        """Current mode (UNICODE or ASCII)."""
        return self._mode

    def symbol(self, name: str) -> str:
        """Get symbol by name for current mode."""
        return self._SYMBOLS.get(self._mode, self._SYMBOLS[self.UNICODE]).get(name, "")

    @property
    def SUCCESS(self) -> str:
        return self.symbol("SUCCESS")

    @property
    def FAILURE(self) -> str:
        return self.symbol("FAILURE")

    @property
    def WARNING(self) -> str:
        return self.symbol("WARNING")

    @property
    def ARROW(self) -> str:
        return self.symbol("ARROW")


# Values accepted as "on" for boolean environment switches
TRUTHY_VALUES = ("1", "true", "yes", "on")


# =============================================================================
# Environment Keys - read ONLY by core.config
# =============================================================================


class EnvKeys:
    """Environment variables that configure a session."""

    STORE = "CRYPTSHELL_STORE"
    MOUNT_POINT = "CRYPTSHELL_MOUNTPOINT"
    INIT_OPTS = "CRYPTSHELL_INIT_OPTS"
    MOUNT_OPTS = "CRYPTSHELL_MOUNT_OPTS"
    COMMAND = "CRYPTSHELL_COMMAND"
    PROVIDER = "CRYPTSHELL_PROVIDER"
    DEBUG = "CRYPTSHELL_DEBUG"
    ASCII = "CRYPTSHELL_ASCII"

    # Inherited from the login environment
    SHELL = "SHELL"
    XDG_RUNTIME_DIR = "XDG_RUNTIME_DIR"


# =============================================================================
# Defaults
# =============================================================================


class Defaults:
    """Default configuration values."""

    STORE_PATH = "~/.cryptshell/store"
    PROVIDER = "gocryptfs"
    SESSION_COMMAND = "/bin/sh"

    # mkdtemp prefix for ephemeral mount targets
    EPHEMERAL_PREFIX = "cryptshell-"


# =============================================================================
# Provider CLI Flags - gocryptfs command-line contract
# =============================================================================


class ProviderFlags:
    """Provider flags for command construction (SSOT)."""

    VERSION = "--version"
    INIT = "-init"
    PASSWD = "-passwd"


class DetachCommands:
    """Host utilities that detach a FUSE mount, by platform."""

    LINUX = ("fusermount", "-u")
    DARWIN = ("umount",)


# =============================================================================
# Exit Codes
# =============================================================================


class ExitCodes:
    """Process exit statuses. Anything that is not success is FAILURE."""

    OK = 0
    FAILURE = 1


# =============================================================================
# CLI Operations - dispatcher commands
# =============================================================================


class CLIOperations:
    """
    Central definition of all dispatcher commands.

    Each operation has:
    - summary: one-line help text
    - requires_provider: True if the capability check must pass first
    """

    OP_HELP = "help"
    OP_VERSION = "version"
    OP_INIT = "init"
    OP_MOUNT = "mount"
    OP_PASSWD = "passwd"

    # Used when no command is given
    DEFAULT = OP_MOUNT

    # Flag-style spellings accepted for the same operations
    ALIASES = {
        "-h": OP_HELP,
        "--help": OP_HELP,
        "-V": OP_VERSION,
        "--version": OP_VERSION,
    }

    OPERATIONS = {
        OP_MOUNT: {
            "summary": "Mount the store, run the session command inside it, then unmount (default)",
            "requires_provider": True,
        },
        OP_INIT: {
            "summary": "Create a new encrypted store",
            "requires_provider": True,
        },
        OP_PASSWD: {
            "summary": "Change the password of the encrypted store",
            "requires_provider": True,
        },
        OP_VERSION: {
            "summary": "Print the program version",
            "requires_provider": False,
        },
        OP_HELP: {
            "summary": "Show this help",
            "requires_provider": False,
        },
    }

    # Order used when rendering help
    HELP_ORDER = [OP_MOUNT, OP_INIT, OP_PASSWD, OP_VERSION, OP_HELP]

    @classmethod
    def resolve(cls, name: str) -> str:
        """Map an alias to its operation id. Unknown names are returned unchanged."""
        return cls.ALIASES.get(name, name)

    @classmethod
    def requires_provider(cls, op_id: str) -> bool:
        """Check whether an operation needs the capability check."""
        return cls.OPERATIONS.get(op_id, {}).get("requires_provider", False)


# =============================================================================
# Branding
# =============================================================================


class Branding:
    """Product branding constants."""

    PRODUCT_NAME = "CryptShell"
    PROGRAM_NAME = "cryptshell"
    PRODUCT_DESCRIPTION = "Run a shell inside a temporarily mounted gocryptfs store"

    # Root of the logger hierarchy
    LOGGER_NAME = "cryptshell"
