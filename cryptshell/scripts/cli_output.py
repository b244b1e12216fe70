"""
CLI Output Formatting Module (SSOT)

This module provides consistent, ASCII-safe terminal output formatting.
Diagnostics and progress go to stderr; stdout carries only help text and
the version string.

Usage:
    from cryptshell.scripts.cli_output import CLIOutput

    out = CLIOutput.detect()
    out.log("Mounting store...")
    out.warn("Unmount failed")
    out.error("No such store")
    out.remedy("Run 'cryptshell init' first")
"""

import logging
import sys
from typing import Optional, TextIO

from rich.console import Console

from cryptshell.core.constants import Branding, ConsoleStyle


class CLIOutput:
    """
    SSOT for consistent CLI output formatting.

    Features:
    - ASCII-safe mode for broken consoles
    - Consistent [OK]/[!]/[X] prefixes
    - One-line cause + one-line remedy for fatal conditions
    """

    def __init__(self, style: Optional[ConsoleStyle] = None, stream: Optional[TextIO] = None):
        """
        Initialize CLI output formatter.

        Args:
            style: Symbol style (auto-detected when None)
            stream: Diagnostic stream (stderr when None)
        """
        self.style = style or ConsoleStyle.detect()
        # markup/highlight off: paths and provider output are printed verbatim
        if stream is None:
            self.console = Console(stderr=True, markup=False, highlight=False, soft_wrap=True)
        else:
            self.console = Console(file=stream, markup=False, highlight=False, soft_wrap=True)
        self._prefix = f"[{Branding.PROGRAM_NAME}]"

    @classmethod
    def detect(cls) -> "CLIOutput":
        """Auto-detect console capabilities and return appropriate formatter."""
        return cls(ConsoleStyle.detect())

    @property
    def use_unicode(self) -> bool:
        return self.style.mode == ConsoleStyle.UNICODE

    def _print(self, msg: str, style: Optional[str] = None):
        """Print with safe encoding fallback."""
        try:
            self.console.print(msg, style=style)
        except UnicodeEncodeError:
            safe_msg = msg.encode("ascii", errors="replace").decode("ascii")
            self.console.print(safe_msg, style=style)

    def log(self, message: str):
        """Progress message."""
        self._print(f"{self._prefix} {message}")

    def info(self, message: str):
        """Success/info message."""
        self._print(f"{self._prefix} {self.style.SUCCESS} {message}", style="green")

    def warn(self, message: str):
        """Warning message."""
        self._print(f"{self._prefix} {self.style.WARNING} {message}", style="yellow")

    def error(self, message: str):
        """Error message (the one-line cause of a fatal condition)."""
        self._print(f"{self._prefix} {self.style.FAILURE} {message}", style="bold red")

    def remedy(self, message: str):
        """One-line remedy following an error."""
        self._print(f"{self._prefix} {self.style.ARROW} {message}")


# Module-level convenience functions
_default_output = None


def get_output() -> CLIOutput:
    """Get or create default CLIOutput instance."""
    global _default_output
    if _default_output is None:
        _default_output = CLIOutput.detect()
    return _default_output


def set_output(output: Optional[CLIOutput]) -> None:
    """Replace the default CLIOutput (None resets to auto-detection)."""
    global _default_output
    _default_output = output


# =============================================================================
# Logging
# =============================================================================


def setup_logging(debug: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the cryptshell logger hierarchy.

    Installs one stderr StreamHandler on the root "cryptshell" logger.
    Calling it again replaces the handler instead of stacking a second one.

    Args:
        debug: DEBUG level when True, WARNING otherwise
        stream: Output stream (stderr when None)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(Branding.LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    for handler in list(logger.handlers):
        if getattr(handler, "_cryptshell_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    handler._cryptshell_handler = True
    logger.addHandler(handler)
    logger.propagate = False

    return logger
