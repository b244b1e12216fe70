# core/errors.py - Exception taxonomy for all CryptShell operations
"""
Every fatal condition is a CryptShellError carrying a one-line cause and,
where one exists, a one-line remedy. The dispatcher prints both and exits
with ExitCodes.FAILURE.

Categories:
- Environment errors: provider or detach utility missing/incompatible
- Precondition errors: store missing (mount, passwd) or not empty (init)
- External operation failures: provider exited non-zero
- Cancellation: a signal interrupted the session
"""

import signal
from typing import Optional


class CryptShellError(Exception):
    """Base class for fatal CryptShell conditions."""

    def __init__(self, message: str, remedy: Optional[str] = None):
        self.message = message
        self.remedy = remedy
        super().__init__(message)


# =============================================================================
# Environment errors
# =============================================================================


class ProviderError(CryptShellError):
    """The external mount provider is unusable."""

    pass


class ProviderNotFoundError(ProviderError):
    """Provider executable is not on the search path."""

    pass


class ProviderVersionUnknownError(ProviderError):
    """Provider printed no recognizable version token."""

    pass


class ProviderIncompatibleError(ProviderError):
    """Provider version is below the required minimum."""

    def __init__(self, message: str, found: str, required: str, remedy: Optional[str] = None):
        self.found = found
        self.required = required
        super().__init__(message, remedy)


class DetachUtilityMissingError(CryptShellError):
    """No host utility is available to detach a mount."""

    pass


# =============================================================================
# Precondition errors
# =============================================================================


class StoreNotFoundError(CryptShellError):
    """The encrypted store directory does not exist."""

    pass


class StoreNotEmptyError(CryptShellError):
    """The store path already holds files; refusing to initialize over them."""

    pass


# =============================================================================
# External operation failures
# =============================================================================


class ProviderOperationError(CryptShellError):
    """Provider exited non-zero during init, attach or passwd."""

    def __init__(self, operation: str, returncode: int, remedy: Optional[str] = None):
        self.operation = operation
        self.returncode = returncode
        super().__init__(f"{operation} failed (exit {returncode})", remedy)


# =============================================================================
# Cancellation
# =============================================================================


class SessionInterrupted(CryptShellError):
    """An interrupt or termination signal ended the session."""

    def __init__(self, signum: int):
        self.signum = signum
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        super().__init__(f"Interrupted by {name}; mount cleaned up")
