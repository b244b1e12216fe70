# CryptShell SSOT core modules
# This package contains all single-source-of-truth modules for the CryptShell runtime.
# =============================================================================
# Version
# =============================================================================
from .version import MIN_PROVIDER_VERSION, VERSION

# =============================================================================
# Public API
# =============================================================================
__all__ = [
    "VERSION",
    "MIN_PROVIDER_VERSION",
]
