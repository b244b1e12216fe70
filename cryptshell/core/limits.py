# core/limits.py - SINGLE SOURCE OF TRUTH for timeouts and thresholds
"""
All numeric limits, timeouts, and thresholds MUST be defined here.
No other module may define these values.

Attach, init, passwd and the session command are interactive and run
without a timeout. Only the non-interactive probes are bounded.
"""


class Limits:
    """Operational limits and thresholds."""

    # ==========================================================================
    # Timeouts (seconds)
    # ==========================================================================

    # `<provider> --version` probe
    VERSION_QUERY_TIMEOUT = 10

    # fusermount -u / umount during cleanup
    DETACH_TIMEOUT = 30

    # ==========================================================================
    # Size limits
    # ==========================================================================

    # Characters of provider output quoted in diagnostics
    DIAGNOSTIC_OUTPUT_MAX_CHARS = 200

    # ==========================================================================
    # Permissions
    # ==========================================================================

    # Store and ephemeral mount targets are owner-only
    PRIVATE_DIR_MODE = 0o700
