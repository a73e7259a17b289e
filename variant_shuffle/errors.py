"""
Error kinds raised before any grouping or shuffling begins.

Constraint relaxation and audit violations are not errors; they are recorded
on the shuffle result instead.
"""


class VariantShuffleError(Exception):
    """Base class for all application-specific errors."""
    pass


class InvalidConfigurationError(VariantShuffleError, ValueError):
    """Raised when shuffle options are contradictory or out of range."""
    pass


class InputEmptyError(VariantShuffleError, ValueError):
    """Raised when no usable track records remain after filtering blanks."""

    def __init__(self, source: str = None):
        self.source = source
        if source:
            message = f"No usable track records found in: {source}"
        else:
            message = "No usable track records supplied"
        super().__init__(message)


class InputFormatError(VariantShuffleError, ValueError):
    """Raised when a track list cannot be read as CSV or M3U (e.g. no path column)."""
    pass
