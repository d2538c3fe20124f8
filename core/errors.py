"""
Exception types raised while replaying an operation log.
"""


class ReplayError(Exception):
    """Base class for every replay failure."""
    pass


class EmptyLogError(ReplayError):
    """Raised when an operation log is built from zero operations."""
    pass


class RangeError(ReplayError):
    """Raised when an operation would address positions outside the data."""
    pass


class InvariantViolation(ReplayError):
    """Raised when backward replay would have to undo an Init operation."""
    pass


class OperationFormatError(ReplayError, ValueError):
    """Raised when a log record cannot be turned into an operation."""
    pass
