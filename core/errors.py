"""
Exceptions raised by the submission tools.
"""


class DependencyResolverError(Exception):
    """Base class for fatal dependency resolution errors."""


class MainTexNotFoundError(DependencyResolverError):
    """Raised when the root document does not exist."""


class ScannerUnavailableError(DependencyResolverError):
    """Raised when the directive patterns cannot be compiled."""


class SubmissionError(Exception):
    """Raised for invalid submission build requests."""
