# Path: retriever/core/errors.py
"""
Retriever Errors

Exception hierarchy for the retrieval pipeline. Every fatal condition
is a RetrieverError subclass; the CLI maps them to a non-zero exit.
Non-fatal conditions (service warnings, per-entry archive failures)
are carried on result objects instead.
"""

from typing import Iterable


class RetrieverError(Exception):
    """Base class for all fatal retrieval errors."""


class UsageError(RetrieverError):
    """Invalid flag combination or missing input, raised before any remote call."""


class ConfigurationError(RetrieverError):
    """Missing or invalid configuration value."""


class RemoteServiceError(RetrieverError):
    """Failure reported by, or while talking to, the metadata service."""


class EmptyResultError(RetrieverError):
    """Service returned only its placeholder package descriptor."""

    def __init__(self, requested: Iterable[str], problems: Iterable[str] = ()):
        self.requested = list(requested)
        # Service warnings returned with the empty result
        self.problems = list(problems)
        super().__init__(
            f"Could not find any objects for {', '.join(self.requested)}. "
            f"(Is the metadata type correct?)"
        )


class MaterializationError(RetrieverError):
    """Directory creation or file write failure while writing output."""


class ArchiveError(RetrieverError):
    """Archive could not be opened or failed its safety limits."""


__all__ = [
    'RetrieverError',
    'UsageError',
    'ConfigurationError',
    'RemoteServiceError',
    'EmptyResultError',
    'MaterializationError',
    'ArchiveError',
]
