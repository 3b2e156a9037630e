# Path: retriever/core/__init__.py
"""
Retriever Core Module

Core utilities for the retriever module: configuration, logging
and the error hierarchy.
"""

from .config_loader import ConfigLoader
from .logger import get_logger, configure_logging
from .errors import (
    RetrieverError,
    UsageError,
    ConfigurationError,
    RemoteServiceError,
    EmptyResultError,
    MaterializationError,
    ArchiveError,
)

__all__ = [
    'ConfigLoader',
    'get_logger',
    'configure_logging',
    'RetrieverError',
    'UsageError',
    'ConfigurationError',
    'RemoteServiceError',
    'EmptyResultError',
    'MaterializationError',
    'ArchiveError',
]
