# Path: retriever/engine/extraction/__init__.py
"""
Extraction Module

Static resource handling: descriptor parsing and path-safe expansion
of zipped resources into directories.
"""

from retriever.engine.extraction.resource_expander import (
    ResourceExpander,
    parse_resource_descriptor,
    is_resource_descriptor,
)

__all__ = [
    'ResourceExpander',
    'parse_resource_descriptor',
    'is_resource_descriptor',
]
