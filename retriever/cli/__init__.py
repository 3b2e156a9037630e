# Path: retriever/cli/__init__.py
"""
Retriever CLI Module

Command-line interface for export and fetch.
"""

from retriever.cli.retrieve_cli import main, build_parser

__all__ = ['main', 'build_parser']
