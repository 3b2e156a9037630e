# Path: retriever/__init__.py
"""
Retriever - metadata retrieval and materialization.

Fetches configuration artifacts from a remote metadata service and
writes them out as a local source tree.
"""

__version__ = '0.1.0'
