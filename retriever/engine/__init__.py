# Path: retriever/engine/__init__.py
"""Engine Module - Query Building, Retrieval and Materialization"""

from .coordinator import RetrievalCoordinator
from .query_builder import QueryBuilder
from .folder_resolver import FolderResolver
from .materializer import FileMaterializer
from .bundle_decomposer import BundleDecomposer
from .service import BaseMetadataService
from .protocol_handlers import HTTPMetadataService

__all__ = [
    'RetrievalCoordinator',
    'QueryBuilder',
    'FolderResolver',
    'FileMaterializer',
    'BundleDecomposer',
    'BaseMetadataService',
    'HTTPMetadataService',
]
