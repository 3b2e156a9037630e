# Path: retriever/engine/service.py
"""
Base Metadata Service

Abstract interface of the remote metadata service consumed by the
engine. Transports (HTTP, test fakes) inherit from this class.

Every method either returns its value or raises RemoteServiceError;
the engine treats any raised error as fatal.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from retriever.engine.result import (
    BundleRecord,
    DefinitionRecord,
    QueryElement,
    RetrievalResult,
)


class BaseMetadataService(ABC):
    """
    Abstract base class for metadata service transports.

    Calls are awaited one at a time by the coordinator; implementations
    do not need to be safe for concurrent use.
    """

    @abstractmethod
    async def list_sobjects(self) -> list[dict]:
        """
        List object descriptions.

        Returns:
            List of dictionaries with at least:
                - name: Object API name
                - custom: True for custom objects
        """
        pass

    @abstractmethod
    async def get_all_folders(self) -> dict[str, list[str]]:
        """
        Get the folder directory.

        Returns:
            Folder API type ('Email', 'Report', ...) -> folder names
        """
        pass

    @abstractmethod
    async def get_metadata_in_folders(
        self,
        metadata_type: str,
        folder_names: list[str]
    ) -> list[str]:
        """
        List members stored in the given folders.

        Args:
            metadata_type: Metadata type name (e.g. 'EmailTemplate')
            folder_names: Folders to enumerate

        Returns:
            Member names as `<folder>/<member>` paths
        """
        pass

    @abstractmethod
    async def retrieve(self, query: list[QueryElement]) -> RetrievalResult:
        """Retrieve every artifact matched by the query."""
        pass

    @abstractmethod
    async def retrieve_by_package_xml(self, path: Path) -> RetrievalResult:
        """Retrieve the artifacts listed in a local package descriptor."""
        pass

    @abstractmethod
    async def retrieve_package(self, name: str) -> RetrievalResult:
        """Retrieve an unmanaged package by name."""
        pass

    @abstractmethod
    async def get_aura_bundles(self) -> tuple[list[BundleRecord], list[DefinitionRecord]]:
        """Get every Aura bundle header and definition."""
        pass

    @abstractmethod
    async def get_aura_bundle(
        self,
        name: str
    ) -> tuple[list[BundleRecord], list[DefinitionRecord]]:
        """Get the header and definitions of one Aura bundle."""
        pass

    async def close(self) -> None:
        """Release transport resources."""
        pass


__all__ = ['BaseMetadataService']
