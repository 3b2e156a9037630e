# Path: retriever/engine/folder_resolver.py
"""
Folder Resolver

Foldered metadata types (email templates, dashboards, reports,
documents) cannot be wildcard-queried. Their members are discovered
by listing folders, then listing the members of each folder.
"""

from typing import Optional

from retriever.core.logger import get_logger
from retriever.core.errors import RemoteServiceError
from retriever.engine.service import BaseMetadataService
from retriever.engine.result import QueryElement
from retriever.engine.constants import (
    FOLDER_TYPE_BY_METADATA_TYPE,
    METADATA_TYPE_BY_FOLDER_TYPE,
)
from retriever.constants import LOG_INPUT, LOG_OUTPUT

logger = get_logger(__name__, 'engine')


def is_foldered(type_name: str) -> bool:
    """True for a foldered type under either its metadata or folder API name."""
    return (
        type_name in FOLDER_TYPE_BY_METADATA_TYPE
        or type_name in METADATA_TYPE_BY_FOLDER_TYPE
    )


def to_metadata_type(type_name: str) -> str:
    """Translate a folder API type name ('Email') to its metadata type name."""
    return METADATA_TYPE_BY_FOLDER_TYPE.get(type_name, type_name)


def to_folder_type(type_name: str) -> str:
    """Translate a metadata type name ('EmailTemplate') to its folder API name."""
    return FOLDER_TYPE_BY_METADATA_TYPE.get(type_name, type_name)


class FolderResolver:
    """
    Resolves foldered types into query elements.

    The folder directory is fetched at most once per resolver, however
    many foldered types are resolved.

    Example:
        resolver = FolderResolver(service)
        element = await resolver.resolve('Email')
        # QueryElement(types=['EmailTemplate'], members=['Sales/Welcome', ...])
    """

    def __init__(self, service: BaseMetadataService):
        self.service = service
        self._folders: Optional[dict[str, list[str]]] = None

    async def get_all_folders(self) -> dict[str, list[str]]:
        """
        Get the folder directory, fetching it on first use.

        Returns:
            Folder API type -> ordered folder names

        Raises:
            RemoteServiceError: If the folder listing fails
        """
        if self._folders is None:
            logger.info(f"{LOG_INPUT} Listing folders")
            try:
                folders = await self.service.get_all_folders()
            except RemoteServiceError as e:
                raise RemoteServiceError(f"Could not get folders: {e}") from e
            self._folders = {
                folder_type: list(names) for folder_type, names in folders.items()
            }
            logger.info(f"{LOG_OUTPUT} Found folders for {len(self._folders)} types")
        return self._folders

    async def resolve(self, type_name: str) -> QueryElement:
        """
        Build the query element for one foldered type.

        Args:
            type_name: Metadata or folder API type name ('EmailTemplate' or 'Email')

        Returns:
            QueryElement listing every member of every folder of the type

        Raises:
            RemoteServiceError: If either remote call fails
        """
        metadata_type = to_metadata_type(type_name)
        folders = await self.get_all_folders()
        folder_names = folders.get(to_folder_type(metadata_type), [])

        try:
            members = await self.service.get_metadata_in_folders(metadata_type, folder_names)
        except RemoteServiceError as e:
            raise RemoteServiceError(f"Could not get metadata in folders: {e}") from e

        logger.info(
            f"{LOG_OUTPUT} {metadata_type}: {len(members)} members "
            f"in {len(folder_names)} folders"
        )
        return QueryElement(types=[metadata_type], members=list(members))


__all__ = [
    'FolderResolver',
    'is_foldered',
    'to_metadata_type',
    'to_folder_type',
]
