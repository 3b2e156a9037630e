# Path: retriever/engine/query_builder.py
"""
Query Builder

Assembles the type -> member-pattern request sent to the metadata
service. One builder serves both command modes:

- export mode: the static wildcard catalog plus every foldered type
  found in the folder directory, minus exclusions
- fetch mode: exactly the caller's types, or the caller's names verbatim

Foldered types go through the FolderResolver, CustomObject gets the
explicit standard-object list (wildcards only match custom objects).
"""

from pathlib import Path
from typing import Iterable, Optional

from retriever.core.logger import get_logger
from retriever.core.errors import UsageError, RemoteServiceError
from retriever.engine.service import BaseMetadataService
from retriever.engine.result import QueryElement
from retriever.engine.folder_resolver import (
    FolderResolver,
    is_foldered,
    to_folder_type,
    to_metadata_type,
)
from retriever.engine.constants import (
    WILDCARD_TYPES,
    WILDCARD_MEMBER,
    CUSTOM_OBJECT_TYPE,
    STANDARD_OBJECT_EXCLUDED_SUFFIXES,
)
from retriever.constants import LOG_INPUT, LOG_PROCESS, LOG_OUTPUT

logger = get_logger(__name__, 'engine')


def split_names(values: Optional[Iterable[str]]) -> list[str]:
    """
    Flatten repeated and comma-separated option values.

    Example:
        split_names(['ApexClass,ApexPage', ' Flow ', ''])
        # ['ApexClass', 'ApexPage', 'Flow']
    """
    names: list[str] = []
    for value in values or []:
        for name in value.split(','):
            name = name.strip()
            if name:
                names.append(name)
    return names


def validate_request(
    types: list[str],
    names: list[str],
    package_xml: Optional[Path] = None
) -> None:
    """
    Reject invalid fetch inputs before any remote call.

    Raises:
        UsageError: If nothing was requested, or several types were
            combined with several names
    """
    if not types and not package_xml:
        raise UsageError("must specify object type and/or object name or package xml path")
    if len(types) > 1 and len(names) > 1:
        raise UsageError(
            "You cannot specify entity names if you specify more than one metadata type."
        )


class QueryBuilder:
    """
    Builds retrieval queries.

    Example:
        builder = QueryBuilder(service)
        query = await builder.build(types=['ApexClass'])
        # [QueryElement(types=['ApexClass'], members=['*'])]

        query = await builder.build(excludes=['Document'], export_all=True)
    """

    def __init__(
        self,
        service: BaseMetadataService,
        folder_resolver: Optional[FolderResolver] = None
    ):
        self.service = service
        self.folder_resolver = folder_resolver if folder_resolver else FolderResolver(service)

    async def build(
        self,
        types: Iterable[str] = (),
        names: Iterable[str] = (),
        excludes: Iterable[str] = (),
        export_all: bool = False
    ) -> list[QueryElement]:
        """
        Build a query.

        Args:
            types: Requested type names (fetch mode)
            names: Explicit member names (fetch mode)
            excludes: Type names to leave out
            export_all: Use the wildcard catalog and folder directory
                instead of `types`

        Returns:
            Ordered list of query elements

        Raises:
            UsageError: If fetch inputs are invalid
            RemoteServiceError: If object or folder listing fails
        """
        names = list(names)
        excluded = set(split_names(excludes))

        if export_all:
            requested = await self._export_types()
            names = []
        else:
            # Aliased and repeated types collapse to one element each
            requested = list(dict.fromkeys(to_metadata_type(type_name) for type_name in types))
            validate_request(requested, names)

        logger.info(
            f"{LOG_INPUT} Building query for {len(requested)} types "
            f"({len(excluded)} excluded, {len(names)} names)"
        )

        if names:
            return [QueryElement(types=requested, members=names)]

        query: list[QueryElement] = []
        for type_name in requested:
            if self._is_excluded(type_name, excluded):
                logger.debug(f"{LOG_PROCESS} Excluded: {type_name}")
                continue

            if is_foldered(type_name):
                query.append(await self.folder_resolver.resolve(type_name))
            elif type_name == CUSTOM_OBJECT_TYPE:
                members = await self.standard_object_members()
                query.append(QueryElement(types=[CUSTOM_OBJECT_TYPE], members=members))
            else:
                query.append(QueryElement(types=[type_name], members=[WILDCARD_MEMBER]))

        logger.info(f"{LOG_OUTPUT} Query has {len(query)} elements")
        return query

    async def standard_object_members(self) -> list[str]:
        """
        Members for the CustomObject element.

        The wildcard only matches custom objects, so every standard object
        is listed explicitly after it. Custom objects and platform-generated
        tag/history/share objects are left out.
        """
        try:
            sobjects = await self.service.list_sobjects()
        except RemoteServiceError as e:
            raise RemoteServiceError(f"Could not list objects: {e}") from e

        members = [WILDCARD_MEMBER]
        for sobject in sobjects:
            name = str(sobject.get('name', ''))
            if not name or sobject.get('custom'):
                continue
            if name.endswith(STANDARD_OBJECT_EXCLUDED_SUFFIXES):
                continue
            members.append(name)
        return members

    async def _export_types(self) -> list[str]:
        """Wildcard catalog followed by every foldered type in the directory."""
        requested = list(WILDCARD_TYPES)
        folders = await self.folder_resolver.get_all_folders()
        for folder_type in folders:
            metadata_type = to_metadata_type(folder_type)
            if metadata_type not in requested:
                requested.append(metadata_type)
        return requested

    @staticmethod
    def _is_excluded(type_name: str, excluded: set[str]) -> bool:
        if type_name in excluded:
            return True
        if is_foldered(type_name):
            return (
                to_folder_type(type_name) in excluded
                or to_metadata_type(type_name) in excluded
            )
        return False


__all__ = ['QueryBuilder', 'split_names', 'validate_request']
