# Path: retriever/tests/fixtures.py
"""
Test Fixtures for the Retriever

In-memory metadata service and archive builders shared by the tests.
"""

import io
import zipfile
from pathlib import Path
from typing import Iterable, Optional

from retriever.engine.service import BaseMetadataService
from retriever.engine.result import (
    BundleRecord,
    DefinitionRecord,
    QueryElement,
    RetrievalResult,
)

PLACEHOLDER_PACKAGE = b'<?xml version="1.0" encoding="UTF-8"?><Package/>'

ZIP_RESOURCE_META = b"""<?xml version="1.0" encoding="UTF-8"?>
<StaticResource xmlns="http://soap.sforce.com/2006/04/metadata">
    <cacheControl>Private</cacheControl>
    <contentType>application/zip</contentType>
</StaticResource>
"""

JS_RESOURCE_META = b"""<?xml version="1.0" encoding="UTF-8"?>
<StaticResource xmlns="http://soap.sforce.com/2006/04/metadata">
    <cacheControl>Public</cacheControl>
    <contentType>text/javascript</contentType>
</StaticResource>
"""


def make_zip(entries: dict[str, bytes], directories: Iterable[str] = ()) -> bytes:
    """Build an in-memory zip with the given file and directory entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as zf:
        for directory in directories:
            zf.writestr(zipfile.ZipInfo(directory.rstrip('/') + '/'), b'')
        for name, data in entries.items():
            zf.writestr(name, data)
    return buffer.getvalue()


class FakeMetadataService(BaseMetadataService):
    """
    Scripted metadata service.

    Every call is appended to `calls` as (method, args). A method listed
    in `failures` raises the given exception instead of answering.
    """

    def __init__(
        self,
        sobjects: Optional[list[dict]] = None,
        folders: Optional[dict[str, list[str]]] = None,
        folder_members: Optional[dict[str, list[str]]] = None,
        retrieve_result: Optional[RetrievalResult] = None,
        packages: Optional[dict[str, RetrievalResult]] = None,
        bundles: Optional[list[BundleRecord]] = None,
        definitions: Optional[list[DefinitionRecord]] = None,
        failures: Optional[dict[str, Exception]] = None,
    ):
        self.sobjects = sobjects or []
        self.folders = folders or {}
        self.folder_members = folder_members or {}
        self.retrieve_result = retrieve_result or RetrievalResult(
            files={'package.xml': PLACEHOLDER_PACKAGE}
        )
        self.packages = packages or {}
        self.bundles = bundles or []
        self.definitions = definitions or []
        self.failures = failures or {}
        self.calls: list[tuple] = []
        self.closed = False

    def _record(self, method: str, *args) -> None:
        self.calls.append((method, args))
        if method in self.failures:
            raise self.failures[method]

    def called(self, method: str) -> list[tuple]:
        return [args for name, args in self.calls if name == method]

    async def list_sobjects(self) -> list[dict]:
        self._record('list_sobjects')
        return self.sobjects

    async def get_all_folders(self) -> dict[str, list[str]]:
        self._record('get_all_folders')
        return self.folders

    async def get_metadata_in_folders(
        self,
        metadata_type: str,
        folder_names: list[str]
    ) -> list[str]:
        self._record('get_metadata_in_folders', metadata_type, list(folder_names))
        return self.folder_members.get(metadata_type, [])

    async def retrieve(self, query: list[QueryElement]) -> RetrievalResult:
        self._record('retrieve', query)
        return self.retrieve_result

    async def retrieve_by_package_xml(self, path: Path) -> RetrievalResult:
        self._record('retrieve_by_package_xml', path)
        return self.retrieve_result

    async def retrieve_package(self, name: str) -> RetrievalResult:
        self._record('retrieve_package', name)
        return self.packages[name]

    async def get_aura_bundles(self) -> tuple[list[BundleRecord], list[DefinitionRecord]]:
        self._record('get_aura_bundles')
        return self.bundles, self.definitions

    async def get_aura_bundle(
        self,
        name: str
    ) -> tuple[list[BundleRecord], list[DefinitionRecord]]:
        self._record('get_aura_bundle', name)
        bundles = [b for b in self.bundles if b.developer_name == name]
        ids = {b.id for b in bundles}
        return bundles, [d for d in self.definitions if d.bundle_id in ids]

    async def close(self) -> None:
        self.closed = True


__all__ = [
    'FakeMetadataService',
    'make_zip',
    'PLACEHOLDER_PACKAGE',
    'ZIP_RESOURCE_META',
    'JS_RESOURCE_META',
]
