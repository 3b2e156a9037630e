# Path: retriever/engine/protocol_handlers.py
"""
Protocol Handlers

HTTP transport for the metadata service. Talks JSON to a metadata
gateway and turns zipped retrieve payloads into in-memory file sets.

Architecture:
- Async HTTP client (aiohttp) with one lazily created session
- Configurable timeouts and opaque bearer token
- Every transport failure surfaces as RemoteServiceError, never retried
"""

import asyncio
import base64
import binascii
import io
import zipfile
from pathlib import Path
from urllib.parse import quote
from typing import Any, Optional

import aiohttp

from retriever.core.logger import get_logger
from retriever.core.config_loader import ConfigLoader
from retriever.core.errors import ConfigurationError, RemoteServiceError, UsageError
from retriever.engine.service import BaseMetadataService
from retriever.engine.result import (
    BundleRecord,
    DefinitionRecord,
    QueryElement,
    RetrievalResult,
)
from retriever.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    HTTP_BAD_REQUEST,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)
from retriever.engine.constants import (
    ENDPOINT_SOBJECTS,
    ENDPOINT_FOLDERS,
    ENDPOINT_FOLDER_MEMBERS,
    ENDPOINT_RETRIEVE,
    ENDPOINT_RETRIEVE_PACKAGE_XML,
    ENDPOINT_RETRIEVE_PACKAGE,
    ENDPOINT_AURA_BUNDLES,
    HEADER_AUTHORIZATION,
    HEADER_ACCEPT,
    DEFAULT_ACCEPT_HEADER,
    PAYLOAD_ZIP_FILE,
    PAYLOAD_PROBLEMS,
    PAYLOAD_BUNDLES,
    PAYLOAD_DEFINITIONS,
    UNPACKAGED_PREFIX,
)

logger = get_logger(__name__, 'engine')


def unpack_archive_payload(archive: bytes) -> dict[str, bytes]:
    """
    Read a retrieve archive into a file set.

    The `unpackaged/` wrapper folder is stripped; package retrievals
    keep their package folder. Directory entries are dropped.

    Args:
        archive: Raw zip bytes

    Returns:
        Relative path -> content

    Raises:
        RemoteServiceError: If the payload is not a readable zip
    """
    files: dict[str, bytes] = {}
    try:
        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue
                name = info.filename
                if name.startswith(UNPACKAGED_PREFIX):
                    name = name[len(UNPACKAGED_PREFIX):]
                files[name] = zf.read(info)
    except zipfile.BadZipFile as e:
        raise RemoteServiceError(f"Invalid retrieve archive: {e}") from e
    return files


def parse_retrieve_payload(payload: Any) -> RetrievalResult:
    """
    Convert a retrieve response body into a RetrievalResult.

    Args:
        payload: Decoded JSON {"zipFile": <base64>, "problems": [...]}

    Raises:
        RemoteServiceError: If the payload is malformed
    """
    if not isinstance(payload, dict) or PAYLOAD_ZIP_FILE not in payload:
        raise RemoteServiceError("Malformed retrieve response: missing archive")

    try:
        archive = base64.b64decode(payload[PAYLOAD_ZIP_FILE], validate=True)
    except (binascii.Error, TypeError, ValueError) as e:
        raise RemoteServiceError(f"Malformed retrieve response: {e}") from e

    problems = [str(p) for p in payload.get(PAYLOAD_PROBLEMS) or []]
    return RetrievalResult(
        files=unpack_archive_payload(archive),
        problems=problems,
        archive=archive,
    )


def parse_bundle_payload(payload: Any) -> tuple[list[BundleRecord], list[DefinitionRecord]]:
    """Convert an Aura bundle response body into header and definition records."""
    if not isinstance(payload, dict):
        raise RemoteServiceError("Malformed bundle response")

    bundles = [BundleRecord.from_record(r) for r in payload.get(PAYLOAD_BUNDLES) or []]
    definitions = [
        DefinitionRecord.from_record(r) for r in payload.get(PAYLOAD_DEFINITIONS) or []
    ]
    return bundles, definitions


class HTTPMetadataService(BaseMetadataService):
    """
    Metadata service over HTTP.

    Example:
        service = HTTPMetadataService()
        try:
            result = await service.retrieve([QueryElement(['ApexClass'], ['*'])])
        finally:
            await service.close()
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize HTTP transport.

        Args:
            config: Optional ConfigLoader instance

        Raises:
            ConfigurationError: If no service URL is configured
        """
        self.config = config if config is not None else ConfigLoader()

        base_url = self.config.get('service_url')
        if not base_url:
            raise ConfigurationError(
                "No metadata service configured (set RETRIEVER_SERVICE_URL)"
            )
        self.base_url = base_url.rstrip('/')
        self.access_token = self.config.get('access_token')
        self.timeout = self.config.get('request_timeout', DEFAULT_TIMEOUT)
        self.connect_timeout = self.config.get('connect_timeout', DEFAULT_CONNECT_TIMEOUT)

        self._session: Optional[aiohttp.ClientSession] = None

    async def list_sobjects(self) -> list[dict]:
        return await self._request_json('GET', ENDPOINT_SOBJECTS)

    async def get_all_folders(self) -> dict[str, list[str]]:
        return await self._request_json('GET', ENDPOINT_FOLDERS)

    async def get_metadata_in_folders(
        self,
        metadata_type: str,
        folder_names: list[str]
    ) -> list[str]:
        return await self._request_json(
            'POST',
            ENDPOINT_FOLDER_MEMBERS,
            {'type': metadata_type, 'folders': list(folder_names)},
        )

    async def retrieve(self, query: list[QueryElement]) -> RetrievalResult:
        payload = await self._request_json(
            'POST',
            ENDPOINT_RETRIEVE,
            {'query': [element.to_dict() for element in query]},
        )
        return parse_retrieve_payload(payload)

    async def retrieve_by_package_xml(self, path: Path) -> RetrievalResult:
        try:
            package_xml = Path(path).read_text(encoding='utf-8')
        except OSError as e:
            raise UsageError(f"Cannot read package xml {path}: {e}") from e

        payload = await self._request_json(
            'POST',
            ENDPOINT_RETRIEVE_PACKAGE_XML,
            {'packageXml': package_xml},
        )
        return parse_retrieve_payload(payload)

    async def retrieve_package(self, name: str) -> RetrievalResult:
        payload = await self._request_json('POST', ENDPOINT_RETRIEVE_PACKAGE, {'name': name})
        return parse_retrieve_payload(payload)

    async def get_aura_bundles(self) -> tuple[list[BundleRecord], list[DefinitionRecord]]:
        payload = await self._request_json('GET', ENDPOINT_AURA_BUNDLES)
        return parse_bundle_payload(payload)

    async def get_aura_bundle(
        self,
        name: str
    ) -> tuple[list[BundleRecord], list[DefinitionRecord]]:
        endpoint = f"{ENDPOINT_AURA_BUNDLES}/{quote(name, safe='')}"
        payload = await self._request_json('GET', endpoint)
        return parse_bundle_payload(payload)

    async def _request_json(
        self,
        method: str,
        endpoint: str,
        body: Optional[dict] = None
    ) -> Any:
        """
        Make one request and decode its JSON body.

        Raises:
            RemoteServiceError: On connection failure, timeout, HTTP error
                status or undecodable body
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"{LOG_INPUT} {method} {url}")

        session = await self._get_session()
        try:
            async with session.request(method, url, json=body) as response:
                if response.status >= HTTP_BAD_REQUEST:
                    detail = (await response.text()).strip()
                    raise RemoteServiceError(
                        f"{method} {endpoint} failed with HTTP {response.status}: {detail}"
                    )
                logger.debug(f"{LOG_PROCESS} {method} {endpoint} -> {response.status}")
                data = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise RemoteServiceError(f"{method} {endpoint} timed out") from e
        except aiohttp.ClientError as e:
            raise RemoteServiceError(f"{method} {endpoint} failed: {e}") from e
        except ValueError as e:
            raise RemoteServiceError(f"{method} {endpoint} returned invalid JSON: {e}") from e

        logger.debug(f"{LOG_OUTPUT} {method} {endpoint} decoded")
        return data

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(
                total=self.timeout,
                connect=self.connect_timeout,
            )
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers=self._build_headers(),
            )
        return self._session

    def _build_headers(self) -> dict[str, str]:
        headers = {HEADER_ACCEPT: DEFAULT_ACCEPT_HEADER}
        if self.access_token:
            headers[HEADER_AUTHORIZATION] = f"Bearer {self.access_token}"
        return headers

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None


__all__ = [
    'HTTPMetadataService',
    'unpack_archive_payload',
    'parse_retrieve_payload',
    'parse_bundle_payload',
]
