# Path: retriever/engine/coordinator.py
"""
Retrieval Coordinator

Main workflow orchestrator for the two command operations.
Coordinates: query -> retrieve -> materialize -> decompose/expand.

Architecture:
- Export: wildcard catalog + folders + standard objects, one retrieve
- Fetch: routed by request to Aura bundles, unmanaged packages,
  a package descriptor, or a built query
- Every remote call is awaited in turn; any error ends the operation
- IPO logging throughout
"""

import time
from pathlib import Path
from typing import Optional

from retriever.core.logger import get_logger
from retriever.core.config_loader import ConfigLoader
from retriever.core.errors import EmptyResultError, MaterializationError, UsageError
from retriever.engine.service import BaseMetadataService
from retriever.engine.query_builder import QueryBuilder, validate_request
from retriever.engine.materializer import FileMaterializer
from retriever.engine.bundle_decomposer import BundleDecomposer
from retriever.engine.extraction.resource_expander import ResourceExpander, is_resource_descriptor
from retriever.engine.result import (
    BundleManifest,
    ExportRequest,
    FetchRequest,
    RetrievalResult,
    RetrievalSummary,
)
from retriever.engine.constants import (
    AURA_FETCH_TYPE,
    PACKAGE_FETCH_TYPE,
    STATIC_RESOURCE_TYPE,
)
from retriever.constants import (
    DEFAULT_SOURCE_DIRNAME,
    PACKAGE_XML_NAME,
    PRESERVED_ARCHIVE_SUFFIX,
    MAX_ARCHIVE_SIZE,
    MAX_EXTRACTION_DEPTH,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


def is_empty_result(files: dict[str, bytes]) -> bool:
    """
    True when a retrieval matched nothing.

    The service always answers with at least its package.xml placeholder.
    """
    return not files or set(files) == {PACKAGE_XML_NAME}


class RetrievalCoordinator:
    """
    Coordinates complete retrieval workflows.

    Example:
        coordinator = RetrievalCoordinator(HTTPMetadataService())
        try:
            summary = await coordinator.fetch(FetchRequest(types=['ApexClass']))
        finally:
            await coordinator.close()
    """

    def __init__(
        self,
        service: BaseMetadataService,
        config: Optional[ConfigLoader] = None
    ):
        """
        Initialize retrieval coordinator.

        Args:
            service: Metadata service transport
            config: Optional ConfigLoader instance
        """
        self.service = service
        self.config = config if config is not None else ConfigLoader()
        self.query_builder = QueryBuilder(service)

    async def export_all(self, request: ExportRequest) -> RetrievalSummary:
        """
        Export every retrievable artifact.

        Args:
            request: Output directory, exclusions, warnings flag

        Returns:
            RetrievalSummary
        """
        root = self.resolve_root(request.output_dir)
        logger.info(f"{LOG_INPUT} Export to {root} (excluding {request.excludes or 'nothing'})")
        start_time = time.time()

        query = await self.query_builder.build(excludes=request.excludes, export_all=True)
        result = await self.service.retrieve(query)

        summary = RetrievalSummary(root=root, problems=list(result.problems))
        self._materialize(result, summary)

        logger.info(
            f"{LOG_OUTPUT} Export complete: {len(summary.files_written)} files "
            f"in {time.time() - start_time:.1f}s"
        )
        return summary

    async def fetch(self, request: FetchRequest) -> RetrievalSummary:
        """
        Fetch specific artifacts.

        Args:
            request: Types, names, output and unpacking options

        Returns:
            RetrievalSummary

        Raises:
            UsageError: If the request is invalid
            EmptyResultError: If nothing matched
        """
        validate_request(request.types, request.names, request.package_xml)
        if request.package_xml and not Path(request.package_xml).is_file():
            raise UsageError(f"Cannot read package xml {request.package_xml}: no such file")

        root = self.resolve_root(request.output_dir)
        mode = self._single_type(request)
        logger.info(f"{LOG_INPUT} Fetch {request.types or request.package_xml} to {root}")

        if mode == AURA_FETCH_TYPE:
            summary = RetrievalSummary(root=root)
            summary.manifests = await self._fetch_bundles(root, request.names, write_sources=True)
            return summary

        summary = RetrievalSummary(root=root)

        if mode == PACKAGE_FETCH_TYPE:
            result = await self._fetch_packages(request, summary)
        elif request.package_xml:
            result = await self.service.retrieve_by_package_xml(request.package_xml)
        else:
            query = await self.query_builder.build(types=request.types, names=request.names)
            result = await self.service.retrieve(query)

        summary.problems.extend(result.problems)

        if is_empty_result(result.files):
            raise EmptyResultError(
                request.types or [str(request.package_xml)],
                problems=summary.problems,
            )

        expander = None
        if request.unpack and not request.package_xml:
            expander = ResourceExpander(
                max_archive_size=self.config.get('max_archive_size', MAX_ARCHIVE_SIZE),
                max_depth=self.config.get('max_extraction_depth', MAX_EXTRACTION_DEPTH),
            )

        self._materialize(result, summary, expander, static_scope=mode == STATIC_RESOURCE_TYPE)

        if expander:
            summary.expansions = expander.expand_pending()

        logger.info(f"{LOG_OUTPUT} Fetch complete: {len(summary.files_written)} files")
        return summary

    async def fetch_manifest(self, name: str = '') -> list[BundleManifest]:
        """
        Build Aura bundle manifests without writing bundle sources.

        Args:
            name: Bundle developer name, or '' for every bundle

        Returns:
            Bundle manifests (each `.manifest` file is still written)
        """
        root = self.resolve_root(None)
        return await self._fetch_bundles(root, [name] if name else [], write_sources=False)

    def resolve_root(self, output_dir: Optional[Path]) -> Path:
        """Explicit output directory, otherwise the configured source directory."""
        root = output_dir if output_dir else self.config.get('source_dir', DEFAULT_SOURCE_DIRNAME)
        return Path(root).expanduser().absolute()

    async def close(self):
        """Cleanup resources."""
        await self.service.close()

    async def _fetch_bundles(
        self,
        root: Path,
        names: list[str],
        write_sources: bool
    ) -> list[BundleManifest]:
        decomposer = BundleDecomposer(root)
        manifests: list[BundleManifest] = []

        if names:
            for name in names:
                bundles, definitions = await self.service.get_aura_bundle(name)
                manifests.extend(decomposer.decompose(bundles, definitions, write_sources))
        else:
            bundles, definitions = await self.service.get_aura_bundles()
            manifests.extend(decomposer.decompose(bundles, definitions, write_sources))

        return manifests

    async def _fetch_packages(
        self,
        request: FetchRequest,
        summary: RetrievalSummary
    ) -> RetrievalResult:
        """Retrieve each named package, merging their file sets."""
        if not request.names:
            raise UsageError("must specify at least one package name")

        merged = RetrievalResult()
        for name in request.names:
            result = await self.service.retrieve_package(name)
            merged.files.update(result.files)
            merged.problems.extend(result.problems)

            if request.preserve_archive and result.archive is not None:
                summary.preserved_archives.append(
                    self._preserve_archive(summary.root, name, result.archive)
                )
        return merged

    @staticmethod
    def _preserve_archive(root: Path, name: str, archive: bytes) -> Path:
        path = root / f"{name}{PRESERVED_ARCHIVE_SUFFIX}"
        try:
            root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(archive)
        except OSError as e:
            raise MaterializationError(f"Failed writing {path}: {e}") from e
        logger.info(f"{LOG_PROCESS} Preserved archive: {path}")
        return path

    def _materialize(
        self,
        result: RetrievalResult,
        summary: RetrievalSummary,
        expander: Optional[ResourceExpander] = None,
        static_scope: bool = False
    ) -> None:
        def on_written(relpath: str, destination: Path, data: bytes) -> None:
            if static_scope or is_resource_descriptor(relpath):
                expander.inspect(relpath, destination, data)

        materialized = FileMaterializer(summary.root).write(
            result.files,
            on_written=on_written if expander else None,
        )
        summary.files_written = materialized.written
        summary.files_skipped = materialized.skipped

    @staticmethod
    def _single_type(request: FetchRequest) -> Optional[str]:
        """Lower-cased type when exactly one was requested."""
        if len(request.types) == 1:
            return request.types[0].lower()
        return None


__all__ = ['RetrievalCoordinator', 'is_empty_result']
