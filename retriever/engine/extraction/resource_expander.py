# Path: retriever/engine/extraction/resource_expander.py
"""
Resource Expander

Static resources arrive as an opaque `<name>.resource` body plus a
`<name>.resource-meta.xml` descriptor. When the descriptor says the
body is a zip archive, the archive is expanded into a sibling
directory `<name>/` mirroring the archive layout.

Workflow:
1. inspect() every descriptor as it is written, recording zipped resources
2. expand_pending() once all files are on disk

CRITICAL: entries never land outside the destination directory.
"""

import shutil
import time
import zipfile
import zlib
from pathlib import Path
from typing import Optional

from lxml import etree

from retriever.core.logger import get_logger
from retriever.core.errors import ArchiveError, MaterializationError
from retriever.engine.result import ExpansionResult, ResourceDescriptor
from retriever.constants import (
    MAX_ARCHIVE_SIZE,
    MAX_EXTRACTION_DEPTH,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)
from retriever.engine.extraction.constants import (
    RESOURCE_META_SUFFIX,
    RESOURCE_SUFFIX,
    ZIP_CONTENT_TYPE,
    TAG_CACHE_CONTROL,
    TAG_CONTENT_TYPE,
    ZIP_READ_MODE,
    RESERVED_ENTRY_PREFIX,
    COPY_CHUNK_SIZE,
)

logger = get_logger(__name__, 'extraction')

# Errors a single entry copy can raise; any of them skips just that entry
_ENTRY_ERRORS = (OSError, zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError)


def is_resource_descriptor(relpath: str) -> bool:
    return relpath.endswith(RESOURCE_META_SUFFIX)


def parse_resource_descriptor(data: bytes) -> Optional[ResourceDescriptor]:
    """
    Parse a static resource descriptor.

    Args:
        data: Raw `-meta.xml` content

    Returns:
        ResourceDescriptor, or None if the XML is malformed
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        logger.warning(f"Unreadable resource descriptor: {e}")
        return None

    return ResourceDescriptor(
        cache_control=(root.findtext(TAG_CACHE_CONTROL) or '').strip(),
        content_type=(root.findtext(TAG_CONTENT_TYPE) or '').strip(),
    )


class ResourceExpander:
    """
    Expands zipped static resources into directories.

    Example:
        expander = ResourceExpander()
        materializer.write(files, on_written=expander.inspect)
        results = expander.expand_pending()
    """

    def __init__(
        self,
        max_archive_size: int = MAX_ARCHIVE_SIZE,
        max_depth: int = MAX_EXTRACTION_DEPTH
    ):
        self.max_archive_size = max_archive_size
        self.max_depth = max_depth
        # resource base name -> archive path
        self.pending: dict[str, Path] = {}

    def inspect(self, relpath: str, destination: Path, data: bytes) -> bool:
        """
        Record a zipped resource if this file is its descriptor.

        Args:
            relpath: Path as returned by the service
            destination: Where the descriptor was written
            data: Descriptor content

        Returns:
            True if an expansion was scheduled
        """
        if not is_resource_descriptor(relpath):
            return False

        descriptor = parse_resource_descriptor(data)
        if descriptor is None or descriptor.content_type != ZIP_CONTENT_TYPE:
            return False

        resource_name = destination.name.split('.')[0]
        archive_path = destination.parent / f"{resource_name}{RESOURCE_SUFFIX}"
        self.pending[resource_name] = archive_path
        logger.debug(f"{LOG_PROCESS} Scheduled expansion: {archive_path}")
        return True

    def expand_pending(self) -> list[ExpansionResult]:
        """
        Expand every recorded archive next to itself.

        Returns:
            One ExpansionResult per archive

        Raises:
            ArchiveError: If an archive cannot be opened
        """
        results = []
        for resource_name, archive_path in self.pending.items():
            results.append(self.expand(archive_path, archive_path.parent / resource_name))
        self.pending.clear()
        return results

    def expand(self, archive_path: Path, target_dir: Path) -> ExpansionResult:
        """
        Expand one zip archive.

        Reserved (`__`) entries are skipped. Unsafe or failing entries are
        logged and skipped; the remaining entries still expand.

        Args:
            archive_path: Zip file
            target_dir: Destination directory (created if missing)

        Returns:
            ExpansionResult

        Raises:
            ArchiveError: If the archive cannot be opened or is too large
            MaterializationError: If the destination cannot be created
        """
        logger.info(f"{LOG_INPUT} Expanding resource: {archive_path.name}")

        start_time = time.time()
        result = ExpansionResult(archive_path=archive_path, extract_directory=target_dir)

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MaterializationError(f"Failed creating directory {target_dir}: {e}") from e

        try:
            zf = zipfile.ZipFile(archive_path, ZIP_READ_MODE)
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveError(f"Cannot open archive {archive_path}: {e}") from e

        with zf:
            total_size = sum(info.file_size for info in zf.infolist())
            if total_size > self.max_archive_size:
                raise ArchiveError(f"Archive too large: {archive_path} ({total_size} bytes)")

            for info in zf.infolist():
                self._expand_entry(zf, info, target_dir, result)

        result.duration = time.time() - start_time
        logger.info(
            f"{LOG_OUTPUT} Expanded {result.files_extracted} files into {target_dir} "
            f"({len(result.failed_entries)} failed) in {result.duration:.2f}s"
        )
        return result

    def _expand_entry(
        self,
        zf: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        target_dir: Path,
        result: ExpansionResult
    ) -> None:
        name = info.filename
        if name.startswith(RESERVED_ENTRY_PREFIX):
            result.skipped_reserved += 1
            return

        member_path = target_dir / name
        if not self._validate_path_traversal(member_path, target_dir) or not self._validate_depth(name):
            result.failed_entries.append(name)
            return

        try:
            if info.is_dir():
                member_path.mkdir(parents=True, exist_ok=True)
                result.directories_created += 1
                return

            member_path.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as source, member_path.open('wb') as target:
                shutil.copyfileobj(source, target, COPY_CHUNK_SIZE)
            result.files_extracted += 1
        except _ENTRY_ERRORS as e:
            logger.error(f"Failed extracting {name} from {result.archive_path.name}: {e}")
            result.failed_entries.append(name)

    def _validate_depth(self, member_path: str) -> bool:
        """
        Validate path depth to prevent runaway nesting.

        Args:
            member_path: Relative path within archive

        Returns:
            True if depth is acceptable
        """
        depth = len(Path(member_path).parts)
        if depth > self.max_depth:
            logger.error(f"Path too deep: {member_path} (depth={depth})")
            return False
        return True

    def _validate_path_traversal(self, member_path: Path, target_dir: Path) -> bool:
        """
        Validate path doesn't escape target directory.

        Args:
            member_path: Full member path
            target_dir: Target extraction directory

        Returns:
            True if path is safe
        """
        try:
            member_path.resolve().relative_to(target_dir.resolve())
            return True
        except ValueError:
            logger.error(f"Unsafe path detected: {member_path}")
            return False


__all__ = ['ResourceExpander', 'parse_resource_descriptor', 'is_resource_descriptor']
