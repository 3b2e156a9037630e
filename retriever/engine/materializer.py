# Path: retriever/engine/materializer.py
"""
File Materializer

Writes a retrieved file set (relative path -> bytes) under an output
root. Existing files are overwritten, except a top-level package.xml
that was already present when the run started: repeated fetches keep
the user's package definition.

Any directory or write failure aborts the remaining writes. Files
already written stay on disk.
"""

from pathlib import Path
from typing import Callable, Mapping, Optional

from retriever.core.logger import get_logger
from retriever.core.errors import MaterializationError
from retriever.engine.result import MaterializationResult
from retriever.constants import (
    PACKAGE_XML_NAME,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')

WrittenCallback = Callable[[str, Path, bytes], None]


class FileMaterializer:
    """
    Writes file sets to an output root.

    Example:
        materializer = FileMaterializer(Path('/work/src'))
        result = materializer.write({'classes/Foo.cls': b'...'})
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def write(
        self,
        files: Mapping[str, bytes],
        on_written: Optional[WrittenCallback] = None
    ) -> MaterializationResult:
        """
        Write every entry of the file set.

        Args:
            files: Relative path (forward slashes) -> content
            on_written: Called as (relpath, destination, data) after each write

        Returns:
            MaterializationResult

        Raises:
            MaterializationError: On an unsafe path, mkdir or write failure
        """
        logger.info(f"{LOG_INPUT} Writing {len(files)} files to {self.root}")

        result = MaterializationResult(root=self.root)
        keep_package = (self.root / PACKAGE_XML_NAME).exists()

        for relpath, data in files.items():
            if keep_package and relpath == PACKAGE_XML_NAME:
                logger.info(f"{LOG_PROCESS} Keeping existing {PACKAGE_XML_NAME}")
                result.skipped.append(relpath)
                continue

            destination = self._destination(relpath)

            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise MaterializationError(
                    f"Failed creating directory {destination.parent}: {e}"
                ) from e

            try:
                destination.write_bytes(data)
            except OSError as e:
                raise MaterializationError(f"Failed writing {destination}: {e}") from e

            result.written.append(destination)
            if on_written:
                on_written(relpath, destination, data)

        logger.info(
            f"{LOG_OUTPUT} Wrote {len(result.written)} files, "
            f"skipped {len(result.skipped)}"
        )
        return result

    def _destination(self, relpath: str) -> Path:
        """Resolve relpath under the root, rejecting paths that escape it."""
        destination = self.root / relpath
        try:
            destination.resolve().relative_to(self.root.resolve())
        except ValueError:
            raise MaterializationError(f"Unsafe path outside output root: {relpath}")
        return destination


__all__ = ['FileMaterializer', 'WrittenCallback']
