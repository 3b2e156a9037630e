# Path: retriever/engine/bundle_decomposer.py
"""
Bundle Decomposer

Splits Aura bundles into one source file per definition under
<root>/aura/<DeveloperName>/, plus a `.manifest` JSON file listing the
produced files and the definition ids they came from.
"""

import json
from pathlib import Path
from typing import Iterable

from retriever.core.logger import get_logger
from retriever.core.errors import MaterializationError
from retriever.engine.result import (
    BundleManifest,
    BundleRecord,
    ComponentFile,
    DefinitionRecord,
)
from retriever.engine.constants import DEF_TYPE_SUFFIXES, DEFAULT_DEF_TYPE_SUFFIX
from retriever.constants import (
    AURA_DIRNAME,
    BUNDLE_MANIFEST_NAME,
    LOG_INPUT,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


def definition_file_name(developer_name: str, def_type: str) -> str:
    """
    File name for one bundle definition.

    Example:
        definition_file_name('Card', 'COMPONENT')   # 'Card.cmp'
        definition_file_name('Card', 'STYLE')       # 'CardStyle.css'
        definition_file_name('Card', 'CONTROLLER')  # 'CardController.js'
    """
    suffix = DEF_TYPE_SUFFIXES.get(def_type, DEFAULT_DEF_TYPE_SUFFIX)
    return developer_name + suffix.format(title=def_type.lower().title())


class BundleDecomposer:
    """
    Writes Aura bundles as source trees.

    Example:
        decomposer = BundleDecomposer(Path('/work/src'))
        manifests = decomposer.decompose(bundles, definitions)

        # Manifest only, no source files
        manifests = decomposer.decompose(bundles, definitions, write_sources=False)
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.aura_root = self.root / AURA_DIRNAME

    def decompose(
        self,
        bundles: Iterable[BundleRecord],
        definitions: Iterable[DefinitionRecord],
        write_sources: bool = True
    ) -> list[BundleManifest]:
        """
        Decompose bundles into per-bundle directories.

        Args:
            bundles: Bundle headers (duplicates by id are ignored)
            definitions: Definitions of any of the bundles
            write_sources: Write definition sources; `.manifest` is
                written either way

        Returns:
            One manifest per bundle, in input order

        Raises:
            MaterializationError: On mkdir or write failure
        """
        unique: dict[str, BundleRecord] = {}
        for bundle in bundles:
            unique.setdefault(bundle.id, bundle)
        definitions = list(definitions)

        logger.info(
            f"{LOG_INPUT} Decomposing {len(unique)} bundles "
            f"({len(definitions)} definitions)"
        )

        manifests = []
        for bundle in unique.values():
            members = [d for d in definitions if d.bundle_id == bundle.id]
            manifests.append(self._decompose_bundle(bundle, members, write_sources))

        logger.info(f"{LOG_OUTPUT} Wrote {len(manifests)} bundle manifests")
        return manifests

    def _decompose_bundle(
        self,
        bundle: BundleRecord,
        definitions: list[DefinitionRecord],
        write_sources: bool
    ) -> BundleManifest:
        bundle_dir = self._bundle_dir(bundle.developer_name)
        try:
            bundle_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MaterializationError(f"Failed creating directory {bundle_dir}: {e}") from e

        manifest = BundleManifest(name=bundle.developer_name, id=bundle.id)

        for definition in definitions:
            path = bundle_dir / definition_file_name(bundle.developer_name, definition.def_type)
            manifest.files.append(
                ComponentFile(file_name=str(path), component_id=definition.id)
            )
            if write_sources:
                self._write(path, definition.source)

        self._write(
            bundle_dir / BUNDLE_MANIFEST_NAME,
            json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False)
        )
        return manifest

    def _bundle_dir(self, developer_name: str) -> Path:
        """Bundle directory under aura/, rejecting names that escape it."""
        bundle_dir = self.aura_root / developer_name
        try:
            bundle_dir.resolve().relative_to(self.aura_root.resolve())
        except ValueError:
            raise MaterializationError(
                f"Unsafe bundle name outside {self.aura_root}: {developer_name}"
            )
        if bundle_dir.resolve() == self.aura_root.resolve():
            raise MaterializationError(f"Invalid bundle name: {developer_name!r}")
        return bundle_dir

    @staticmethod
    def _write(path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding='utf-8')
        except OSError as e:
            raise MaterializationError(f"Failed writing {path}: {e}") from e


__all__ = ['BundleDecomposer', 'definition_file_name']
