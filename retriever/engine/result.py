# Path: retriever/engine/result.py
"""
Retrieval Data Objects

Type-safe, structured values passed between pipeline stages.
Replaces raw dictionaries with proper data classes.

Architecture:
- QueryElement: one type/member-pattern pair of a retrieval request
- RetrievalResult: file set + warnings returned by the service
- BundleRecord / DefinitionRecord / BundleManifest: Aura decomposition
- ResourceDescriptor: parsed static resource sidecar
- MaterializationResult / ExpansionResult: what landed on disk
- FetchRequest / ExportRequest / RetrievalSummary: command-level values
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from retriever.engine.constants import (
    FIELD_ID,
    FIELD_DEVELOPER_NAME,
    FIELD_BUNDLE_ID,
    FIELD_DEF_TYPE,
    FIELD_SOURCE,
)


@dataclass
class QueryElement:
    """
    One element of a retrieval query.

    Attributes:
        types: Metadata type names (usually a single one)
        members: Member names, or ["*"] for every member of the type
    """
    types: list[str]
    members: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation."""
        return {
            'types': list(self.types),
            'members': list(self.members),
        }


@dataclass
class RetrievalResult:
    """
    Result of a single retrieval call.

    Attributes:
        files: Relative output path (forward slashes) -> raw bytes
        problems: Non-fatal warnings reported by the service
        archive: Raw archive payload, kept so callers can preserve it
    """
    files: dict[str, bytes] = field(default_factory=dict)
    problems: list[str] = field(default_factory=list)
    archive: Optional[bytes] = None


@dataclass(frozen=True)
class BundleRecord:
    """Aura bundle header."""
    id: str
    developer_name: str

    @classmethod
    def from_record(cls, record: dict) -> 'BundleRecord':
        return cls(
            id=str(record.get(FIELD_ID, '')),
            developer_name=str(record.get(FIELD_DEVELOPER_NAME, '')),
        )


@dataclass(frozen=True)
class DefinitionRecord:
    """Aura bundle definition (one source file)."""
    id: str
    bundle_id: str
    def_type: str
    source: str

    @classmethod
    def from_record(cls, record: dict) -> 'DefinitionRecord':
        return cls(
            id=str(record.get(FIELD_ID, '')),
            bundle_id=str(record.get(FIELD_BUNDLE_ID, '')),
            def_type=str(record.get(FIELD_DEF_TYPE, '')),
            source=str(record.get(FIELD_SOURCE) or ''),
        )


@dataclass(frozen=True)
class ComponentFile:
    file_name: str
    component_id: str

    def to_dict(self) -> dict[str, str]:
        return {'fileName': self.file_name, 'componentId': self.component_id}


@dataclass
class BundleManifest:
    """
    Descriptor of the files produced for one Aura bundle.

    Serialized as `.manifest` inside the bundle directory.
    """
    name: str
    id: str
    files: list[ComponentFile] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'id': self.id,
            'files': [f.to_dict() for f in self.files],
        }


@dataclass(frozen=True)
class ResourceDescriptor:
    """Subset of a static resource `-meta.xml` sidecar."""
    cache_control: str = ''
    content_type: str = ''


@dataclass
class MaterializationResult:
    """
    Result of writing a file set to disk.

    Attributes:
        root: Destination root directory
        written: Absolute paths written, in write order
        skipped: Relative paths intentionally not written
    """
    root: Path
    written: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass
class ExpansionResult:
    """
    Result of expanding one zipped static resource.

    Attributes:
        archive_path: The `.resource` archive file
        extract_directory: Directory named after the resource
        files_extracted: Number of file entries copied
        directories_created: Number of directory entries created
        skipped_reserved: Entries skipped for the reserved `__` prefix
        failed_entries: Entries that could not be copied (logged, skipped)
        duration: Expansion duration in seconds
    """
    archive_path: Path
    extract_directory: Path
    files_extracted: int = 0
    directories_created: int = 0
    skipped_reserved: int = 0
    failed_entries: list[str] = field(default_factory=list)
    duration: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            'archive_path': str(self.archive_path),
            'extract_directory': str(self.extract_directory),
            'files_extracted': self.files_extracted,
            'directories_created': self.directories_created,
            'skipped_reserved': self.skipped_reserved,
            'failed_entries': self.failed_entries,
            'duration': self.duration,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class FetchRequest:
    """Inputs of the "fetch specific artifacts" operation."""
    types: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    output_dir: Optional[Path] = None
    unpack: bool = False
    preserve_archive: bool = False
    package_xml: Optional[Path] = None
    show_warnings: bool = False


@dataclass
class ExportRequest:
    """Inputs of the "export everything" operation."""
    output_dir: Optional[Path] = None
    excludes: list[str] = field(default_factory=list)
    show_warnings: bool = False


@dataclass
class RetrievalSummary:
    """
    Outcome of a command operation, handed back to the CLI.

    Attributes:
        root: Output root directory
        files_written: Paths written by the materializer
        files_skipped: Relative paths preserved instead of overwritten
        problems: Service warnings (display is the caller's decision)
        manifests: Aura bundle manifests produced
        expansions: Static resource expansions performed
        preserved_archives: Raw archives kept on disk
    """
    root: Path
    files_written: list[Path] = field(default_factory=list)
    files_skipped: list[str] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)
    manifests: list[BundleManifest] = field(default_factory=list)
    expansions: list[ExpansionResult] = field(default_factory=list)
    preserved_archives: list[Path] = field(default_factory=list)


__all__ = [
    'QueryElement',
    'RetrievalResult',
    'BundleRecord',
    'DefinitionRecord',
    'ComponentFile',
    'BundleManifest',
    'ResourceDescriptor',
    'MaterializationResult',
    'ExpansionResult',
    'FetchRequest',
    'ExportRequest',
    'RetrievalSummary',
]
