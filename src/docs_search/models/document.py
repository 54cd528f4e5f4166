"""Document data models for indexed markdown files."""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DocumentMetadata:
    """
    Facts derived from a markdown document's text.

    Attributes:
        package_name: Package named on a ``Package:`` line
        import_statement: Import statement named on an ``Import:`` line
        description: First descriptive paragraph
        see_also: Link texts from the "See Also" section, in document order
        has_props_table: Whether a table appears under a "Props" heading
        has_code_examples: Whether a fenced block uses a front-end language hint
    """
    package_name: Optional[str] = None
    import_statement: Optional[str] = None
    description: Optional[str] = None
    see_also: List[str] = field(default_factory=list)
    has_props_table: bool = False
    has_code_examples: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "packageName": self.package_name,
            "importStatement": self.import_statement,
            "description": self.description,
            "seeAlso": list(self.see_also),
            "hasPropsTable": self.has_props_table,
            "hasCodeExamples": self.has_code_examples,
        }


@dataclass(frozen=True)
class DocumentEntry:
    """
    One indexed markdown file.

    Attributes:
        id: Stable identifier derived from the relative path (e.g. ``components/layout/card``)
        title: Text of the first level-1 heading
        content: Full raw markdown text
        file_path: Absolute path on disk
        relative_path: POSIX path relative to the version root
        module: Module inferred from the top-level folder
        category: Category folder, only for documents under the components module
        metadata: Extracted metadata
    """
    id: str
    title: str
    content: str
    file_path: str
    relative_path: str
    module: str
    category: Optional[str] = None
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    def __post_init__(self) -> None:
        """Validate entry after initialization."""
        if not self.id.strip():
            raise ValueError("Document ID cannot be empty")
        if not self.module.strip():
            raise ValueError("Document module cannot be empty")

    @property
    def file_stem(self) -> str:
        """File name without directory or extension."""
        return PurePosixPath(self.relative_path).stem

    def to_summary(self) -> Dict[str, Any]:
        """Compact view used by listing operations."""
        return {
            "id": self.id,
            "title": self.title,
            "module": self.module,
            "category": self.category,
            "relativePath": self.relative_path,
            "description": self.metadata.description,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            **self.to_summary(),
            "filePath": self.file_path,
            "content": self.content,
            "metadata": self.metadata.to_dict(),
        }
