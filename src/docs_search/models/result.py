"""Search result and operation result data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .document import DocumentEntry


@dataclass(frozen=True)
class MatchedField:
    """Score contribution of one document field to a search result."""
    field: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "score": self.score}


@dataclass
class SearchResult:
    """
    Search result with relevance scoring and context.

    Attributes:
        document: The matched document (shared, read-only)
        relevance: Normalized score (0-100, higher is better)
        excerpt: Bounded window of text around the first match
        matched_fields: Field contributions, highest first
    """
    document: DocumentEntry
    relevance: float
    excerpt: str
    matched_fields: List[MatchedField] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate search result."""
        if not 0.0 <= self.relevance <= 100.0:
            raise ValueError("Relevance must be between 0 and 100")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "document": self.document.to_summary(),
            "relevance": self.relevance,
            "excerpt": self.excerpt,
            "matchedFields": [matched.to_dict() for matched in self.matched_fields],
        }


@dataclass
class IndexStats:
    """Statistics from one index build."""
    total_files: int = 0
    indexed_files: int = 0
    failed_files: int = 0
    skipped_files: int = 0
    malformed_files: int = 0
    duration_ms: float = 0.0
    by_module: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total_files": self.total_files,
            "indexed_files": self.indexed_files,
            "failed_files": self.failed_files,
            "skipped_files": self.skipped_files,
            "malformed_files": self.malformed_files,
            "duration_ms": round(self.duration_ms, 3),
            "by_module": dict(self.by_module),
            "by_category": dict(self.by_category),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class ToolResult:
    """Text result of one callable operation."""
    text: str
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Shape expected by the protocol transport."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }
