"""Data models for the documentation search system."""

from .document import DocumentEntry, DocumentMetadata
from .result import IndexStats, MatchedField, SearchResult, ToolResult

__all__ = [
    "DocumentEntry",
    "DocumentMetadata",
    "IndexStats",
    "MatchedField",
    "SearchResult",
    "ToolResult",
]
