"""Core indexing and search functionality."""

from .builder import IndexBuilder, IndexGeneration, build_index
from .engine import InvertedIndex, Posting, SearchEngine
from .exceptions import (
    ConfigurationError,
    DocsPathNotFound,
    DocsSearchError,
    IndexBuildError,
    MalformedDocument,
    NotFound,
    UnknownOperation,
    ValidationError,
)
from .store import DocumentStore
from .suggestions import ComponentSuggestion, ImplementationGuide, SuggestionEngine

__all__ = [
    "ComponentSuggestion",
    "ConfigurationError",
    "DocsPathNotFound",
    "DocsSearchError",
    "DocumentStore",
    "ImplementationGuide",
    "IndexBuildError",
    "IndexBuilder",
    "IndexGeneration",
    "InvertedIndex",
    "MalformedDocument",
    "NotFound",
    "Posting",
    "SearchEngine",
    "SuggestionEngine",
    "UnknownOperation",
    "ValidationError",
    "build_index",
]
