"""
Markdown Documentation Search

Indexes a versioned tree of markdown documentation into an in-memory store,
ranks free-text queries with a weighted-field scoring model, and suggests
components for UI descriptions.
"""

from .core.builder import IndexBuilder, IndexGeneration, build_index
from .core.engine import SearchEngine
from .core.store import DocumentStore
from .core.suggestions import SuggestionEngine
from .api.service import DocsSearchService
from .models.document import DocumentEntry, DocumentMetadata
from .models.result import IndexStats, SearchResult, ToolResult
from .config import SERVER_VERSION, ServerConfig, resolve_config

__version__ = SERVER_VERSION

__all__ = [
    "DocsSearchService",
    "DocumentEntry",
    "DocumentMetadata",
    "DocumentStore",
    "IndexBuilder",
    "IndexGeneration",
    "IndexStats",
    "SearchEngine",
    "SearchResult",
    "ServerConfig",
    "SuggestionEngine",
    "ToolResult",
    "build_index",
    "resolve_config",
]
