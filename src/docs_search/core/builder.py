"""Index builder: walks a documentation tree and produces one index generation."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set, Union

from ..models.document import DocumentEntry
from ..models.result import IndexStats
from ..utils.logging_config import StructuredLogger
from ..utils.text_processing import TextProcessor
from . import taxonomy
from .engine import SearchEngine
from .exceptions import DocsPathNotFound, IndexBuildError, MalformedDocument, ValidationError
from .metadata import extract_document, extract_metadata
from .store import DocumentStore
from .suggestions import SuggestionEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexGeneration:
    """
    One complete, internally consistent build.

    Never mutated after construction; a reindex builds a new generation and
    the holder swaps its reference.
    """
    root_path: Path
    store: DocumentStore
    engine: SearchEngine
    suggestions: SuggestionEngine
    stats: IndexStats


class IndexBuilder:
    """Builds index generations from a markdown tree."""

    def __init__(
        self,
        components_module: str = taxonomy.COMPONENTS_MODULE,
        text_processor: Optional[TextProcessor] = None
    ):
        self.components_module = components_module
        self.text_processor = text_processor or TextProcessor()
        self._log = StructuredLogger(__name__)

    def discover(self, root_path: Path) -> List[Path]:
        """Markdown files under root_path, sorted by relative path."""
        files = [
            path for path in root_path.rglob('*')
            if path.is_file() and path.suffix.lower() == '.md'
        ]
        return sorted(files, key=lambda path: path.relative_to(root_path).as_posix())

    def build(self, root_path: Union[str, Path]) -> IndexGeneration:
        """
        Index every markdown file under root_path.

        Per-file problems (unreadable files, missing titles, folders outside
        the module convention) are counted in the stats and never abort the
        build.

        Args:
            root_path: Documentation root for one version

        Returns:
            A new IndexGeneration

        Raises:
            DocsPathNotFound: If root_path is not an existing directory
            IndexBuildError: If the collected documents violate store invariants
        """
        start_time = time.perf_counter()
        root = Path(root_path).expanduser().resolve()

        if not root.is_dir():
            raise DocsPathNotFound(f"Documentation path not found: {root}")

        logger.info(f"Building index from {root}")

        stats = IndexStats()
        entries: List[DocumentEntry] = []
        seen_ids: Set[str] = set()

        for path in self.discover(root):
            stats.total_files += 1
            entry = self._process_file(root, path, stats, seen_ids)
            if entry is None:
                continue

            entries.append(entry)
            seen_ids.add(entry.id)
            stats.indexed_files += 1
            stats.by_module[entry.module] = stats.by_module.get(entry.module, 0) + 1
            if entry.category:
                stats.by_category[entry.category] = stats.by_category.get(entry.category, 0) + 1

        store = DocumentStore(self.components_module)
        try:
            store.replace_all(entries)
        except ValidationError as e:
            raise IndexBuildError(f"Index build failed: {str(e)}") from e

        engine = SearchEngine(entries, self.text_processor)
        suggestions = SuggestionEngine(store, engine, self.components_module)

        stats.duration_ms = (time.perf_counter() - start_time) * 1000.0

        logger.info(
            f"Indexed {stats.indexed_files}/{stats.total_files} files in {stats.duration_ms:.1f}ms "
            f"(failed={stats.failed_files}, skipped={stats.skipped_files}, malformed={stats.malformed_files})"
        )

        return IndexGeneration(
            root_path=root,
            store=store,
            engine=engine,
            suggestions=suggestions,
            stats=stats,
        )

    def _process_file(
        self,
        root: Path,
        path: Path,
        stats: IndexStats,
        seen_ids: Set[str]
    ) -> Optional[DocumentEntry]:
        """Turn one file into a DocumentEntry, or record why it was left out."""
        relative_path = path.relative_to(root).as_posix()
        log = self._log.with_context(path=relative_path)

        placement = taxonomy.resolve(relative_path, self.components_module)
        if placement is None:
            stats.skipped_files += 1
            self._warn(stats, log, relative_path, "top-level folder is not a module folder, skipped")
            return None

        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            stats.failed_files += 1
            self._warn(stats, log, relative_path, f"could not be read: {str(e)}")
            return None

        try:
            extracted = extract_document(content)
            title, metadata = extracted.title, extracted.metadata
        except MalformedDocument as e:
            stats.malformed_files += 1
            title = taxonomy.title_from_filename(relative_path)
            metadata = extract_metadata(content)
            self._warn(stats, log, relative_path, f"{str(e)}, using title '{title}'")

        document_id = taxonomy.document_id(relative_path)
        if document_id in seen_ids:
            fallback = taxonomy.fallback_id(relative_path)
            self._warn(stats, log, relative_path, f"ID '{document_id}' already used, using '{fallback}'")
            document_id = fallback
            if document_id in seen_ids:
                stats.failed_files += 1
                self._warn(stats, log, relative_path, "duplicate document ID, not indexed")
                return None

        return DocumentEntry(
            id=document_id,
            title=title,
            content=content,
            file_path=str(path),
            relative_path=relative_path,
            module=placement.module,
            category=placement.category,
            metadata=metadata,
        )

    @staticmethod
    def _warn(stats: IndexStats, log: StructuredLogger, relative_path: str, message: str) -> None:
        stats.warnings.append(f"{relative_path}: {message}")
        log.warning(message)


def build_index(root_path: Union[str, Path], **kwargs) -> IndexGeneration:
    """Build a generation with a default IndexBuilder."""
    return IndexBuilder(**kwargs).build(root_path)
