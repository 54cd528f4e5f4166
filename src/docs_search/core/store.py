"""In-memory document store with module, category and title lookups."""

import logging
import re
from collections import OrderedDict
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..models.document import DocumentEntry
from ..utils.validators import validate_documents_batch
from .taxonomy import COMPONENTS_MODULE, strip_numeric_prefix

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r'[\s_-]+')

_EXACT, _PREFIX, _SUBSTRING = 0, 1, 2


def _compact(value: str) -> str:
    return _SEPARATORS.sub('', value.lower())


class DocumentStore:
    """
    Read-mostly repository of the documents in one index generation.

    ``replace_all`` is the only mutator. It builds the new backing
    collections off to the side and publishes them with a single attribute
    assignment, so a reader sees either the old or the new set, never a mix.
    """

    def __init__(self, components_module: str = COMPONENTS_MODULE):
        self.components_module = components_module
        self._documents: Mapping[str, DocumentEntry] = MappingProxyType({})

    def replace_all(self, entries: Sequence[DocumentEntry]) -> None:
        """
        Replace every document in the store.

        Args:
            entries: Documents in discovery order

        Raises:
            ValidationError: If IDs collide or a category sits outside the components module
        """
        validate_documents_batch(list(entries), self.components_module)

        documents: Dict[str, DocumentEntry] = OrderedDict((entry.id, entry) for entry in entries)
        self._documents = MappingProxyType(documents)

        logger.debug(f"Document store now holds {len(documents)} documents")

    @property
    def size(self) -> int:
        return len(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._documents

    def get(self, document_id: str) -> Optional[DocumentEntry]:
        return self._documents.get(document_id)

    def all(self) -> List[DocumentEntry]:
        """Every document, in discovery order."""
        return list(self._documents.values())

    def list_by_module(self, module: str) -> List[DocumentEntry]:
        return [doc for doc in self._documents.values() if doc.module == module]

    def list_by_category(self, category: str) -> List[DocumentEntry]:
        return [doc for doc in self._documents.values() if doc.category == category]

    def modules(self) -> List[Tuple[str, int]]:
        """Module names with document counts, sorted by name."""
        return self._count_by(lambda doc: doc.module)

    def categories(self) -> List[Tuple[str, int]]:
        """Category names with document counts, sorted by name."""
        return self._count_by(lambda doc: doc.category)

    def _count_by(self, key) -> List[Tuple[str, int]]:
        counts: Dict[str, int] = {}
        for doc in self._documents.values():
            value = key(doc)
            if value is not None:
                counts[value] = counts.get(value, 0) + 1
        return sorted(counts.items())

    def find_by_title(
        self,
        name: str,
        module: Optional[str] = None
    ) -> Optional[DocumentEntry]:
        """
        Best case-insensitive partial match on title or file name.

        Exact matches beat prefix matches, which beat substring matches.
        Ties go to the shortest title, then to the first-discovered document.

        Args:
            name: Component or document name, e.g. "button" or "Date Picker"
            module: Restrict the lookup to one module

        Returns:
            The best matching document, or None
        """
        query = name.strip().lower()
        if not query:
            return None

        compact_query = _compact(query)
        best: Optional[Tuple[int, int, int]] = None
        best_doc: Optional[DocumentEntry] = None

        for order, doc in enumerate(self._documents.values()):
            if module is not None and doc.module != module:
                continue

            rank = self._match_rank(doc, query, compact_query)
            if rank is None:
                continue

            key = (rank, len(doc.title), order)
            if best is None or key < best:
                best, best_doc = key, doc

        return best_doc

    @staticmethod
    def _match_rank(doc: DocumentEntry, query: str, compact_query: str) -> Optional[int]:
        stem = doc.file_stem.lower()
        variants = {doc.title.lower(), stem, strip_numeric_prefix(stem)}
        compact_variants = {_compact(variant) for variant in variants}

        if query in variants or (compact_query and compact_query in compact_variants):
            return _EXACT
        if any(variant.startswith(query) for variant in variants):
            return _PREFIX
        if compact_query and any(variant.startswith(compact_query) for variant in compact_variants):
            return _PREFIX
        if any(query in variant for variant in variants):
            return _SUBSTRING
        if compact_query and any(compact_query in variant for variant in compact_variants):
            return _SUBSTRING
        return None
