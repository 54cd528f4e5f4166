"""Inverted index and weighted-field search engine."""

import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from ..models.document import DocumentEntry
from ..models.result import MatchedField, SearchResult
from ..utils.text_processing import TextProcessor
from ..utils.validators import normalize_limit, validate_query

logger = logging.getLogger(__name__)

TITLE_WEIGHT = 10.0
DESCRIPTION_WEIGHT = 5.0
METADATA_WEIGHT = 3.0
CONTENT_WEIGHT = 1.0
CONTENT_FREQUENCY_CAP = 5
# Content alone stays below the phrase bonus so it never reaches an exact title match
CONTENT_FIELD_CAP = 40.0
TITLE_PHRASE_BONUS = 50.0
REFERENCE_MAX_SCORE = 100.0
EXCERPT_LENGTH = 160

# Field order used to break ties between equal contributions
FIELD_ORDER = ("title", "description", "metadata", "content")


class Posting(NamedTuple):
    document_id: str
    term_frequency: int


@dataclass(frozen=True)
class IndexedDocument:
    """Pre-tokenized fields of one document."""
    entry: DocumentEntry
    title_tokens: FrozenSet[str]
    description_tokens: FrozenSet[str]
    metadata_tokens: FrozenSet[str]
    content_counts: Counter


class InvertedIndex:
    """Token to postings mapping; one posting per (token, document)."""

    def __init__(self):
        self._postings: Dict[str, Dict[str, int]] = {}

    def add(self, document_id: str, tokens: Iterable[str]) -> None:
        """Aggregate token frequencies for one document into the index."""
        for token, count in Counter(tokens).items():
            postings = self._postings.setdefault(token, {})
            postings[document_id] = postings.get(document_id, 0) + count

    def postings(self, token: str) -> List[Posting]:
        return [Posting(doc_id, tf) for doc_id, tf in self._postings.get(token, {}).items()]

    def candidates(self, tokens: Iterable[str]) -> Set[str]:
        """IDs of documents containing at least one of the tokens."""
        found: Set[str] = set()
        for token in tokens:
            found.update(self._postings.get(token, {}))
        return found

    @property
    def vocabulary_size(self) -> int:
        return len(self._postings)

    def __contains__(self, token: str) -> bool:
        return token in self._postings


class SearchEngine:
    """
    Deterministic weighted-field search over one generation of documents.

    Built once from a document list and never mutated afterwards; a reindex
    builds a new engine.
    """

    def __init__(
        self,
        documents: Sequence[DocumentEntry],
        text_processor: Optional[TextProcessor] = None
    ):
        """
        Tokenize every document and build the inverted index.

        Args:
            documents: Documents of the generation, in discovery order
            text_processor: Tokenizer, a default TextProcessor if omitted
        """
        self.text_processor = text_processor or TextProcessor()
        self.index = InvertedIndex()
        self._documents: Dict[str, IndexedDocument] = {}

        for entry in documents:
            self._add(entry)

        logger.debug(
            f"Search index built: {len(self._documents)} documents, "
            f"{self.index.vocabulary_size} tokens"
        )

    def _add(self, entry: DocumentEntry) -> None:
        tokenize = self.text_processor.tokenize
        metadata = entry.metadata

        title_tokens = tokenize(entry.title)
        description_tokens = tokenize(metadata.description or "")
        content_tokens = tokenize(entry.content)
        metadata_tokens = tokenize(
            " ".join(value for value in (metadata.package_name, metadata.import_statement) if value)
        )

        self._documents[entry.id] = IndexedDocument(
            entry=entry,
            title_tokens=frozenset(title_tokens),
            description_tokens=frozenset(description_tokens),
            metadata_tokens=frozenset(metadata_tokens),
            content_counts=Counter(content_tokens),
        )
        self.index.add(entry.id, title_tokens + description_tokens + content_tokens)

    @property
    def document_count(self) -> int:
        return len(self._documents)

    def search(
        self,
        query: str,
        module: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[SearchResult]:
        """
        Search documents and return ranked results.

        Args:
            query: Free-text query
            module: Only score documents of this module
            limit: Maximum results (default 10, clamped to 1..50)

        Returns:
            Results by descending relevance, then ascending document ID

        Raises:
            ValidationError: If the query is empty
        """
        return self.rank(query, module)[:normalize_limit(limit)]

    def rank(self, query: str, module: Optional[str] = None) -> List[SearchResult]:
        """Score and order every candidate document, without a limit."""
        start_time = time.perf_counter()
        query = validate_query(query)
        tokens = self.text_processor.query_tokens(query)
        if not tokens:
            logger.debug(f"Query has no searchable tokens: {query!r}")
            return []

        phrase = self.text_processor.collapse_whitespace(query.lower())

        results = []
        for doc_id in self.index.candidates(tokens):
            indexed = self._documents[doc_id]
            if module is not None and indexed.entry.module != module:
                continue

            raw_score, fields = self._score(indexed, tokens, phrase)
            if raw_score <= 0:
                continue

            results.append(SearchResult(
                document=indexed.entry,
                relevance=self.normalize(raw_score),
                excerpt=self._excerpt(indexed.entry, tokens),
                matched_fields=fields,
            ))

        results.sort(key=lambda result: (-result.relevance, result.document.id))

        search_time = time.perf_counter() - start_time
        logger.debug(f"Search for {query!r} scored {len(results)} candidates in {search_time:.4f}s")
        return results

    def _score(
        self,
        indexed: IndexedDocument,
        tokens: List[str],
        phrase: str
    ) -> Tuple[float, List[MatchedField]]:
        """Weighted field sum and the per-field breakdown."""
        scores = {
            "title": TITLE_WEIGHT * sum(1 for t in tokens if t in indexed.title_tokens),
            "description": DESCRIPTION_WEIGHT * sum(1 for t in tokens if t in indexed.description_tokens),
            "metadata": METADATA_WEIGHT * sum(1 for t in tokens if t in indexed.metadata_tokens),
            "content": min(CONTENT_WEIGHT * sum(
                min(indexed.content_counts.get(t, 0), CONTENT_FREQUENCY_CAP) for t in tokens
            ), CONTENT_FIELD_CAP),
        }

        if phrase and phrase in indexed.entry.title.lower():
            scores["title"] += TITLE_PHRASE_BONUS

        fields = [
            MatchedField(field=name, score=round(scores[name], 2))
            for name in sorted(
                (name for name in FIELD_ORDER if scores[name] > 0),
                key=lambda name: -scores[name]
            )
        ]
        return sum(scores.values()), fields

    @staticmethod
    def normalize(raw_score: float) -> float:
        """Map a raw weighted sum onto 0..100."""
        return round(max(0.0, min(raw_score / REFERENCE_MAX_SCORE * 100.0, 100.0)), 2)

    def _excerpt(self, entry: DocumentEntry, tokens: List[str]) -> str:
        snippet = self.text_processor.generate_context_snippet(entry.content, tokens, EXCERPT_LENGTH)
        if snippet:
            return snippet
        if entry.metadata.description:
            return entry.metadata.description
        return self.text_processor.leading_excerpt(entry.content, EXCERPT_LENGTH)
