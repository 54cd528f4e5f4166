"""Text processing utilities for markdown document content."""

import re
from typing import Iterable, List, Optional


STOP_WORDS = frozenset({
    'a', 'an', 'and', 'are', 'as', 'at', 'be', 'but', 'by', 'can', 'do',
    'for', 'from', 'has', 'have', 'how', 'if', 'in', 'into', 'is', 'it',
    'its', 'me', 'my', 'of', 'on', 'or', 'our', 'so', 'that', 'the',
    'their', 'then', 'there', 'these', 'this', 'to', 'was', 'we', 'what',
    'when', 'which', 'will', 'with', 'you', 'your', 'i',
})

MIN_TOKEN_LENGTH = 2


class TextProcessor:
    """Tokenization and excerpt helpers shared by the index and the search engine."""

    def __init__(self, stop_words: Optional[Iterable[str]] = None):
        """Initialize text processor with an optional custom stop-word set."""
        self.stop_words = frozenset(stop_words) if stop_words is not None else STOP_WORDS
        self.split_pattern = re.compile(r'[^a-z0-9]+')
        self.whitespace_pattern = re.compile(r'\s+')

    def tokenize(self, text: str) -> List[str]:
        """
        Split text into normalized tokens.

        Args:
            text: Raw text

        Returns:
            Lower-cased alphanumeric tokens, short tokens and stop words removed,
            in order of appearance (duplicates kept)
        """
        if not text:
            return []

        return [
            token for token in self.split_pattern.split(text.lower())
            if len(token) >= MIN_TOKEN_LENGTH and token not in self.stop_words
        ]

    def query_tokens(self, query: str) -> List[str]:
        """Tokenize a query and drop repeated tokens, keeping first-seen order."""
        return list(dict.fromkeys(self.tokenize(query)))

    def collapse_whitespace(self, text: str) -> str:
        """Replace runs of whitespace with single spaces."""
        return self.whitespace_pattern.sub(' ', text).strip()

    def truncate_at_word(self, text: str, max_length: int) -> str:
        """Truncate text to max_length characters without splitting a word."""
        if len(text) <= max_length:
            return text

        cut = text[:max_length]
        space_pos = cut.rfind(' ')
        if space_pos > 0:
            cut = cut[:space_pos]
        return cut.rstrip() + "..."

    def generate_context_snippet(
        self,
        text: str,
        query_terms: List[str],
        max_length: int = 160
    ) -> Optional[str]:
        """
        Generate a snippet centered on the first occurrence of any query term.

        Args:
            text: Full document text
            query_terms: Normalized query tokens
            max_length: Target snippet length

        Returns:
            Snippet with "..." markers on truncated ends, or None if no term
            occurs literally in the text
        """
        if not text or not query_terms:
            return None

        text_lower = text.lower()
        positions = [
            pos for pos in (text_lower.find(term) for term in query_terms) if pos >= 0
        ]
        if not positions:
            return None

        first_pos = min(positions)
        start = max(0, first_pos - max_length // 2)
        end = min(len(text), start + max_length)
        start = max(0, end - max_length)

        snippet = text[start:end]

        # Ensure we don't cut words
        if start > 0 and not text[start - 1].isspace():
            space_pos = snippet.find(' ')
            if 0 < space_pos < first_pos - start:
                snippet = snippet[space_pos + 1:]

        if end < len(text) and not text[end].isspace():
            space_pos = snippet.rfind(' ')
            if space_pos > len(snippet) * 0.8:
                snippet = snippet[:space_pos]

        snippet = self.collapse_whitespace(snippet)

        if start > 0:
            snippet = "..." + snippet
        if end < len(text):
            snippet = snippet + "..."

        return snippet

    def leading_excerpt(self, text: str, max_length: int = 160) -> str:
        """Excerpt from the start of text, used when no term occurs literally."""
        return self.truncate_at_word(self.collapse_whitespace(text), max_length)
