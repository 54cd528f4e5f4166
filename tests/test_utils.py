"""Test text processing, validators and logging helpers."""

import logging

import pytest

from docs_search.core.exceptions import ValidationError
from docs_search.utils.logging_config import StructuredLogger
from docs_search.utils.text_processing import TextProcessor
from docs_search.utils.validators import normalize_limit, validate_query


class TestTextProcessor:
    """Test tokenization and text helpers."""

    @pytest.fixture
    def processor(self):
        return TextProcessor()

    def test_tokenize(self, processor):
        """Test lower-casing, splitting and filtering."""
        assert processor.tokenize("The Date-Picker is a UI_control, v9!") == [
            "date", "picker", "ui", "control", "v9"
        ]

    def test_tokenize_keeps_duplicates(self, processor):
        """Test document tokens keep repeats for term frequency."""
        assert processor.tokenize("card card") == ["card", "card"]

    def test_query_tokens_deduplicated(self, processor):
        """Test query tokens keep first-seen order without repeats."""
        assert processor.query_tokens("grid Card grid card") == ["grid", "card"]

    def test_empty_text(self, processor):
        """Test empty input."""
        assert processor.tokenize("") == []

    def test_custom_stop_words(self):
        """Test a custom stop-word set."""
        assert TextProcessor(stop_words={"card"}).tokenize("the card") == ["the"]

    def test_truncate_at_word(self, processor):
        """Test truncation keeps whole words."""
        assert processor.truncate_at_word("alpha beta gamma", 12) == "alpha beta..."
        assert processor.truncate_at_word("short", 12) == "short"

    def test_snippet_without_match(self, processor):
        """Test snippets need a literal occurrence."""
        assert processor.generate_context_snippet("nothing here", ["card"]) is None
        assert processor.generate_context_snippet("", ["card"]) is None


class TestValidators:
    """Test query and limit validation."""

    def test_validate_query(self):
        """Test queries are stripped and must not be blank."""
        assert validate_query("  card  ") == "card"
        with pytest.raises(ValidationError, match="Query text is required"):
            validate_query("")

    def test_normalize_limit(self):
        """Test the default limit and clamping."""
        assert normalize_limit(None) == 10
        assert normalize_limit(25) == 25
        assert normalize_limit(500) == 50
        assert normalize_limit(0) == 1


class TestStructuredLogger:
    """Test context-carrying log messages."""

    def test_context_appended(self, caplog):
        """Test key=value context follows the message."""
        log = StructuredLogger("docs_search.tests").with_context(path="a.md", line=3)

        with caplog.at_level(logging.WARNING, logger="docs_search"):
            log.warning("could not be read")

        assert caplog.records[-1].getMessage() == "could not be read [path=a.md line=3]"

    def test_without_context(self, caplog):
        """Test plain messages pass through unchanged."""
        with caplog.at_level(logging.WARNING, logger="docs_search"):
            StructuredLogger("docs_search.tests").warning("built")

        assert caplog.records[-1].getMessage() == "built"

    def test_with_context_is_a_copy(self):
        """Test adding context leaves the original logger untouched."""
        base = StructuredLogger("docs_search.tests", {"a": 1})
        child = base.with_context(b=2)

        assert base.context == {"a": 1}
        assert child.context == {"a": 1, "b": 2}
