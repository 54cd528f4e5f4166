"""Test index generation builds from a documentation tree."""

import logging

import pytest

from docs_search.core.builder import IndexBuilder, build_index
from docs_search.core.exceptions import DocsPathNotFound

from conftest import CARD_MD, write_tree


class TestBuild:
    """Test building from the sample tree."""

    def test_stats(self, generation):
        """Test indexed, skipped and malformed counts."""
        stats = generation.stats

        assert stats.total_files == 9
        assert stats.indexed_files == 8
        assert stats.skipped_files == 1
        assert stats.malformed_files == 1
        assert stats.failed_files == 0
        assert stats.duration_ms >= 0.0
        assert stats.by_module == {"foundation": 3, "components": 3, "patterns": 1, "enterprise": 1}
        assert stats.by_category == {"layout": 2, "navigation": 1}

    def test_card_scenario(self, generation):
        """Test the card document's taxonomy and title."""
        card = generation.store.get("components/layout/card")

        assert card.module == "components"
        assert card.category == "layout"
        assert card.title == "Card"
        assert card.relative_path == "02-components/layout/card.md"
        assert card.content == CARD_MD
        assert card.metadata.see_also == ["Divider", "Avatar"]

    def test_discovery_order(self, generation):
        """Test documents are stored in relative path order."""
        assert [doc.id for doc in generation.store.all()] == [
            "overview",
            "foundation/theming",
            "foundation/no-heading",
            "components/layout/card",
            "components/layout/divider",
            "components/navigation/nav",
            "patterns/forms/validation",
            "enterprise/dashboard-kpi",
        ]

    def test_relative_paths_round_trip(self, generation, docs_root):
        """Test every entry points back at exactly one file."""
        paths = [doc.relative_path for doc in generation.store.all()]

        assert len(paths) == len(set(paths))
        for doc in generation.store.all():
            assert (docs_root / doc.relative_path).is_file()
            assert (docs_root / doc.relative_path).resolve() == (docs_root / doc.file_path).resolve()

    def test_root_files_are_foundation(self, generation):
        """Test files at the version root join the foundation module."""
        assert generation.store.get("overview").module == "foundation"

    def test_malformed_document_indexed(self, generation):
        """Test documents without a heading get a file-name title."""
        doc = generation.store.get("foundation/no-heading")

        assert doc.title == "No Heading"
        assert doc.metadata.description == "Just some notes about spacing."
        assert any("05-no-heading.md" in warning for warning in generation.stats.warnings)

    def test_skipped_folder_warned(self, generation):
        """Test skipped files are recorded as warnings."""
        assert any(w.startswith("drafts/notes.md:") for w in generation.stats.warnings)

    def test_warnings_logged_with_path(self, docs_root, caplog):
        """Test per-file warnings carry the file path."""
        with caplog.at_level(logging.WARNING, logger="docs_search"):
            build_index(docs_root)

        assert any("[path=drafts/notes.md]" in record.getMessage() for record in caplog.records)

    def test_idempotent(self, docs_root):
        """Test two builds of an unchanged tree are identical."""
        first = build_index(docs_root)
        second = build_index(docs_root)

        assert [d.to_dict() for d in first.store.all()] == [d.to_dict() for d in second.store.all()]
        assert [(r.document.id, r.relevance) for r in first.engine.search("card layout")] == \
            [(r.document.id, r.relevance) for r in second.engine.search("card layout")]


class TestBuildEdgeCases:
    """Test failure handling during builds."""

    def test_missing_root(self, tmp_path):
        """Test a missing root fails fast."""
        with pytest.raises(DocsPathNotFound):
            build_index(tmp_path / "missing")

    def test_file_root(self, tmp_path):
        """Test a file is not a documentation root."""
        path = tmp_path / "file.md"
        path.write_text("# File\n")

        with pytest.raises(DocsPathNotFound):
            IndexBuilder().build(path)

    def test_empty_tree(self, tmp_path):
        """Test an empty tree builds an empty generation."""
        generation = build_index(tmp_path)

        assert generation.store.size == 0
        assert generation.stats.total_files == 0
        assert generation.engine.search("anything") == []

    def test_unreadable_file_counted_as_failed(self, tmp_path):
        """Test files that are not UTF-8 fail without aborting the build."""
        write_tree(tmp_path, {"02-components/layout/card.md": CARD_MD})
        (tmp_path / "02-components" / "layout" / "broken.md").write_bytes(b"\xff\xfe# Broken\n")

        generation = build_index(tmp_path)

        assert generation.stats.failed_files == 1
        assert generation.stats.indexed_files == 1
        assert "components/layout/card" in generation.store

    def test_id_collision_uses_prefixed_id(self, tmp_path):
        """Test two files with the same stripped ID are both indexed."""
        write_tree(tmp_path, {
            "01-foundation/02-theming.md": "# Theming\n",
            "01-foundation/theming.md": "# Theming Legacy\n",
        })

        generation = build_index(tmp_path)
        ids = [doc.id for doc in generation.store.all()]

        assert ids == ["foundation/theming", "01-foundation/theming"]
        assert any("already used" in warning for warning in generation.stats.warnings)

    def test_uppercase_extension(self, tmp_path):
        """Test markdown files are matched case-insensitively."""
        write_tree(tmp_path, {"02-components/layout/GRID.MD": "# Grid\n"})

        assert build_index(tmp_path).store.get("components/layout/GRID").title == "Grid"

    def test_new_category_folder(self, docs_root):
        """Test a new folder becomes a category with no code change."""
        write_tree(docs_root, {"02-components/feedback/toast.md": "# Toast\n\nShort notifications.\n"})

        generation = build_index(docs_root)

        assert [doc.title for doc in generation.store.list_by_category("feedback")] == ["Toast"]
