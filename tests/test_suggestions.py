"""Test component suggestions and implementation guides."""

from docs_search.core.engine import SearchEngine
from docs_search.core.store import DocumentStore
from docs_search.core.suggestions import (
    UNIVERSAL_CHECKLIST,
    SuggestionEngine,
    accessibility_checklist,
    consolidate_imports,
)


class TestSuggest:
    """Test ranking components for UI descriptions."""

    def test_card_scenario(self, generation):
        """Test a profile card description puts the card first."""
        suggestions = generation.suggestions.suggest("a profile card with avatar and actions")
        ids = [s.document.id for s in suggestions]

        assert ids[0] == "components/layout/card"
        assert suggestions[0].relevance == 61.0
        assert suggestions[0].reasons == ("search match", "title match")
        assert "components/navigation/nav" not in ids

    def test_category_boost(self, generation):
        """Test a category word boosts documents in that category."""
        suggestions = generation.suggestions.suggest("navigation menu")

        assert suggestions[0].document.id == "components/navigation/nav"
        assert suggestions[0].relevance == 27.0
        assert "category: navigation" in suggestions[0].reasons

    def test_category_only_matches_included(self, generation):
        """Test category members are suggested even without a text match."""
        suggestions = generation.suggestions.suggest("layout")

        assert [(s.document.id, s.relevance) for s in suggestions] == [
            ("components/layout/card", 22.0),
            ("components/layout/divider", 20.0),
        ]
        assert suggestions[1].reasons == ("category: layout",)

    def test_only_components(self, generation):
        """Test documents outside the components module are never suggested."""
        suggestions = generation.suggestions.suggest("dashboard overview form validation")

        assert all(s.document.module == "components" for s in suggestions)

    def test_limit(self, generation):
        """Test the suggestion limit."""
        assert len(generation.suggestions.suggest("layout", limit=1)) == 1

    def test_no_tokens(self, generation):
        """Test descriptions made only of stop words."""
        assert generation.suggestions.suggest("the and with") == []

    def test_one_suggestion_per_title(self, make_entry):
        """Test components sharing a title are deduplicated."""
        entries = [
            make_entry("components/inputs/button", "Button", category="inputs", content="Button docs."),
            make_entry("components/actions/button", "Button", category="actions", content="Button docs."),
        ]
        store = DocumentStore()
        store.replace_all(entries)
        engine = SuggestionEngine(store, SearchEngine(entries))

        suggestions = engine.suggest("button")

        assert len(suggestions) == 1
        assert suggestions[0].document.id == "components/actions/button"

    def test_category_drops_a_single_plural_s(self, make_entry):
        """Test only one trailing "s" is dropped when matching a category word."""
        entries = [make_entry("components/progress/spinner", "Spinner", category="progress")]
        store = DocumentStore()
        store.replace_all(entries)
        engine = SuggestionEngine(store, SearchEngine(entries))

        assert engine.suggest("show progre state") == []
        assert engine.suggest("show progres state")[0].reasons == ("category: progress",)

    def test_hyphenated_category(self, make_entry):
        """Test multi-word categories match when every part is present."""
        entries = [make_entry("components/data-display/badge", "Badge", category="data-display")]
        store = DocumentStore()
        store.replace_all(entries)
        engine = SuggestionEngine(store, SearchEngine(entries))

        suggestions = engine.suggest("display some data")

        assert suggestions[0].reasons == ("category: data-display",)

    def test_to_dict(self, generation):
        """Test suggestion serialization."""
        data = generation.suggestions.suggest("layout")[0].to_dict()

        assert data["document"]["id"] == "components/layout/card"
        assert data["reasons"] == ["search match", "category: layout"]


class TestImplementationGuide:
    """Test guide assembly."""

    def test_card_guide(self, generation):
        """Test components, one-hop complements, imports and styling notes."""
        guide = generation.suggestions.implementation_guide("profile card with actions")

        assert [s.document.id for s in guide.components] == ["components/layout/card"]
        assert [doc.id for doc in guide.complementary] == ["components/layout/divider"]
        assert guide.imports == ["import { Card, CardHeader } from '@acme/react-card';"]
        assert guide.patterns == []
        assert guide.styling_notes == [
            ("Theming", "Design tokens and themes control colors, spacing and typography.")
        ]
        assert guide.accessibility_checklist == list(UNIVERSAL_CHECKLIST)
        assert not guide.is_empty

    def test_patterns_guide(self, generation):
        """Test pattern documents are found for pattern-only goals."""
        guide = generation.suggestions.implementation_guide("form validation")

        assert guide.components == []
        assert [r.document.id for r in guide.patterns] == ["patterns/forms/validation"]
        assert not guide.is_empty

    def test_complements_are_one_hop(self, make_entry):
        """Test See Also references of complements are not followed."""
        entries = [
            make_entry("components/a/alpha", "Alpha", category="a", content="alpha", see_also=["Beta"]),
            make_entry("components/a/beta", "Beta", category="a", content="b", see_also=["Gamma"]),
            make_entry("components/a/gamma", "Gamma", category="a", content="g", see_also=["Alpha"]),
        ]
        store = DocumentStore()
        store.replace_all(entries)
        guide = SuggestionEngine(store, SearchEngine(entries)).implementation_guide("alpha")

        assert [s.document.id for s in guide.components] == ["components/a/alpha"]
        assert [doc.id for doc in guide.complementary] == ["components/a/beta"]

    def test_empty_guide(self, generation):
        """Test goals that match nothing."""
        assert generation.suggestions.implementation_guide("zebra quantum").is_empty
        assert generation.suggestions.implementation_guide("the and").is_empty


class TestHelpers:
    """Test import consolidation and the accessibility checklist."""

    def test_consolidate_imports(self):
        """Test named imports are merged per package."""
        assert consolidate_imports([
            "import { Button } from '@a/b'",
            "import { Input, Button } from \"@a/b\"",
            "import x from 'y'",
            None,
            "import x from 'y'",
        ]) == ["import { Button, Input } from '@a/b';", "import x from 'y'"]

    def test_checklist_for_component_kinds(self, make_entry):
        """Test component kinds add their own checklist items."""
        items = accessibility_checklist([
            make_entry("components/inputs/input", "Input"),
            make_entry("components/overlays/dialog", "Dialog"),
        ])

        assert items[:len(UNIVERSAL_CHECKLIST)] == list(UNIVERSAL_CHECKLIST)
        assert "All form fields have associated labels" in items
        assert "Overlay traps focus while open and restores it on close" in items
        assert "Icon-only buttons have an accessible label" not in items
