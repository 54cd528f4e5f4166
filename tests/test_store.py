"""Test the in-memory document store."""

import pytest

from docs_search.core.exceptions import ValidationError
from docs_search.core.store import DocumentStore


@pytest.fixture
def button_store(make_entry):
    """Store with several button-like components."""
    store = DocumentStore()
    store.replace_all([
        make_entry("components/actions/toggle-button", "Toggle Button", category="actions"),
        make_entry("components/actions/button-group", "Button Group", category="actions"),
        make_entry("components/actions/button", "Button", category="actions"),
        make_entry("components/inputs/date-picker", "Date Picker", category="inputs"),
        make_entry("foundation/theming", "Theming", module="foundation"),
    ])
    return store


class TestReplaceAll:
    """Test the store's only mutator."""

    def test_replace_all(self, button_store, make_entry):
        """Test the whole collection is replaced."""
        button_store.replace_all([make_entry("components/inputs/slider", "Slider", category="inputs")])

        assert button_store.size == 1
        assert "components/inputs/slider" in button_store
        assert button_store.get("components/actions/button") is None

    def test_duplicate_ids_rejected(self, button_store, make_entry):
        """Test duplicate IDs fail and leave the previous contents in place."""
        with pytest.raises(ValidationError, match="Duplicate document ID"):
            button_store.replace_all([
                make_entry("components/a", "A"),
                make_entry("components/a", "A again"),
            ])

        assert button_store.size == 5

    def test_category_outside_components_rejected(self, make_entry):
        """Test categories are only allowed in the components module."""
        store = DocumentStore()
        with pytest.raises(ValidationError, match="outside the 'components' module"):
            store.replace_all([make_entry("patterns/forms/x", "X", module="patterns", category="forms")])

    def test_missing_title_rejected(self, make_entry):
        """Test entries need a title."""
        with pytest.raises(ValidationError, match="title is required"):
            DocumentStore().replace_all([make_entry("components/x", "  ")])


class TestLookups:
    """Test read operations."""

    def test_get(self, button_store):
        """Test lookup by ID."""
        assert button_store.get("components/actions/button").title == "Button"
        assert button_store.get("missing") is None

    def test_list_by_module_keeps_discovery_order(self, button_store):
        """Test module listing order."""
        titles = [doc.title for doc in button_store.list_by_module("components")]

        assert titles == ["Toggle Button", "Button Group", "Button", "Date Picker"]

    def test_list_by_category(self, button_store):
        """Test category listing."""
        assert [doc.title for doc in button_store.list_by_category("inputs")] == ["Date Picker"]
        assert button_store.list_by_category("unknown") == []

    def test_modules_and_categories(self, button_store):
        """Test counted, name-sorted module and category lists."""
        assert button_store.modules() == [("components", 4), ("foundation", 1)]
        assert button_store.categories() == [("actions", 3), ("inputs", 1)]

    def test_all(self, button_store):
        """Test all documents are returned in discovery order."""
        assert len(button_store.all()) == len(button_store) == 5


class TestFindByTitle:
    """Test partial, case-insensitive title matching."""

    def test_exact_match_wins(self, button_store):
        """Test an exact title beats longer titles containing it."""
        assert button_store.find_by_title("button").title == "Button"
        assert button_store.find_by_title("BUTTON").title == "Button"

    def test_prefix_prefers_shortest_title(self, button_store):
        """Test prefix matches tie-break on title length."""
        assert button_store.find_by_title("butt").title == "Button"

    def test_substring_match(self, button_store):
        """Test substring matches when nothing starts with the name."""
        assert button_store.find_by_title("group").title == "Button Group"
        assert button_store.find_by_title("picker").title == "Date Picker"

    def test_separator_insensitive(self, button_store):
        """Test names written without spaces or with hyphens."""
        assert button_store.find_by_title("datepicker").title == "Date Picker"
        assert button_store.find_by_title("button-group").title == "Button Group"

    def test_discovery_order_breaks_ties(self, make_entry):
        """Test equally good matches go to the first-discovered document."""
        store = DocumentStore()
        store.replace_all([
            make_entry("components/b/alpha", "Alpha", category="b"),
            make_entry("components/a/alpha", "Alpha", category="a"),
        ])

        assert store.find_by_title("alpha").id == "components/b/alpha"

    def test_module_restriction(self, button_store):
        """Test lookups limited to one module."""
        assert button_store.find_by_title("theming").module == "foundation"
        assert button_store.find_by_title("theming", module="components") is None

    def test_no_match(self, button_store):
        """Test unknown and blank names."""
        assert button_store.find_by_title("carousel") is None
        assert button_store.find_by_title("   ") is None
