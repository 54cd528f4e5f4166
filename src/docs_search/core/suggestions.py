"""Component suggestions and implementation guides built on the search engine."""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..models.document import DocumentEntry
from ..models.result import SearchResult
from .engine import SearchEngine
from .store import DocumentStore
from .taxonomy import COMPONENTS_MODULE, ROOT_MODULE

logger = logging.getLogger(__name__)

PATTERNS_MODULE = "patterns"

TITLE_BOOST = 30.0
CATEGORY_BOOST = 20.0
MIN_RELEVANCE = 1.0
MAX_SUGGESTIONS = 10
MAX_GUIDE_COMPONENTS = 8
MAX_GUIDE_PATTERNS = 4

_IMPORT_NAMES = re.compile(r'import\s*\{([^}]+)\}\s*from\s*[\'"]([^\'"]+)[\'"]')
_NON_ALNUM = re.compile(r'[^a-z0-9]+')

UNIVERSAL_CHECKLIST = (
    "Ensure proper heading hierarchy (h1 → h2 → h3)",
    "Test keyboard navigation (Tab, Enter, Escape)",
    "Verify screen reader announces interactive elements",
    "Check color contrast meets WCAG 2.1 AA standards",
)

# Component title keywords to extra checklist items
COMPONENT_CHECKLIST: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("button",), (
        "Icon-only buttons have an accessible label",
    )),
    (("input", "textarea", "select", "combobox", "field", "checkbox", "radio", "switch", "slider"), (
        "All form fields have associated labels",
        "Required fields are marked as required",
        "Error messages are linked to their fields",
    )),
    (("dialog", "drawer", "popover"), (
        "Overlay traps focus while open and restores it on close",
        "Overlay has an accessible name",
    )),
    (("table", "datagrid", "grid"), (
        "Table has an accessible label",
        "Sortable columns announce sort state",
    )),
    (("menu", "nav", "tab"), (
        "Navigation items have clear labels",
        "Arrow key and Escape navigation works",
    )),
)


@dataclass(frozen=True)
class ComponentSuggestion:
    """A component document recommended for a UI description."""
    document: DocumentEntry
    relevance: float
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "document": self.document.to_summary(),
            "relevance": self.relevance,
            "reasons": list(self.reasons),
        }


@dataclass
class ImplementationGuide:
    """
    Ordered, multi-section guide for a UI goal.

    Attributes:
        goal: The goal as given
        components: Suggested components, best first
        complementary: Components referenced from the suggestions' See Also sections
        imports: Consolidated import statements for the suggested components
        patterns: Pattern documents matching the goal
        styling_notes: Styling and theming documents as (title, description) pairs
        accessibility_checklist: Checklist items for the suggested components
    """
    goal: str
    components: List[ComponentSuggestion] = field(default_factory=list)
    complementary: List[DocumentEntry] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    patterns: List[SearchResult] = field(default_factory=list)
    styling_notes: List[Tuple[str, str]] = field(default_factory=list)
    accessibility_checklist: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.components and not self.patterns


def _compact(text: str) -> str:
    return _NON_ALNUM.sub('', text.lower())


class SuggestionEngine:
    """Maps free-text UI descriptions to ranked component documents."""

    def __init__(
        self,
        store: DocumentStore,
        engine: SearchEngine,
        components_module: str = COMPONENTS_MODULE,
        patterns_module: str = PATTERNS_MODULE
    ):
        self.store = store
        self.engine = engine
        self.components_module = components_module
        self.patterns_module = patterns_module

    def suggest(self, ui_description: str, limit: int = MAX_SUGGESTIONS) -> List[ComponentSuggestion]:
        """
        Rank component documents for a UI description.

        Search results restricted to the components module are boosted when
        the document title or category is itself a word of the description.
        Only one suggestion is kept per distinct title.

        Args:
            ui_description: Free-text description of the UI
            limit: Maximum number of suggestions

        Returns:
            Suggestions by descending relevance, then document ID
        """
        tokens = set(self.engine.text_processor.query_tokens(ui_description))
        if not tokens:
            return []

        scored: Dict[str, Tuple[float, List[str], DocumentEntry]] = {}
        for result in self.engine.rank(ui_description, module=self.components_module):
            scored[result.document.id] = (result.relevance, ["search match"], result.document)

        # Category matches are suggested even when no word occurs in the text
        for doc in self.store.list_by_module(self.components_module):
            if doc.id not in scored and self._category_matches(doc, tokens):
                scored[doc.id] = (0.0, [], doc)

        suggestions = []
        for relevance, reasons, doc in scored.values():
            if self._title_matches(doc, tokens):
                relevance += TITLE_BOOST
                reasons.append("title match")
            if self._category_matches(doc, tokens):
                relevance += CATEGORY_BOOST
                reasons.append(f"category: {doc.category}")

            relevance = round(min(relevance, 100.0), 2)
            if relevance >= MIN_RELEVANCE:
                suggestions.append(ComponentSuggestion(doc, relevance, tuple(reasons)))

        suggestions.sort(key=lambda s: (-s.relevance, s.document.id))

        unique: List[ComponentSuggestion] = []
        seen_titles: Set[str] = set()
        for suggestion in suggestions:
            title_key = suggestion.document.title.lower()
            if title_key in seen_titles:
                continue
            seen_titles.add(title_key)
            unique.append(suggestion)
            if len(unique) >= limit:
                break

        logger.debug(f"Suggested {len(unique)} components for {ui_description!r}")
        return unique

    @staticmethod
    def _title_matches(doc: DocumentEntry, tokens: Set[str]) -> bool:
        title = _compact(doc.title)
        return bool(title) and (title in tokens or f"{title}s" in tokens)

    @staticmethod
    def _category_matches(doc: DocumentEntry, tokens: Set[str]) -> bool:
        if not doc.category:
            return False

        category = doc.category.lower()
        singular = category[:-1] if category.endswith('s') else category
        if category in tokens or singular in tokens:
            return True

        parts = [part for part in _NON_ALNUM.split(category) if part]
        return len(parts) > 1 and all(part in tokens for part in parts)

    def implementation_guide(self, goal: str) -> ImplementationGuide:
        """
        Assemble an implementation guide for a UI goal.

        See Also references of the suggested components are followed one
        hop only; references of those references are not expanded.
        """
        guide = ImplementationGuide(goal=goal)
        if not self.engine.text_processor.query_tokens(goal):
            return guide

        guide.components = self.suggest(goal, limit=MAX_GUIDE_COMPONENTS)
        guide.complementary = self._complementary(guide.components)
        guide.imports = consolidate_imports(
            [s.document.metadata.import_statement for s in guide.components]
        )
        guide.patterns = self.engine.search(goal, module=self.patterns_module, limit=MAX_GUIDE_PATTERNS)
        guide.styling_notes = self._styling_notes()
        guide.accessibility_checklist = accessibility_checklist(
            [s.document for s in guide.components] + guide.complementary
        )

        logger.debug(
            f"Guide for {goal!r}: {len(guide.components)} components, "
            f"{len(guide.complementary)} complementary, {len(guide.patterns)} patterns"
        )
        return guide

    def _complementary(self, suggestions: List[ComponentSuggestion]) -> List[DocumentEntry]:
        suggested_ids = {s.document.id for s in suggestions}
        found: List[DocumentEntry] = []
        found_ids: Set[str] = set()

        for suggestion in suggestions:
            for name in suggestion.document.metadata.see_also:
                doc = self.store.find_by_title(name, module=self.components_module)
                if doc is None or doc.id in suggested_ids or doc.id in found_ids:
                    continue
                found.append(doc)
                found_ids.add(doc.id)

        return found

    def _styling_notes(self) -> List[Tuple[str, str]]:
        """Foundation documents about styling or theming."""
        notes = []
        for doc in self.store.list_by_module(ROOT_MODULE):
            key = f"{doc.id} {doc.title}".lower()
            if 'styl' in key or 'them' in key:
                notes.append((doc.title, doc.metadata.description or ""))
        return notes


def consolidate_imports(statements: List[Optional[str]]) -> List[str]:
    """
    Merge ``import { A } from 'pkg'`` statements per package.

    Statements that do not follow that shape are kept verbatim, once.
    """
    by_package: Dict[str, Set[str]] = {}
    verbatim: List[str] = []

    for statement in statements:
        if not statement:
            continue
        match = _IMPORT_NAMES.search(statement)
        if match is None:
            if statement not in verbatim:
                verbatim.append(statement)
            continue
        names = [name.strip() for name in match.group(1).split(',') if name.strip()]
        by_package.setdefault(match.group(2), set()).update(names)

    imports = [
        f"import {{ {', '.join(sorted(names))} }} from '{package}';"
        for package, names in by_package.items()
    ]
    return imports + verbatim


def accessibility_checklist(documents: List[DocumentEntry]) -> List[str]:
    """Universal checklist items plus items for the kinds of components given."""
    titles = [_compact(doc.title) for doc in documents]
    items = list(UNIVERSAL_CHECKLIST)

    for keywords, extra in COMPONENT_CHECKLIST:
        if any(keyword in title for title in titles for keyword in keywords):
            items.extend(item for item in extra if item not in items)

    return items
