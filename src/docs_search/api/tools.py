"""
Lookup operations over one index generation.

Every operation takes the current IndexGeneration plus its validated argument
model and returns markdown text. Failed lookups raise NotFound with a message
that already lists what is available; the service turns it into an error
result.
"""

from pathlib import PurePosixPath
from typing import Dict, List, Optional, Tuple

from ..core.builder import IndexGeneration
from ..core.exceptions import NotFound
from ..core.store import DocumentStore
from ..core.taxonomy import ROOT_MODULE, strip_numeric_prefix
from ..models.document import DocumentEntry
from ..models.result import IndexStats
from ..models.tools import (
    GetEnterpriseArgs,
    GetFoundationArgs,
    GetPatternArgs,
    ListByCategoryArgs,
    QueryComponentArgs,
    SearchDocsArgs,
)

FOUNDATION_MODULE = ROOT_MODULE
PATTERNS_MODULE = "patterns"
ENTERPRISE_MODULE = "enterprise"

FOUNDATION_TOPIC_ALIASES: Dict[str, str] = {
    'start': 'getting-started',
    'setup': 'getting-started',
    'install': 'getting-started',
    'provider': 'fluent-provider',
    'theme': 'theming',
    'themes': 'theming',
    'tokens': 'theming',
    'styling': 'styling-griffel',
    'griffel': 'styling-griffel',
    'css': 'styling-griffel',
    'architecture': 'component-architecture',
    'hooks': 'component-architecture',
    'slots': 'component-architecture',
    'a11y': 'accessibility',
}

# topic -> (display name, description, file name fragment)
ENTERPRISE_TOPICS: Dict[str, Tuple[str, str, str]] = {
    'app-shell': (
        'Application Shell',
        'Application shell patterns: layout, navigation and overall app structure.',
        'app-shell',
    ),
    'dashboard': (
        'Dashboard Patterns',
        'Dashboard components: KPI cards, charts and real-time data updates.',
        'dashboard',
    ),
    'admin': (
        'Admin Panel Patterns',
        'Admin interfaces: CRUD operations, user management and settings panels.',
        'admin',
    ),
    'data': (
        'Data Management',
        'Data handling at scale: virtualization, filtering, sorting and export.',
        'data-',
    ),
    'accessibility': (
        'Enterprise Accessibility',
        'Accessibility at scale: WCAG compliance, focus management and screen readers.',
        'accessibility',
    ),
}

ENTERPRISE_TOPIC_ALIASES: Dict[str, str] = {
    'shell': 'app-shell',
    'layout': 'app-shell',
    'kpi': 'dashboard',
    'charts': 'dashboard',
    'widgets': 'dashboard',
    'realtime': 'dashboard',
    'real-time': 'dashboard',
    'crud': 'admin',
    'users': 'admin',
    'user-management': 'admin',
    'settings': 'admin',
    'virtualization': 'data',
    'filtering': 'data',
    'sorting': 'data',
    'export': 'data',
    'import': 'data',
    'a11y': 'accessibility',
    'wcag': 'accessibility',
    'keyboard': 'accessibility',
    'screen-reader': 'accessibility',
    'screen-readers': 'accessibility',
}


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _display_name(slug: str) -> str:
    return " ".join(_capitalize(word) for word in slug.split('-'))


def _doc_header(doc: DocumentEntry, include_taxonomy: bool = True) -> List[str]:
    parts = [f"# {doc.title}", ""]
    if doc.metadata.package_name:
        parts.append(f"**Package:** `{doc.metadata.package_name}`")
    if doc.metadata.import_statement:
        parts.append(f"**Import:** `{doc.metadata.import_statement}`")
    if include_taxonomy:
        parts.append(f"**Module:** {doc.module}")
        if doc.category:
            parts.append(f"**Category:** {doc.category}")
    return parts


def _indicators(doc: DocumentEntry) -> str:
    flags = []
    if doc.metadata.has_code_examples:
        flags.append("examples")
    if doc.metadata.has_props_table:
        flags.append("props")
    return f" ({', '.join(flags)})" if flags else ""


def topic_key(doc: DocumentEntry) -> str:
    """File name without extension or numeric prefix, e.g. ``theming``."""
    return strip_numeric_prefix(doc.file_stem).lower()


def available_components(store: DocumentStore, components_module: str) -> List[str]:
    """Component titles grouped by category, one markdown bullet per category."""
    by_category: Dict[str, List[str]] = {}
    for doc in store.list_by_module(components_module):
        by_category.setdefault(doc.category or "other", []).append(doc.title)
    return [f"- **{category}:** {', '.join(titles)}" for category, titles in by_category.items()]


def component_not_found(name: str, store: DocumentStore, components_module: str) -> NotFound:
    parts = [f'Component "{name}" not found.']
    listing = available_components(store, components_module)
    if listing:
        parts += ["", "**Available components:**", *listing, "",
                  '*Tip: Use partial names (e.g., "button" for Button)*']
    return NotFound("\n".join(parts))


def query_component(generation: IndexGeneration, args: QueryComponentArgs) -> str:
    """
    Full documentation for the best title match.

    Raises:
        NotFound: If no document title or file name matches
    """
    store = generation.store
    doc = store.find_by_title(args.component_name)
    if doc is None:
        raise component_not_found(args.component_name, store, store.components_module)

    return "\n".join(_doc_header(doc) + ["", "---", "", doc.content])


def search_docs(generation: IndexGeneration, args: SearchDocsArgs) -> str:
    """Ranked search results with relevance, tags and excerpts."""
    results = generation.engine.search(args.query, module=args.module, limit=args.limit)

    if not results:
        parts = [f'No results found for "{args.query}".', ""]
        if args.module:
            parts += [f"*You searched only in the **{args.module}** module. "
                      "Try removing the module filter for broader results.*", ""]
        parts += [
            "**Suggestions:**",
            "- Try simpler or shorter search terms",
            "- Use document titles directly",
            "- Use `list_all_docs` to see all available modules and documents",
        ]
        return "\n".join(parts)

    filter_note = f" in **{args.module}**" if args.module else ""
    parts = [
        f'## Search Results for "{args.query}"{filter_note}',
        f"*Found {_plural(len(results), 'result')}*",
        "",
    ]
    for rank, result in enumerate(results, 1):
        doc = result.document
        parts.append(f"### {rank}. {doc.title} ({result.relevance}% relevant)")

        tags = [f"module: {doc.module}"]
        if doc.category:
            tags.append(f"category: {doc.category}")
        if doc.metadata.has_code_examples:
            tags.append("has examples")
        if doc.metadata.has_props_table:
            tags.append("has props")
        parts.append(" · ".join(tags))

        fields = ", ".join(f"{matched.field} {matched.score:g}" for matched in result.matched_fields)
        parts.append(f"*Matched: {fields}*")
        if result.excerpt:
            parts.append(f"> {result.excerpt}")
        parts.append(f'*Use `query_component("{doc.title}")` for full documentation*')
        parts.append("")

    return "\n".join(parts)


def list_by_category(generation: IndexGeneration, args: ListByCategoryArgs) -> str:
    """
    Documents in one component category, or the category list when none is given.

    Raises:
        NotFound: If the category does not exist
    """
    store = generation.store
    categories = store.categories()

    if not args.category or not args.category.strip():
        parts = ["## Available Component Categories", ""]
        if not categories:
            parts.append("No categories found. The document index may be empty.")
            return "\n".join(parts)
        parts += [f"- **{name}** ({_plural(count, 'component')})" for name, count in categories]
        parts += ["", '*Use `list_by_category("category-name")` to see components in a category*']
        return "\n".join(parts)

    requested = args.category.strip()
    by_lower = {name.lower(): name for name, _ in categories}
    category = requested if requested in dict(categories) else by_lower.get(requested.lower())
    if category is None:
        parts = [f'Category "{requested}" not found.', "", "**Valid categories:**"]
        if categories:
            parts += [f"- **{name}** ({_plural(count, 'component')})" for name, count in categories]
        else:
            parts.append("*(No categories discovered, the document index may be empty)*")
        raise NotFound("\n".join(parts))

    docs = sorted(store.list_by_category(category), key=lambda doc: doc.title.lower())
    parts = [
        f"## {_capitalize(category)} Components",
        f"*{_plural(len(docs), 'component')} in this category*",
        "",
    ]
    for doc in docs:
        parts.append(f"### {doc.title}{_indicators(doc)}")
        if doc.metadata.import_statement:
            parts.append(f"`{doc.metadata.import_statement}`")
        if doc.metadata.description:
            parts.append(doc.metadata.description)
        parts.append(f'*Use `query_component("{doc.title}")` for full documentation*')
        parts.append("")

    return "\n".join(parts)


def resolve_foundation_topic(topic: str, docs: List[DocumentEntry]) -> Optional[DocumentEntry]:
    """
    Foundation document for a topic name or alias.

    Tries the exact topic key, then the alias table, then partial matches
    between the topic and the document keys.
    """
    requested = topic.strip().lower().replace(' ', '-')
    by_key = {topic_key(doc): doc for doc in reversed(docs)}

    if requested in by_key:
        return by_key[requested]

    aliased = FOUNDATION_TOPIC_ALIASES.get(requested)
    if aliased and aliased in by_key:
        return by_key[aliased]

    for key, doc in sorted(by_key.items(), key=lambda item: len(item[0])):
        if requested in key or key in requested:
            return doc

    for doc in docs:
        if requested in doc.title.lower():
            return doc
    return None


def get_foundation(generation: IndexGeneration, args: GetFoundationArgs) -> str:
    """
    One foundation document by topic, or an overview of all of them.

    Raises:
        NotFound: If the topic matches no foundation document
    """
    docs = generation.store.list_by_module(FOUNDATION_MODULE)

    if not args.topic or not args.topic.strip():
        parts = ["## Foundation Documentation", "", "Core topics covering setup, architecture and design principles.", ""]
        if not docs:
            parts.append("No foundation documents are indexed.")
        for doc in docs:
            key = topic_key(doc)
            aliases = sorted(alias for alias, target in FOUNDATION_TOPIC_ALIASES.items() if target == key)
            parts.append(f"### {doc.title}")
            if doc.metadata.description:
                parts.append(doc.metadata.description)
            if aliases:
                parts.append(f"*Aliases: {', '.join(aliases)}*")
            parts.append(f'*Use `get_foundation("{key}")` for full documentation*')
            parts.append("")
        return "\n".join(parts)

    doc = resolve_foundation_topic(args.topic, docs)
    if doc is None:
        parts = [f'Foundation topic "{args.topic}" not recognized.', "", "**Available topics:**"]
        parts += [f"- **{topic_key(d)}**" for d in docs]
        parts += ["", "*Omit the topic to get an overview of all foundation docs.*"]
        raise NotFound("\n".join(parts))

    return "\n".join([f"# {doc.title}", "", f"**Module:** {doc.module}", "", "---", "", doc.content])


def pattern_categories(store: DocumentStore) -> Dict[str, List[DocumentEntry]]:
    """Pattern documents grouped by the folder directly under the patterns module."""
    grouped: Dict[str, List[DocumentEntry]] = {}
    for doc in store.list_by_module(PATTERNS_MODULE):
        parts = PurePosixPath(doc.relative_path).parts
        if len(parts) > 2:
            grouped.setdefault(parts[1], []).append(doc)
    return dict(sorted(grouped.items()))


def _pattern_name(doc: DocumentEntry) -> str:
    return strip_numeric_prefix(doc.file_stem)


def find_pattern(docs: List[DocumentEntry], name: str) -> Optional[DocumentEntry]:
    """Match by title, then file name (either containing the other), then ID."""
    requested = name.strip().lower()

    for doc in docs:
        if requested in doc.title.lower():
            return doc
    for doc in docs:
        file_name = _pattern_name(doc).lower()
        if requested in file_name or file_name in requested:
            return doc
    for doc in docs:
        if requested in doc.id.lower():
            return doc
    return None


def get_pattern(generation: IndexGeneration, args: GetPatternArgs) -> str:
    """
    Pattern overview, one category's patterns, or one pattern document.

    Raises:
        NotFound: If the category or the named pattern does not exist
    """
    grouped = pattern_categories(generation.store)

    if not args.pattern_category or not args.pattern_category.strip():
        parts = ["## Pattern Documentation", "", "Implementation patterns and best practices for common UI scenarios.", ""]
        if not grouped:
            parts.append("No pattern documents are indexed.")
        for folder, docs in grouped.items():
            category = strip_numeric_prefix(folder)
            parts.append(f"### {_capitalize(category)} Patterns")
            parts.append(f"*{_plural(len(docs), 'pattern')} available*")
            parts.append(f"Topics: {', '.join(doc.title for doc in docs)}")
            parts.append(f'*Use `get_pattern("{category}")` to see all patterns*')
            parts.append("")
        return "\n".join(parts)

    requested = args.pattern_category.strip().lower()
    folder = next(
        (f for f in grouped if f.lower() == requested or strip_numeric_prefix(f).lower() == requested),
        None
    )
    if folder is None:
        parts = [f'Pattern category "{args.pattern_category}" not found.', "", "**Valid pattern categories:**"]
        parts += [f"- {strip_numeric_prefix(f)}" for f in grouped] or ["*(none indexed)*"]
        raise NotFound("\n".join(parts))

    category = strip_numeric_prefix(folder)
    docs = sorted(grouped[folder], key=lambda doc: doc.relative_path)

    if args.pattern_name and args.pattern_name.strip():
        doc = find_pattern(docs, args.pattern_name)
        if doc is None:
            parts = [f'Pattern "{args.pattern_name}" not found in category "{category}".', "",
                     "**Available patterns in this category:**"]
            parts += [f'- {d.title} → `get_pattern("{category}", "{_pattern_name(d)}")`' for d in docs]
            raise NotFound("\n".join(parts))

        parts = [f"# {doc.title}", "", f"**Module:** {doc.module}"]
        if doc.metadata.has_code_examples:
            parts.append("**Has code examples:** yes")
        parts += ["", "---", "", doc.content]
        return "\n".join(parts)

    parts = [f"## {_capitalize(category)} Patterns", f"*{_plural(len(docs), 'pattern')} in this category*", ""]
    for doc in docs:
        parts.append(f"### {doc.title}{_indicators(doc)}")
        if doc.metadata.description:
            parts.append(doc.metadata.description)
        parts.append(f'*Use `get_pattern("{category}", "{_pattern_name(doc)}")` for full documentation*')
        parts.append("")
    return "\n".join(parts)


def resolve_enterprise_topic(topic: str) -> Optional[str]:
    """Canonical enterprise topic for a name, alias or partial name."""
    requested = topic.strip().lower().replace(' ', '-')
    if requested in ENTERPRISE_TOPICS:
        return requested
    if requested in ENTERPRISE_TOPIC_ALIASES:
        return ENTERPRISE_TOPIC_ALIASES[requested]
    for key in ENTERPRISE_TOPICS:
        if key in requested or requested in key:
            return key
    return None


def enterprise_docs(store: DocumentStore, topic: str) -> List[DocumentEntry]:
    fragment = ENTERPRISE_TOPICS[topic][2]
    docs = [doc for doc in store.list_by_module(ENTERPRISE_MODULE) if fragment in doc.file_stem.lower()]
    return sorted(docs, key=lambda doc: doc.relative_path)


def get_enterprise(generation: IndexGeneration, args: GetEnterpriseArgs) -> str:
    """
    Documents of one enterprise topic group, or an overview of all groups.

    Raises:
        NotFound: If the topic is unknown or has no documents
    """
    store = generation.store

    if not args.topic or not args.topic.strip():
        parts = ["## Enterprise Documentation", "", "Enterprise-scale application patterns and best practices.", ""]
        for key, (display_name, description, _) in ENTERPRISE_TOPICS.items():
            docs = enterprise_docs(store, key)
            parts.append(f"### {display_name}")
            parts.append(description)
            parts.append(f"*{_plural(len(docs), 'document')} available*")
            if docs:
                parts.append(f"Topics: {', '.join(doc.title for doc in docs)}")
            parts.append(f'*Use `get_enterprise("{key}")` for full documentation*')
            parts.append("")
        return "\n".join(parts)

    topic = resolve_enterprise_topic(args.topic)
    if topic is None:
        parts = [f'Enterprise topic "{args.topic}" not recognized.', "", "**Available enterprise topics:**"]
        for key, (_, description, _) in ENTERPRISE_TOPICS.items():
            aliases = [alias for alias, target in ENTERPRISE_TOPIC_ALIASES.items() if target == key]
            alias_note = f" (aliases: {', '.join(aliases)})" if aliases else ""
            parts.append(f"- **{key}**: {description}{alias_note}")
        raise NotFound("\n".join(parts))

    docs = enterprise_docs(store, topic)
    if not docs:
        raise NotFound(f'No enterprise documentation found for topic "{topic}". The docs directory may be incomplete.')

    parts = [
        f"# {ENTERPRISE_TOPICS[topic][0]}",
        "",
        f"**Module:** {ENTERPRISE_MODULE}",
        f"**Topic:** {topic}",
        f"**Documents:** {len(docs)}",
        "",
    ]
    if len(docs) > 1:
        parts += ["## Table of Contents", ""] + [f"- {doc.title}" for doc in docs] + [""]
    for index, doc in enumerate(docs):
        if index:
            parts += ["", "---", ""]
        parts.append(doc.content)
    return "\n".join(parts)


def list_all_docs(generation: IndexGeneration, args=None) -> str:
    """Every indexed document grouped by module, then category."""
    store = generation.store
    if store.size == 0:
        return "\n".join([
            "**No documents indexed.**",
            "",
            "The documentation tree contained no indexable markdown files.",
            "Try the `reindex` operation after adding documents.",
        ])

    modules = store.modules()
    categories = store.categories()
    parts = [
        "# Documentation Index",
        "",
        f"**Total documents:** {store.size}",
        f"**Modules:** {', '.join(f'{name} ({count})' for name, count in modules)}",
    ]
    if categories:
        parts.append(f"**Component categories:** {', '.join(f'{name} ({count})' for name, count in categories)}")
    parts += ["", "---"]

    for module, count in modules:
        parts += ["", f"## {_capitalize(module)} ({_plural(count, 'doc')})", ""]
        docs = store.list_by_module(module)
        if any(doc.category for doc in docs):
            by_category: Dict[str, List[DocumentEntry]] = {}
            for doc in docs:
                by_category.setdefault(doc.category or "other", []).append(doc)
            for category in sorted(by_category):
                parts.append(f"### {_capitalize(category)}")
                parts += [f"- **{doc.title}** `{doc.id}`{_indicators(doc)}" for doc in by_category[category]]
                parts.append("")
        else:
            parts += [f"- **{doc.title}** `{doc.id}`{_indicators(doc)}" for doc in docs]
            parts.append("")

    return "\n".join(parts)


def format_reindex(stats: IndexStats, previous_count: int) -> str:
    """Summary of a completed rebuild, with the change in document count."""
    parts = [
        "# Reindex Complete",
        "",
        f"**Documents indexed:** {stats.indexed_files}",
        f"**Previous count:** {previous_count}",
        f"**Duration:** {stats.duration_ms:.1f}ms",
    ]
    if stats.failed_files:
        parts.append(f"**Failed files:** {stats.failed_files}")
    if stats.skipped_files:
        parts.append(f"**Skipped files:** {stats.skipped_files}")
    if stats.malformed_files:
        parts.append(f"**Files without a title heading:** {stats.malformed_files}")
    parts.append("")

    if stats.by_module:
        parts.append("## By Module")
        parts += [f"- **{module}:** {_plural(count, 'doc')}" for module, count in sorted(stats.by_module.items())]
        parts.append("")
    if stats.by_category:
        parts.append("## By Category")
        parts += [f"- **{category}:** {_plural(count, 'doc')}" for category, count in sorted(stats.by_category.items())]
        parts.append("")

    delta = stats.indexed_files - previous_count
    if delta > 0:
        parts.append(f"*{delta} new document(s) discovered.*")
    elif delta < 0:
        parts.append(f"*{-delta} document(s) no longer present.*")
    else:
        parts.append("*No change in document count.*")
    return "\n".join(parts)
