"""Sub-extraction and recommendation operations rendered as markdown."""

from typing import List

from ..core.builder import IndexGeneration
from ..core.exceptions import NotFound
from ..core.metadata import extract_code_blocks, extract_prop_tables, extract_props_section
from ..core.store import DocumentStore
from ..models.document import DocumentEntry
from ..models.tools import ComponentNameArgs, ImplementationGuideArgs, SuggestComponentsArgs


def _find_component(generation: IndexGeneration, name: str, listing_label: str, has_feature) -> DocumentEntry:
    """Best title match, or NotFound listing the components that have the feature."""
    store: DocumentStore = generation.store
    doc = store.find_by_title(name)
    if doc is not None:
        return doc

    parts = [f'Component "{name}" not found.']
    titles = sorted(d.title for d in store.list_by_module(store.components_module) if has_feature(d))
    if titles:
        parts += ["", f"**{listing_label}:**", ", ".join(titles), "",
                  '*Tip: Use partial names (e.g., "button" for Button)*']
    raise NotFound("\n".join(parts))


def _package_lines(doc: DocumentEntry) -> List[str]:
    lines = []
    if doc.metadata.package_name:
        lines.append(f"**Package:** `{doc.metadata.package_name}`")
    if doc.metadata.import_statement:
        lines.append(f"**Import:** `{doc.metadata.import_statement}`")
    return lines


def get_component_examples(generation: IndexGeneration, args: ComponentNameArgs) -> str:
    """
    Code examples of a component, each labeled with its section heading.

    Raises:
        NotFound: If no component matches the name
    """
    doc = _find_component(
        generation, args.component_name, "Components with code examples",
        lambda d: d.metadata.has_code_examples
    )
    blocks = extract_code_blocks(doc.content)

    if not blocks:
        return "\n".join([
            f"# {doc.title}: No Code Examples Found",
            "",
            f'The documentation for "{doc.title}" does not contain front-end code examples.',
            "",
            "**Suggestions:**",
            "- Use `query_component` to see the full documentation",
            "- Use `search_docs` to find related patterns with examples",
            "- Use `get_pattern` to find implementation patterns",
        ])

    parts = [f"# {doc.title}: Code Examples", ""]
    parts += _package_lines(doc)
    parts += [f"**Examples found:** {len(blocks)}", "", "---", ""]
    for number, block in enumerate(blocks, 1):
        parts += [
            f"### Example {number}: {block.section}",
            "",
            f"```{block.language}",
            block.code,
            "```",
            "",
        ]
    return "\n".join(parts)


def get_props_reference(generation: IndexGeneration, args: ComponentNameArgs) -> str:
    """
    Props section of a component, falling back to prop-like tables.

    Raises:
        NotFound: If no component matches the name
    """
    doc = _find_component(
        generation, args.component_name, "Components with props references",
        lambda d: d.metadata.has_props_table
    )
    header = [f"# {doc.title}: Props Reference", ""] + _package_lines(doc)

    section = extract_props_section(doc.content)
    if section:
        return "\n".join(header + ["", "---", "", section])

    tables = extract_prop_tables(doc.content)
    if tables:
        parts = header + ["", "*Note: Extracted from inline tables (no props section found)*", "", "---", ""]
        for number, table in enumerate(tables, 1):
            if len(tables) > 1:
                parts += [f"### Table {number}", ""]
            parts += [table, ""]
        return "\n".join(parts)

    parts = [
        f"# {doc.title}: No Props Reference Found",
        "",
        f'The documentation for "{doc.title}" does not contain a props reference table.',
        "",
    ]
    if doc.module != generation.store.components_module:
        parts += [f'*Note: "{doc.title}" is a {doc.module} document, not a component.*', ""]
    parts += [
        "**Suggestions:**",
        "- Use `query_component` to see the full documentation",
        "- Use `list_by_category` to find components with props tables",
        "- Use `search_docs` to search for specific prop names",
    ]
    return "\n".join(parts)


def suggest_components(generation: IndexGeneration, args: SuggestComponentsArgs) -> str:
    """
    Ranked component recommendations for a UI description.

    Raises:
        NotFound: If nothing in the components module matches
    """
    suggestions = generation.suggestions.suggest(args.ui_description)

    if not suggestions:
        store = generation.store
        parts = [f'No components matched "{args.ui_description}".', ""]
        categories = store.categories()
        if categories:
            parts.append("**Browse categories instead:**")
            parts += [f"- `list_by_category(\"{name}\")` ({count})" for name, count in categories]
        raise NotFound("\n".join(parts))

    parts = [
        "# Suggested Components",
        "",
        f'**For:** "{args.ui_description}"',
        f"**Suggestions:** {len(suggestions)} components",
        "",
        "---",
        "",
    ]
    for number, suggestion in enumerate(suggestions, 1):
        doc = suggestion.document
        parts.append(f"### {number}. {doc.title} ({suggestion.relevance}% relevant)")
        if doc.metadata.description:
            parts.append(doc.metadata.description)
        parts.append(f"*Why:* {', '.join(suggestion.reasons)}")

        quick_info = []
        if doc.category:
            quick_info.append(f"Category: {doc.category}")
        if doc.metadata.package_name:
            quick_info.append(f"Package: `{doc.metadata.package_name}`")
        if quick_info:
            parts.append(" | ".join(quick_info))
        parts.append(f'*→ `query_component("{doc.title}")` for full docs*')
        parts.append("")

    parts += [
        "---",
        "",
        "**Next steps:**",
        '- Use `query_component("<name>")` for complete documentation',
        '- Use `get_component_examples("<name>")` for code examples',
        '- Use `get_props_reference("<name>")` for the props API',
        '- Use `get_implementation_guide("<goal>")` for step-by-step guidance',
    ]
    return "\n".join(parts)


def get_implementation_guide(generation: IndexGeneration, args: ImplementationGuideArgs) -> str:
    """
    Multi-section implementation guide for a UI goal.

    Raises:
        NotFound: If neither components nor patterns match the goal
    """
    guide = generation.suggestions.implementation_guide(args.goal)

    if guide.is_empty:
        raise NotFound("\n".join([
            f'No components or patterns matched "{args.goal}".',
            "",
            "**Try:**",
            "- `list_all_docs` to browse everything that is indexed",
            "- `search_docs` with simpler terms",
        ]))

    parts = [f"# Implementation Guide: {args.goal}", ""]

    parts += ["## Recommended Components", ""]
    if guide.imports:
        parts += ["### Quick Import", "", "```typescript", *guide.imports, "```", ""]
    if guide.components:
        parts += ["### Component Details", ""]
        for suggestion in guide.components:
            doc = suggestion.document
            parts.append(f"- **{doc.title}** ({suggestion.relevance}% relevant)")
            if doc.metadata.description:
                parts.append(f"  {doc.metadata.description}")
            if doc.category:
                parts.append(f"  *Category: {doc.category}*")
        parts.append("")
    else:
        parts += ["No specific components found. Try `list_by_category` to browse available components.", ""]

    if guide.complementary:
        parts += ["### Complementary Components", ""]
        parts += [f"- **{doc.title}** (referenced under See Also)" for doc in guide.complementary]
        parts.append("")

    if guide.patterns:
        parts += ["## Relevant Patterns", ""]
        for result in guide.patterns:
            doc = result.document
            parts.append(f"- **{doc.title}**: {doc.metadata.description or 'See pattern docs'}")
        parts.append("")

    parts += ["## Implementation Steps", ""]
    step = 1
    if guide.imports:
        parts.append(f"**Step {step}: Import components**")
        parts += ["", "```typescript", *guide.imports, "```", ""]
        step += 1
    if guide.components:
        names = ", ".join(s.document.title for s in guide.components)
        parts += [f"**Step {step}: Compose the UI**", f"Combine {names} to build the interface.", ""]
        step += 1
    if guide.patterns:
        parts += [f"**Step {step}: Follow recommended patterns**",
                  f"Review {', '.join(r.document.title for r in guide.patterns)} for best practices.", ""]
        step += 1

    if guide.styling_notes:
        parts += ["## Styling Notes", ""]
        for title, description in guide.styling_notes:
            parts.append(f"- **{title}**{': ' + description if description else ''}")
        parts.append("")

    parts += ["## Accessibility Checklist", ""]
    parts += [f"- [ ] {item}" for item in guide.accessibility_checklist]
    parts.append("")

    parts += ["## Next Steps", ""]
    for suggestion in guide.components[:3]:
        title = suggestion.document.title
        parts.append(f'- `query_component("{title}")`: full {title} documentation')
    with_examples = [s.document for s in guide.components if s.document.metadata.has_code_examples]
    if with_examples:
        parts.append(f'- `get_component_examples("{with_examples[0].title}")`: code examples')
    with_props = [s.document for s in guide.components if s.document.metadata.has_props_table]
    if with_props:
        parts.append(f'- `get_props_reference("{with_props[0].title}")`: props API')

    return "\n".join(parts)
