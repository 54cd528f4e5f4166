"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path
from typing import Dict

from docs_search.api.service import DocsSearchService
from docs_search.core.builder import IndexGeneration, build_index
from docs_search.models.document import DocumentEntry, DocumentMetadata


OVERVIEW_MD = """# Design System Overview

Welcome to the design system documentation.
"""

THEMING_MD = """# Theming

## Overview

Design tokens and themes control colors, spacing and typography.

Use the theme provider at the root of the app.
"""

NO_HEADING_MD = """Just some notes about spacing.
"""

CARD_MD = """# Card

Category: Layout

**Package:** `@acme/react-card`
**Import:** `import { Card, CardHeader } from '@acme/react-card'`

## Overview

A card groups related content and actions about a single subject.

## Usage

```tsx
<Card>
  <CardHeader header="Title" />
</Card>
```

## Props

| Prop | Type | Default | Description |
|------|------|---------|-------------|
| appearance | string | filled | Visual style |
| orientation | string | vertical | Layout direction |

## See Also

- [Divider](./divider.md)
- [Avatar](../media/avatar.md)
"""

DIVIDER_MD = """# Divider

**Package:** `@acme/react-divider`
**Import:** `import { Divider } from '@acme/react-divider'`

## Overview

A divider separates sections of content.

## Example

```tsx
<Divider />
```
"""

NAV_MD = """# Nav

**Package:** `@acme/react-nav`
**Import:** `import { Nav, NavItem } from '@acme/react-nav'`

## Overview

Side navigation for moving between application areas.

## Props

| Name | Description |
|------|-------------|
| items | Navigation entries |
"""

VALIDATION_MD = """# Form Validation

## Overview

Validate form fields on blur and show inline error messages.

```tsx
const rules = { required: true };
```
"""

DASHBOARD_MD = """# KPI Dashboard

## Overview

Dashboard layouts with KPI cards and charts.
"""

DRAFT_MD = """# Draft Notes

Not part of any module.
"""

DOCS_TREE: Dict[str, str] = {
    "00-overview.md": OVERVIEW_MD,
    "01-foundation/03-theming.md": THEMING_MD,
    "01-foundation/05-no-heading.md": NO_HEADING_MD,
    "02-components/layout/card.md": CARD_MD,
    "02-components/layout/divider.md": DIVIDER_MD,
    "02-components/layout/readme.txt": "Not markdown.",
    "02-components/navigation/nav.md": NAV_MD,
    "03-patterns/forms/01-validation.md": VALIDATION_MD,
    "04-enterprise/02-dashboard-kpi.md": DASHBOARD_MD,
    "drafts/notes.md": DRAFT_MD,
}


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    """Write relative path -> text pairs under root."""
    for relative_path, text in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def docs_root(tmp_path) -> Path:
    """A small versioned documentation tree."""
    return write_tree(tmp_path / "docs" / "v9", DOCS_TREE)


@pytest.fixture
def generation(docs_root) -> IndexGeneration:
    """An index generation built from the sample tree."""
    return build_index(docs_root)


@pytest.fixture
def make_entry():
    """Factory for DocumentEntry objects that never touch the file system."""

    def _make(
        doc_id: str,
        title: str,
        content: str = "",
        module: str = "components",
        category=None,
        description=None,
        package_name=None,
        import_statement=None,
        see_also=(),
    ) -> DocumentEntry:
        return DocumentEntry(
            id=doc_id,
            title=title,
            content=content,
            file_path=f"/docs/{doc_id}.md",
            relative_path=f"{doc_id}.md",
            module=module,
            category=category,
            metadata=DocumentMetadata(
                package_name=package_name,
                import_statement=import_statement,
                description=description,
                see_also=list(see_also),
            ),
        )

    return _make


@pytest.fixture
async def search_service(docs_root):
    """Create and initialize a service over the sample tree."""
    async with DocsSearchService.create(docs_root) as service:
        yield service
