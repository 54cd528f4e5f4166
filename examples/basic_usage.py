"""Basic usage example for the documentation search service."""

import asyncio
import sys
import tempfile
from pathlib import Path

from docs_search import DocsSearchService

SAMPLE_DOCS = {
    "00-overview.md": "# Overview\n\nWelcome to the sample design system.\n",
    "01-foundation/01-theming.md": (
        "# Theming\n\n## Overview\n\nDesign tokens for color, spacing and typography.\n"
    ),
    "02-components/buttons/button.md": (
        "# Button\n\n"
        "**Package:** `@acme/react-button`\n"
        "**Import:** `import { Button } from '@acme/react-button'`\n\n"
        "## Overview\n\nButtons trigger an action.\n\n"
        "## Usage\n\n```tsx\n<Button appearance=\"primary\">Save</Button>\n```\n\n"
        "## Props\n\n| Prop | Type | Description |\n|---|---|---|\n| appearance | string | Visual style |\n\n"
        "## See Also\n\n- [Link](./link.md)\n"
    ),
    "02-components/buttons/link.md": "# Link\n\n## Overview\n\nNavigates to another page.\n",
    "02-components/layout/card.md": (
        "# Card\n\n"
        "**Import:** `import { Card } from '@acme/react-card'`\n\n"
        "## Overview\n\nCards group content about one subject.\n"
    ),
    "03-patterns/forms/01-validation.md": (
        "# Form Validation\n\n## Overview\n\nValidate fields and show inline errors.\n"
    ),
}


def write_sample_docs(root: Path) -> Path:
    for relative_path, text in SAMPLE_DOCS.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


async def basic_search_demo(docs_path: Path):
    """Demonstrate the main operations."""
    print("Documentation Search - Basic Usage Demo")
    print("=" * 50)

    async with DocsSearchService.create(docs_path, log_level="WARNING") as service:
        stats = await service.get_stats()
        print(f"\nIndexed {stats['index']['indexed_files']} documents from {docs_path}")

        calls = [
            ("search_docs", {"query": "button"}),
            ("query_component", {"componentName": "card"}),
            ("list_by_category", {}),
            ("get_props_reference", {"componentName": "button"}),
            ("suggest_components", {"uiDescription": "a save button on a card"}),
            ("get_implementation_guide", {"goal": "a settings form with a save button"}),
            ("query_component", {"componentName": "carousel"}),
        ]

        for name, arguments in calls:
            print(f"\n--- {name} {arguments} ---")
            result = await service.call_tool(name, arguments)
            if result.is_error:
                print("(error result)")
            print(result.text)


def main():
    if len(sys.argv) > 1:
        asyncio.run(basic_search_demo(Path(sys.argv[1])))
        return

    with tempfile.TemporaryDirectory() as temp_dir:
        asyncio.run(basic_search_demo(write_sample_docs(Path(temp_dir))))


if __name__ == "__main__":
    main()
