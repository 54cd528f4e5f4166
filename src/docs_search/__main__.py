"""Command-line entry point: ``python -m docs_search``."""

import asyncio
import json
import os
import sys
from typing import Optional, Sequence

from .api.service import DocsSearchService
from .config import ServerConfig, build_parser, config_from_args
from .core.exceptions import DocsSearchError
from .utils.logging_config import setup_logging


async def run(config: ServerConfig, tool: Optional[str], arguments: dict, list_tools: bool) -> int:
    async with DocsSearchService.create(config.docs_path) as service:
        if list_tools:
            print(json.dumps(service.list_tools(), indent=2))
            return 0

        if tool:
            result = await service.call_tool(tool, arguments)
            print(result.text)
            return 1 if result.is_error else 0

        stats = await service.get_stats()
        print(json.dumps({
            "server": {"name": config.server_name, "version": config.server_version},
            **stats,
        }, indent=2))
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args, os.environ)
    except DocsSearchError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1

    setup_logging(level=config.log_level)

    try:
        arguments = json.loads(args.arguments)
    except json.JSONDecodeError as e:
        print(f"Error: --arguments is not valid JSON: {str(e)}", file=sys.stderr)
        return 2
    if not isinstance(arguments, dict):
        print("Error: --arguments must be a JSON object", file=sys.stderr)
        return 2

    try:
        return asyncio.run(run(config, args.tool, arguments, args.list_tools))
    except DocsSearchError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
