"""High-level service: holds the current index generation and dispatches operations."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, List, Mapping, NamedTuple, Optional, Type, Union

from pydantic import ValidationError as ArgumentsError

from ..core.builder import IndexBuilder, IndexGeneration
from ..core.exceptions import DocsPathNotFound, DocsSearchError, IndexBuildError, UnknownOperation
from ..core.taxonomy import COMPONENTS_MODULE
from ..models.result import ToolResult
from ..models.tools import (
    ComponentNameArgs,
    GetEnterpriseArgs,
    GetFoundationArgs,
    GetPatternArgs,
    ImplementationGuideArgs,
    ListAllDocsArgs,
    ListByCategoryArgs,
    QueryComponentArgs,
    ReindexArgs,
    SearchDocsArgs,
    SuggestComponentsArgs,
    ToolArguments,
)
from ..utils.logging_config import setup_logging
from . import intelligence, tools

logger = logging.getLogger(__name__)


class Operation(NamedTuple):
    arguments: Type[ToolArguments]
    handler: Optional[Callable[[IndexGeneration, Any], str]]
    description: str


OPERATIONS: Dict[str, Operation] = {
    "query_component": Operation(
        QueryComponentArgs, tools.query_component,
        "Full documentation for a component, matched by name (case-insensitive, partial match)."),
    "search_docs": Operation(
        SearchDocsArgs, tools.search_docs,
        "Ranked full-text search across all documentation, optionally within one module."),
    "list_by_category": Operation(
        ListByCategoryArgs, tools.list_by_category,
        "Components in one category, or the list of categories."),
    "get_foundation": Operation(
        GetFoundationArgs, tools.get_foundation,
        "A foundation document by topic or alias, or an overview of all topics."),
    "get_pattern": Operation(
        GetPatternArgs, tools.get_pattern,
        "Pattern overview, one pattern category, or one pattern document."),
    "get_enterprise": Operation(
        GetEnterpriseArgs, tools.get_enterprise,
        "Enterprise documents for a topic or alias, or an overview of all topics."),
    "get_component_examples": Operation(
        ComponentNameArgs, intelligence.get_component_examples,
        "Only the code examples of a component, labeled by section."),
    "get_props_reference": Operation(
        ComponentNameArgs, intelligence.get_props_reference,
        "Only the props reference of a component."),
    "suggest_components": Operation(
        SuggestComponentsArgs, intelligence.suggest_components,
        "Components recommended for a free-text UI description."),
    "get_implementation_guide": Operation(
        ImplementationGuideArgs, intelligence.get_implementation_guide,
        "Step-by-step guide with components, imports, patterns and an accessibility checklist."),
    "list_all_docs": Operation(
        ListAllDocsArgs, tools.list_all_docs,
        "Every indexed document grouped by module and category."),
    "reindex": Operation(
        ReindexArgs, None,
        "Rebuild the index from the documentation tree."),
}


class DocsSearchService:
    """
    Service interface for documentation indexing and query operations.

    The current IndexGeneration is published through a single attribute.
    Each operation reads that attribute once, so a reindex that finishes
    mid-request never changes the data the request is working on.
    """

    def __init__(
        self,
        docs_path: Union[str, Path],
        components_module: str = COMPONENTS_MODULE,
        max_workers: int = 1,
        log_level: Optional[str] = None
    ):
        """
        Initialize the service.

        Args:
            docs_path: Documentation root for one version
            components_module: Module whose sub-folders are categories
            max_workers: Worker threads for index builds
            log_level: Configure logging at this level; leave logging alone if None
        """
        if log_level is not None:
            setup_logging(level=log_level)

        self.docs_path = Path(docs_path)
        self.builder = IndexBuilder(components_module=components_module)
        self.executor = ThreadPoolExecutor(max_workers=max_workers)

        self._generation: Optional[IndexGeneration] = None
        self._generation_number = 0
        self._reindex_lock: Optional[asyncio.Lock] = None
        self._initialized = False
        logger.debug(f"Docs search service created for {self.docs_path}")

    @property
    def generation(self) -> IndexGeneration:
        self._check_initialized()
        return self._generation

    @property
    def generation_number(self) -> int:
        return self._generation_number

    async def _build(self) -> IndexGeneration:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self.builder.build, self.docs_path)

    async def initialize(self) -> None:
        """
        Build the first index generation.

        Raises:
            DocsPathNotFound: If the documentation root does not exist
            IndexBuildError: If the build fails for any other reason
        """
        # Bound to the running loop, not the one current at construction
        self._reindex_lock = asyncio.Lock()

        try:
            self._publish(await self._build())
            self._initialized = True
            logger.info("Service initialization complete")

        except DocsPathNotFound:
            logger.error(f"Documentation path not found: {self.docs_path}")
            raise
        except DocsSearchError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize service: {str(e)}")
            raise IndexBuildError(f"Service initialization failed: {str(e)}") from e

    def _publish(self, generation: IndexGeneration) -> None:
        self._generation = generation
        self._generation_number += 1
        logger.info(
            f"Published index generation {self._generation_number} "
            f"({generation.stats.indexed_files} documents)"
        )

    async def reindex(self, force: bool = True) -> IndexGeneration:
        """
        Rebuild the index from scratch and swap it in.

        The previous generation stays live until the new one is complete,
        and stays live if the rebuild fails.

        Returns:
            The newly published generation

        Raises:
            DocsSearchError: If the rebuild fails
        """
        self._check_initialized()

        async with self._reindex_lock:
            try:
                generation = await self._build()
            except DocsSearchError as e:
                logger.error(f"Reindex failed, keeping generation {self._generation_number}: {str(e)}")
                raise
            except Exception as e:
                logger.error(f"Reindex failed, keeping generation {self._generation_number}: {str(e)}")
                raise IndexBuildError(f"Reindex failed: {str(e)}") from e

            self._publish(generation)
            return generation

    async def _reindex_operation(self, previous: IndexGeneration, args: ReindexArgs) -> str:
        try:
            generation = await self.reindex(force=args.force)
        except DocsSearchError as e:
            raise IndexBuildError("\n".join([
                "Reindex failed.",
                "",
                f"**Reason:** {str(e)}",
                f"**Docs path:** `{self.docs_path}`",
                "",
                "The previous index is still being served.",
            ])) from e
        return tools.format_reindex(generation.stats, previous.store.size)

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """
        Run one named operation against the current generation.

        Never raises: unknown names, invalid arguments and failed lookups all
        come back as error results.

        Args:
            name: Operation name, e.g. ``search_docs``
            arguments: Operation arguments (camelCase or snake_case keys)

        Returns:
            ToolResult with markdown text
        """
        try:
            self._check_initialized()
            operation = OPERATIONS.get(name)
            if operation is None:
                raise UnknownOperation(f"Unknown tool: {name}. Available tools: {', '.join(OPERATIONS)}")

            args = operation.arguments.model_validate(dict(arguments or {}))
            generation = self._generation

            if operation.handler is None:
                text = await self._reindex_operation(generation, args)
            else:
                text = operation.handler(generation, args)

            logger.debug(f"Tool {name} completed")
            return ToolResult(text=text)

        except ArgumentsError as e:
            messages = "; ".join(
                f"{'.'.join(str(loc) for loc in error['loc']) or 'arguments'}: {error['msg']}"
                for error in e.errors()
            )
            logger.warning(f"Invalid arguments for {name}: {messages}")
            return ToolResult(text=f"**Error:** Invalid arguments for {name}: {messages}", is_error=True)

        except DocsSearchError as e:
            logger.info(f"Tool {name} returned an error: {type(e).__name__}")
            return ToolResult(text=f"**Error:** {str(e)}", is_error=True)

        except Exception as e:
            logger.exception(f"Tool {name} failed")
            return ToolResult(text=f"**Error:** Tool {name} failed: {str(e)}", is_error=True)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Operation names, descriptions and JSON schemas of their arguments."""
        return [
            {
                "name": name,
                "description": operation.description,
                "inputSchema": operation.arguments.model_json_schema(by_alias=True),
            }
            for name, operation in OPERATIONS.items()
        ]

    async def get_stats(self) -> Dict[str, Any]:
        """Get service and index statistics."""
        self._check_initialized()
        generation = self._generation

        return {
            'service': {
                'initialized': self._initialized,
                'docs_path': str(self.docs_path),
                'generation': self._generation_number,
            },
            'index': generation.stats.to_dict(),
        }

    async def health_check(self) -> Dict[str, Any]:
        """Report whether an index generation is being served."""
        if not self._initialized:
            return {
                'status': 'not_initialized',
                'message': 'Service not initialized'
            }

        generation = self._generation
        return {
            'status': 'healthy' if generation.store.size > 0 else 'empty',
            'documents': generation.store.size,
            'generation': self._generation_number,
            'docs_path': str(generation.root_path),
        }

    def _check_initialized(self) -> None:
        if not self._initialized or self._generation is None:
            raise DocsSearchError("Service not initialized. Call initialize() first.")

    async def close(self) -> None:
        """Release worker threads."""
        self.executor.shutdown(wait=True)
        self._initialized = False
        logger.debug("Service closed")

    @classmethod
    @asynccontextmanager
    async def create(
        cls,
        docs_path: Union[str, Path],
        **kwargs
    ) -> AsyncIterator['DocsSearchService']:
        """
        Create and manage the service lifecycle with a context manager.

        Yields:
            Initialized service
        """
        service = cls(docs_path, **kwargs)

        try:
            await service.initialize()
            yield service
        finally:
            await service.close()
