"""Operation layer and service interface."""

from .service import OPERATIONS, DocsSearchService

__all__ = ["DocsSearchService", "OPERATIONS"]
