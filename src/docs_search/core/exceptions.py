"""Custom exceptions for the documentation search system."""


class DocsSearchError(Exception):
    """Base exception for documentation search operations."""
    pass


class DocsPathNotFound(DocsSearchError):
    """Exception raised when the documentation root does not exist."""
    pass


class MalformedDocument(DocsSearchError):
    """Exception raised when a markdown document lacks required structure."""
    pass


class UnknownOperation(DocsSearchError):
    """Exception raised when a caller requests an operation that is not registered."""
    pass


class NotFound(DocsSearchError):
    """Exception raised when a lookup by title, category or topic finds nothing."""
    pass


class IndexBuildError(DocsSearchError):
    """Exception raised when an index generation cannot be assembled."""
    pass


class ValidationError(DocsSearchError):
    """Exception raised during input validation."""
    pass


class ConfigurationError(DocsSearchError):
    """Exception raised for configuration issues."""
    pass
