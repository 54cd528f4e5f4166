"""Logging configuration for the documentation search system."""

import logging
import sys
from typing import Any, Dict, Optional, TextIO


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    include_timestamp: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """
    Set up logging for the documentation search system.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        include_timestamp: Whether to include timestamps
        stream: Output stream, stderr by default since stdout carries results
    """
    if format_string is None:
        if include_timestamp:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(name)s - %(levelname)s - %(message)s"

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        stream=stream if stream is not None else sys.stderr,
        force=True
    )

    logging.getLogger("docs_search").setLevel(numeric_level)

    # Pydantic is quiet, asyncio debug output is not
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured with level: {level}")


class StructuredLogger:
    """Logger that appends key=value context to every message."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.logger = logging.getLogger(name)
        self.context = dict(context or {})

    def with_context(self, **kwargs) -> 'StructuredLogger':
        """Return a logger carrying additional context."""
        return StructuredLogger(self.logger.name, {**self.context, **kwargs})

    def _format_message(self, message: str) -> str:
        if not self.context:
            return message

        context_str = " ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{message} [{context_str}]"

    def warning(self, message: str) -> None:
        self.logger.warning(self._format_message(message))
