"""Utility modules for the documentation search system."""

from .logging_config import StructuredLogger, setup_logging
from .text_processing import TextProcessor

__all__ = ["StructuredLogger", "TextProcessor", "setup_logging"]
