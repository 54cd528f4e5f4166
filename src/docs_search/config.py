"""Configuration resolution from command-line arguments and environment variables."""

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .core.exceptions import ConfigurationError, DocsPathNotFound

logger = logging.getLogger(__name__)

DOCS_PATH_ENV_VAR = "DOCS_SEARCH_PATH"
VERSION_ENV_VAR = "DOCS_SEARCH_VERSION"
LOG_LEVEL_ENV_VAR = "DOCS_SEARCH_LOG_LEVEL"

DEFAULT_VERSION = "v9"
DEFAULT_LOG_LEVEL = "INFO"
SERVER_VERSION = "1.0.0"

# Repository root in a source checkout: src/docs_search/config.py -> ../../
PACKAGE_ROOT = Path(__file__).resolve().parents[2]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ServerConfig:
    """
    Resolved runtime configuration.

    Attributes:
        version: Documentation version, e.g. "v9"
        docs_path: Existing documentation root for that version
        server_name: Name reported to protocol clients
        server_version: Version of this package
        log_level: Logging level name
    """
    version: str
    docs_path: Path
    server_name: str
    server_version: str = SERVER_VERSION
    log_level: str = DEFAULT_LOG_LEVEL


def bundled_docs_path(version: str, base_dir: Optional[Path] = None) -> Path:
    """Documentation shipped alongside the package: ``<base>/docs/<version>``."""
    return (base_dir or PACKAGE_ROOT) / "docs" / version


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-search",
        description="Index a markdown documentation tree and run search operations against it"
    )
    parser.add_argument("version", nargs="?", help=f"Documentation version (default: {DEFAULT_VERSION})")
    parser.add_argument("--docs-path", help=f"Documentation root, overrides ${DOCS_PATH_ENV_VAR}")
    parser.add_argument("--log-level", help=f"Logging level (default: {DEFAULT_LOG_LEVEL})")
    parser.add_argument("--tool", help="Run one operation and print its result")
    parser.add_argument("--arguments", default="{}", help="JSON object of operation arguments")
    parser.add_argument("--list-tools", action="store_true", help="Print the available operations")
    return parser


def config_from_args(
    args: argparse.Namespace,
    environ: Mapping[str, str],
    base_dir: Optional[Path] = None
) -> ServerConfig:
    """
    Resolve configuration from parsed arguments and the environment.

    Version: positional argument, then $DOCS_SEARCH_VERSION, then "v9".
    Docs path: --docs-path, then $DOCS_SEARCH_PATH, then the bundled docs
    for the version.

    Raises:
        DocsPathNotFound: If the resolved docs path is not a directory
        ConfigurationError: If the log level is not a known level name
    """
    version = args.version or environ.get(VERSION_ENV_VAR) or DEFAULT_VERSION

    explicit_path = args.docs_path or environ.get(DOCS_PATH_ENV_VAR)
    if explicit_path:
        docs_path = Path(explicit_path).expanduser().resolve()
    else:
        docs_path = bundled_docs_path(version, base_dir)

    log_level = (args.log_level or environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level: {log_level}. Use one of {', '.join(_LOG_LEVELS)}")

    if not docs_path.is_dir():
        raise DocsPathNotFound(
            f"Documentation path not found: {docs_path}\n"
            f'Looked for version "{version}" docs.\n'
            f"Available options:\n"
            f"  - Pass a version argument: docs-search v9\n"
            f"  - Set {DOCS_PATH_ENV_VAR}=/path/to/docs\n"
            f"  - Ensure bundled docs exist at: {bundled_docs_path(version, base_dir)}"
        )

    logger.debug(f"Resolved docs path {docs_path} for version {version}")
    return ServerConfig(
        version=version,
        docs_path=docs_path,
        server_name=f"docs-search-{version}",
        log_level=log_level,
    )


def resolve_config(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    base_dir: Optional[Path] = None
) -> ServerConfig:
    """Parse argv and resolve configuration against environ (os.environ by default)."""
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    return config_from_args(args, os.environ if environ is None else environ, base_dir)
