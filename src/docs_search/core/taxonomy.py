"""
Folder-name based taxonomy: module, category and document ID derivation.

Everything here is a pure function of POSIX path segments, so it never
touches the file system.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional, Tuple

COMPONENTS_MODULE = "components"
ROOT_MODULE = "foundation"

_MODULE_FOLDER = re.compile(r'^(\d+)-(.+)$')
_NUMERIC_PREFIX = re.compile(r'^\d+-')


@dataclass(frozen=True)
class Taxonomy:
    """Resolved placement of a document."""
    module: str
    category: Optional[str] = None


def split_path(relative_path: str) -> Tuple[str, ...]:
    """Split a relative path into segments, accepting either separator."""
    normalized = relative_path.replace('\\', '/')
    return tuple(part for part in PurePosixPath(normalized).parts if part not in ('', '.'))


def module_from_folder(folder: str) -> Optional[str]:
    """
    Module name for a top-level folder.

    Args:
        folder: Folder name such as ``02-components``

    Returns:
        The name with its numeric prefix removed, or None if the folder does
        not follow the ``<digits>-<name>`` convention
    """
    match = _MODULE_FOLDER.match(folder)
    return match.group(2) if match else None


def resolve(relative_path: str, components_module: str = COMPONENTS_MODULE) -> Optional[Taxonomy]:
    """
    Resolve (module, category) from a path relative to the version root.

    Args:
        relative_path: Path of a markdown file, e.g. ``02-components/layout/card.md``
        components_module: Module whose first sub-folder is a category

    Returns:
        Taxonomy, or None if the top-level folder is not a module folder
    """
    parts = split_path(relative_path)
    if not parts:
        return None

    if len(parts) == 1:
        return Taxonomy(module=ROOT_MODULE)

    module = module_from_folder(parts[0])
    if module is None:
        return None

    category = None
    # parts = (module folder, category folder, ..., file)
    if module == components_module and len(parts) > 2:
        category = parts[1]

    return Taxonomy(module=module, category=category)


def strip_numeric_prefix(name: str) -> str:
    """Remove an ordering prefix such as ``01-`` from a name."""
    return _NUMERIC_PREFIX.sub('', name)


def document_id(relative_path: str) -> str:
    """
    Stable document ID from a relative path.

    The extension is dropped and every segment loses its numeric prefix:
    ``02-components/layout/card.md`` becomes ``components/layout/card``.
    """
    parts = list(split_path(relative_path))
    if not parts:
        raise ValueError("Cannot derive an ID from an empty path")

    parts[-1] = PurePosixPath(parts[-1]).stem
    return "/".join(strip_numeric_prefix(part) or part for part in parts)


def fallback_id(relative_path: str) -> str:
    """ID that keeps prefixes, used when the stripped form collides."""
    parts = list(split_path(relative_path))
    parts[-1] = PurePosixPath(parts[-1]).stem
    return "/".join(parts)


def title_from_filename(relative_path: str) -> str:
    """Readable title derived from a file name, for documents with no heading."""
    stem = PurePosixPath(split_path(relative_path)[-1]).stem
    words = strip_numeric_prefix(stem).replace('_', ' ').replace('-', ' ').split()
    return " ".join(word.capitalize() for word in words) or stem
