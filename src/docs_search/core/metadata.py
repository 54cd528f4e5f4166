"""
Best-effort metadata extraction from markdown documents.

Each extractor is independent and returns a neutral value (None, empty list,
False) when its pattern is absent. Only the title extractor can fail, since a
document without a level-1 heading has no usable title.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ..models.document import DocumentMetadata
from ..utils.text_processing import TextProcessor
from .exceptions import MalformedDocument

CODE_LANGUAGES = frozenset({'typescript', 'ts', 'tsx', 'jsx', 'javascript', 'js'})
MAX_DESCRIPTION_LENGTH = 300
DEFAULT_SECTION = "General"

_HEADING = re.compile(r'^\s{0,3}(#{1,6})\s+(.+?)(?:\s+#+)?\s*$')
_FENCE = re.compile(r'^\s*(```|~~~)\s*([\w+#.-]*)')
_PACKAGE = re.compile(r'^[ \t]*>?[ \t]*\**Package\**[ \t]*:[ \t]*\**[ \t]*`([^`\n]+)`', re.IGNORECASE | re.MULTILINE)
_IMPORT = re.compile(r'^[ \t]*>?[ \t]*\**Import\**[ \t]*:[ \t]*\**[ \t]*`([^`\n]+)`', re.IGNORECASE | re.MULTILINE)
_LINK = re.compile(r'\[([^\]]+)\]\(([^)]*)\)')
_TABLE_SEPARATOR = re.compile(r'^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)+\|?\s*$')

_text = TextProcessor()


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block labeled with the section it appears under."""
    section: str
    language: str
    code: str


@dataclass(frozen=True)
class ExtractedDocument:
    title: str
    metadata: DocumentMetadata


def _scan(content: str) -> Iterator[Tuple[str, bool]]:
    """Yield (line, inside_fence); fence marker lines count as inside."""
    fence: Optional[str] = None
    for line in content.splitlines():
        match = _FENCE.match(line)
        if fence is None and match:
            fence = match.group(1)
            yield line, True
        elif fence is not None:
            if line.strip().startswith(fence):
                fence = None
            yield line, True
        else:
            yield line, False


def _heading(line: str) -> Optional[Heading]:
    match = _HEADING.match(line)
    if not match:
        return None
    return Heading(level=len(match.group(1)), text=match.group(2).strip())


def _is_table_row(line: str) -> bool:
    return line.strip().startswith('|')


def extract_title(content: str) -> str:
    """
    Text of the first level-1 heading outside code fences.

    Raises:
        MalformedDocument: If the document has no level-1 heading
    """
    for line, fenced in _scan(content):
        if fenced:
            continue
        heading = _heading(line)
        if heading and heading.level == 1:
            return heading.text
    raise MalformedDocument("Document has no level-1 heading")


def extract_package_name(content: str) -> Optional[str]:
    match = _PACKAGE.search(content)
    return match.group(1).strip() if match else None


def extract_import_statement(content: str) -> Optional[str]:
    match = _IMPORT.search(content)
    return match.group(1).strip() if match else None


def _next_paragraph(lines: List[str], start: int) -> Optional[str]:
    """Collect the first paragraph at or after ``start``, skipping blockquote metadata."""
    parts: List[str] = []
    for line in lines[start:]:
        stripped = line.strip()
        if not parts and not stripped:
            continue
        if stripped.startswith(('#', '```', '~~~', '|', '---')):
            break
        if stripped.startswith('>'):
            continue
        if stripped:
            parts.append(stripped)
        else:
            break
    return " ".join(parts) if parts else None


def extract_description(content: str) -> Optional[str]:
    """
    First descriptive paragraph.

    Looks after an "Overview" heading first, then after the title, then
    takes the first plain text line anywhere. The result is capped at
    MAX_DESCRIPTION_LENGTH characters on a word boundary.
    """
    lines = content.splitlines()
    headings = [(index, _heading(line)) for index, (line, fenced) in enumerate(_scan(content)) if not fenced]
    headings = [(index, heading) for index, heading in headings if heading]

    candidates = [index for index, heading in headings if heading.text.lower().startswith('overview')]
    candidates += [index for index, heading in headings if heading.level == 1][:1]

    for index in candidates:
        paragraph = _next_paragraph(lines, index + 1)
        if paragraph:
            return _text.truncate_at_word(paragraph, MAX_DESCRIPTION_LENGTH)

    for line, fenced in _scan(content):
        stripped = line.strip()
        if fenced or not stripped or stripped.startswith(('#', '>', '---', '|')):
            continue
        return _text.truncate_at_word(stripped, MAX_DESCRIPTION_LENGTH)

    return None


def extract_see_also(content: str) -> List[str]:
    """Link texts inside a "See Also" section, in document order."""
    references: List[str] = []
    section_level: Optional[int] = None

    for line, fenced in _scan(content):
        if fenced:
            continue
        heading = _heading(line)
        if heading:
            if section_level is not None and heading.level <= section_level:
                break
            if section_level is None and heading.text.lower().startswith('see also'):
                section_level = heading.level
            continue
        if section_level is not None:
            references.extend(match.group(1).strip() for match in _LINK.finditer(line))

    return references


def detect_props_table(content: str) -> bool:
    """True if a header row plus separator row appears under a heading mentioning props."""
    props_level: Optional[int] = None
    previous = ""

    for line, fenced in _scan(content):
        if fenced:
            previous = ""
            continue
        heading = _heading(line)
        if heading:
            if 'props' in heading.text.lower():
                props_level = heading.level
            elif props_level is not None and heading.level <= props_level:
                props_level = None
            previous = ""
            continue
        if props_level is not None and _is_table_row(previous) and _TABLE_SEPARATOR.match(line):
            return True
        previous = line

    return False


def detect_code_examples(content: str) -> bool:
    for line, fenced in _scan(content):
        match = _FENCE.match(line)
        if fenced and match and match.group(2).lower() in CODE_LANGUAGES:
            return True
    return False


def extract_metadata(content: str) -> DocumentMetadata:
    """Run every metadata extractor over the document text."""
    return DocumentMetadata(
        package_name=extract_package_name(content),
        import_statement=extract_import_statement(content),
        description=extract_description(content),
        see_also=extract_see_also(content),
        has_props_table=detect_props_table(content),
        has_code_examples=detect_code_examples(content),
    )


def extract_document(content: str) -> ExtractedDocument:
    """
    Extract title and metadata from markdown text.

    Raises:
        MalformedDocument: If the document has no level-1 heading
    """
    return ExtractedDocument(title=extract_title(content), metadata=extract_metadata(content))


def extract_code_blocks(content: str) -> List[CodeBlock]:
    """
    Fenced code blocks in a recognized front-end language.

    Each block is labeled with the nearest preceding heading below level 1,
    or "General" when none precedes it.
    """
    blocks: List[CodeBlock] = []
    section = DEFAULT_SECTION
    language: Optional[str] = None
    fence: Optional[str] = None
    code: List[str] = []

    for line in content.splitlines():
        if fence is None:
            heading = _heading(line)
            if heading and heading.level > 1:
                section = heading.text
                continue
            match = _FENCE.match(line)
            if match:
                fence = match.group(1)
                language = match.group(2).lower()
                code = []
            continue

        if line.strip().startswith(fence):
            if language in CODE_LANGUAGES and "\n".join(code).strip():
                blocks.append(CodeBlock(section=section, language=language, code="\n".join(code).strip()))
            fence = None
            continue
        code.append(line)

    return blocks


def extract_props_section(content: str) -> Optional[str]:
    """
    Markdown of the first section whose heading mentions props.

    The section runs up to the next heading of the same or higher level.
    """
    collected: List[str] = []
    section_level: Optional[int] = None

    for line, fenced in _scan(content):
        heading = None if fenced else _heading(line)
        if section_level is None:
            if heading and heading.level > 1 and 'props' in heading.text.lower():
                section_level = heading.level
                collected.append(line)
            continue
        if heading and heading.level <= section_level:
            break
        collected.append(line)

    if not collected:
        return None
    return "\n".join(collected).strip()


def extract_prop_tables(content: str) -> List[str]:
    """
    Tables that look like prop definitions, for documents without a props section.

    A table qualifies when its header row mentions prop, type or slot (or both
    name and description) and it has at least one data row.
    """
    tables: List[str] = []
    current: List[str] = []

    def flush() -> None:
        if len(current) >= 3:
            header = current[0].lower()
            if ('prop' in header or 'type' in header or 'slot' in header
                    or ('name' in header and 'description' in header)):
                tables.append("\n".join(current))

    for line, fenced in _scan(content):
        if not fenced and _is_table_row(line):
            current.append(line.strip())
            continue
        flush()
        current.clear()

    flush()
    return tables
