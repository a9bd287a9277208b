"""Block recognizers for wikitext.

This module recognizes constructs anchored at a given position:
- == Headings == (only at the start of a line)
- {| tables |} with rows and header/data cells
- [[Category:Name|sort key]] links
- [[File:...]] / [[Image:...]] links with options and caption
- {{Templates}}

Each recognizer takes (text, index) and returns (element, next index),
or None when the construct is absent or its delimiters are unbalanced.
"""

from __future__ import annotations

import logging
import re
from typing import Final

from wikitext_parser.parsers import inline
from wikitext_parser.parsers.spans import find_matching_close
from wikitext_parser.parsers.types import (
    Category,
    Element,
    Heading,
    Image,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Template,
    Text,
)

logger = logging.getLogger(__name__)

HEADING_MARK: Final[str] = "="
MIN_HEADING_LEVEL: Final[int] = 2
TABLE_OPEN: Final[str] = "{|"
TABLE_CLOSE: Final[str] = "|}"
ROW_SEPARATOR: Final[str] = "|-"
HEADER_CELL_MARK: Final[str] = "!"
DATA_CELL_MARK: Final[str] = "|"
HEADER_CELL_SEPARATOR: Final[str] = "!!"
DATA_CELL_SEPARATOR: Final[str] = "||"
CATEGORY_PREFIX: Final[str] = "[[Category:"
FILE_PREFIXES: Final[tuple[str, ...]] = ("File:", "Image:")
LINK_OPEN: Final[str] = "[["
LINK_CLOSE: Final[str] = "]]"
TEMPLATE_OPEN: Final[str] = "{{"
TEMPLATE_CLOSE: Final[str] = "}}"

# Image options that are never a caption
KNOWN_IMAGE_OPTIONS: Final[frozenset[str]] = frozenset(
    [
        "thumb",
        "thumbnail",
        "frame",
        "framed",
        "frameless",
        "border",
        # Horizontal alignment
        "right",
        "left",
        "center",
        "none",
        # Vertical alignment
        "baseline",
        "middle",
        "sub",
        "super",
        "top",
        "text-top",
        "bottom",
        "text-bottom",
    ]
)

# Size options: 220px, x120px (height only)
IMAGE_SIZE_PATTERN: Final[re.Pattern[str]] = re.compile(r"x?[+-]?\d+px")

IMAGE_ALT_PREFIX: Final[str] = "alt="

# Cell attribute text that is a bare integer, e.g. the "2" in "2|content"
INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?\d+")

# Template name ends at the first pipe or newline
TEMPLATE_NAME_END_PATTERN: Final[re.Pattern[str]] = re.compile(r"[|\n]")


def _startswith_ignore_case(text: str, prefix: str, index: int) -> bool:
    return text[index : index + len(prefix)].lower() == prefix.lower()


# =============================================================================
# HEADINGS
# =============================================================================


def match_heading(text: str, index: int) -> tuple[Heading, int] | None:
    """Recognize a heading line such as ``=== Title ===``.

    The line must start at ``index`` and ``index`` must be at the start of
    a line. The level is the number of leading equals signs (at least 2).
    Trailing equals signs are dropped and the title is trimmed; a heading
    with an empty title is not a heading.

    Args:
        text: Full document text.
        index: Candidate start of the heading.

    Returns:
        Tuple of (Heading, index of the newline ending the line), or None.

    Examples:
        >>> heading, end = match_heading("==Simple Heading==", 0)
        >>> heading.level, heading.child.source_text
        (2, 'Simple Heading')
    """
    if index > 0 and text[index - 1] not in "\r\n":
        return None

    i = index
    while i < len(text) and text[i] == HEADING_MARK:
        i += 1
    level = i - index
    if level < MIN_HEADING_LEVEL:
        return None

    end_of_line = text.find("\n", i)
    if end_of_line == -1:
        end_of_line = len(text)

    title = text[i:end_of_line].rstrip().rstrip(HEADING_MARK).strip()
    if not title:
        return None

    elements = inline.scan_inline(title)
    child: Element = elements[0] if elements else Text(title)
    return Heading(text[index:end_of_line], level, child), end_of_line


# =============================================================================
# TABLES
# =============================================================================


def match_table(text: str, index: int) -> tuple[Table, int] | None:
    """Recognize a {| ... |} table starting at ``index``.

    The rest of the {| line holds the table attributes unless it already
    starts a row with |-. Each |- line starts a new row; its remainder is
    the row's attribute line. Lines before the first |- form an implicit
    first row.

    Args:
        text: Full document text.
        index: Position of the opening {|.

    Returns:
        Tuple of (Table, index past the closing |}), or None.
    """
    if not text.startswith(TABLE_OPEN, index):
        return None

    end = find_matching_close(text, index, TABLE_OPEN, TABLE_CLOSE)
    if end is None:
        logger.debug("Unclosed table at offset %d, keeping as text", index)
        return None

    table_source = text[index:end]
    lines = table_source[len(TABLE_OPEN) : -len(TABLE_CLOSE)].split("\n")

    if lines[0].startswith(ROW_SEPARATOR):
        attributes = ""
        content_lines = lines
    else:
        attributes = lines[0].strip()
        content_lines = lines[1:]

    rows = tuple(_parse_table_row(row_source) for row_source in _group_rows(content_lines))
    return Table(table_source, attributes, rows), end


def _group_rows(lines: list[str]) -> list[str]:
    """Group table lines into row sources, splitting at |- lines."""
    row_sources: list[str] = []
    current: list[str] = []
    for line in lines:
        if line.startswith(ROW_SEPARATOR):
            if current:
                row_sources.append("\n".join(current))
            current = [line[len(ROW_SEPARATOR) :].strip()]
        else:
            current.append(line)
    if current:
        row_sources.append("\n".join(current))
    return row_sources


def _parse_table_row(row_source: str) -> TableRow:
    lines = row_source.strip().split("\n")
    attributes = lines[0].strip()
    if attributes.startswith((DATA_CELL_MARK, HEADER_CELL_MARK)):
        attributes = ""
    cell_lines = lines[1:] if attributes else lines

    cells: list[TableCell] = []
    for line in cell_lines:
        stripped = line.strip()
        if not stripped:
            continue

        is_header = stripped.startswith(HEADER_CELL_MARK)
        if not is_header and not stripped.startswith(DATA_CELL_MARK):
            continue

        separator = HEADER_CELL_SEPARATOR if is_header else DATA_CELL_SEPARATOR
        for cell_source in stripped[1:].split(separator):
            cells.append(_parse_table_cell(cell_source, is_header))

    return TableRow(row_source, attributes, tuple(cells))


def _parse_table_cell(cell_source: str, is_header: bool) -> TableCell:
    """Parse one cell, splitting off a leading ``attributes|`` part.

    Text before the first pipe counts as attributes only if it contains
    "=" or ";" or is a bare integer.

    Examples:
        >>> cell = _parse_table_cell(' rowspan="2" | Cell A1', False)
        >>> cell.attributes, cell.content.source_text
        ('rowspan="2"', 'Cell A1')
    """
    attributes = ""
    content_source = cell_source

    before_pipe, pipe, after_pipe = cell_source.partition("|")
    if pipe and (
        "=" in before_pipe
        or ";" in before_pipe
        or INTEGER_PATTERN.fullmatch(before_pipe.strip()) is not None
    ):
        attributes = before_pipe.strip()
        content_source = after_pipe

    content_source = content_source.strip()
    elements = inline.scan_inline(content_source)
    content: Element = (
        elements[0] if len(elements) == 1 else Paragraph(content_source, tuple(elements))
    )
    return TableCell(cell_source, attributes, content, is_header)


# =============================================================================
# LINKS
# =============================================================================


def match_category_link(text: str, index: int) -> tuple[Category, int] | None:
    """Recognize [[Category:Name]] or [[Category:Name|sort key]].

    The prefix is matched case-insensitively. The sort key is None when
    there is no pipe, and kept verbatim (even " ") when there is one.

    Examples:
        >>> category, _ = match_category_link("[[Category:Foo| ]]", 0)
        >>> category.name, category.sort_key
        ('Foo', ' ')
    """
    if not _startswith_ignore_case(text, CATEGORY_PREFIX, index):
        return None

    content_start = index + len(CATEGORY_PREFIX)
    end = text.find(LINK_CLOSE, content_start)
    if end == -1:
        return None

    name, pipe, sort_key = text[content_start:end].partition("|")
    next_index = end + len(LINK_CLOSE)
    return Category(text[index:next_index], name, sort_key if pipe else None), next_index


def match_file_link(text: str, index: int) -> tuple[Image, int] | None:
    """Recognize [[File:name|options|caption]] or [[Image:...]].

    Segments after the file name are size options (220px, x120px), known
    keywords (thumb, right, ...) or alt= options; anything else is the
    caption, and the last such segment wins.

    Examples:
        >>> image, _ = match_file_link("[[File:A.jpg|thumb|220px|A caption]]", 0)
        >>> image.file_name, image.options, image.caption
        ('A.jpg', ('thumb', '220px'), 'A caption')
    """
    if not text.startswith(LINK_OPEN, index):
        return None

    content_start = index + len(LINK_OPEN)
    prefix = next(
        (p for p in FILE_PREFIXES if _startswith_ignore_case(text, p, content_start)),
        None,
    )
    if prefix is None:
        return None

    end = text.find(LINK_CLOSE, content_start)
    if end == -1:
        return None

    parts = text[content_start + len(prefix) : end].split("|")
    file_name = parts[0].strip()
    options: list[str] = []
    caption: str | None = None

    for raw_part in parts[1:]:
        part = raw_part.strip()
        if _is_image_option(part.lower()):
            options.append(part)
        else:
            caption = part

    next_index = end + len(LINK_CLOSE)
    return Image(text[index:next_index], file_name, tuple(options), caption), next_index


def _is_image_option(part: str) -> bool:
    return (
        IMAGE_SIZE_PATTERN.fullmatch(part) is not None
        or part in KNOWN_IMAGE_OPTIONS
        or part.startswith(IMAGE_ALT_PREFIX)
    )


# =============================================================================
# TEMPLATES
# =============================================================================


def match_template(text: str, index: int) -> tuple[Template, int] | None:
    """Recognize a {{...}} template, including nested templates.

    The name is the text before the first pipe or newline, stripped.

    Examples:
        >>> template, end = match_template("{{Main|A|{{B}}}} rest", 0)
        >>> template.name, end
        ('Main', 16)
    """
    if not text.startswith(TEMPLATE_OPEN, index):
        return None

    end = find_matching_close(text, index, TEMPLATE_OPEN, TEMPLATE_CLOSE)
    if end is None:
        return None

    template_source = text[index:end]
    inner = template_source[len(TEMPLATE_OPEN) : -len(TEMPLATE_CLOSE)]
    name_end = TEMPLATE_NAME_END_PATTERN.search(inner)
    name = inner[: name_end.start()] if name_end else inner
    return Template(template_source, name.strip()), end
