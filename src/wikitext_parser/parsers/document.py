"""Document segmenter: turns a whole wikitext page into a flat element list.

The segmenter walks the source once. At each position (after skipping
whitespace) it tries, in order:
1. Table ({| ... |})
2. Heading (== ... == at the start of a line)
3. Category link ([[Category:...]])
4. Template ({{...}}), possibly read as a WikiKeyValuePair
5. Paragraph: everything up to the next blank line or block start
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Final

from wikitext_parser.errors import InvalidUsageError
from wikitext_parser.parsers.block import (
    TEMPLATE_OPEN,
    match_category_link,
    match_heading,
    match_table,
    match_template,
)
from wikitext_parser.parsers.inline import scan_inline, wrap_inline
from wikitext_parser.parsers.spans import split_top_level
from wikitext_parser.parsers.types import Element, Paragraph, Template, WikiKeyValuePair

logger = logging.getLogger(__name__)

# A paragraph ends at a blank line or a line that starts another block
PARAGRAPH_END_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\n(?:\n|\{\||\{\{|\[\[category:|==)",
    re.IGNORECASE,
)

# Templates that keep their Template form even with one parameter
METADATA_EXCLUDED_PREFIX: Final[str] = "infobox"
METADATA_EXCLUDED_NAMES: Final[frozenset[str]] = frozenset(["main", "see also"])


def normalize_line_endings(source: str) -> str:
    """Convert \\r\\n and lone \\r line endings to \\n.

    Examples:
        >>> normalize_line_endings("a\\r\\nb\\rc")
        'a\\nb\\nc'
    """
    return source.replace("\r\n", "\n").replace("\r", "\n")


def parse(source: str) -> list[Element]:
    """Parse a wikitext document into a flat list of elements.

    Args:
        source: Full wikitext of a page.

    Returns:
        Top-level elements in document order: Table, Heading, Category,
        Template, WikiKeyValuePair and Paragraph elements.

    Raises:
        InvalidUsageError: If ``source`` is not a str.

    Examples:
        >>> [e.type for e in parse("==Intro==\\nHello [[world]].")]
        ['heading', 'paragraph']
    """
    if not isinstance(source, str):
        raise InvalidUsageError(f"parse() expects str, got {type(source).__name__}")
    return list(iter_elements(source))


def iter_elements(source: str) -> Iterator[Element]:
    """Yield top-level elements of ``source`` lazily, in document order."""
    text = normalize_line_endings(source)
    index = 0

    while index < len(text):
        while index < len(text) and text[index].isspace():
            index += 1
        if index >= len(text):
            break

        block = (
            match_table(text, index)
            or match_heading(text, index)
            or match_category_link(text, index)
        )
        if block is not None:
            element, index = block
            yield element
            continue

        if text.startswith(TEMPLATE_OPEN, index):
            template_match = match_template(text, index)
            if template_match is not None:
                template, index = template_match
                yield _as_metadata_or_template(template)
                continue
            logger.debug("Unbalanced template at offset %d, keeping as text", index)

        end = _find_paragraph_end(text, index)
        paragraph_source = text[index:end].strip()
        if paragraph_source:
            yield Paragraph(paragraph_source, tuple(scan_inline(paragraph_source)))
        index = end


def _find_paragraph_end(text: str, index: int) -> int:
    """Return the index of the nearest paragraph boundary after ``index``."""
    match = PARAGRAPH_END_PATTERN.search(text, index)
    return match.start() if match else len(text)


def _as_metadata_or_template(template: Template) -> Template | WikiKeyValuePair:
    """Read a single-line two-part template as a key/value pair.

    {{Short description|A show}} becomes WikiKeyValuePair("Short description",
    ...). Templates spanning lines, with more or fewer than two top-level
    parts, infoboxes and {{Main}}/{{See also}} stay Templates.

    Examples:
        >>> from wikitext_parser.parsers.block import match_template
        >>> template, _ = match_template("{{Use mdy dates|date=May 2024}}", 0)
        >>> _as_metadata_or_template(template).type
        'key_value_pair'
        >>> template, _ = match_template("{{Main|History of Foo}}", 0)
        >>> _as_metadata_or_template(template).type
        'template'
    """
    inner = template.source_text[2:-2].strip()
    if "\n" in inner:
        return template

    parts = split_top_level(inner, "|")
    if len(parts) != 2:
        return template

    key = parts[0].strip()
    lowered_key = key.lower()
    if lowered_key.startswith(METADATA_EXCLUDED_PREFIX) or lowered_key in METADATA_EXCLUDED_NAMES:
        return template

    return WikiKeyValuePair(template.source_text, key, wrap_inline(parts[1].strip()))
