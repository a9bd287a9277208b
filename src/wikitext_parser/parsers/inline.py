"""Inline scanner for wikitext.

This module turns a run of text into inline elements:
- <!-- comments -->
- '''''bold italic''''', '''bold''', ''italic''
- [[File:...]] / [[Image:...]] links (recognized by the block module)
- [[links]] and [[display|target]] links
- <ref>...</ref> and <ref name="x" /> references
- {{templates}} (recognized by the block module)

Recognizers are tried in that order at every position and the first
match wins. Anything no recognizer consumes ends up in a Text element.
Unterminated tokens are never an error: the opening characters are
simply kept as text.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from wikitext_parser.parsers import block
from wikitext_parser.parsers.types import (
    Bold,
    Element,
    HtmlComment,
    Italic,
    Link,
    Paragraph,
    Ref,
    Text,
)

Recognizer = Callable[[str, int], tuple[Element, int] | None]
"""Recognizer signature: (text, index) -> (element, next index) or None."""

COMMENT_OPEN: Final[str] = "<!--"
COMMENT_CLOSE: Final[str] = "-->"
BOLD_ITALIC_MARK: Final[str] = "'''''"
BOLD_MARK: Final[str] = "'''"
ITALIC_MARK: Final[str] = "''"
LINK_OPEN: Final[str] = "[["
LINK_CLOSE: Final[str] = "]]"
REF_OPEN: Final[str] = "<ref"
REF_CLOSE: Final[str] = "</ref>"
REF_NAME_ATTRIBUTE: Final[str] = "name="

# [[Prefix:...]] links handled by other recognizers, never as plain links
NON_LINK_PREFIXES: Final[tuple[str, ...]] = ("category:", "file:", "image:")

REF_NAME_QUOTES: Final[frozenset[str]] = frozenset(['"', "'"])


def scan_inline(text: str) -> list[Element]:
    """Convert text into a list of inline elements.

    Args:
        text: Wikitext fragment, typically a paragraph or a parameter value.

    Returns:
        Elements in source order. Empty list for empty input.

    Examples:
        >>> [e.type for e in scan_inline("See [[Foo]] now")]
        ['text', 'link', 'text']
        >>> scan_inline("")
        []
    """
    if not text:
        return []

    elements: list[Element] = []
    last_index = 0
    i = 0
    while i < len(text):
        match = _match_element(text, i)
        if match is None:
            i += 1
            continue

        element, next_index = match
        if i > last_index:
            elements.append(Text(text[last_index:i]))
        elements.append(element)
        i = last_index = next_index

    if last_index < len(text):
        elements.append(Text(text[last_index:]))
    return elements


def wrap_inline(text: str) -> Element:
    """Scan text and return a single element for it.

    One scanned element is returned as-is; several are wrapped in a
    Paragraph; nothing at all falls back to a Text of the raw input.

    Examples:
        >>> wrap_inline("plain").type
        'text'
        >>> wrap_inline("a [[b]]").type
        'paragraph'
    """
    elements = scan_inline(text)
    if not elements:
        return Text(text)
    if len(elements) == 1:
        return elements[0]
    return Paragraph(text, tuple(elements))


def _match_element(text: str, i: int) -> tuple[Element, int] | None:
    """Try each inline recognizer at position i, in priority order."""
    for recognizer in RECOGNIZERS:
        match = recognizer(text, i)
        if match is not None:
            return match
    return None


def _match_comment(text: str, i: int) -> tuple[Element, int] | None:
    if not text.startswith(COMMENT_OPEN, i):
        return None
    end = text.find(COMMENT_CLOSE, i + len(COMMENT_OPEN))
    if end == -1:
        return None
    next_index = end + len(COMMENT_CLOSE)
    return HtmlComment(text[i:next_index]), next_index


def _match_bold_italic(text: str, i: int) -> tuple[Element, int] | None:
    """Match '''''text''''' as Italic(Bold(text))."""
    mark_length = len(BOLD_ITALIC_MARK)
    if not text.startswith(BOLD_ITALIC_MARK, i):
        return None
    end = text.find(BOLD_ITALIC_MARK, i + mark_length)
    if end == -1:
        return None

    inner_source = text[i + mark_length : end]
    bold = Bold(inner_source, wrap_inline(inner_source))
    next_index = end + mark_length
    return Italic(text[i:next_index], bold), next_index


def _match_bold(text: str, i: int) -> tuple[Element, int] | None:
    inner = _match_quoted(text, i, BOLD_MARK)
    if inner is None:
        return None
    inner_element, next_index = inner
    return Bold(text[i:next_index], inner_element), next_index


def _match_italic(text: str, i: int) -> tuple[Element, int] | None:
    inner = _match_quoted(text, i, ITALIC_MARK)
    if inner is None:
        return None
    inner_element, next_index = inner
    return Italic(text[i:next_index], inner_element), next_index


def _match_quoted(text: str, i: int, mark: str) -> tuple[Element, int] | None:
    """Match mark...mark and scan what is between the marks.

    Returns:
        Tuple of (inner element, index past the closing mark), or None.
    """
    if not text.startswith(mark, i):
        return None
    end = text.find(mark, i + len(mark))
    if end == -1:
        return None
    inner_source = text[i + len(mark) : end]
    return wrap_inline(inner_source), end + len(mark)


def _match_link(text: str, i: int) -> tuple[Element, int] | None:
    """Match [[target]] or [[display|target]].

    Category, File and Image links are left to their own recognizers.
    """
    if not text.startswith(LINK_OPEN, i):
        return None
    content_start = i + len(LINK_OPEN)
    head = text[content_start : content_start + len("category:")].lower()
    if head.startswith(NON_LINK_PREFIXES):
        return None

    end = text.find(LINK_CLOSE, content_start)
    if end == -1:
        return None

    content = text[content_start:end]
    display_text, pipe, target = content.partition("|")
    if not pipe:
        target = display_text
    next_index = end + len(LINK_CLOSE)
    return Link(text[i:next_index], display_text, target), next_index


def _match_ref(text: str, i: int) -> tuple[Element, int] | None:
    """Match <ref>...</ref>, <ref name="x">...</ref> or <ref name="x" />."""
    if not text.startswith(REF_OPEN, i):
        return None
    attributes_start = i + len(REF_OPEN)
    # <references />, <refs> and similar are other tags
    if attributes_start >= len(text):
        return None
    boundary = text[attributes_start]
    if not (boundary.isspace() or boundary in ">/"):
        return None

    tag_end = text.find(">", attributes_start)
    if tag_end == -1:
        return None

    tag_content = text[attributes_start:tag_end]
    name = _extract_ref_name(tag_content)

    if tag_content.strip().endswith("/"):
        next_index = tag_end + 1
        return Ref(text[i:next_index], None, name), next_index

    content_end = text.find(REF_CLOSE, tag_end)
    if content_end == -1:
        return None

    inner_source = text[tag_end + 1 : content_end]
    child = wrap_inline(inner_source) if inner_source else None
    next_index = content_end + len(REF_CLOSE)
    return Ref(text[i:next_index], child, name), next_index


def _extract_ref_name(tag_content: str) -> str | None:
    """Extract the quoted name attribute from the inside of a <ref> tag.

    Args:
        tag_content: Text between "<ref" and ">".

    Returns:
        The attribute value, or None if there is no quoted name.

    Examples:
        >>> _extract_ref_name(' name="smith2020"')
        'smith2020'
        >>> _extract_ref_name(" NAME='a b' /")
        'a b'
        >>> _extract_ref_name(" name=bare") is None
        True
    """
    name_index = tag_content.lower().find(REF_NAME_ATTRIBUTE)
    if name_index == -1:
        return None

    value_start = name_index + len(REF_NAME_ATTRIBUTE)
    if value_start >= len(tag_content):
        return None
    quote = tag_content[value_start]
    if quote not in REF_NAME_QUOTES:
        return None

    value_end = tag_content.find(quote, value_start + 1)
    if value_end == -1:
        return None
    return tag_content[value_start + 1 : value_end]


def _match_file_link(text: str, i: int) -> tuple[Element, int] | None:
    return block.match_file_link(text, i)


def _match_template(text: str, i: int) -> tuple[Element, int] | None:
    return block.match_template(text, i)


# Priority order. block is still loading when this module runs, so its
# recognizers are looked up at call time through the wrappers above
RECOGNIZERS: Final[tuple[Recognizer, ...]] = (
    _match_comment,
    _match_bold_italic,
    _match_bold,
    _match_italic,
    _match_file_link,
    _match_link,
    _match_ref,
    _match_template,
)
