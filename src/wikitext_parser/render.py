"""HTML, plain text and debug projections of a parsed wikitext tree.

Each projection is a single exhaustive match over the element variants,
plus Page and Section. Metadata-only variants (Category,
WikiKeyValuePair) render as empty strings in both HTML and text.

Example usage::

    from wikitext_parser import parse_page, to_html, to_text

    page = parse_page(source)
    html = to_html(page)
    text = to_text(page)
"""

from __future__ import annotations

import hashlib
import html
from collections.abc import Callable, Sequence
from typing import TypeAlias

from wikitext_parser.config import WikitextConfig, load_config
from wikitext_parser.errors import InvalidUsageError
from wikitext_parser.page import Page, Section
from wikitext_parser.parsers.types import (
    Bold,
    Category,
    Element,
    Heading,
    HtmlComment,
    Image,
    Italic,
    Link,
    Paragraph,
    Ref,
    Table,
    TableCell,
    TableRow,
    Template,
    TemplateParameter,
    Text,
    WikiKeyValuePair,
)

Node: TypeAlias = Element | Section | Page
"""Anything the renderers accept."""


def ref_anchor(ref: Ref) -> int:
    """Stable anchor number for a reference, keyed by name or source text.

    Examples:
        >>> ref_anchor(Ref('<ref name="a" />', None, "a")) == ref_anchor(
        ...     Ref('<ref name="a">Text</ref>', None, "a"))
        True
    """
    key = ref.name if ref.name is not None else ref.source_text
    digest = hashlib.md5(key.encode("utf-8"), usedforsecurity=False).hexdigest()
    return int(digest[:8], 16)


def _join(nodes: Sequence[Node], render: Callable[[Node], str]) -> str:
    return "".join(render(node) for node in nodes)


def _inline(element: Element, render: Callable[[Node], str]) -> str:
    """Render bold/italic content; a Paragraph here is an inline run, not a block."""
    if isinstance(element, Paragraph):
        return _join(element.children, render)
    return render(element)


# =============================================================================
# HTML
# =============================================================================


def to_html(node: Node, config: WikitextConfig | None = None) -> str:
    """Render an element, Section or Page as HTML.

    Args:
        node: Tree node to render.
        config: Rendering configuration; defaults to load_config().

    Returns:
        HTML string. Text content is escaped.

    Raises:
        InvalidUsageError: If ``node`` is not part of a parsed tree.

    Examples:
        >>> to_html(Bold("'''x'''", Text("x")))
        '<strong>x</strong>'
    """
    cfg = config if config is not None else load_config()

    def render(current: Node) -> str:
        match current:
            case Text():
                return html.escape(current.source_text, quote=False)
            case Bold(inner=inner):
                return f"<strong>{_inline(inner, render)}</strong>"
            case Italic(inner=inner):
                return f"<em>{_inline(inner, render)}</em>"
            case Link(display_text=display_text, target=target):
                href = html.escape(cfg.link_base_path + target.replace(" ", "_"))
                return f'<a href="{href}">{html.escape(display_text, quote=False)}</a>'
            case Image(caption=caption):
                src = html.escape(cfg.commons_file_url + current.file_name.replace(" ", "_"))
                alt = html.escape(caption or "")
                return f'<img src="{src}" alt="{alt}" title="{alt}" />'
            case Category() | WikiKeyValuePair():
                return ""
            case HtmlComment():
                return current.source_text
            case Ref():
                anchor = ref_anchor(current)
                index = abs(anchor % cfg.ref_index_modulus)
                return f'<sup><a href="#ref-{anchor}">[{index}]</a></sup>'
            case Heading(level=level, child=child):
                return f"<h{level}>{render(child)}</h{level}>"
            case Template():
                if not current.is_plainlist:
                    return ""
                items = "".join(f"<li>{render(item)}</li>" for item in current.plain_list_items)
                return f"<ul>{items}</ul>"
            case TemplateParameter(value=value):
                return render(value)
            case Paragraph(children=children):
                return f"<p>{_join(children, render)}</p>"
            case Table(attributes=attributes, rows=rows):
                return f"<table{_attributes(attributes)}>{_join(rows, render)}</table>"
            case TableRow(attributes=attributes, cells=cells):
                return f"<tr{_attributes(attributes)}>{_join(cells, render)}</tr>"
            case TableCell(attributes=attributes, content=content, is_header=is_header):
                tag = "th" if is_header else "td"
                return f"<{tag}{_attributes(attributes)}>{render(content)}</{tag}>"
            case Section():
                return (
                    render(current.heading)
                    + _join(current.content_elements, render)
                    + _join(current.subsections, render)
                )
            case Page():
                return _join(current.lead_content, render) + _join(current.sections, render)
            case _:
                raise InvalidUsageError(f"Cannot render {type(current).__name__} as HTML")

    return render(node)


def _attributes(attributes: str) -> str:
    return f" {attributes}" if attributes else ""


# =============================================================================
# PLAIN TEXT
# =============================================================================


def to_text(node: Node) -> str:
    """Render an element, Section or Page as plain text.

    Headings are surrounded by blank lines, paragraphs end with one, and
    table rows become ``| a | b |`` lines. References, comments and
    metadata render as nothing.

    Raises:
        InvalidUsageError: If ``node`` is not part of a parsed tree.

    Examples:
        >>> to_text(Link("[[Page|shown]]", "shown", "Page"))
        'shown'
    """
    match node:
        case Text():
            return node.source_text
        case Bold(inner=inner) | Italic(inner=inner):
            return _inline(inner, to_text)
        case Link(display_text=display_text):
            return display_text
        case Image(caption=caption):
            return caption or ""
        case Category() | WikiKeyValuePair() | HtmlComment() | Ref():
            return ""
        case Heading(child=child):
            return f"\n\n{to_text(child)}\n\n"
        case Template():
            if not node.is_plainlist:
                return ""
            return "".join(f"\n* {to_text(item)}" for item in node.plain_list_items)
        case TemplateParameter(value=value):
            return to_text(value)
        case Paragraph(children=children):
            return _join(children, to_text) + "\n\n"
        case Table(rows=rows):
            return _join(rows, to_text) + "\n"
        case TableRow(cells=cells):
            cell_texts = (to_text(cell).replace("\n", " ").strip() for cell in cells)
            return "| " + " | ".join(cell_texts) + " |\n"
        case TableCell(content=content):
            return to_text(content)
        case Section():
            return (
                to_text(node.heading)
                + _join(node.content_elements, to_text)
                + _join(node.subsections, to_text)
            )
        case Page():
            return (_join(node.lead_content, to_text) + _join(node.sections, to_text)).strip()
        case _:
            raise InvalidUsageError(f"Cannot render {type(node).__name__} as text")


# =============================================================================
# DEBUG
# =============================================================================


def to_debug_string(element: Element) -> str:
    """One-line description of an element, for logs and debugging.

    Examples:
        >>> to_debug_string(Heading("==A==", 2, Text("A")))
        'H2: A'
    """
    match element:
        case Text():
            return element.source_text
        case Bold(inner=inner):
            return f"Bold: {to_debug_string(inner)}"
        case Italic(inner=inner):
            return f"Italic: {to_debug_string(inner)}"
        case Link(display_text=display_text):
            return f"Link: {display_text}"
        case Image(file_name=file_name, caption=caption):
            return f"Image: {file_name}" + (f" | {caption}" if caption is not None else "")
        case Category(name=name, sort_key=sort_key):
            return f"Category: {name}" + (f" | {sort_key}" if sort_key is not None else "")
        case HtmlComment():
            return f"HtmlComment: {element.source_text}"
        case Ref(child=child, name=name):
            label = f"Ref ({name})" if name is not None else "Ref"
            return f"{label}: {to_debug_string(child)}" if child is not None else label
        case Heading(level=level, child=child):
            return f"H{level}: {to_debug_string(child)}"
        case Template():
            params = "".join(f"    {to_debug_string(p)}" for p in element.parameters)
            return f"Template: {element.name}{params}"
        case TemplateParameter(key=key, value=value):
            if key is not None:
                return f"Param: {key} = {to_debug_string(value)}"
            return f"Param: {to_debug_string(value)}"
        case WikiKeyValuePair(key=key, value=value):
            return f"KeyValue: {key} : {to_debug_string(value)}"
        case Paragraph(children=children):
            return "Paragraph: " + "".join(to_debug_string(child) for child in children)
        case Table(rows=rows):
            return f"Table ({len(rows)} rows)"
        case TableRow(cells=cells):
            return f"TableRow ({len(cells)} cells)"
        case TableCell(content=content, is_header=is_header):
            kind = "Header" if is_header else "Data"
            return f"TableCell ({kind}): {to_debug_string(content)}"
        case _:
            raise InvalidUsageError(f"Cannot describe {type(element).__name__}")
