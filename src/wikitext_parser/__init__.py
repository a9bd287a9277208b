"""wikitext-parser: MediaWiki wikitext to a typed document tree.

Two entry points:

- parse(source): flat list of top-level elements
- parse_page(source): Page with infobox, lead content and nested sections

The tree renders to HTML or plain text with to_html() and to_text().
"""

from wikitext_parser.errors import InvalidUsageError, WikitextError
from wikitext_parser.page import Page, Section, parse_page
from wikitext_parser.parsers import (
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
    WikitextElement,
    WikitextElementType,
    parse,
)
from wikitext_parser.render import to_debug_string, to_html, to_text

__all__ = [
    "Bold",
    "Category",
    "Element",
    "Heading",
    "HtmlComment",
    "Image",
    "InvalidUsageError",
    "Italic",
    "Link",
    "Page",
    "Paragraph",
    "Ref",
    "Section",
    "Table",
    "TableCell",
    "TableRow",
    "Template",
    "TemplateParameter",
    "Text",
    "WikiKeyValuePair",
    "WikitextElement",
    "WikitextElementType",
    "WikitextError",
    "parse",
    "parse_page",
    "to_debug_string",
    "to_html",
    "to_text",
]
