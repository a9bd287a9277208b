"""Parser modules for MediaWiki wikitext.

This package turns raw wikitext into a tree of typed elements:

- **Spans**: balanced {{...}}/{|...|} matching and top-level splitting
- **Inline**: text, bold/italic, links, images, refs, comments, templates
- **Block**: headings, tables, category links, file links, templates
- **Template**: parameters and {{Plainlist}} items of a template
- **Document**: the top-level segmenter producing the flat element list

Example usage::

    from wikitext_parser.parsers import parse, Heading

    elements = parse("==History==\\nFounded in [[1999]].")
    assert isinstance(elements[0], Heading)

Public API:
    Types:
        - Element: Union of every element class
        - WikitextElementType: Literal type of the ``type`` discriminator
        - Text, Bold, Italic, Link, Image, Category, HtmlComment, Ref,
          Heading, Template, TemplateParameter, WikiKeyValuePair,
          Paragraph, Table, TableRow, TableCell

    Functions:
        - parse: Parse a whole document into top-level elements
        - scan_inline: Parse a fragment into inline elements
        - parse_template_parameters: Parameters of a Template
        - parse_plain_list: Items of a {{Plainlist}} Template
        - find_matching_close: End of a balanced delimiter span
        - split_top_level: Split outside {{...}} and [[...]]
"""

from wikitext_parser.parsers.document import parse
from wikitext_parser.parsers.inline import scan_inline
from wikitext_parser.parsers.spans import find_matching_close, split_top_level
from wikitext_parser.parsers.template import parse_plain_list, parse_template_parameters
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
    WikitextElement,
    WikitextElementType,
)

__all__ = [
    "Bold",
    "Category",
    "Element",
    "Heading",
    "HtmlComment",
    "Image",
    "Italic",
    "Link",
    "Paragraph",
    "Ref",
    "Table",
    "TableCell",
    "TableRow",
    "Template",
    "TemplateParameter",
    "Text",
    "WikiKeyValuePair",
    "WikitextElement",
    "WikitextElementType",
    "find_matching_close",
    "parse",
    "parse_plain_list",
    "parse_template_parameters",
    "scan_inline",
    "split_top_level",
]
