"""Element types produced by the wikitext parser.

This module contains the frozen dataclasses that make up a parsed
document tree. Every element keeps the verbatim ``source_text`` it was
parsed from. The set of variants is closed: ``Element`` is the union of
all of them, and renderers match on it exhaustively.

Derived views on Template and Image (parameters, plain list items,
infobox type, Wikimedia link) are computed on first access and cached on
the instance. The computation is a pure function of ``source_text``, so
concurrent first accesses may race harmlessly.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import ClassVar, Literal, TypeAlias

from wikitext_parser.config import load_config

# Type aliases for literal string types
WikitextElementType = Literal[
    "text",
    "bold",
    "italic",
    "link",
    "image",
    "category",
    "comment",
    "ref",
    "heading",
    "template",
    "template_parameter",
    "key_value_pair",
    "paragraph",
    "table",
    "table_row",
    "table_cell",
]
"""Discriminator carried by every element class as ``type``."""

INFOBOX_PREFIX: str = "Infobox"
PLAINLIST_NAME: str = "Plainlist"
TRANSCLUSION_PREFIX: str = ":"


@dataclass(frozen=True)
class WikitextElement:
    """Base class for all elements.

    Attributes:
        source_text: Exact substring of the source this element was parsed from.
    """

    type: ClassVar[WikitextElementType]

    source_text: str


@dataclass(frozen=True)
class Text(WikitextElement):
    """Plain text run between recognized tokens."""

    type: ClassVar[WikitextElementType] = "text"


@dataclass(frozen=True)
class Bold(WikitextElement):
    """Content between ''' and '''.

    Attributes:
        inner: Parsed content of the bold run.
    """

    type: ClassVar[WikitextElementType] = "bold"

    inner: Element


@dataclass(frozen=True)
class Italic(WikitextElement):
    """Content between '' and ''.

    For ''''' runs the inner element is a Bold wrapping the content.

    Attributes:
        inner: Parsed content of the italic run.
    """

    type: ClassVar[WikitextElementType] = "italic"

    inner: Element


@dataclass(frozen=True)
class Link(WikitextElement):
    """Internal link, [[target]] or [[display|target]].

    Attributes:
        display_text: Text before the pipe (or the whole content).
        target: Text after the pipe (or the whole content).
    """

    type: ClassVar[WikitextElementType] = "link"

    display_text: str
    target: str


@dataclass(frozen=True)
class Image(WikitextElement):
    """File or image link, [[File:name|options...|caption]].

    Attributes:
        file_name: File name without the File:/Image: prefix.
        options: Recognized display options (size, thumb, alignment, alt=...).
        caption: Last segment that is not an option, None if absent.
    """

    type: ClassVar[WikitextElementType] = "image"

    file_name: str
    options: tuple[str, ...] = ()
    caption: str | None = None

    @cached_property
    def wikimedia_link(self) -> str:
        """Wikimedia Commons URL of the file.

        Examples:
            >>> Image("[[File:A b.jpg]]", "A b.jpg").wikimedia_link
            'https://commons.wikimedia.org/wiki/File:A_b.jpg'
        """
        return load_config().commons_file_url + self.file_name.replace(" ", "_")


@dataclass(frozen=True)
class Category(WikitextElement):
    """Category link, [[Category:name]] or [[Category:name|sort key]].

    Attributes:
        name: Category name without the prefix.
        sort_key: Text after the pipe; None when there is no pipe.
    """

    type: ClassVar[WikitextElementType] = "category"

    name: str
    sort_key: str | None = None


@dataclass(frozen=True)
class HtmlComment(WikitextElement):
    """HTML comment, <!-- ... -->, delimiters included in source_text."""

    type: ClassVar[WikitextElementType] = "comment"


@dataclass(frozen=True)
class Ref(WikitextElement):
    """Reference tag, <ref>...</ref> or self-closing <ref name="x" />.

    Attributes:
        child: Parsed reference content; None for self-closing or empty refs.
        name: Value of the name attribute, None if absent.
    """

    type: ClassVar[WikitextElementType] = "ref"

    child: Element | None = None
    name: str | None = None


@dataclass(frozen=True)
class Heading(WikitextElement):
    """Section heading, ==Title== is level 2, ===Title=== level 3, etc.

    Attributes:
        level: Number of leading equals signs (always >= 2).
        child: First inline element of the heading text.
    """

    type: ClassVar[WikitextElementType] = "heading"

    level: int
    child: Element


@dataclass(frozen=True)
class TemplateParameter(WikitextElement):
    """One |-separated segment of a template.

    Attributes:
        key: Parameter name; None for positional parameters.
        value: Parsed parameter value.
    """

    type: ClassVar[WikitextElementType] = "template_parameter"

    key: str | None
    value: Element


@dataclass(frozen=True)
class Template(WikitextElement):
    """Template, {{Name|param|key=value}}.

    Attributes:
        name: Text before the first pipe or newline, stripped.
    """

    type: ClassVar[WikitextElementType] = "template"

    name: str

    @property
    def is_infobox(self) -> bool:
        return self.name.startswith(INFOBOX_PREFIX)

    @property
    def is_plainlist(self) -> bool:
        return self.name == PLAINLIST_NAME

    @property
    def is_transclusion(self) -> bool:
        """True for {{:Page}} templates that include another page."""
        return self.name.startswith(TRANSCLUSION_PREFIX)

    @cached_property
    def infobox_type(self) -> str | None:
        """Part of the name after the first space, None if not an infobox.

        Examples:
            >>> Template("{{Infobox television}}", "Infobox television").infobox_type
            'television'
        """
        if not self.is_infobox:
            return None
        return self.name.split(" ", maxsplit=1)[-1]

    def is_infobox_of_type(self, infobox_type: str) -> bool:
        return self.is_infobox and self.infobox_type == infobox_type

    @cached_property
    def parameters(self) -> tuple[TemplateParameter, ...]:
        """Positional and named parameters, in source order."""
        from wikitext_parser.parsers.template import parse_template_parameters

        return tuple(parse_template_parameters(self))

    @cached_property
    def plain_list_items(self) -> tuple[Element, ...]:
        """Inline elements of all bullet items; empty unless is_plainlist."""
        if not self.is_plainlist:
            return ()

        from wikitext_parser.parsers.template import parse_plain_list

        return tuple(parse_plain_list(self))


@dataclass(frozen=True)
class WikiKeyValuePair(WikitextElement):
    """Single-line {{Key|Value}} template read as page metadata.

    Attributes:
        key: Text before the pipe, stripped.
        value: Parsed value.
    """

    type: ClassVar[WikitextElementType] = "key_value_pair"

    key: str
    value: Element


@dataclass(frozen=True)
class Paragraph(WikitextElement):
    """Block of inline elements.

    Attributes:
        children: Inline elements in source order.
    """

    type: ClassVar[WikitextElementType] = "paragraph"

    children: tuple[Element, ...] = ()


@dataclass(frozen=True)
class TableCell(WikitextElement):
    """Single table cell, started by | (data) or ! (header).

    Attributes:
        attributes: Cell attributes before the content pipe, "" if none.
        content: Parsed cell content.
        is_header: True for ! cells.
    """

    type: ClassVar[WikitextElementType] = "table_cell"

    attributes: str
    content: Element
    is_header: bool = False


@dataclass(frozen=True)
class TableRow(WikitextElement):
    """Table row, usually started by |-.

    Attributes:
        attributes: Row attributes from the |- line, "" if none.
        cells: Cells in source order.
    """

    type: ClassVar[WikitextElementType] = "table_row"

    attributes: str
    cells: tuple[TableCell, ...] = ()


@dataclass(frozen=True)
class Table(WikitextElement):
    """Table, {| ... |}.

    Attributes:
        attributes: Text on the {| line, "" if the first line starts a row.
        rows: Rows in source order.
    """

    type: ClassVar[WikitextElementType] = "table"

    attributes: str
    rows: tuple[TableRow, ...] = ()


Element: TypeAlias = (
    Text
    | Bold
    | Italic
    | Link
    | Image
    | Category
    | HtmlComment
    | Ref
    | Heading
    | Template
    | TemplateParameter
    | WikiKeyValuePair
    | Paragraph
    | Table
    | TableRow
    | TableCell
)
"""Closed union of every element variant."""
