"""Template content parser.

This module extracts the contents of a recognized {{template}}:
- parameters: positional and key=value segments, split at top level
- plain list items: the bullet lines of a {{Plainlist|...}} template

Both operations only make sense for Template elements; passing any other
element raises InvalidUsageError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wikitext_parser.errors import InvalidUsageError
from wikitext_parser.parsers.inline import scan_inline, wrap_inline
from wikitext_parser.parsers.spans import split_top_level
from wikitext_parser.parsers.types import PLAINLIST_NAME, Template, TemplateParameter

if TYPE_CHECKING:
    from wikitext_parser.parsers.types import Element

PARAMETER_SEPARATOR: str = "|"
KEY_VALUE_SEPARATOR: str = "="
LIST_ITEM_MARK: str = "*"


def _template_inner(template: object, operation: str) -> str:
    """Return the text between {{ and }}, checking the element kind."""
    if not isinstance(template, Template):
        raise InvalidUsageError(
            f"{operation} requires a Template element, got {type(template).__name__}"
        )
    return template.source_text[2:-2]


def parse_template_parameters(template: Template) -> list[TemplateParameter]:
    """Extract the parameters of a template.

    Everything after the first pipe is split on top-level pipes. Empty
    segments are dropped. A segment with "=" after its first character is
    a named parameter; otherwise it is positional (key None).

    Args:
        template: Template element to read.

    Returns:
        Parameters in source order.

    Raises:
        InvalidUsageError: If ``template`` is not a Template.

    Examples:
        >>> from wikitext_parser.parsers.block import match_template
        >>> template, _ = match_template("{{Main|Article 1|l1=Label}}", 0)
        >>> [(p.key, p.value.source_text) for p in parse_template_parameters(template)]
        [(None, 'Article 1'), ('l1', 'Label')]
    """
    inner = _template_inner(template, "parse_template_parameters")

    _, pipe, parameters_text = inner.partition(PARAMETER_SEPARATOR)
    if not pipe:
        return []

    parameters: list[TemplateParameter] = []
    for segment in split_top_level(parameters_text, PARAMETER_SEPARATOR):
        parameter_source = segment.strip()
        if not parameter_source:
            continue

        key: str | None = None
        value_source = parameter_source
        equals_index = parameter_source.find(KEY_VALUE_SEPARATOR)
        if equals_index > 0:
            key = parameter_source[:equals_index].strip()
            value_source = parameter_source[equals_index + 1 :].strip()

        parameters.append(TemplateParameter(parameter_source, key, wrap_inline(value_source)))

    return parameters


def parse_plain_list(template: Template) -> list[Element]:
    """Flatten the bullet items of a {{Plainlist}} template.

    Lines starting with "*" (after trimming) contribute their inline
    elements; all items end up in one flat list.

    Args:
        template: Template named exactly "Plainlist".

    Returns:
        Inline elements of every item, in order.

    Raises:
        InvalidUsageError: If ``template`` is not a Plainlist Template.

    Examples:
        >>> from wikitext_parser.parsers.block import match_template
        >>> template, _ = match_template("{{Plainlist|\\n* One\\n* [[Two]]\\n}}", 0)
        >>> [e.type for e in parse_plain_list(template)]
        ['text', 'link']
    """
    inner = _template_inner(template, "parse_plain_list")
    if template.name != PLAINLIST_NAME:
        raise InvalidUsageError(
            f"parse_plain_list requires a Plainlist template, got {template.name!r}"
        )

    _, pipe, list_text = inner.partition(PARAMETER_SEPARATOR)
    if not pipe:
        return []

    items: list[Element] = []
    for line in list_text.split("\n"):
        stripped = line.strip()
        if stripped.startswith(LIST_ITEM_MARK):
            items.extend(scan_inline(stripped[len(LIST_ITEM_MARK) :].strip()))
    return items
