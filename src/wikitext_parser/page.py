"""Page assembler for wikitext documents.

This module provides the high-level entry point that turns wikitext into
a structured Page. It runs the document segmenter and then:
1. Removes the first infobox template and keeps it as Page.infobox
2. Collects everything before the first heading as lead content
3. Folds headings into nested sections (== into sections, === into
   their subsections, and so on)
4. Pulls {{Main}} and {{See also}} templates that sit directly under a
   heading into the section's main article links
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from wikitext_parser.parsers import parse
from wikitext_parser.parsers.types import Element, Heading, Template

logger = logging.getLogger(__name__)

TOP_SECTION_LEVEL: Final[int] = 2

# Templates that point to a fuller article on the section's topic
MAIN_ARTICLE_TEMPLATES: Final[frozenset[str]] = frozenset(["Main", "See also"])


@dataclass(frozen=True)
class Section:
    """Heading with its content and nested subsections.

    Attributes:
        heading: Heading that opens the section.
        main_article_links: {{Main}}/{{See also}} templates placed before
            the first subsection.
        content_elements: Remaining elements before the first subsection.
        subsections: Sections one level deeper, in order.
    """

    heading: Heading
    main_article_links: tuple[Template, ...] = ()
    content_elements: tuple[Element, ...] = ()
    subsections: tuple[Section, ...] = ()

    @property
    def level(self) -> int:
        return self.heading.level


@dataclass(frozen=True)
class Page:
    """Structured wiki page.

    Attributes:
        infobox: First {{Infobox ...}} template on the page, None if absent.
        lead_content: Elements before the first heading.
        sections: Top-level (level 2) sections.
    """

    infobox: Template | None = None
    lead_content: tuple[Element, ...] = ()
    sections: tuple[Section, ...] = ()


def parse_page(source: str) -> Page:
    """Parse wikitext into a Page with infobox, lead and section tree.

    Never fails on malformed markup: a page without headings has no
    sections, and a page without an infobox has ``infobox=None``.

    Args:
        source: Full wikitext of a page.

    Returns:
        Page built from the flat element list.

    Raises:
        InvalidUsageError: If ``source`` is not a str.

    Examples:
        >>> page = parse_page("{{Infobox person|name=X}}\\nLead.\\n==A==\\nText")
        >>> page.infobox.infobox_type, len(page.lead_content), len(page.sections)
        ('person', 1, 1)
    """
    elements = parse(source)

    infobox = _pop_infobox(elements)

    first_heading = _find_index(elements, lambda e: isinstance(e, Heading))
    if first_heading is None:
        return Page(infobox=infobox, lead_content=tuple(elements))

    lead_content = tuple(elements[:first_heading])
    sections = _build_sections(elements[first_heading:], TOP_SECTION_LEVEL)
    logger.debug(
        "Assembled page: %d lead elements, %d top-level sections",
        len(lead_content),
        len(sections),
    )
    return Page(infobox=infobox, lead_content=lead_content, sections=tuple(sections))


def _find_index(elements: list[Element], predicate: Callable[[Element], bool]) -> int | None:
    """Index of the first element matching ``predicate``, or None."""
    return next((i for i, element in enumerate(elements) if predicate(element)), None)


def _pop_infobox(elements: list[Element]) -> Template | None:
    """Remove and return the first infobox template in ``elements``."""
    for index, element in enumerate(elements):
        if isinstance(element, Template) and element.is_infobox:
            del elements[index]
            logger.debug("Found infobox %r at element %d", element.name, index)
            return element
    return None


def _is_main_article_link(element: Element) -> bool:
    return isinstance(element, Template) and element.name in MAIN_ARTICLE_TEMPLATES


def _build_sections(elements: list[Element], level: int) -> list[Section]:
    """Fold a run of elements into sections of the given heading level.

    Each level-``level`` heading owns everything up to the next heading
    of the same or a higher level. Within that block, the first deeper
    heading starts the subsections, built recursively at ``level + 1``.
    Elements before the first heading of this level are skipped.

    Args:
        elements: Elements starting at (or before) a heading.
        level: Heading level to collect.

    Returns:
        Sections in document order.
    """
    sections: list[Section] = []
    i = 0
    while i < len(elements):
        heading = elements[i]
        if not isinstance(heading, Heading) or heading.level != level:
            logger.debug("Skipping %s element outside a level-%d section", heading.type, level)
            i += 1
            continue

        block_end = i + 1
        while block_end < len(elements):
            candidate = elements[block_end]
            if isinstance(candidate, Heading) and candidate.level <= level:
                break
            block_end += 1

        block = elements[i + 1 : block_end]
        subsection_start = _find_index(
            block, lambda e: isinstance(e, Heading) and e.level > level
        )
        if subsection_start is None:
            subsection_start = len(block)

        direct_content = block[:subsection_start]
        main_article_links = tuple(
            element
            for element in direct_content
            if isinstance(element, Template) and _is_main_article_link(element)
        )
        content_elements = tuple(
            element for element in direct_content if not _is_main_article_link(element)
        )

        sections.append(
            Section(
                heading=heading,
                main_article_links=main_article_links,
                content_elements=content_elements,
                subsections=tuple(_build_sections(block[subsection_start:], level + 1)),
            )
        )
        i = block_end

    return sections
