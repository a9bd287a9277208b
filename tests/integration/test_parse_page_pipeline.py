"""Integration tests for the full parse -> page -> render pipeline.

These tests run whole sample articles through parse_page and the
renderers, and cross-check the top-level structure against
mwparserfromhell.
"""

from typing import TYPE_CHECKING

import mwparserfromhell
import pytest

from wikitext_parser import (
    Heading,
    Image,
    Italic,
    Link,
    Paragraph,
    Ref,
    Template,
    Text,
    WikiKeyValuePair,
    parse,
    parse_page,
    to_html,
    to_text,
)

if TYPE_CHECKING:
    from wikitext_parser import Element


def _top_level_template_names(elements: "list[Element]") -> list[str]:
    names: list[str] = []
    for element in elements:
        if isinstance(element, Template):
            names.append(element.name)
        elif isinstance(element, WikiKeyValuePair):
            names.append(element.key)
    return names


class TestParsePagePipeline:
    """Integration tests for full article processing."""

    @pytest.mark.integration
    def test_television_series_lead(self, television_series: str) -> None:
        """Should extract the infobox and parse the lead paragraph inline."""
        page = parse_page(television_series)

        assert page.infobox is not None
        assert page.infobox.is_infobox_of_type("television")
        assert page.sections == ()

        *metadata, lead = page.lead_content
        assert [m.type for m in metadata] == ["key_value_pair"] * 3
        assert isinstance(lead, Paragraph)

        title = lead.children[0]
        assert isinstance(title, Italic)
        assert title.inner.type == "bold"

        links = [c for c in lead.children if isinstance(c, Link)]
        assert [link.display_text for link in links] == ["Science fiction", "Jane Doe"]

        (ref,) = [c for c in lead.children if isinstance(c, Ref)]
        assert ref.name == "deadline"
        assert isinstance(ref.child, Template)
        assert ref.child.name == "Cite web"

        assert lead.children[-1].type == "comment"

    @pytest.mark.integration
    def test_television_series_text(self, television_series: str) -> None:
        """Should render the lead as clean prose."""
        text = to_text(parse_page(television_series))
        assert text == (
            "Mystery Grove is an American Science fiction drama television series "
            "created by Jane Doe. The second season premiered in 2024."
        )

    @pytest.mark.integration
    def test_fictional_town_html(self, fictional_town: str) -> None:
        """Should render headings, the table and the image in page order."""
        html = to_html(parse_page(fictional_town))

        assert html.startswith("<p><strong>Millbrook</strong> is a fictional town.<sup>")
        positions = [
            html.index("<h2>History</h2>"),
            html.index("<h3>Early years</h3>"),
            html.index("<h3>Modern era</h3>"),
            html.index('<table class="wikitable">'),
            html.index("<h2>Geography</h2>"),
            html.index('<img src="https://commons.wikimedia.org/wiki/File:Millbrook_river.jpg"'),
            html.index("<h2>References</h2>"),
        ]
        assert positions == sorted(positions)
        assert "<th>Year</th><th>Population</th>" in html
        assert "Infobox" not in html
        assert "History of Millbrook" not in html

    @pytest.mark.integration
    def test_fictional_town_image(self, fictional_town: str) -> None:
        """Should parse the Geography image with its options and caption."""
        geography = parse_page(fictional_town).sections[1]
        (paragraph,) = geography.content_elements
        assert isinstance(paragraph, Paragraph)
        image = paragraph.children[0]
        assert isinstance(image, Image)
        assert image.options == ("thumb", "220px")
        assert image.caption == "The river in spring"
        assert paragraph.children[1] == Text("\nThe town lies on a river.")


class TestMwparserfromhellParity:
    """Cross-checks against mwparserfromhell's view of the same page."""

    @pytest.mark.integration
    @pytest.mark.parametrize("fixture_name", ["television_series", "fictional_town"])
    def test_top_level_templates(self, fixture_name: str, request: pytest.FixtureRequest) -> None:
        """Should find the same top-level templates, in the same order."""
        source: str = request.getfixturevalue(fixture_name)
        expected = [
            str(template.name).strip()
            for template in mwparserfromhell.parse(source).filter_templates(recursive=False)
        ]
        assert _top_level_template_names(parse(source)) == expected

    @pytest.mark.integration
    def test_headings(self, fictional_town: str) -> None:
        """Should find the same heading levels and titles."""
        expected = [
            (heading.level, str(heading.title).strip())
            for heading in mwparserfromhell.parse(fictional_town).filter_headings()
        ]
        actual = [
            (element.level, element.child.source_text)
            for element in parse(fictional_town)
            if isinstance(element, Heading)
        ]
        assert actual == expected
