"""Unit tests for the page assembler (parse_page)."""

import pytest

from wikitext_parser import Page, Section, parse_page
from wikitext_parser.errors import InvalidUsageError
from wikitext_parser.parsers import (
    Category,
    Heading,
    Paragraph,
    Table,
    Template,
    Text,
    WikiKeyValuePair,
)


def _title(section: Section) -> str:
    assert isinstance(section.heading.child, Text)
    return section.heading.child.source_text


class TestLeadAndInfobox:
    """Tests for infobox extraction and lead content."""

    @pytest.mark.unit
    def test_empty_page(self) -> None:
        """Should return an empty Page for empty input."""
        assert parse_page("") == Page()

    @pytest.mark.unit
    def test_page_without_headings(self) -> None:
        """Should put everything in the lead when there are no headings."""
        page = parse_page("First.\n\nSecond.")
        assert page.infobox is None
        assert len(page.lead_content) == 2
        assert page.sections == ()

    @pytest.mark.unit
    def test_infobox_is_removed_from_lead(self) -> None:
        """Should keep the infobox apart from the lead content."""
        page = parse_page("{{Infobox person\n| name = Ada\n}}\nAda was a mathematician.")
        assert page.infobox is not None
        assert page.infobox.infobox_type == "person"
        assert [e.type for e in page.lead_content] == ["paragraph"]

    @pytest.mark.unit
    def test_single_line_infobox(self) -> None:
        """Should find an infobox written on a single line."""
        page = parse_page("{{Infobox person|name=X}}\nLead.\n==A==\nText")
        assert page.infobox is not None
        assert page.infobox.infobox_type == "person"
        assert len(page.lead_content) == 1
        assert len(page.sections) == 1

    @pytest.mark.unit
    def test_only_first_infobox_is_taken(self) -> None:
        """Should leave later infoboxes in place."""
        page = parse_page("{{Infobox a|x=1}}\n{{Infobox b|y=2}}")
        assert page.infobox is not None
        assert page.infobox.name == "Infobox a"
        (other,) = page.lead_content
        assert isinstance(other, Template)
        assert other.name == "Infobox b"

    @pytest.mark.unit
    def test_infobox_removal_keeps_surrounding_order(self) -> None:
        """Should remove only the infobox and keep its neighbours in order."""
        page = parse_page("{{Short description|X}}\n{{Infobox person|name=Y}}\nLead.")
        assert page.infobox is not None
        assert page.infobox.name == "Infobox person"
        assert [e.type for e in page.lead_content] == ["key_value_pair", "paragraph"]

    @pytest.mark.unit
    def test_infobox_after_heading(self) -> None:
        """Should take the infobox even when it appears inside a section."""
        page = parse_page("==A==\n{{Infobox person|name=X}}\nText")
        assert page.infobox is not None
        assert page.sections[0].content_elements[0].type == "paragraph"

    @pytest.mark.unit
    def test_rejects_non_string(self) -> None:
        """Should raise InvalidUsageError for non-str input."""
        with pytest.raises(InvalidUsageError):
            parse_page(None)  # type: ignore[arg-type]


class TestSections:
    """Tests for folding headings into sections."""

    @pytest.mark.unit
    def test_two_sections_with_subsection(self) -> None:
        """Should nest ===A.1=== under ==A== and start a new section at ==B==."""
        page = parse_page("==A==\n===A.1===\n==B==")
        assert [_title(s) for s in page.sections] == ["A", "B"]
        (subsection,) = page.sections[0].subsections
        assert _title(subsection) == "A.1"
        assert subsection.level == 3
        assert page.sections[1].subsections == ()

    @pytest.mark.unit
    def test_content_before_first_subsection(self) -> None:
        """Should split direct content from subsection content."""
        page = parse_page("==A==\nIntro.\n===A.1===\nDetail.")
        (section,) = page.sections
        assert [e.source_text for e in section.content_elements] == ["Intro."]
        (subsection,) = section.subsections
        assert [e.source_text for e in subsection.content_elements] == ["Detail."]

    @pytest.mark.unit
    def test_deep_nesting(self) -> None:
        """Should nest level 4 headings under level 3."""
        page = parse_page("==A==\n===B===\n====C====\nText\n===D===")
        (section,) = page.sections
        b, d = section.subsections
        (c,) = b.subsections
        assert (_title(b), _title(c), _title(d)) == ("B", "C", "D")
        assert [e.source_text for e in c.content_elements] == ["Text"]

    @pytest.mark.unit
    def test_skipped_level_is_not_a_subsection(self) -> None:
        """Should drop a level 4 heading that directly follows a level 2 one."""
        page = parse_page("==A==\n====Deep====\nText")
        (section,) = page.sections
        assert section.content_elements == ()
        assert section.subsections == ()

    @pytest.mark.unit
    def test_main_article_links(self) -> None:
        """Should pull {{Main}} and {{See also}} into main_article_links."""
        page = parse_page("==A==\n{{Main|Article 1|Article 2|l1=Label}}\n{{See also|B}}\nText")
        (section,) = page.sections
        assert [t.name for t in section.main_article_links] == ["Main", "See also"]
        assert len(section.main_article_links[0].parameters) == 3
        assert [e.type for e in section.content_elements] == ["paragraph"]

    @pytest.mark.unit
    def test_main_link_after_subsection_stays_in_subsection(self) -> None:
        """Should attach {{Main}} to the innermost enclosing section."""
        page = parse_page("==A==\n===B===\n{{Main|Deep}}")
        (section,) = page.sections
        assert section.main_article_links == ()
        assert [t.name for t in section.subsections[0].main_article_links] == ["Main"]

    @pytest.mark.unit
    def test_lead_before_first_heading(self) -> None:
        """Should collect metadata and text before the first heading as lead."""
        page = parse_page("{{Short description|X}}\nLead.\n==A==\nBody")
        assert [e.type for e in page.lead_content] == ["key_value_pair", "paragraph"]
        assert isinstance(page.sections[0].heading, Heading)


class TestFullPage:
    """Tests against the fictional town sample."""

    @pytest.mark.unit
    def test_infobox_and_lead(self, fictional_town: str) -> None:
        """Should find the settlement infobox and a two-element lead."""
        page = parse_page(fictional_town)
        assert page.infobox is not None
        assert page.infobox.is_infobox_of_type("settlement")
        assert isinstance(page.lead_content[0], WikiKeyValuePair)
        assert isinstance(page.lead_content[1], Paragraph)

    @pytest.mark.unit
    def test_section_tree(self, fictional_town: str) -> None:
        """Should build History (with two subsections), Geography and References."""
        page = parse_page(fictional_town)
        assert [_title(s) for s in page.sections] == ["History", "Geography", "References"]

        history = page.sections[0]
        assert [t.name for t in history.main_article_links] == ["Main"]
        assert [e.type for e in history.content_elements] == ["paragraph"]
        assert [_title(s) for s in history.subsections] == ["Early years", "Modern era"]

        early_years, modern_era = history.subsections
        assert [t.name for t in early_years.main_article_links] == ["See also"]
        (table,) = modern_era.content_elements
        assert isinstance(table, Table)
        assert table.attributes == 'class="wikitable"'

    @pytest.mark.unit
    def test_categories_end_up_in_last_section(self, fictional_town: str) -> None:
        """Should keep trailing categories in the section they follow."""
        references = parse_page(fictional_town).sections[-1]
        categories = [e for e in references.content_elements if isinstance(e, Category)]
        assert [(c.name, c.sort_key) for c in categories] == [
            ("Fictional towns", None),
            ("Millbrook", " "),
        ]
