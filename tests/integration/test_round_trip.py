"""Integration tests for ADF ↔ markdown round trips.

Round trips run through the public MarkdownConverter facade: ADF dict →
markdown → ADF tree, and markdown → ADF → markdown.
"""

import pytest

from src.content_converter.markdown_converter import MarkdownConverter
from tests.fixtures.adf_fixtures import (
    ADF_COMPLEX,
    ADF_MINIMAL,
    ADF_WITH_MARKS,
    ADF_WITH_PANELS,
    ADF_WITH_TABLE,
    count_nodes_by_type,
    create_adf_doc,
    create_code_block,
    create_heading,
    create_list,
    create_paragraph,
    create_rule,
    extract_text_content,
)
from tests.fixtures.sample_markdown import (
    SAMPLE_MARKDOWN_CANONICAL,
    SAMPLE_MARKDOWN_SIMPLE,
    SAMPLE_MARKDOWN_WITH_FRONTMATTER,
)


def adf_round_trip(converter: MarkdownConverter, adf: dict) -> dict:
    markdown = converter.adf_to_markdown(adf)
    return converter.markdown_to_adf(markdown).document.to_dict()


class TestAdfRoundTrip:
    """ADF → markdown → ADF recovers the same tree."""

    @pytest.mark.parametrize("adf", [
        ADF_MINIMAL,
        ADF_WITH_MARKS,
        ADF_WITH_PANELS,
        ADF_WITH_TABLE,
        ADF_COMPLEX,
    ], ids=["minimal", "marks", "panels", "table", "complex"])
    def test_fixture_documents(self, converter, adf):
        assert adf_round_trip(converter, adf) == adf

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, converter, level):
        adf = create_adf_doc([create_heading("Title", level)])

        assert adf_round_trip(converter, adf) == adf

    @pytest.mark.parametrize("language", ["python", None])
    def test_code_blocks(self, converter, language):
        adf = create_adf_doc([create_code_block("a = 1\n\nb = 2", language)])

        assert adf_round_trip(converter, adf) == adf

    def test_ordered_and_bullet_lists(self, converter):
        adf = create_adf_doc([
            create_list(["one", "two"], ordered=True),
            create_list(["x", "y"]),
        ])

        assert adf_round_trip(converter, adf) == adf

    def test_rule_between_paragraphs(self, converter):
        adf = create_adf_doc([
            create_heading("Before", 2),
            create_rule(),
            create_heading("After", 2),
        ])

        assert adf_round_trip(converter, adf) == adf

    @pytest.mark.parametrize("content", [
        [create_rule()],
        [create_rule(), create_rule()],
        [create_rule(), create_paragraph("x"), create_rule()],
    ], ids=["rule", "two-rules", "rules-around-paragraph"])
    def test_rules_at_document_edges(self, converter, content):
        adf = create_adf_doc(content)

        assert adf_round_trip(converter, adf) == adf

    def test_text_survives(self, converter):
        result = adf_round_trip(converter, ADF_COMPLEX)

        assert extract_text_content(result) == extract_text_content(ADF_COMPLEX)
        assert count_nodes_by_type(result, "listItem") == 4


class TestMarkdownRoundTrip:
    """Markdown → ADF → markdown reproduces canonical markdown."""

    def test_canonical_markdown_is_stable(self, converter):
        result = converter.markdown_to_adf(SAMPLE_MARKDOWN_CANONICAL)

        assert converter.adf_to_markdown(result.document) == SAMPLE_MARKDOWN_CANONICAL

    def test_frontmatter_survives(self, converter):
        result = converter.markdown_to_adf(SAMPLE_MARKDOWN_WITH_FRONTMATTER)

        markdown = converter.adf_to_markdown(result.document, result.metadata)

        assert markdown == SAMPLE_MARKDOWN_WITH_FRONTMATTER.rstrip()

    def test_second_pass_is_fixed_point(self, converter):
        first = converter.adf_to_markdown(converter.markdown_to_adf(SAMPLE_MARKDOWN_SIMPLE).document)
        second = converter.adf_to_markdown(converter.markdown_to_adf(first).document)

        assert second == first

    def test_mixed_content_document(self, converter):
        markdown = (
            "# Title\n\n"
            "Paragraph with **bold**.\n\n"
            "- Item 1\n- Item 2\n\n"
            "```python\nprint('hello')\n```\n\n"
            "> \u2139\ufe0f **Info:** This is an info panel"
        )

        document = converter.markdown_to_adf(markdown).document

        assert [node.type_name for node in document.content] == [
            "heading", "paragraph", "bulletList", "codeBlock", "panel",
        ]
