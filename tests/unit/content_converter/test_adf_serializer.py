"""Unit tests for content_converter.adf_serializer module."""

import pytest

from src.adf.adf_models import (
    EM,
    STRONG,
    AdfDocument,
    Blockquote,
    BulletList,
    CodeBlock,
    HardBreak,
    Heading,
    ListItem,
    OrderedList,
    Panel,
    Paragraph,
    Rule,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    Text,
    UnknownNode,
)
from src.content_converter.adf_serializer import AdfSerializer


def para(text: str) -> Paragraph:
    return Paragraph(content=[Text(text)])


def item(text: str) -> ListItem:
    return ListItem(content=[para(text)])


@pytest.fixture
def serializer() -> AdfSerializer:
    return AdfSerializer()


def serialize(serializer: AdfSerializer, *nodes) -> str:
    return serializer.serialize(AdfDocument(content=list(nodes)))


class TestBlockRendering:
    """Test cases for block-level renderers."""

    def test_empty_document(self, serializer):
        assert serialize(serializer) == ""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, serializer, level):
        heading = Heading(content=[Text("Title")], level=level)

        assert serialize(serializer, heading) == "#" * level + " Title"

    def test_paragraphs_are_separated_by_blank_line(self, serializer):
        assert serialize(serializer, para("One"), para("Two")) == "One\n\nTwo"

    def test_paragraph_with_marks_and_hard_break(self, serializer):
        paragraph = Paragraph(content=[Text("bold", [STRONG]), HardBreak(), Text("it", [EM])])

        assert serialize(serializer, paragraph) == "**bold**\n*it*"

    def test_code_block_with_language(self, serializer):
        code = CodeBlock(text="def f():\n    return 1", language="python")

        assert serialize(serializer, code) == "```python\ndef f():\n    return 1\n```"

    def test_code_block_without_language(self, serializer):
        assert serialize(serializer, CodeBlock(text="x")) == "```\nx\n```"

    def test_blockquote_prefixes_every_line(self, serializer):
        quote = Blockquote(content=[para("One"), para("Two")])

        assert serialize(serializer, quote) == "> One\n> \n> Two"

    def test_nested_blockquote(self, serializer):
        quote = Blockquote(content=[Blockquote(content=[para("Deep")])])

        assert serialize(serializer, quote) == "> > Deep"

    @pytest.mark.parametrize("panel_type,expected", [
        ("info", "> \u2139\ufe0f **Info:** Body"),
        ("warning", "> \u26a0\ufe0f **Warning:** Body"),
        ("error", "> \u274c **Error:** Body"),
        ("success", "> \u2705 **Success:** Body"),
        ("note", "> \U0001f4dd **Note:** Body"),
    ])
    def test_panel(self, serializer, panel_type, expected):
        panel = Panel(content=[para("Body")], panel_type=panel_type)

        assert serialize(serializer, panel) == expected

    def test_unknown_panel_type_uses_info_icon(self, serializer):
        panel = Panel(content=[para("Body")], panel_type="custom")

        assert serialize(serializer, panel) == "> \u2139\ufe0f **Custom:** Body"

    def test_bullet_list(self, serializer):
        bullets = BulletList(content=[item("Apple"), item("Banana")])

        assert serialize(serializer, bullets) == "- Apple\n- Banana"

    def test_ordered_list(self, serializer):
        ordered = OrderedList(content=[item("First"), item("Second"), item("Third")])

        assert serialize(serializer, ordered) == "1. First\n2. Second\n3. Third"

    def test_list_is_followed_by_single_newline(self, serializer):
        bullets = BulletList(content=[item("a")])

        assert serialize(serializer, bullets, para("after")) == "- a\nafter"

    def test_nested_list_is_indented(self, serializer):
        nested = ListItem(content=[
            para("Parent"),
            BulletList(content=[item("Child")]),
        ])
        bullets = BulletList(content=[nested])

        assert serialize(serializer, bullets) == "- Parent\n\n  - Child"

    def test_table(self, serializer):
        table = Table(content=[
            TableRow(content=[
                TableHeader(content=[para("Header 1")]),
                TableHeader(content=[para("Header 2")]),
            ]),
            TableRow(content=[
                TableCell(content=[para("Cell 1")]),
                TableCell(content=[para("Cell 2")]),
            ]),
        ])

        assert serialize(serializer, table) == (
            "| Header 1 | Header 2 |\n| --- | --- |\n| Cell 1 | Cell 2 |"
        )

    def test_multi_paragraph_cell_is_flattened(self, serializer):
        table = Table(content=[
            TableRow(content=[TableHeader(content=[para("a"), para("b")])]),
        ])

        assert serialize(serializer, table) == "| a  b |\n| --- |"

    def test_rule(self, serializer):
        assert serialize(serializer, para("above"), Rule(), para("below")) == "above\n\n---\n\nbelow"


class TestFallbackRendering:
    """Test cases for nodes outside the block renderer table."""

    def test_unknown_block_renders_children(self, serializer):
        expand = UnknownNode(type="expand", content=[para("Hidden")])

        assert serialize(serializer, expand) == "Hidden"

    def test_unknown_inline_node_without_children_renders_nothing(self, serializer):
        paragraph = Paragraph(content=[
            Text("Hi "),
            UnknownNode(type="mention", attrs={"id": "abc"}),
            Text("!"),
        ])

        assert serialize(serializer, paragraph) == "Hi !"

    def test_bare_text_at_block_level(self, serializer):
        assert serialize(serializer, Text("loose", [STRONG])) == "**loose**"

    def test_stray_list_item(self, serializer):
        assert serialize(serializer, item("alone")) == "- alone"
