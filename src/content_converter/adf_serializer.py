"""Serializer from the ADF node tree to markdown.

Walks the tree depth-first and dispatches each node to a renderer keyed by
its class. Fragments are concatenated in document order; the caller trims
the final result.
"""

import logging
from typing import Callable, Dict, List

from src.adf.adf_models import (
    AdfDocument,
    AdfNode,
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
)

from .inline_markdown import render_inline

logger = logging.getLogger(__name__)

LIST_INDENT = "  "
TABLE_SEPARATOR_CELL = "---"


class AdfSerializer:
    """Renders ADF nodes as markdown fragments.

    Each block renderer returns its fragment including the trailing blank
    line(s) that separate it from the next block. Unrecognised node kinds
    render as the concatenation of their children.
    """

    def __init__(self):
        self._renderers: Dict[type, Callable[[AdfNode, int], str]] = {
            Paragraph: self._render_paragraph,
            Heading: self._render_heading,
            CodeBlock: self._render_code_block,
            Blockquote: self._render_blockquote,
            Panel: self._render_panel,
            BulletList: self._render_bullet_list,
            OrderedList: self._render_ordered_list,
            ListItem: self._render_list_item,
            Table: self._render_table,
            Rule: self._render_rule,
            Text: self._render_inline_node,
            HardBreak: self._render_inline_node,
        }

    def serialize(self, document: AdfDocument) -> str:
        """Render every top-level node and trim surrounding whitespace.

        Args:
            document: Document tree to render

        Returns:
            Markdown body without front-matter
        """
        return "".join(self.render_node(node) for node in document.content).strip()

    def render_node(self, node: AdfNode, depth: int = 0) -> str:
        """Render one node (and its subtree) at the given list depth."""
        renderer = self._renderers.get(type(node))
        if renderer is None:
            logger.debug(f"Rendering '{node.type_name}' as pass-through container")
            return self._render_children(node.children, depth)
        return renderer(node, depth)

    def _render_children(self, children: List[AdfNode], depth: int) -> str:
        return "".join(self.render_node(child, depth) for child in children)

    def _inline(self, nodes: List[AdfNode]) -> str:
        return render_inline(nodes, self.render_node)

    def _render_inline_node(self, node: AdfNode, depth: int) -> str:
        return self._inline([node])

    def _render_paragraph(self, node: Paragraph, depth: int) -> str:
        return self._inline(node.content) + "\n\n"

    def _render_heading(self, node: Heading, depth: int) -> str:
        return "#" * node.level + " " + self._inline(node.content) + "\n\n"

    def _render_code_block(self, node: CodeBlock, depth: int) -> str:
        return f"```{node.language or ''}\n{node.text}\n```\n\n"

    def _render_blockquote(self, node: Blockquote, depth: int) -> str:
        inner = self._render_children(node.content, depth + 1).rstrip("\n")
        quoted = "\n".join("> " + line for line in inner.split("\n"))
        return quoted + "\n\n"

    def _render_panel(self, node: Panel, depth: int) -> str:
        icon = node.kind.icon
        label = node.panel_type[:1].upper() + node.panel_type[1:]
        body = self._render_children(node.content, 0).strip()
        return f"> {icon} **{label}:** {body}\n\n"

    def _render_bullet_list(self, node: BulletList, depth: int) -> str:
        return self._render_list(node, depth, ordered=False) + "\n"

    def _render_ordered_list(self, node: OrderedList, depth: int) -> str:
        return self._render_list(node, depth, ordered=True) + "\n"

    def _render_list(self, node: AdfNode, depth: int, ordered: bool) -> str:
        indent = LIST_INDENT * depth
        lines = []
        for index, item in enumerate(node.children, start=1):
            marker = f"{index}." if ordered else "-"
            content = self._render_children(item.children, depth + 1).strip()
            lines.append(f"{indent}{marker} {content}")
        return "\n".join(lines)

    def _render_list_item(self, node: ListItem, depth: int) -> str:
        # A list item outside of a list renders as a lone bullet
        content = self._render_children(node.content, depth).strip()
        return f"{LIST_INDENT * depth}- {content}\n"

    def _render_table(self, node: Table, depth: int) -> str:
        rows = []
        header_done = False
        for row in node.content:
            if not isinstance(row, TableRow):
                continue
            cells = [self._render_cell(cell) for cell in row.content]
            rows.append("| " + " | ".join(cells) + " |")
            if not header_done:
                rows.append("| " + " | ".join(TABLE_SEPARATOR_CELL for _ in cells) + " |")
                header_done = True
        return "\n".join(rows) + "\n\n"

    def _render_cell(self, cell: AdfNode) -> str:
        if not isinstance(cell, (TableHeader, TableCell)):
            return ""
        return self._render_children(cell.content, 0).strip().replace("\n", " ")

    def _render_rule(self, node: Rule, depth: int) -> str:
        return "---\n\n"
