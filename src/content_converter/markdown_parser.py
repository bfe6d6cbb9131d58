"""Parser from markdown text to the ADF node tree.

A cursor walks the input lines. At each position the block recognizers are
tried in a fixed priority order; the first whose predicate accepts the
current line consumes one or more lines and returns at most one node.
Changing the order changes behaviour, e.g. a panel line must be seen by the
quote recognizer before the paragraph fallback.

Blockquotes re-enter the line parser on their dequoted content. Recursion is
bounded by max_quote_depth; past it, quoted lines become plain paragraphs.
"""

import logging
import re
from typing import Callable, List, NamedTuple, Optional

from src.adf.adf_models import (
    PANEL_ICONS,
    AdfNode,
    Blockquote,
    BulletList,
    CodeBlock,
    Heading,
    ListItem,
    OrderedList,
    Panel,
    PanelType,
    Paragraph,
    Rule,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    clamp_heading_level,
)

from .inline_markdown import tokenize_inline

logger = logging.getLogger(__name__)

HEADING_MARKER = re.compile(r'^#+')
ORDERED_ITEM = re.compile(r'^\d+\. ')
LIST_MARKER = re.compile(r'^(\d+\. |- |\* )')
CODE_FENCE = '```'
QUOTE_PREFIX = '> '
TABLE_PREFIX = '| '
TABLE_ROW_START = '|'
RULE_LINE = '---'

PANEL_PATTERN = re.compile(
    r'^> (' + '|'.join(re.escape(icon) for icon in PANEL_ICONS.values()) + r') \*\*(\w+):\*\* (.+)$'
)

DEFAULT_MAX_QUOTE_DEPTH = 32


class BlockResult(NamedTuple):
    """Outcome of one recognizer step: the node (or None) and the next cursor."""
    node: Optional[AdfNode]
    next_index: int


class _Recognizer(NamedTuple):
    name: str
    accepts: Callable[[str], bool]
    consume: Callable[[List[str], int, int], BlockResult]


def _is_bullet_item(line: str) -> bool:
    return line.startswith('- ') or line.startswith('* ')


def _is_quote_line(line: str) -> bool:
    # An empty quoted line is written as "> " but may lose its trailing space
    return line.startswith(QUOTE_PREFIX) or line.rstrip() == '>'


def _dequote(line: str) -> str:
    return line[len(QUOTE_PREFIX):] if line.startswith(QUOTE_PREFIX) else ''


class MarkdownParser:
    """Parses markdown into a list of top-level ADF block nodes.

    The parser is stateless between calls; one instance may be shared
    across threads.
    """

    def __init__(self, max_quote_depth: int = DEFAULT_MAX_QUOTE_DEPTH):
        self.max_quote_depth = max_quote_depth
        self._recognizers: List[_Recognizer] = [
            _Recognizer('blank', lambda line: line == '', self._skip_blank),
            _Recognizer('heading', lambda line: line.startswith('#'), self._consume_heading),
            _Recognizer('code', lambda line: line.startswith(CODE_FENCE), self._consume_code_block),
            _Recognizer('quote', lambda line: line.startswith(QUOTE_PREFIX), self._consume_quote),
            _Recognizer(
                'list',
                lambda line: _is_bullet_item(line) or bool(ORDERED_ITEM.match(line)),
                self._consume_list,
            ),
            _Recognizer('table', lambda line: line.startswith(TABLE_PREFIX), self._consume_table),
            _Recognizer('rule', lambda line: line == RULE_LINE, self._consume_rule),
            _Recognizer('paragraph', lambda line: True, self._consume_paragraph),
        ]

    def parse(self, content: str) -> List[AdfNode]:
        """Parse a markdown body (without frontmatter) into block nodes.

        Args:
            content: Markdown text; empty input yields an empty list

        Returns:
            Top-level block nodes in document order
        """
        if not content:
            return []
        return self._parse_lines(content.split('\n'), depth=0)

    def _parse_lines(self, lines: List[str], depth: int) -> List[AdfNode]:
        nodes: List[AdfNode] = []
        index = 0
        while index < len(lines):
            result = self._parse_block(lines, index, depth)
            if result.node is not None:
                nodes.append(result.node)
            index = result.next_index
        return nodes

    def _parse_block(self, lines: List[str], start: int, depth: int) -> BlockResult:
        line = lines[start].strip()
        for recognizer in self._recognizers:
            if recognizer.accepts(line):
                result = recognizer.consume(lines, start, depth)
                logger.debug(
                    f"Line {start}: {recognizer.name} consumed "
                    f"{result.next_index - start} line(s)"
                )
                return result
        # Unreachable: the paragraph recognizer accepts everything
        return BlockResult(None, start + 1)

    def _skip_blank(self, lines: List[str], start: int, depth: int) -> BlockResult:
        return BlockResult(None, start + 1)

    def _consume_heading(self, lines: List[str], start: int, depth: int) -> BlockResult:
        line = lines[start].strip()
        marker_length = len(HEADING_MARKER.match(line).group(0))
        level = clamp_heading_level(marker_length)
        if level != marker_length:
            logger.debug(f"Clamping heading level {marker_length} to {level}")
        text = line[marker_length:].strip()
        return BlockResult(Heading(content=tokenize_inline(text), level=level), start + 1)

    def _consume_code_block(self, lines: List[str], start: int, depth: int) -> BlockResult:
        language = lines[start].strip()[len(CODE_FENCE):].strip()
        index = start + 1
        code_lines = []
        while index < len(lines) and not lines[index].lstrip().startswith(CODE_FENCE):
            code_lines.append(lines[index])
            index += 1

        node = CodeBlock(text='\n'.join(code_lines), language=language or None)
        # Skip the closing fence (no-op at end of input)
        return BlockResult(node, index + 1)

    def _consume_quote(self, lines: List[str], start: int, depth: int) -> BlockResult:
        line = lines[start].strip()
        panel_match = PANEL_PATTERN.match(line)
        if panel_match:
            icon, _label, rest = panel_match.groups()
            panel = Panel(
                content=[Paragraph(content=tokenize_inline(rest))],
                panel_type=PanelType.from_icon(icon).value,
            )
            return BlockResult(panel, start + 1)

        index = start
        quoted_lines = []
        while index < len(lines) and _is_quote_line(lines[index].lstrip()):
            quoted_lines.append(_dequote(lines[index].lstrip()))
            index += 1

        if depth + 1 > self.max_quote_depth:
            logger.warning(
                f"Blockquote nesting exceeds {self.max_quote_depth} levels; "
                f"keeping remaining quoted lines as paragraphs"
            )
            content = [
                Paragraph(content=tokenize_inline(quoted.strip()))
                for quoted in quoted_lines
                if quoted.strip()
            ]
        else:
            content = self._parse_lines(quoted_lines, depth + 1)

        return BlockResult(Blockquote(content=content), index)

    def _consume_list(self, lines: List[str], start: int, depth: int) -> BlockResult:
        ordered = bool(ORDERED_ITEM.match(lines[start].strip()))
        index = start
        items = []
        while index < len(lines):
            current = lines[index].strip()
            if current == '':
                index += 1
                continue

            is_item = bool(ORDERED_ITEM.match(current)) if ordered else _is_bullet_item(current)
            if not is_item:
                break

            text = LIST_MARKER.sub('', current, count=1)
            items.append(ListItem(content=[Paragraph(content=tokenize_inline(text))]))
            index += 1

        node = OrderedList(content=items) if ordered else BulletList(content=items)
        return BlockResult(node, index)

    def _consume_table(self, lines: List[str], start: int, depth: int) -> BlockResult:
        index = start
        rows = []
        # Continuation rows may be compact, e.g. a |---|---| separator
        while index < len(lines) and lines[index].strip().startswith(TABLE_ROW_START):
            current = lines[index].strip()
            index += 1
            if RULE_LINE in current:
                continue

            cell_class = TableHeader if not rows else TableCell
            cells = [cell.strip() for cell in current.split('|')[1:-1]]
            rows.append(TableRow(content=[
                cell_class(content=[Paragraph(content=tokenize_inline(cell))])
                for cell in cells
            ]))

        return BlockResult(Table(content=rows), index)

    def _consume_rule(self, lines: List[str], start: int, depth: int) -> BlockResult:
        return BlockResult(Rule(), start + 1)

    def _consume_paragraph(self, lines: List[str], start: int, depth: int) -> BlockResult:
        text = lines[start].strip()
        return BlockResult(Paragraph(content=tokenize_inline(text)), start + 1)
