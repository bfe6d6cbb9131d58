"""Inline markdown: mark rendering and tokenizing.

Rendering wraps each text run in its marks in list order, so the first
mark ends up innermost.
Tokenizing scans a line for the earliest special-character run and emits
alternating plain and single-mark text nodes. Nested marks are never
produced on the way in; ``**a *b* c**`` does not become strong+em.
"""

import re
from typing import Callable, List, Optional, Tuple

from src.adf.adf_models import (
    CODE,
    EM,
    STRIKE,
    STRONG,
    AdfMark,
    AdfNode,
    HardBreak,
    MarkType,
    Text,
)

# Tried in this order at every scan position
INLINE_PATTERNS: List[Tuple[re.Pattern, Callable[[re.Match], AdfMark]]] = [
    (re.compile(r'\*\*([^*]+)\*\*'), lambda m: STRONG),
    (re.compile(r'\*([^*]+)\*'), lambda m: EM),
    (re.compile(r'`([^`]+)`'), lambda m: CODE),
    (re.compile(r'\[([^\]]+)\]\(([^)]+)\)'), lambda m: AdfMark.link(m.group(2))),
    (re.compile(r'~~([^~]+)~~'), lambda m: STRIKE),
]

SPECIAL_CHARS = re.compile(r'[*`\[~]')


def render_marks(text: str, marks: List[AdfMark]) -> str:
    """Wrap text in the markdown syntax of each mark, in order."""
    for mark in marks:
        if mark.type is MarkType.STRONG:
            text = f"**{text}**"
        elif mark.type is MarkType.EM:
            text = f"*{text}*"
        elif mark.type is MarkType.CODE:
            text = f"`{text}`"
        elif mark.type is MarkType.LINK:
            text = f"[{text}]({mark.href or ''})"
        elif mark.type is MarkType.STRIKE:
            text = f"~~{text}~~"
    return text


def render_inline(nodes: List[AdfNode], block_renderer: Callable[[AdfNode], str]) -> str:
    """Render a sequence of inline nodes to markdown.

    Args:
        nodes: Inline children of a text-bearing node
        block_renderer: Fallback for non-inline nodes found in inline position

    Returns:
        Concatenated markdown for the inline content
    """
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(render_marks(node.text, node.marks))
        elif isinstance(node, HardBreak):
            parts.append("\n")
        else:
            parts.append(block_renderer(node))
    return "".join(parts)


def _match_marked(text: str, pos: int) -> Optional[Tuple[Text, int]]:
    for pattern, make_mark in INLINE_PATTERNS:
        match = pattern.match(text, pos)
        if match:
            return Text(text=match.group(1), marks=[make_mark(match)]), match.end()
    return None


def tokenize_inline(text: str) -> List[AdfNode]:
    """Split a line of markdown into text nodes.

    Adjacent unmarked runs are merged, so the output alternates between
    plain text and single-mark text. A stray special character therefore
    stays inside its run: "a * b" is one text node, not three.

    Args:
        text: One line of inline markdown

    Returns:
        List of Text nodes (empty for empty input)
    """
    if not text:
        return []

    nodes: List[AdfNode] = []
    plain: List[str] = []
    pos = 0

    def flush_plain():
        if plain:
            nodes.append(Text(text="".join(plain)))
            plain.clear()

    while pos < len(text):
        marked = _match_marked(text, pos)
        if marked:
            flush_plain()
            node, pos = marked
            nodes.append(node)
            continue

        # Advance to the next special character, at least one character
        special = SPECIAL_CHARS.search(text, pos + 1)
        end = special.start() if special else len(text)
        plain.append(text[pos:end])
        pos = end

    flush_plain()
    return nodes or [Text(text=text)]
