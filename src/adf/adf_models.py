"""Data models for ADF (Atlassian Document Format) documents.

ADF is a typed JSON tree: block nodes own ordered child content and text
nodes carry inline marks. Each node kind the converter understands has its
own dataclass with kind-specific fields, so renderers dispatch on the class
instead of probing optional keys. Anything outside that vocabulary is kept
as an UnknownNode and rendered as a pass-through container.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from .errors import AdfValidationError


class AdfNodeType(Enum):
    """Wire names of the ADF node kinds."""

    DOC = "doc"

    # Block nodes
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    CODE_BLOCK = "codeBlock"
    BLOCKQUOTE = "blockquote"
    PANEL = "panel"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_HEADER = "tableHeader"
    TABLE_CELL = "tableCell"
    RULE = "rule"

    # Inline nodes
    TEXT = "text"
    HARD_BREAK = "hardBreak"

    # Anything else
    UNKNOWN = "unknown"


class MarkType(Enum):
    """Inline formatting marks."""

    STRONG = "strong"
    EM = "em"
    CODE = "code"
    LINK = "link"
    STRIKE = "strike"


class PanelType(Enum):
    """Panel (callout) kinds and the glyph each renders with in markdown."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
    NOTE = "note"

    @property
    def icon(self) -> str:
        return PANEL_ICONS[self]

    @classmethod
    def from_icon(cls, icon: str) -> "PanelType":
        """Look up the panel type for a glyph, falling back to INFO."""
        for panel_type, panel_icon in PANEL_ICONS.items():
            if panel_icon == icon:
                return panel_type
        return cls.INFO


PANEL_ICONS: Dict[PanelType, str] = {
    PanelType.INFO: "\u2139\ufe0f",
    PanelType.WARNING: "\u26a0\ufe0f",
    PanelType.ERROR: "\u274c",
    PanelType.SUCCESS: "\u2705",
    PanelType.NOTE: "\U0001f4dd",
}

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6


def clamp_heading_level(level: int) -> int:
    """Clamp a heading level into the 1-6 range ADF allows."""
    return max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, level))


@dataclass(frozen=True)
class AdfMark:
    """A text mark (formatting) applied to a text node.

    Only links carry a payload; every other mark is a bare tag.

    Attributes:
        type: Mark kind
        href: Link target (required for links, None otherwise)
    """

    type: MarkType
    href: Optional[str] = None

    def __post_init__(self):
        if self.type is MarkType.LINK and self.href is None:
            raise AdfValidationError("link mark requires an href")
        if self.type is not MarkType.LINK and self.href is not None:
            raise AdfValidationError(f"{self.type.value} mark does not take an href")

    @classmethod
    def link(cls, href: str) -> "AdfMark":
        return cls(MarkType.LINK, href)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type.value}
        if self.href is not None:
            result["attrs"] = {"href": self.href}
        return result


STRONG = AdfMark(MarkType.STRONG)
EM = AdfMark(MarkType.EM)
CODE = AdfMark(MarkType.CODE)
STRIKE = AdfMark(MarkType.STRIKE)


@dataclass
class AdfNode:
    """Base class for every node in the ADF tree."""

    node_type: ClassVar[AdfNodeType] = AdfNodeType.UNKNOWN

    @property
    def type_name(self) -> str:
        return self.node_type.value

    @property
    def children(self) -> List["AdfNode"]:
        return []

    def attrs_dict(self) -> Dict[str, Any]:
        """Attributes as they appear on the wire (empty when none are set)."""
        return {}

    def get_text_content(self) -> str:
        """Extract all text content from this node and its children.

        Block-level children are joined with a space, inline children are
        concatenated directly.
        """
        texts = [child.get_text_content() for child in self.children]
        texts = [text for text in texts if text]
        if self.children and isinstance(self.children[0], BlockNode):
            return " ".join(texts)
        return "".join(texts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert this node back to ADF JSON format.

        Returns:
            Dictionary suitable for JSON serialization
        """
        result: Dict[str, Any] = {"type": self.type_name}
        attrs = self.attrs_dict()
        if attrs:
            result["attrs"] = attrs
        if self.children:
            result["content"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class BlockNode(AdfNode):
    """A block-level node that owns an ordered sequence of children."""

    content: List[AdfNode] = field(default_factory=list)

    @property
    def children(self) -> List[AdfNode]:
        return self.content


@dataclass
class Paragraph(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.PARAGRAPH


@dataclass
class Heading(BlockNode):
    """Heading with a level from 1 to 6."""

    node_type: ClassVar[AdfNodeType] = AdfNodeType.HEADING

    level: int = 1

    def __post_init__(self):
        if not MIN_HEADING_LEVEL <= self.level <= MAX_HEADING_LEVEL:
            raise AdfValidationError(
                f"heading level must be between {MIN_HEADING_LEVEL} and "
                f"{MAX_HEADING_LEVEL}, got {self.level}"
            )

    def attrs_dict(self) -> Dict[str, Any]:
        return {"level": self.level}


@dataclass
class CodeBlock(AdfNode):
    """Fenced code. The body is held directly; newlines are literal.

    Attributes:
        text: Full code body
        language: Optional language tag from the fence
    """

    node_type: ClassVar[AdfNodeType] = AdfNodeType.CODE_BLOCK

    text: str = ""
    language: Optional[str] = None

    @property
    def children(self) -> List[AdfNode]:
        return [Text(self.text)] if self.text else []

    def attrs_dict(self) -> Dict[str, Any]:
        if self.language:
            return {"language": self.language}
        return {}


@dataclass
class Blockquote(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.BLOCKQUOTE


@dataclass
class Panel(BlockNode):
    """Callout block.

    panel_type keeps the raw wire value so unrecognised kinds survive a
    round trip through the tree; use ``kind`` for the typed lookup.
    """

    node_type: ClassVar[AdfNodeType] = AdfNodeType.PANEL

    panel_type: str = PanelType.INFO.value

    @property
    def kind(self) -> PanelType:
        try:
            return PanelType(self.panel_type)
        except ValueError:
            return PanelType.INFO

    def attrs_dict(self) -> Dict[str, Any]:
        return {"panelType": self.panel_type}


@dataclass
class BulletList(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.BULLET_LIST


@dataclass
class OrderedList(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.ORDERED_LIST


@dataclass
class ListItem(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.LIST_ITEM


@dataclass
class Table(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.TABLE


@dataclass
class TableRow(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.TABLE_ROW


@dataclass
class TableHeader(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.TABLE_HEADER


@dataclass
class TableCell(BlockNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.TABLE_CELL


@dataclass
class Rule(AdfNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.RULE


@dataclass
class Text(AdfNode):
    """Inline text run.

    Attributes:
        text: Text payload
        marks: Formatting marks; the first is rendered innermost
    """

    node_type: ClassVar[AdfNodeType] = AdfNodeType.TEXT

    text: str = ""
    marks: List[AdfMark] = field(default_factory=list)

    def get_text_content(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type_name, "text": self.text}
        if self.marks:
            result["marks"] = [mark.to_dict() for mark in self.marks]
        return result


@dataclass
class HardBreak(AdfNode):
    node_type: ClassVar[AdfNodeType] = AdfNodeType.HARD_BREAK

    def get_text_content(self) -> str:
        return "\n"


@dataclass
class UnknownNode(AdfNode):
    """Node kind outside the converter's vocabulary (mention, media, ...).

    The raw type, attributes and children are preserved so the node can be
    written back to JSON unchanged and rendered as a pass-through container.
    """

    type: str = AdfNodeType.UNKNOWN.value
    attrs: Dict[str, Any] = field(default_factory=dict)
    content: List[AdfNode] = field(default_factory=list)
    text: Optional[str] = None

    @property
    def type_name(self) -> str:
        return self.type

    @property
    def children(self) -> List[AdfNode]:
        return self.content

    def attrs_dict(self) -> Dict[str, Any]:
        return dict(self.attrs)

    def get_text_content(self) -> str:
        if self.text:
            return self.text
        return super().get_text_content()

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.text is not None:
            result["text"] = self.text
        return result


# Lookup used by the JSON parser; UnknownNode is the fallback.
NODE_CLASSES: Dict[str, type] = {
    cls.node_type.value: cls
    for cls in (
        Paragraph,
        Heading,
        CodeBlock,
        Blockquote,
        Panel,
        BulletList,
        OrderedList,
        ListItem,
        Table,
        TableRow,
        TableHeader,
        TableCell,
        Rule,
        Text,
        HardBreak,
    )
}


@dataclass
class AdfDocument:
    """Represents a complete ADF document.

    Attributes:
        version: ADF schema version (always 1)
        content: Top-level block nodes in document order
    """

    version: int = 1
    content: List[AdfNode] = field(default_factory=list)

    def get_text_content(self) -> str:
        return " ".join(
            text for text in (node.get_text_content() for node in self.content) if text
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the document to ADF JSON format.

        Returns:
            Dictionary suitable for JSON serialization
        """
        return {
            "version": self.version,
            "type": AdfNodeType.DOC.value,
            "content": [node.to_dict() for node in self.content],
        }
