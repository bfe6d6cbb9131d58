"""Typed ADF (Atlassian Document Format) document model.

Key classes:
    AdfDocument: Root of a document tree
    AdfParser: Builds typed trees from ADF JSON
    AdfMark: Inline formatting mark (strong, em, code, link, strike)
"""

from .adf_models import (
    AdfDocument,
    AdfMark,
    AdfNode,
    AdfNodeType,
    BlockNode,
    Blockquote,
    BulletList,
    CodeBlock,
    HardBreak,
    Heading,
    ListItem,
    MarkType,
    OrderedList,
    Panel,
    PanelType,
    Paragraph,
    Rule,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    Text,
    UnknownNode,
)
from .adf_parser import AdfParser
from .errors import AdfValidationError, ConverterError

__all__ = [
    "AdfDocument",
    "AdfMark",
    "AdfNode",
    "AdfNodeType",
    "AdfParser",
    "BlockNode",
    "Blockquote",
    "BulletList",
    "CodeBlock",
    "HardBreak",
    "Heading",
    "ListItem",
    "MarkType",
    "OrderedList",
    "Panel",
    "PanelType",
    "Paragraph",
    "Rule",
    "Table",
    "TableCell",
    "TableHeader",
    "TableRow",
    "Text",
    "UnknownNode",
    # Errors
    "AdfValidationError",
    "ConverterError",
]
