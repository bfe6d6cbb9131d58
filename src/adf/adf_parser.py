"""Parser for ADF (Atlassian Document Format) documents.

This module turns ADF JSON (as decoded dictionaries or a raw JSON string)
into the typed node tree defined in adf_models.
"""

import json
import logging
from typing import Any, Dict, List

from .adf_models import (
    NODE_CLASSES,
    AdfDocument,
    AdfMark,
    AdfNode,
    AdfNodeType,
    BlockNode,
    CodeBlock,
    Heading,
    MarkType,
    Panel,
    PanelType,
    Text,
    UnknownNode,
    clamp_heading_level,
)
from .errors import AdfValidationError

logger = logging.getLogger(__name__)


class AdfParser:
    """Parser for ADF documents.

    Converts ADF JSON to AdfDocument and typed AdfNode objects. Node kinds
    outside the converter's vocabulary become UnknownNode so nothing is lost.
    """

    def parse_document(self, adf_json: Dict[str, Any]) -> AdfDocument:
        """Parse an ADF JSON document into an AdfDocument object.

        Args:
            adf_json: The ADF document as a dictionary (parsed JSON)

        Returns:
            AdfDocument object with parsed content tree

        Raises:
            AdfValidationError: If the JSON is not valid ADF format
        """
        if not isinstance(adf_json, dict):
            raise AdfValidationError(
                f"document must be a dictionary, got {type(adf_json).__name__}"
            )

        doc_type = adf_json.get("type")
        if doc_type != AdfNodeType.DOC.value:
            raise AdfValidationError(f"expected type 'doc', got '{doc_type}'")

        version = adf_json.get("version", 1)
        content = self._parse_children(adf_json, "doc")

        return AdfDocument(version=version, content=content)

    def parse_from_string(self, adf_string: str) -> AdfDocument:
        """Parse an ADF JSON string into an AdfDocument object.

        Args:
            adf_string: The ADF document as a JSON string

        Returns:
            AdfDocument object with parsed content tree

        Raises:
            AdfValidationError: If the string is not JSON or not valid ADF
        """
        try:
            adf_json = json.loads(adf_string)
        except json.JSONDecodeError as e:
            raise AdfValidationError(f"not valid JSON: {e}")
        return self.parse_document(adf_json)

    def _parse_children(self, node_data: Dict[str, Any], path: str) -> List[AdfNode]:
        content_data = node_data.get("content") or []
        if not isinstance(content_data, list):
            raise AdfValidationError("content must be a list", path)
        return [
            self._parse_node(child, f"{path}.content[{index}]")
            for index, child in enumerate(content_data)
        ]

    def _parse_node(self, node_data: Dict[str, Any], path: str) -> AdfNode:
        """Parse a single ADF node from JSON.

        Args:
            node_data: Node data as a dictionary
            path: Location of the node, used in error messages

        Returns:
            Parsed AdfNode object
        """
        if not isinstance(node_data, dict):
            raise AdfValidationError(
                f"node must be a dictionary, got {type(node_data).__name__}", path
            )

        node_type = node_data.get("type")
        if not node_type:
            raise AdfValidationError("node has no type", path)

        attrs = node_data.get("attrs") or {}
        node_class = NODE_CLASSES.get(node_type)

        if node_class is None:
            logger.debug(f"Keeping unknown node type as pass-through: {node_type}")
            return UnknownNode(
                type=node_type,
                attrs=attrs,
                content=self._parse_children(node_data, path),
                text=node_data.get("text"),
            )

        if node_class is Text:
            return Text(
                text=node_data.get("text") or "",
                marks=self._parse_marks(node_data.get("marks") or [], path),
            )

        if node_class is CodeBlock:
            # Body is the single text child; absent text reads as empty
            body = "".join(
                child.get("text") or ""
                for child in node_data.get("content") or []
                if isinstance(child, dict)
            )
            return CodeBlock(text=body, language=attrs.get("language") or None)

        if node_class is Heading:
            level = attrs.get("level")
            if level is None:
                level = 1
            # JSON numbers may arrive as whole floats (2.0); bool is not a level
            if isinstance(level, float) and level.is_integer():
                level = int(level)
            if isinstance(level, bool) or not isinstance(level, int):
                raise AdfValidationError(f"heading level must be an integer, got {level!r}", path)
            clamped = clamp_heading_level(level)
            if clamped != level:
                logger.debug(f"Clamping heading level {level} to {clamped} at {path}")
            return Heading(content=self._parse_children(node_data, path), level=clamped)

        if node_class is Panel:
            panel_type = attrs.get("panelType") or PanelType.INFO.value
            return Panel(content=self._parse_children(node_data, path), panel_type=panel_type)

        if issubclass(node_class, BlockNode):
            return node_class(content=self._parse_children(node_data, path))

        return node_class()

    def _parse_marks(self, marks_data: List[Dict[str, Any]], path: str) -> List[AdfMark]:
        """Parse text marks, dropping mark kinds the converter cannot render."""
        marks = []
        for mark_data in marks_data:
            mark_name = mark_data.get("type") if isinstance(mark_data, dict) else None
            try:
                mark_type = MarkType(mark_name)
            except ValueError:
                logger.debug(f"Dropping unsupported mark '{mark_name}' at {path}")
                continue

            if mark_type is MarkType.LINK:
                href = (mark_data.get("attrs") or {}).get("href") or ""
                marks.append(AdfMark.link(href))
            else:
                marks.append(AdfMark(mark_type))
        return marks
