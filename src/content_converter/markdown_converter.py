"""Bidirectional converter between ADF documents and markdown.

ADF→markdown renders the node tree with AdfSerializer and prepends YAML
frontmatter when metadata is given. Markdown→ADF splits off frontmatter and
runs MarkdownParser over the body. Both directions are pure: a converter
instance holds only configuration, so it may be shared across threads.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from src.adf.adf_models import AdfDocument
from src.adf.adf_parser import AdfParser

from .adf_serializer import AdfSerializer
from .errors import ConversionError
from .frontmatter_handler import FrontmatterHandler
from .markdown_parser import MarkdownParser
from .models import ConversionResult, ConverterConfig, Metadata

logger = logging.getLogger(__name__)


class MarkdownConverter:
    """Converts between ADF and markdown.

    Example:
        >>> converter = MarkdownConverter()
        >>> result = converter.markdown_to_adf("# Title")
        >>> converter.adf_to_markdown(result.document)
        '# Title'
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        """Initialize MarkdownConverter.

        Args:
            config: Converter options (defaults when omitted)
        """
        self.config = config or ConverterConfig()
        self._adf_parser = AdfParser()
        self._serializer = AdfSerializer()
        self._parser = MarkdownParser(max_quote_depth=self.config.max_quote_depth)

    def adf_to_markdown(
        self,
        document: Union[AdfDocument, Dict[str, Any]],
        metadata: Optional[Metadata] = None,
    ) -> str:
        """Convert an ADF document to markdown.

        Args:
            document: AdfDocument, or ADF JSON already decoded to a dict
            metadata: Optional flat mapping emitted as YAML frontmatter

        Returns:
            Markdown string trimmed of trailing whitespace

        Raises:
            AdfValidationError: If a dict document is not valid ADF
            ConversionError: If document is neither an AdfDocument nor a dict
            FrontmatterError: If metadata is not a flat mapping of scalars
        """
        if isinstance(document, dict):
            document = self._adf_parser.parse_document(document)
        elif not isinstance(document, AdfDocument):
            raise ConversionError(
                f"Expected AdfDocument or ADF dict, got {type(document).__name__}"
            )

        frontmatter = FrontmatterHandler.generate(
            metadata, sort_keys=self.config.sort_metadata_keys
        )
        body = self._serializer.serialize(document)
        logger.debug(
            f"Serialized {len(document.content)} top-level node(s) to "
            f"{len(body)} character(s) of markdown"
        )
        return (frontmatter + body).rstrip()

    def markdown_to_adf(self, markdown: str, source: str = "<markdown>") -> ConversionResult:
        """Convert markdown (optionally with frontmatter) to an ADF document.

        Args:
            markdown: Markdown text
            source: Name of the input used in error messages

        Returns:
            ConversionResult with the document and decoded metadata

        Raises:
            FrontmatterError: If frontmatter is present but cannot be decoded
        """
        text = markdown.replace('\r\n', '\n')
        metadata, body = FrontmatterHandler.split(text, source)
        content = self._parser.parse(body)
        logger.debug(f"Parsed {len(content)} top-level node(s) from {source}")
        return ConversionResult(document=AdfDocument(content=content), metadata=metadata)

    def adf_json_to_markdown(self, adf_json: str, metadata: Optional[Metadata] = None) -> str:
        """Convert an ADF JSON string to markdown.

        Raises:
            AdfValidationError: If the string is not valid ADF JSON
        """
        document = self._adf_parser.parse_from_string(adf_json)
        return self.adf_to_markdown(document, metadata)

    def markdown_to_adf_json(
        self, markdown: str, with_metadata: bool = False, source: str = "<markdown>"
    ) -> str:
        """Convert markdown to an ADF JSON string.

        Args:
            markdown: Markdown text
            with_metadata: Emit ``{"adf": ..., "metadata": ...}`` instead of the
                bare document
            source: Name of the input used in error messages

        Returns:
            JSON text indented per the converter config
        """
        result = self.markdown_to_adf(markdown, source)
        payload = result.to_dict() if with_metadata else result.document.to_dict()
        return json.dumps(
            payload, indent=self.config.indent_json, ensure_ascii=False, default=str
        )
