"""Data models for conversion results and converter configuration."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.adf.adf_models import AdfDocument


# Flat front-matter mapping of string keys to scalar values
Metadata = Dict[str, Any]


@dataclass
class ConversionResult:
    """Result of markdown to ADF conversion.

    Attributes:
        document: Parsed ADF document tree
        metadata: Decoded front-matter, or None when the input had none
    """
    document: AdfDocument
    metadata: Optional[Metadata] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary with 'adf' and optional 'metadata'."""
        result: Dict[str, Any] = {"adf": self.document.to_dict()}
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result


@dataclass
class ConverterConfig:
    """Converter and batch conversion options.

    Attributes:
        max_quote_depth: Deepest blockquote nesting parsed recursively
        sort_metadata_keys: Emit front-matter keys sorted instead of in insertion order
        workers: Thread pool size for batch conversion
        markdown_suffix: File suffix of markdown files
        adf_suffix: File suffix of ADF JSON files
        indent_json: Indentation for written ADF JSON (None for compact output)
    """
    max_quote_depth: int = 32
    sort_metadata_keys: bool = False
    workers: int = 4
    markdown_suffix: str = ".md"
    adf_suffix: str = ".json"
    indent_json: Optional[int] = 2
