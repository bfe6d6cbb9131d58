"""Content conversion module for ADF ↔ markdown conversion.

This module provides the MarkdownConverter for bidirectional conversion
between ADF document trees and markdown with optional YAML frontmatter.
"""

from .config_loader import ConfigLoader
from .errors import ConfigError, ConversionError, FilesystemError, FrontmatterError
from .frontmatter_handler import FrontmatterHandler
from .markdown_converter import MarkdownConverter
from .models import ConversionResult, ConverterConfig

__all__ = [
    'ConfigLoader',
    'ConversionResult',
    'ConverterConfig',
    'FrontmatterHandler',
    'MarkdownConverter',
    # Errors
    'ConfigError',
    'ConversionError',
    'FilesystemError',
    'FrontmatterError',
]
