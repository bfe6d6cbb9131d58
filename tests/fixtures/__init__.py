"""Test fixtures for converter tests.

This module provides test fixtures for:
- ADF documents (as decoded JSON) covering every supported node kind
- Sample markdown content for conversion and round-trip tests
"""

from .adf_fixtures import (
    ADF_COMPLEX,
    ADF_MINIMAL,
    ADF_WITH_HARDBREAK,
    ADF_WITH_MARKS,
    ADF_WITH_PANELS,
    ADF_WITH_TABLE,
    ADF_WITH_UNKNOWN_NODE,
    count_nodes_by_type,
    extract_text_content,
)
from .sample_markdown import (
    SAMPLE_MARKDOWN_CANONICAL,
    SAMPLE_MARKDOWN_SIMPLE,
    SAMPLE_MARKDOWN_WITH_CODE_BLOCKS,
    SAMPLE_MARKDOWN_WITH_FRONTMATTER,
    SAMPLE_MARKDOWN_WITH_PANELS,
    SAMPLE_MARKDOWN_WITH_TABLES,
)

__all__ = [
    "ADF_COMPLEX",
    "ADF_MINIMAL",
    "ADF_WITH_HARDBREAK",
    "ADF_WITH_MARKS",
    "ADF_WITH_PANELS",
    "ADF_WITH_TABLE",
    "ADF_WITH_UNKNOWN_NODE",
    "count_nodes_by_type",
    "extract_text_content",
    "SAMPLE_MARKDOWN_CANONICAL",
    "SAMPLE_MARKDOWN_SIMPLE",
    "SAMPLE_MARKDOWN_WITH_CODE_BLOCKS",
    "SAMPLE_MARKDOWN_WITH_FRONTMATTER",
    "SAMPLE_MARKDOWN_WITH_PANELS",
    "SAMPLE_MARKDOWN_WITH_TABLES",
]
