"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

from src.adf.adf_parser import AdfParser
from src.content_converter.markdown_converter import MarkdownConverter


@pytest.fixture
def converter() -> MarkdownConverter:
    """MarkdownConverter with default configuration."""
    return MarkdownConverter()


@pytest.fixture
def adf_parser() -> AdfParser:
    return AdfParser()


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attaches to the 'src' logger between tests.

    CliRunner swaps sys.stderr per invocation; a handler left behind would
    write to a closed stream in later tests.
    """
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
