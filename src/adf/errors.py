"""Typed exception hierarchy for ADF document errors.

All converter exceptions inherit from ConverterError so callers can catch
any application-level failure with a single except clause.
"""

from typing import Optional


class ConverterError(Exception):
    """Base exception for all adf-markdown errors.

    Use this to catch any application-level error from the converter.
    """
    pass


class AdfValidationError(ConverterError):
    """Raised when an ADF document or node does not have the expected shape."""

    def __init__(self, message: str, node_path: Optional[str] = None):
        if node_path:
            full_message = f"Invalid ADF at {node_path}: {message}"
        else:
            full_message = f"Invalid ADF: {message}"
        super().__init__(full_message)
        self.node_path = node_path
        self.original_message = message
