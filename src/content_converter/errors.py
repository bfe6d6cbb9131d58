"""Typed exception hierarchy for conversion errors.

All exceptions inherit from ConverterError (defined alongside the ADF
model) and carry enough context to tell the caller what to fix.
"""

from typing import Optional

from src.adf.errors import ConverterError


class ConversionError(ConverterError):
    """Raised when content conversion between formats fails."""

    def __init__(self, message: str):
        super().__init__(message)


class FrontmatterError(ConverterError):
    """Raised when YAML frontmatter parsing or generation fails."""

    def __init__(self, source: str, message: str):
        super().__init__(
            f"Frontmatter error in {source}: {message}"
        )
        self.source = source
        self.message = message


class ConfigError(ConverterError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class FilesystemError(ConverterError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
