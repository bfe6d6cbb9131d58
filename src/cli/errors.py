"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError, itself a ConverterError, so the
entry point can map any failure to an exit code.
"""

from src.adf.errors import ConverterError


class CLIError(ConverterError):
    """Base exception for all CLI-related errors."""
    pass


class InvalidMetadataOptionError(CLIError):
    """Raised when a --meta option is not of the form key=value."""

    def __init__(self, option: str):
        super().__init__(
            f"Invalid metadata option '{option}': expected key=value"
        )
        self.option = option


class InputPathError(CLIError):
    """Raised when an input file or directory does not exist or has the wrong kind."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot use {path}: {reason}")
        self.path = path
        self.reason = reason
