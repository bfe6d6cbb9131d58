"""Command-line interface for ADF and Markdown conversion.

This package provides the `adf-markdown` CLI tool that converts single files
or whole directories between ADF JSON and Markdown with YAML frontmatter.
"""

from .errors import CLIError, InputPathError, InvalidMetadataOptionError
from .file_converter import FileConverter
from .models import BatchConversionResult, Direction, ExitCode, FileConversionResult

__all__ = [
    'FileConverter',
    'BatchConversionResult',
    'Direction',
    'ExitCode',
    'FileConversionResult',
    'CLIError',
    'InputPathError',
    'InvalidMetadataOptionError',
]
