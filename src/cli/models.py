"""Data models for CLI operations.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, bad options)
    - CONVERSION_ERROR (2): Input could not be converted (bad ADF, bad frontmatter)
    - FILE_ERROR (3): Input or output file could not be read or written

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONVERSION_ERROR = 2
    FILE_ERROR = 3


class Direction(str, Enum):
    """Target format of a conversion."""
    MARKDOWN = "markdown"
    ADF = "adf"


@dataclass
class FileConversionResult:
    """Outcome of converting a single file.

    Attributes:
        source: Input file path
        destination: Output file path (None when conversion failed before writing)
        success: Whether the file was converted and written
        error: Error message if success is False
    """
    source: str
    destination: Optional[str] = None
    success: bool = True
    error: Optional[str] = None


@dataclass
class BatchConversionResult:
    """Outcome of converting every eligible file in a directory.

    Attributes:
        converted: Files converted successfully
        failed: Files that could not be converted

    Example:
        >>> result = BatchConversionResult()
        >>> result.exit_code
        <ExitCode.SUCCESS: 0>
    """
    converted: List[FileConversionResult] = field(default_factory=list)
    failed: List[FileConversionResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.converted) + len(self.failed)

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.CONVERSION_ERROR if self.failed else ExitCode.SUCCESS
