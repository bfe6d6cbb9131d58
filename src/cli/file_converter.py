"""File-level conversion between ADF JSON files and markdown files.

Wraps MarkdownConverter with file reading and writing, and converts whole
directories in parallel. A directory run never stops at the first bad file:
each failure is recorded and the remaining files are still converted.
"""

import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional, Tuple

from src.adf.errors import AdfValidationError, ConverterError
from src.content_converter.errors import FilesystemError
from src.content_converter.markdown_converter import MarkdownConverter
from src.content_converter.models import ConverterConfig, Metadata

from .errors import InputPathError
from .models import BatchConversionResult, Direction, FileConversionResult

logger = logging.getLogger(__name__)


class FileConverter:
    """Converts ADF JSON files to markdown files and back.

    An ADF input file holds either a bare ``doc`` node or the wrapper written
    by ``to-adf --with-metadata``: ``{"adf": {...}, "metadata": {...}}``. The
    wrapper's metadata becomes the markdown frontmatter.

    Example:
        >>> converter = FileConverter()
        >>> converter.convert_file("page.json", Direction.MARKDOWN)
        FileConversionResult(source='page.json', destination='page.md', ...)
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        """Initialize FileConverter.

        Args:
            config: Converter options (defaults when omitted)
        """
        self.config = config or ConverterConfig()
        self.converter = MarkdownConverter(self.config)

    def adf_file_to_markdown(
        self, input_path: str, metadata: Optional[Metadata] = None
    ) -> str:
        """Read an ADF JSON file and convert it to markdown.

        Args:
            input_path: Path to the ADF JSON file
            metadata: Frontmatter entries; override metadata stored in the file

        Returns:
            Markdown text with frontmatter when any metadata is present

        Raises:
            FilesystemError: If the file cannot be read
            AdfValidationError: If the file is not valid ADF JSON
            FrontmatterError: If the metadata is not a flat mapping of scalars
        """
        content = self._read_file(input_path)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise AdfValidationError(f"{input_path} is not valid JSON: {e}")

        document, stored_metadata = self._unwrap(data, input_path)
        merged: Dict[str, Any] = dict(stored_metadata or {})
        merged.update(metadata or {})
        return self.converter.adf_to_markdown(document, merged or None)

    def markdown_file_to_adf_json(self, input_path: str, with_metadata: bool = False) -> str:
        """Read a markdown file and convert it to ADF JSON text.

        Raises:
            FilesystemError: If the file cannot be read
            FrontmatterError: If the file's frontmatter cannot be decoded
        """
        content = self._read_file(input_path)
        return self.converter.markdown_to_adf_json(
            content, with_metadata=with_metadata, source=input_path
        )

    def convert_file(self, source: str, direction: Direction) -> FileConversionResult:
        """Convert one file and write the result beside it.

        The output has the same stem as the input and the suffix of the
        target format.

        Raises:
            ConverterError: If reading, converting or writing fails
        """
        if direction is Direction.MARKDOWN:
            destination = self._sibling(source, self.config.markdown_suffix)
            output = self.adf_file_to_markdown(source)
            # Markdown files end with a newline
            output += "\n"
        else:
            destination = self._sibling(source, self.config.adf_suffix)
            output = self.markdown_file_to_adf_json(source, with_metadata=True) + "\n"

        self.write_file(destination, output)
        logger.info(f"Converted {source} -> {destination}")
        return FileConversionResult(source=source, destination=destination)

    def find_inputs(self, directory: str, direction: Direction) -> List[str]:
        """List the files in a directory that convert in the given direction.

        Args:
            directory: Directory to scan (not recursive)
            direction: Target format; inputs carry the other format's suffix

        Returns:
            Sorted input file paths

        Raises:
            InputPathError: If directory does not exist or is not a directory
        """
        if not os.path.isdir(directory):
            raise InputPathError(directory, "not a directory")

        suffix = (
            self.config.adf_suffix if direction is Direction.MARKDOWN
            else self.config.markdown_suffix
        )
        return sorted(
            os.path.join(directory, name)
            for name in os.listdir(directory)
            if name.endswith(suffix) and os.path.isfile(os.path.join(directory, name))
        )

    def convert_directory(
        self,
        directory: str,
        direction: Direction,
        workers: Optional[int] = None,
        on_progress: Optional[Callable[[FileConversionResult], None]] = None,
    ) -> BatchConversionResult:
        """Convert every eligible file in a directory in parallel.

        Args:
            directory: Directory holding the input files
            direction: Target format
            workers: Thread pool size (config value when omitted)
            on_progress: Called once per finished file, from the calling thread

        Returns:
            BatchConversionResult listing converted and failed files

        Raises:
            InputPathError: If directory does not exist or is not a directory
        """
        inputs = self.find_inputs(directory, direction)
        max_workers = workers or self.config.workers
        result = BatchConversionResult()

        logger.info(
            f"Converting {len(inputs)} file(s) in {directory} to {direction.value} "
            f"with {max_workers} worker(s)"
        )

        if not inputs:
            return result

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(self.convert_file, path, direction): path
                for path in inputs
            }

            for i, future in enumerate(as_completed(futures), 1):
                path = futures[future]
                logger.debug(f"Finished file {i}/{len(inputs)}: {path}")

                try:
                    item = future.result()
                    result.converted.append(item)
                except ConverterError as e:
                    item = FileConversionResult(source=path, success=False, error=str(e))
                    result.failed.append(item)
                    logger.error(f"  ✗ Error converting {path}: {e}")

                if on_progress:
                    on_progress(item)

        # Completion order is arbitrary; report in file order
        result.converted.sort(key=lambda item: item.source)
        result.failed.sort(key=lambda item: item.source)

        logger.info(
            f"Directory conversion complete: {len(result.converted)} converted, "
            f"{len(result.failed)} failed"
        )
        return result

    def write_file(self, path: str, content: str) -> None:
        """Write text to a file, creating parent directories as needed.

        Raises:
            FilesystemError: If the file cannot be written
        """
        try:
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
        except PermissionError:
            raise FilesystemError(path, 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(path, 'write', str(e))

    @staticmethod
    def _read_file(path: str) -> str:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            raise FilesystemError(path, 'read', 'File not found')
        except PermissionError:
            raise FilesystemError(path, 'read', 'Permission denied')
        except UnicodeDecodeError as e:
            raise FilesystemError(path, 'read', f"Not UTF-8 text: {e}")
        except OSError as e:
            raise FilesystemError(path, 'read', str(e))

    @staticmethod
    def _unwrap(data: Any, source: str) -> Tuple[Any, Optional[Metadata]]:
        if isinstance(data, dict) and "adf" in data and data.get("type") != "doc":
            metadata = data.get("metadata")
            if metadata is not None and not isinstance(metadata, dict):
                raise AdfValidationError(
                    f"{source}: 'metadata' must be an object, got {type(metadata).__name__}"
                )
            return data["adf"], metadata
        return data, None

    @staticmethod
    def _sibling(path: str, suffix: str) -> str:
        stem, _ = os.path.splitext(path)
        return stem + suffix
