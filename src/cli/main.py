"""Main CLI entry point for the adf-markdown command.

This module provides the Typer application that serves as the entry point
for the adf-markdown command-line tool. Global options (config, verbosity,
logging, color) are handled by the app callback and shared with the
subcommands through the Typer context.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.adf.errors import AdfValidationError, ConverterError
from src.cli.errors import CLIError, InvalidMetadataOptionError
from src.cli.file_converter import FileConverter
from src.cli.models import Direction, ExitCode
from src.cli.output import OutputHandler
from src.content_converter.config_loader import ConfigLoader
from src.content_converter.errors import (
    ConfigError,
    ConversionError,
    FilesystemError,
    FrontmatterError,
)
from src.content_converter.models import ConverterConfig, Metadata

__version__ = "0.1.0"

app = typer.Typer(
    name="adf-markdown",
    help="""Convert between Atlassian Document Format (ADF) JSON and Markdown.

QUICK START:
  adf-markdown to-markdown page.json -o page.md --meta pageId=123   # ADF → Markdown
  adf-markdown to-adf page.md -o page.json --with-metadata          # Markdown → ADF
  adf-markdown convert ./pages --to markdown                        # Whole directory""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Options shared by every subcommand."""
    config: ConverterConfig
    output: OutputHandler


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    # Repeated invocations in one process must not stack handlers
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"adf-markdown_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _parse_meta_options(options: Optional[List[str]]) -> Optional[Metadata]:
    """Turn repeated ``--meta key=value`` options into a metadata mapping.

    Values stay strings, so ``--meta pageId=123`` round-trips as ``"123"``.

    Raises:
        InvalidMetadataOptionError: If an option has no '=' or an empty key
    """
    if not options:
        return None

    metadata: Metadata = {}
    for option in options:
        key, sep, value = option.partition("=")
        if not sep or not key.strip():
            raise InvalidMetadataOptionError(option)
        metadata[key.strip()] = value
    return metadata


def _exit_code_for(error: ConverterError) -> ExitCode:
    if isinstance(error, FilesystemError):
        return ExitCode.FILE_ERROR
    if isinstance(error, (AdfValidationError, ConversionError, FrontmatterError)):
        return ExitCode.CONVERSION_ERROR
    return ExitCode.GENERAL_ERROR


def _fail(output: OutputHandler, message: str, error: ConverterError) -> None:
    logger.error(f"{message}: {error}")
    output.error(f"{message}: {error}")
    raise typer.Exit(_exit_code_for(error))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"adf-markdown version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help=f"Path to YAML config file (default: {ConfigLoader.DEFAULT_CONFIG_FILE} if present)",
        metavar="PATH",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Convert between Atlassian Document Format (ADF) JSON and Markdown."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = ConfigLoader.load(config_path)
    except (ConfigError, FilesystemError) as e:
        output.error(f"Failed to load config: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    ctx.obj = CLIState(config=config, output=output)


@app.command("to-markdown")
def to_markdown(
    ctx: typer.Context,
    input_file: str = typer.Argument(..., help="ADF JSON file to convert", metavar="INPUT.json"),
    output_file: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write markdown to this file instead of stdout",
        metavar="OUT.md",
    ),
    meta: Optional[List[str]] = typer.Option(
        None,
        "--meta",
        help="Frontmatter entry as key=value (can be used multiple times)",
        metavar="KEY=VALUE",
    ),
) -> None:
    """Convert an ADF JSON file to Markdown with optional YAML frontmatter."""
    state: CLIState = ctx.obj
    output = state.output
    converter = FileConverter(state.config)

    try:
        metadata = _parse_meta_options(meta)
    except CLIError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    try:
        markdown = converter.adf_file_to_markdown(input_file, metadata)
        if output_file:
            converter.write_file(output_file, markdown + "\n")
            output.success(f"Converted {input_file} -> {output_file}")
        else:
            output.print(markdown)
    except ConverterError as e:
        _fail(output, f"Failed to convert {input_file}", e)

    raise typer.Exit(ExitCode.SUCCESS)


@app.command("to-adf")
def to_adf(
    ctx: typer.Context,
    input_file: str = typer.Argument(..., help="Markdown file to convert", metavar="INPUT.md"),
    output_file: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write ADF JSON to this file instead of stdout",
        metavar="OUT.json",
    ),
    with_metadata: bool = typer.Option(
        False,
        "--with-metadata",
        help='Emit {"adf": ..., "metadata": ...} including decoded frontmatter',
    ),
) -> None:
    """Convert a Markdown file (with optional frontmatter) to ADF JSON."""
    state: CLIState = ctx.obj
    output = state.output
    converter = FileConverter(state.config)

    try:
        adf_json = converter.markdown_file_to_adf_json(input_file, with_metadata=with_metadata)
        if output_file:
            converter.write_file(output_file, adf_json + "\n")
            output.success(f"Converted {input_file} -> {output_file}")
        else:
            output.print(adf_json)
    except ConverterError as e:
        _fail(output, f"Failed to convert {input_file}", e)

    raise typer.Exit(ExitCode.SUCCESS)


@app.command("convert")
def convert(
    ctx: typer.Context,
    directory: str = typer.Argument(..., help="Directory of files to convert", metavar="DIR"),
    to: Direction = typer.Option(
        Direction.MARKDOWN,
        "--to",
        help="Target format: markdown converts ADF JSON files, adf converts markdown files",
        case_sensitive=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        help="Number of parallel workers (default from config)",
    ),
) -> None:
    """Convert every file in a directory, writing siblings in the other format."""
    state: CLIState = ctx.obj
    output = state.output
    converter = FileConverter(state.config)

    try:
        inputs = converter.find_inputs(directory, to)
    except CLIError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.FILE_ERROR)

    output.info(f"Converting {len(inputs)} file(s) in {directory} to {to.value}")

    with output.progress_bar(len(inputs), f"Converting to {to.value}") as (progress, task):
        def advance(item) -> None:
            progress.update(task, advance=1)
            if not item.success:
                output.debug(f"Failed: {item.source}")

        result = converter.convert_directory(
            directory, to, workers=workers, on_progress=advance
        )

    for item in result.converted:
        output.info(f"  {item.source} -> {item.destination}")
    output.print_summary(result)

    raise typer.Exit(result.exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
