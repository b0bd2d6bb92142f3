"""
Command line interface for the file concatenator.
Turns positional arguments into run options and maps failures to exit codes.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from .. import __version__
from ..application.concatenate_files import ConcatenateFilesUseCase
from ..domain.entities import ConcatSettings, RunOptions
from ..domain.errors import ConcatError
from ..infrastructure.config_loader import ConfigurationError, load_settings
from ..infrastructure.logging_config import setup_logger
from .console import ConsoleLinePrompt, ConsoleMessageSink, PresentationConfig

EXIT_FAILURE = 1

EPILOG = """\b
Examples:
  concat '*.c' '*.h' out.txt    Concatenate all .c and .h files into out.txt
  concat out.txt                Concatenate every file in the directory into out.txt
  concat -d '*.sh' script.out   Concatenate .sh files with descriptions
  concat -i                     Choose a pattern, then confirm each file
"""


def interpret_arguments(
    args: Tuple[str, ...], default_output: str
) -> Tuple[Tuple[str, ...], str, Optional[str]]:
    """Split positional arguments into patterns and the output path.

    The last argument is the output file and everything before it is a
    pattern. Returns the patterns, the output and an optional notice.
    """
    if args and not args[-1].strip():
        raise click.UsageError("Output file name must not be empty")
    if not args:
        return (), default_output, (
            f"No patterns and no output file specified. Using all files -> {default_output}"
        )
    if len(args) == 1:
        return (), args[0], f"No patterns specified, using all files. Output: {args[0]}"
    return tuple(args[:-1]), args[-1], None


def _load_settings_or_exit(config_path: Optional[Path], sink: ConsoleMessageSink) -> ConcatSettings:
    """Load settings with a clean error message instead of a traceback."""
    try:
        return load_settings(config_path)
    except ConfigurationError as e:
        sink.error(f"Configuration error: {e}")
        sys.exit(EXIT_FAILURE)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.argument("args", nargs=-1, metavar="[PATTERN ...] [OUTPUT_FILE]")
@click.option("-i", "--interactive", is_flag=True,
              help="Interactive mode: prompts per file to include or skip")
@click.option("-d", "--describe", is_flag=True,
              help="Describe files (path and size) before their contents")
@click.option("--no-color", is_flag=True, help="Disable coloured output")
@click.option("--config", "-c", "config_path",
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Path to settings file (default: ./.concat.yml if present)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="concat")
def cli(
    args: Tuple[str, ...],
    interactive: bool,
    describe: bool,
    no_color: bool,
    config_path: Optional[Path],
    verbose: bool,
):
    """
    Concatenate files into a single output file.

    All arguments before the last one are treated as file patterns; the last
    one is the output file. Patterns match file names one directory level
    deep, e.g. 'src/*.py'. Quote them so the shell does not expand them.
    """
    presentation = PresentationConfig.detect(no_color=no_color)
    sink = ConsoleMessageSink(
        presentation.make_console(), presentation.make_console(stderr=True)
    )
    settings = _load_settings_or_exit(config_path, sink)

    # Settings may turn colour off as well; decided once, here
    if not settings.color and presentation.color:
        presentation = PresentationConfig(color=False)
        sink = ConsoleMessageSink(
            presentation.make_console(), presentation.make_console(stderr=True)
        )

    setup_logger(
        logging.DEBUG if verbose else settings.log_level,
        console=presentation.make_console(stderr=True),
    )

    patterns, output, notice = interpret_arguments(args, settings.default_output)
    if notice:
        sink.warning(notice)

    options = RunOptions(
        patterns=patterns,
        output=output,
        interactive=interactive,
        describe=describe or settings.describe,
    )

    use_case = ConcatenateFilesUseCase(
        prompt=ConsoleLinePrompt(presentation.make_console()),
        sink=sink,
    )
    try:
        use_case.execute(options)
    except ConcatError as e:
        sink.error(e.message)
        if verbose:
            presentation.make_console(stderr=True).print_exception()
        sys.exit(EXIT_FAILURE)


def main():
    """Main entry point for the CLI application."""
    cli(prog_name="concat")


if __name__ == '__main__':
    main()
