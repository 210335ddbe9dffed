#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/cli.py
"""Command-line interface for wiki2latex.

Convert a content bundle (zip file or directory) to a PDF::

    wiki2latex collection.zip -o collection.pdf

Emit the LaTeX sources instead, keeping the build directory::

    wiki2latex collection.zip --latex -o collection.tex

Translate a single HTML file to a LaTeX fragment::

    wiki2latex --html article.html --lang he

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from wiki2latex import __version__
from wiki2latex.api import convert, html_to_latex
from wiki2latex.constants import DEFAULT_MEDIA_WORKERS, DEFAULT_PAPER_SIZE
from wiki2latex.exceptions import (
    CompilationError,
    DependencyError,
    FileError,
    ParsingError,
    RenderingError,
    ValidationError,
    Wiki2LatexError,
)
from wiki2latex.languages import lookup
from wiki2latex.logging_utils import configure_logging
from wiki2latex.options.convert import ConvertOptions
from wiki2latex.options.visitor import VisitorOptions
from wiki2latex.progress import StatusEvent

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, DependencyError):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, (FileError, OSError)):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, (RenderingError, CompilationError)):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wiki2latex",
        description="Convert wiki content bundles to bidi-aware XeLaTeX and PDF.",
    )
    parser.add_argument("bundle", nargs="?", help="Bundle zip file or directory")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-o", "--output", type=Path, help="Save output to the given file (default: stdout)")
    parser.add_argument(
        "-s", "--size", choices=["letter", "a4"], default=DEFAULT_PAPER_SIZE, help="Set paper size"
    )
    toc = parser.add_mutually_exclusive_group()
    toc.add_argument("--toc", dest="toc", action="store_true", default=None, help="Force table of contents")
    toc.add_argument("--no-toc", dest="toc", action="store_false", help="Suppress table of contents")
    parser.add_argument("--onecolumn", action="store_true", help="Use single-column layout")
    parser.add_argument("--parindent", action="store_true", help="Use paragraph indentation")
    parser.add_argument("--lang", help="Force collection language (e.g. 'en', 'he')")
    parser.add_argument("-L", "--latex", action="store_true", help="Output LaTeX source instead of PDF")
    parser.add_argument("-T", "--tmpdir", type=Path, help="Use the given directory for temporary files")
    parser.add_argument("--skip-jpegtran", action="store_true", help="Don't strip metadata from JPEGs")
    parser.add_argument(
        "--max-workers",
        type=int,
        default=DEFAULT_MEDIA_WORKERS,
        help=f"Parallel media conversions (default: {DEFAULT_MEDIA_WORKERS})",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Keep build files and show tracebacks")
    parser.add_argument("--html", type=Path, metavar="FILE", help="Translate one HTML file to a LaTeX fragment")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output with progress messages")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--rich", action="store_true", help="Show a progress bar")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.INFO
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


class StatusDisplay:
    """Show conversion progress as a rich progress bar or plain stderr lines.

    Parameters
    ----------
    use_rich : bool
        Draw a rich progress bar
    verbose : bool
        Print plain status lines when not using rich

    """

    def __init__(self, use_rich: bool, verbose: bool):
        self.use_rich = use_rich
        self.verbose = verbose
        self._progress: Any = None
        self._task_id: Any = None

    def __enter__(self) -> StatusDisplay:
        if self.use_rich:
            from rich.console import Console
            from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

            # stdout may carry the PDF
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=Console(stderr=True),
            )
            self._progress.__enter__()
            self._task_id = self._progress.add_task("[cyan]Starting...", total=100)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._progress is not None:
            self._progress.__exit__(exc_type, exc_val, exc_tb)

    def __call__(self, event: StatusEvent) -> None:
        if self._progress is not None:
            description = f"[cyan]{event.message}" + (f" [dim]{event.file}" if event.file else "")
            self._progress.update(self._task_id, completed=event.percent, description=description)
        elif self.verbose:
            print(str(event), file=sys.stderr)


def _translate_html(parsed_args: argparse.Namespace) -> int:
    try:
        html = parsed_args.html.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: cannot read {parsed_args.html}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    lang = parsed_args.lang or "en"
    options = VisitorOptions(lang=lang, dir=lookup(lang).dir, parindent=parsed_args.parindent)
    result = html_to_latex(html, options)
    if parsed_args.output:
        parsed_args.output.write_text(result.latex, encoding="utf-8")
    else:
        sys.stdout.write(result.latex)
    logger.info("Languages used: %s", ", ".join(sorted(result.used_languages)) or "none")
    return EXIT_SUCCESS


def _build_options(parsed_args: argparse.Namespace) -> ConvertOptions:
    return ConvertOptions(
        bundle=Path(parsed_args.bundle),
        output=parsed_args.output,
        size=parsed_args.size,
        toc=parsed_args.toc,
        onecolumn=parsed_args.onecolumn,
        parindent=parsed_args.parindent,
        lang=parsed_args.lang,
        latex_only=parsed_args.latex,
        tmpdir=parsed_args.tmpdir,
        debug=parsed_args.debug,
        skip_jpegtran=parsed_args.skip_jpegtran,
        max_workers=parsed_args.max_workers,
    )


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        if parsed_args.html is not None:
            return _translate_html(parsed_args)

        if not parsed_args.bundle:
            print("Error: a bundle file or directory is required", file=sys.stderr)
            return EXIT_VALIDATION_ERROR
        if not Path(parsed_args.bundle).exists():
            print(f"Error: bundle not found: {parsed_args.bundle}", file=sys.stderr)
            return EXIT_FILE_ERROR

        try:
            options = _build_options(parsed_args)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_VALIDATION_ERROR

        with StatusDisplay(parsed_args.rich, parsed_args.verbose) as display:
            return convert(options, display)
    except (Wiki2LatexError, OSError, ValueError) as e:
        if parsed_args.debug:
            logger.exception("Conversion failed")
        else:
            print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
