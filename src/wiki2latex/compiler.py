#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/compiler.py
"""Compile generated LaTeX to PDF with XeLaTeX."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional

from wiki2latex.collection import OUTPUT_FILE
from wiki2latex.constants import (
    MAX_XELATEX_PASSES,
    RERUN_INDICATORS,
    XELATEX_COMMAND,
    XELATEX_OPTIONS,
)
from wiki2latex.exceptions import CompilationError, DependencyError, FileError
from wiki2latex.options.convert import ConvertOptions
from wiki2latex.progress import StatusReporter

logger = logging.getLogger(__name__)

JOB_NAME = "document"
LOG_EXCERPT_LINES = 20


def driver_source(builddir: Path) -> str:
    """Return the top-level LaTeX file that pulls in the generated sources."""
    return f"\\input{{{(Path(builddir) / OUTPUT_FILE).as_posix()}}}\n"


def needs_rerun(log_text: str) -> bool:
    """Return True if an xelatex log asks for another pass."""
    return any(indicator in log_text for indicator in RERUN_INDICATORS)


def _write_output(data: bytes, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    try:
        Path(output).write_bytes(data)
    except OSError as e:
        raise FileError(f"Cannot write output: {e}", file_path=str(output), original_error=e) from e


def _log_excerpt(log_path: Path) -> str:
    if not log_path.exists():
        return ""
    lines = log_path.read_text(encoding="utf-8", errors="replace").splitlines()
    return "\n".join(lines[-LOG_EXCERPT_LINES:])


def run_xelatex(builddir: Path, size: str) -> Path:
    """Run xelatex on the driver until no rerun is requested.

    Parameters
    ----------
    builddir : Path
        Build directory holding ``output.tex``
    size : str
        Paper size

    Returns
    -------
    Path
        The generated PDF

    Raises
    ------
    DependencyError
        If xelatex is not installed
    CompilationError
        If xelatex fails

    """
    executable = shutil.which(XELATEX_COMMAND)
    if executable is None:
        raise DependencyError(
            "compiler",
            [XELATEX_COMMAND],
            message=f"{XELATEX_COMMAND} is required to build a PDF; use --latex to emit LaTeX instead",
        )

    builddir = Path(builddir)
    source = builddir / f"{JOB_NAME}.tex"
    source.write_text(driver_source(builddir), encoding="utf-8")
    log_path = builddir / f"{JOB_NAME}.log"
    args = [executable, *XELATEX_OPTIONS, f"-papersize={size}", source.name]

    for attempt in range(1, MAX_XELATEX_PASSES + 1):
        logger.info("Running xelatex (pass %d)", attempt)
        result = subprocess.run(args, cwd=builddir, capture_output=True)
        if result.returncode != 0:
            raise CompilationError(
                f"xelatex failed with exit status {result.returncode}", log_excerpt=_log_excerpt(log_path)
            )
        log_text = log_path.read_text(encoding="utf-8", errors="replace") if log_path.exists() else ""
        if not needs_rerun(log_text):
            break
    else:
        logger.warning("xelatex still requests a rerun after %d passes", MAX_XELATEX_PASSES)

    pdf = builddir / f"{JOB_NAME}.pdf"
    if not pdf.exists():
        raise CompilationError("xelatex produced no PDF", log_excerpt=_log_excerpt(log_path))
    return pdf


def compile_latex(builddir: Path, options: ConvertOptions, status: Optional[StatusReporter] = None) -> None:
    """Write the LaTeX driver, or compile it and write the PDF.

    With ``options.latex_only`` the driver file is written to the output
    instead of a PDF; it references the build directory, which is then kept.
    """
    if status is not None:
        status.create_stage(0, "Compiling PDF")
    if options.latex_only:
        _write_output(driver_source(builddir).encode("utf-8"), options.output)
        return
    pdf = run_xelatex(builddir, options.size)
    _write_output(pdf.read_bytes(), options.output)
