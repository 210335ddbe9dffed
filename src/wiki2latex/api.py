"""The main entry points for converting wiki content to LaTeX."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/wiki2latex/api.py
import io
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from wiki2latex.bundle import load_metabook, prepare_workspace
from wiki2latex.collection import generate_latex, render_article
from wiki2latex.compiler import compile_latex
from wiki2latex.media import missing_tools, process_images
from wiki2latex.options.convert import ConvertOptions
from wiki2latex.options.visitor import VisitorOptions
from wiki2latex.progress import StatusCallback, StatusReporter
from wiki2latex.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

# workspace, media, LaTeX, compilation
CONVERT_STAGES = 4


@dataclass(frozen=True)
class LatexResult:
    """LaTeX produced from a single HTML document.

    Parameters
    ----------
    latex : str
        LaTeX body text, without preamble
    used_languages : frozenset of str
        Languages the text switches to; pass them to
        :func:`~wiki2latex.languages.render_language_setup` to build the
        matching preamble

    """

    latex: str
    used_languages: frozenset[str]


def html_to_latex(html: str, options: Optional[VisitorOptions] = None, **kwargs: Any) -> LatexResult:
    """Translate one wiki HTML document to LaTeX.

    Parameters
    ----------
    html : str
        Document or fragment HTML
    options : VisitorOptions, optional
        Visitor options
    **kwargs
        Individual option overrides, e.g. ``lang="he"``

    Returns
    -------
    LatexResult
        The LaTeX text and the languages it uses

    Examples
    --------
        >>> html_to_latex("<p>Hello, <i>world</i></p>").latex
        'Hello, \\\\emph{world}\\n\\n'

    """
    options = options or VisitorOptions()
    if kwargs:
        options = options.create_updated(**kwargs)
    out = io.StringIO()
    used = render_article(html, out, options)
    return LatexResult(out.getvalue(), frozenset(used))


def convert(options: ConvertOptions, status_callback: Optional[StatusCallback] = None) -> int:
    """Convert a content bundle to a PDF or to LaTeX sources.

    Runs the four stages in order: unpack the bundle, process its media,
    generate LaTeX and compile (or write the LaTeX driver).

    Parameters
    ----------
    options : ConvertOptions
        Conversion options
    status_callback : StatusCallback, optional
        Receives progress events

    Returns
    -------
    int
        0 on success, 1 on error

    Raises
    ------
    Exception
        Any error, when ``options.debug`` is set

    """
    status = StatusReporter(CONVERT_STAGES, status_callback)
    builddir: Optional[Path] = None
    try:
        with debug_timer(logger, "Preparing workspace"):
            builddir = prepare_workspace(options, status)
            metabook = load_metabook(builddir)

        for executable, purpose in missing_tools():
            logger.warning("%s not found; %s will fail", executable, purpose)
        with debug_timer(logger, "Processing media"):
            image_map = process_images(builddir, options, status)

        with debug_timer(logger, "Generating LaTeX"):
            generate_latex(metabook, builddir, image_map, options, status)

        with debug_timer(logger, "Compiling"):
            compile_latex(builddir, options, status)
        status.create_stage(0, "Done")
        return 0
    except Exception as e:
        if options.debug:
            raise
        logger.error("Error: %s", e)
        return 1
    finally:
        # the LaTeX driver references the build directory
        if builddir is not None and not (options.debug or options.latex_only):
            shutil.rmtree(builddir, ignore_errors=True)
        elif builddir is not None:
            logger.info("Build files kept in %s", builddir)
