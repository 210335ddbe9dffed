#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/media.py
"""Prepare bundle media for XeLaTeX.

XeLaTeX can include PNG, JPEG and PDF images from TeX-safe file names.
:func:`process_images` renames bundle images accordingly, converts the
formats XeLaTeX cannot read (GIF to PNG, SVG to PDF), strips JPEG
resolution data that makes LaTeX abort with "dimension too large", and
splits PDFs into one file per page. The result maps each image's resource
URL to its final file name under ``bundle/images``.

Conversions run in a bounded thread pool and shell out to ImageMagick,
rsvg-convert (or Inkscape), jpegtran and pdfseparate. An image whose
conversion fails is logged and left out of the map; the article then simply
renders without it.

"""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
import tempfile
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from wiki2latex.bundle import BUNDLE_DIR, IMAGE_DIR, Db
from wiki2latex.constants import DEPS_GIF, DEPS_JPEG, DEPS_PDF, DEPS_SVG, JPEG_DENSITY, MAX_SAFE_FILENAME_LENGTH
from wiki2latex.options.convert import ConvertOptions
from wiki2latex.progress import StatusReporter

logger = logging.getLogger(__name__)

IMAGEINFO_DB = "imageinfo.db"

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9.:]+")
_EXTENSION_RE = re.compile(r"[.][^.]+$")
_URL_KEY_RE = re.compile(r"^https?://")

# renames check for existing names, so they must not interleave
_RENAME_LOCK = threading.Lock()


def safe_filename(name: str) -> str:
    """Return a TeX-safe version of an image file name.

    Runs of characters other than ASCII letters, digits, ``.`` and ``:``
    become ``-``, only the extension's dot is kept, and the name is cut to
    its last 64 characters so the extension survives.

    Examples
    --------
        >>> safe_filename("Flag of the U.S.A..svg")
        'Flag-of-the-U-S-A-.svg'

    """
    safe = _UNSAFE_RE.sub("-", name)
    match = _EXTENSION_RE.search(safe)
    stem, extension = (safe[: match.start()], match.group(0)) if match else (safe, "")
    safe = stem.replace(".", "-") + extension
    return safe[-MAX_SAFE_FILENAME_LENGTH:]


def _temp_name(directory: Path, prefix: str, suffix: str) -> Path:
    fd, name = tempfile.mkstemp(dir=directory, prefix=prefix, suffix=suffix)
    os.close(fd)
    return Path(name)


def _run(args: list[str], cwd: Optional[Path] = None) -> None:
    logger.debug("Running %s", " ".join(args))
    subprocess.run(args, cwd=cwd, check=True, capture_output=True)


def rename_file(directory: Path, old_name: str, new_base: str) -> str:
    """Rename a file, choosing a unique name if ``new_base`` is taken.

    Returns
    -------
    str
        The new file name, relative to ``directory``

    """
    with _RENAME_LOCK:
        target = directory / new_base
        if target.exists():
            target = _temp_name(directory, "", new_base)
        os.replace(directory / old_name, target)
    return target.name


def convert_gif(directory: Path, filename: str) -> str:
    """Convert a GIF to PNG with ImageMagick."""
    target = _temp_name(directory, re.sub(r"[.]gif", "", filename, flags=re.IGNORECASE), ".png")
    _run(["convert", str(directory / filename), str(target)])
    return target.name


def convert_svg(directory: Path, filename: str) -> str:
    """Convert an SVG to PDF with rsvg-convert, falling back to Inkscape."""
    # graphicx is confused by ".svg" anywhere in the name
    target = _temp_name(directory, re.sub(r"[.]svg", "", filename, flags=re.IGNORECASE), ".pdf")
    source = str(directory / filename)
    try:
        _run(["rsvg-convert", "-f", "pdf", "-o", str(target), source], cwd=directory)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.debug("rsvg-convert failed for %s (%s), trying inkscape", filename, e)
        _run(["inkscape", "-f", source, "-A", str(target)], cwd=directory)
    return target.name


def convert_jpeg(directory: Path, filename: str, skip_jpegtran: bool = False) -> str:
    """Strip resolution information from a JPEG in place."""
    path = directory / filename
    if not skip_jpegtran:
        original = directory / rename_file(directory, filename, "X" + filename)
        _run(["jpegtran", "-optimize", "-copy", "none", "-outfile", str(path), str(original)])
        original.unlink()
    _run(["mogrify", "-density", JPEG_DENSITY, str(path)])
    return filename


def separate_pdf(directory: Path, filename: str) -> str:
    """Split a PDF into ``<filename>/<page>.pdf`` files."""
    original = directory / rename_file(directory, filename, "X" + filename)
    (directory / filename).mkdir()
    _run(["pdfseparate", str(original), str(directory / filename / "%d.pdf")])
    original.unlink()
    return filename


def _process_one(directory: Path, filename: str, mime: str, options: ConvertOptions) -> str:
    safe = safe_filename(filename)
    if safe != filename:
        filename = rename_file(directory, filename, safe)
    if mime == "image/gif":
        filename = convert_gif(directory, filename)
    elif mime.startswith("image/svg"):
        filename = convert_svg(directory, filename)
    elif mime == "image/jpeg":
        filename = convert_jpeg(directory, filename, options.skip_jpegtran)
    elif mime == "application/pdf":
        filename = separate_pdf(directory, filename)
    return filename


def process_images(
    builddir: Path, options: ConvertOptions, status: Optional[StatusReporter] = None
) -> dict[str, str]:
    """Rename and convert every image in the bundle.

    Parameters
    ----------
    builddir : Path
        Build directory created by :func:`~wiki2latex.bundle.prepare_workspace`
    options : ConvertOptions
        Conversion options; ``max_workers`` and ``skip_jpegtran`` are used
    status : StatusReporter, optional
        Progress reporter

    Returns
    -------
    dict
        Resource URL to file name (relative to ``bundle/images``)

    """
    directory = Path(builddir) / BUNDLE_DIR / IMAGE_DIR
    db_path = Path(builddir) / BUNDLE_DIR / IMAGEINFO_DB
    if not db_path.exists():
        logger.info("Bundle has no %s, skipping media", IMAGEINFO_DB)
        if status is not None:
            status.create_stage(0, "Processing media files")
        return {}

    with Db(db_path) as db:
        entries = list(db.items())
    if status is not None:
        status.create_stage(len(entries), "Processing media files")

    image_map: dict[str, str] = {}
    pending: list[tuple[str, dict, Future[str]]] = []
    with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
        for key, info in entries:
            filename = info.get("filename") if isinstance(info, dict) else None
            if status is not None:
                status.report(None, filename or "")
            if not filename:
                continue
            if not _URL_KEY_RE.match(key):
                # older bundles key images by title
                key = info.get("resource", key)
            future = executor.submit(_process_one, directory, filename, info.get("mime") or "", options)
            pending.append((key, info, future))

        for key, info, future in pending:
            try:
                image_map[key] = future.result()
            except (subprocess.CalledProcessError, OSError) as e:
                logger.error("Could not convert image '%s': %s (%s)", info["filename"], info.get("short", ""), e)

    logger.info("Prepared %d of %d images", len(image_map), len(pending))
    return image_map


def missing_tools() -> list[tuple[str, str]]:
    """Return the ``(executable, purpose)`` pairs of conversion tools not on PATH.

    SVG conversion needs only one of its two tools.
    """
    missing = [dep for dep in (*DEPS_GIF, *DEPS_JPEG, *DEPS_PDF) if shutil.which(dep[0]) is None]
    if all(shutil.which(executable) is None for executable, _ in DEPS_SVG):
        missing.extend(DEPS_SVG)
    return missing
