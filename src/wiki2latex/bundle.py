#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/bundle.py
"""Content bundle access.

A bundle is a zip file (or an unpacked directory) holding a collection's
``metabook.json`` outline, the article HTML in ``parsoid.db``, per-wiki
site information in ``siteinfo.db``, image metadata in ``imageinfo.db``
and the image files themselves under ``images/``. The ``.db`` files are
SQLite key/value stores with a single ``kv_table(key, val)`` table whose
values are JSON.

"""

from __future__ import annotations

import errno
import json
import logging
import os
import shutil
import sqlite3
import tempfile
import zipfile
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from wiki2latex.exceptions import BundleError, FileError, ParsingError
from wiki2latex.options.convert import ConvertOptions
from wiki2latex.progress import StatusReporter

logger = logging.getLogger(__name__)

BUNDLE_DIR = "bundle"
LATEX_DIR = "latex"
IMAGE_DIR = "images"
METABOOK_FILE = "metabook.json"


class Db:
    """Read-only key/value store backed by a bundle SQLite file.

    Parameters
    ----------
    path : str or Path
        Database file

    Raises
    ------
    BundleError
        If the database cannot be opened

    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if not self.path.is_file():
            raise BundleError(f"Bundle database not found: {self.path}", file_path=str(self.path))
        try:
            self._conn = sqlite3.connect(f"{self.path.resolve().as_uri()}?mode=ro", uri=True, check_same_thread=False)
        except sqlite3.Error as e:
            raise BundleError(f"Cannot open bundle database {self.path}", file_path=str(self.path), original_error=e) from e

    def __enter__(self) -> Db:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    def _decode(self, key: str, val: str) -> Any:
        try:
            return json.loads(val)
        except ValueError as e:
            raise ParsingError(f"Malformed JSON for key {key!r} in {self.path.name}", original_error=e) from e

    def get(self, key: str, raw: bool = False) -> Optional[Any]:
        """Return the value stored under ``key``, or None if it is missing.

        Parameters
        ----------
        key : str
            Lookup key
        raw : bool, default False
            Return the stored text without JSON decoding

        """
        row = self._conn.execute("SELECT val FROM kv_table WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return row[0] if raw else self._decode(key, row[0])

    def count(self) -> int:
        """Return the number of stored keys."""
        return self._conn.execute("SELECT COUNT(*) FROM kv_table").fetchone()[0]

    def items(self) -> Iterator[tuple[str, Any]]:
        """Iterate over ``(key, decoded value)`` pairs in key order."""
        for key, val in self._conn.execute("SELECT key, val FROM kv_table ORDER BY key"):
            yield key, self._decode(key, val)


def _hardlink_tree(source: Path, target: Path) -> None:
    target.mkdir()
    for entry in os.scandir(source):
        if entry.is_file(follow_symlinks=False):
            os.link(entry.path, target / entry.name)
        elif entry.is_dir(follow_symlinks=False):
            _hardlink_tree(Path(entry.path), target / entry.name)
        # symlinks and special files are ignored


def prepare_workspace(options: ConvertOptions, status: Optional[StatusReporter] = None) -> Path:
    """Create a build directory holding the bundle contents.

    A zip bundle is extracted into ``<builddir>/bundle``; a bundle directory
    is hard-linked there instead, which is fast but requires the temporary
    directory to live on the same file system as the bundle.

    Parameters
    ----------
    options : ConvertOptions
        Conversion options; ``bundle`` and ``tmpdir`` are used
    status : StatusReporter, optional
        Progress reporter

    Returns
    -------
    Path
        The new build directory. The caller is responsible for removing it.

    Raises
    ------
    FileError
        If the bundle does not exist or cannot be linked
    BundleError
        If a zip bundle is corrupt

    """
    source = Path(options.bundle).resolve()
    if not source.exists():
        raise FileError(f"Bundle not found: {options.bundle}", file_path=str(options.bundle))

    builddir = Path(tempfile.mkdtemp(prefix="wiki2latex-", dir=options.tmpdir))
    logger.debug("Build directory: %s", builddir)
    try:
        _populate(source, builddir, status)
    except Exception:
        shutil.rmtree(builddir, ignore_errors=True)
        raise
    return builddir


def _populate(source: Path, builddir: Path, status: Optional[StatusReporter]) -> None:
    (builddir / LATEX_DIR).mkdir()
    bundledir = builddir / BUNDLE_DIR

    if source.is_dir():
        if status is not None:
            status.create_stage(0, "Creating work space")
        try:
            _hardlink_tree(source, bundledir)
        except OSError as e:
            if e.errno == errno.EXDEV:
                raise FileError(
                    "TMPDIR must be on same filesystem as bundle dir", file_path=str(source), original_error=e
                ) from e
            raise FileError(f"Cannot link bundle directory: {e}", file_path=str(source), original_error=e) from e
        return

    if status is not None:
        status.create_stage(0, "Unpacking content bundle")
    bundledir.mkdir()
    try:
        with zipfile.ZipFile(source) as archive:
            archive.extractall(bundledir)
    except zipfile.BadZipFile as e:
        raise BundleError(f"Not a valid bundle archive: {source}", file_path=str(source), original_error=e) from e


def load_metabook(builddir: Path) -> dict[str, Any]:
    """Read the collection outline from an unpacked bundle.

    Raises
    ------
    BundleError
        If the bundle has no ``metabook.json``
    ParsingError
        If it is not valid JSON

    """
    path = Path(builddir) / BUNDLE_DIR / METABOOK_FILE
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise BundleError("Bundle has no metabook.json", file_path=str(path), original_error=e) from e
    try:
        metabook = json.loads(data)
    except ValueError as e:
        raise ParsingError(f"Malformed metabook: {e}", original_error=e) from e
    if not isinstance(metabook, dict):
        raise ParsingError("Metabook must be a JSON object")
    metabook.setdefault("items", [])
    return metabook
