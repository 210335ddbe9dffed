"""Pytest configuration and shared fixtures for the wiki2latex test suite.

This module provides shared fixtures for building small content bundles
and the Hypothesis profiles used by the property-based tests.
"""

import json
import os
import sqlite3
import zipfile
from pathlib import Path
from typing import Any, Callable

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


def write_kv_db(path: Path, entries: dict[str, Any], raw: bool = False) -> Path:
    """Create a bundle key/value database.

    Parameters
    ----------
    path : Path
        Database file to create
    entries : dict
        Keys and values; values are JSON-encoded unless ``raw`` is set
    raw : bool, default False
        Store values as given

    """
    conn = sqlite3.connect(path)
    try:
        conn.execute("CREATE TABLE kv_table (key TEXT PRIMARY KEY, val TEXT)")
        conn.executemany(
            "INSERT INTO kv_table (key, val) VALUES (?, ?)",
            [(key, val if raw else json.dumps(val)) for key, val in entries.items()],
        )
        conn.commit()
    finally:
        conn.close()
    return path


ARTICLE_HTML = (
    '<html><head><base href="//en.wikipedia.org/wiki/"></head>'
    "<body><p>Hello <b>world</b></p></body></html>"
)


@pytest.fixture
def kv_db() -> Callable[..., Path]:
    """Provide the key/value database writer."""
    return write_kv_db


@pytest.fixture
def bundle_dir(tmp_path: Path) -> Path:
    """Provide an unpacked bundle holding a one-article collection."""
    bundle = tmp_path / "bundle"
    bundle.mkdir()
    (bundle / "images").mkdir()
    metabook = {
        "type": "collection",
        "title": "Test Collection",
        "wikis": [{"baseurl": "https://en.wikipedia.org/w"}],
        "items": [{"type": "article", "title": "Greeting", "revision": 42, "wiki": 0}],
    }
    (bundle / "metabook.json").write_text(json.dumps(metabook), encoding="utf-8")
    write_kv_db(bundle / "parsoid.db", {"42": ARTICLE_HTML}, raw=True)
    write_kv_db(bundle / "siteinfo.db", {"https://en.wikipedia.org/w": {"general": {"lang": "en"}}})
    return bundle


@pytest.fixture
def bundle_zip(bundle_dir: Path, tmp_path: Path) -> Path:
    """Provide the same bundle as a zip archive."""
    archive = tmp_path / "bundle.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for path in bundle_dir.rglob("*"):
            zf.write(path, path.relative_to(bundle_dir).as_posix())
    return archive
