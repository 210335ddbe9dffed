"""Unit tests for collection-level LaTeX generation."""

import io
import json
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from wiki2latex.bundle import LATEX_DIR, prepare_workspace
from wiki2latex.collection import (
    LANGUAGES_FILE,
    OUTPUT_FILE,
    STD_FOOTER,
    build_header,
    count_items,
    generate_latex,
    get_base_href,
    render_article,
)
from wiki2latex.exceptions import BundleError
from wiki2latex.options import ConvertOptions, VisitorOptions
from wiki2latex.progress import StatusReporter

ARTICLE = {"type": "article", "title": "Greeting", "revision": 42, "wiki": 0}


def header(metabook, **kwargs):
    return build_header(metabook, Path("/build"), ConvertOptions(bundle=Path("c.zip"), **kwargs))


@pytest.mark.unit
class TestHelpers:
    """Test small outline and document helpers."""

    def test_count_items(self):
        assert count_items({"items": [{"items": [{}, {}]}, {}]}) == 5

    @pytest.mark.parametrize(
        "html, expected",
        [
            ('<head><base href="//he.wikipedia.org/wiki/"></head>', "https://he.wikipedia.org/wiki/"),
            ('<head><base href="http://localhost/wiki/"></head>', "http://localhost/wiki/"),
            ("<p>no base</p>", ""),
        ],
    )
    def test_get_base_href(self, html, expected):
        assert get_base_href(BeautifulSoup(html, "html.parser")) == expected


@pytest.mark.unit
class TestBuildHeader:
    """Test preamble generation from the metabook."""

    def test_single_article(self):
        head, layout = header({"title": "Test", "items": [ARTICLE]})
        assert "\\documentclass[10pt,twocolumn,twoside,fleqn]{article}" in head
        assert "\\tableofcontents" not in head
        assert "\\setlength{\\parindent}{0pt}" in head
        assert "\\input{/build/languages.tex}" in head
        assert "\\graphicspath{{/build/bundle/images/}}" in head
        assert "\\title{{\\Huge Test}}" in head
        assert head.endswith("\\begin{document}\\maketitle\n")
        assert layout == {"columns": 2, "has_chapters": False, "single_item": True, "language": "en"}

    def test_several_articles_get_report_and_toc(self):
        head, layout = header({"title": "Test", "items": [ARTICLE, ARTICLE]})
        assert "titlepage]{report}" in head
        assert "\\tableofcontents" in head
        assert not layout["single_item"]

    def test_toc_option_overrides_metabook(self):
        head, _ = header({"toc": True, "items": [ARTICLE]}, toc=False)
        assert "\\tableofcontents" not in head
        head, _ = header({"toc": True, "items": [ARTICLE]})
        assert "\\tableofcontents" in head

    def test_chapters(self):
        _, layout = header({"items": [{"type": "chapter", "title": "Part", "items": [ARTICLE]}]})
        assert layout["has_chapters"]
        assert not layout["single_item"]

    def test_onecolumn(self):
        head, layout = header({"items": [ARTICLE]}, onecolumn=True)
        assert "onecolumn" in head and "twocolumn" not in head
        assert layout["columns"] == 1
        _, layout = header({"columns": 1, "items": [ARTICLE]})
        assert layout["columns"] == 1

    def test_parindent(self):
        head, _ = header({"items": [ARTICLE]}, parindent=True)
        assert "\\parindent" not in head

    def test_title_falls_back_to_single_item(self):
        head, _ = header({"items": [ARTICLE]})
        assert "\\hypersetup{pdftitle={Greeting}}" in head

    def test_subtitle_and_summary_are_escaped(self):
        head, _ = header({"title": "A & B", "subtitle": "50%", "summary": "x_1", "items": [ARTICLE]})
        assert "\\title{{\\Huge A \\& B} \\\\ 50\\%}" in head
        assert "\\begin{abstract}\nx\\_1\n\\end{abstract}" in head

    def test_language(self):
        assert header({"lang": "he", "items": []})[1]["language"] == "he"
        assert header({"lang": "he", "items": []}, lang="ar")[1]["language"] == "ar"


@pytest.mark.unit
class TestRenderArticle:
    """Test translating a single article document."""

    def test_title_heading_in_article_language(self):
        out = io.StringIO()
        used = render_article("<p>Hello</p>", out, VisitorOptions(), title="Greeting")
        assert out.getvalue().startswith("\\chapter[Greeting]{Greeting}\n\n")
        assert "Hello\n" in out.getvalue()
        assert used == set()

    def test_base_href_feeds_links(self):
        html = '<html><head><base href="//en.wikipedia.org/wiki/"></head><body><a href="./Foo">Foo</a></body></html>'
        out = io.StringIO()
        render_article(html, out)
        assert "https://en.wikipedia.org/wiki/Foo" in out.getvalue()

    def test_rtl_article(self):
        out = io.StringIO()
        render_article("<p>שלום</p>", out, VisitorOptions(lang="he", dir="rtl"))
        assert "שלום" in out.getvalue()


@pytest.mark.unit
class TestGenerateLatex:
    """Test writing a collection into a build directory."""

    def workspace(self, bundle, tmp_path):
        return prepare_workspace(ConvertOptions(bundle=bundle, tmpdir=tmp_path))

    def test_single_article(self, bundle_dir, tmp_path):
        builddir = self.workspace(bundle_dir, tmp_path)
        metabook = json.loads((bundle_dir / "metabook.json").read_text(encoding="utf-8"))
        used = generate_latex(metabook, builddir, {}, ConvertOptions(bundle=bundle_dir))

        article = builddir / LATEX_DIR / "0-42.tex"
        output = (builddir / OUTPUT_FILE).read_text(encoding="utf-8")
        assert f"\\input{{{article.as_posix()}}}\n" in output
        assert output.endswith(STD_FOOTER)
        assert "Hello \\textbf{world}" in article.read_text(encoding="utf-8")
        assert "\\setdefaultlanguage" in (builddir / LANGUAGES_FILE).read_text(encoding="utf-8")
        assert "en" in used

    def test_missing_article(self, bundle_dir, tmp_path):
        builddir = self.workspace(bundle_dir, tmp_path)
        with pytest.raises(BundleError, match="revision 99"):
            generate_latex({"items": [dict(ARTICLE, revision=99)]}, builddir, {}, ConvertOptions(bundle=bundle_dir))

    def test_chapter_switches_columns(self, bundle_dir, tmp_path):
        builddir = self.workspace(bundle_dir, tmp_path)
        metabook = {"items": [{"type": "chapter", "title": "Part & Parcel", "columns": 1, "items": [ARTICLE]}]}
        generate_latex(metabook, builddir, {}, ConvertOptions(bundle=bundle_dir))
        output = (builddir / OUTPUT_FILE).read_text(encoding="utf-8")
        assert "\\onecolumn\n\\chapter{Part \\& Parcel}\n\\input{" in output

    def test_unknown_items_are_ignored(self, bundle_dir, tmp_path, caplog):
        builddir = self.workspace(bundle_dir, tmp_path)
        generate_latex({"items": [{"type": "poster"}, ARTICLE]}, builddir, {}, ConvertOptions(bundle=bundle_dir))
        assert "Unknown item type 'poster'" in caplog.text

    def test_attribution(self, bundle_dir, tmp_path):
        (bundle_dir / "attribution.html").write_text("<body><h2>Credits</h2><p>Thanks</p></body>", encoding="utf-8")
        builddir = self.workspace(bundle_dir, tmp_path)
        generate_latex({"items": [ARTICLE]}, builddir, {}, ConvertOptions(bundle=bundle_dir))
        output = (builddir / OUTPUT_FILE).read_text(encoding="utf-8")
        attribution = builddir / LATEX_DIR / "attribution.tex"
        assert f"\\attributions\n\\input{{{attribution.as_posix()}}}\n" in output
        assert "Thanks" in attribution.read_text(encoding="utf-8")

    def test_progress(self, bundle_dir, tmp_path):
        events = []
        builddir = self.workspace(bundle_dir, tmp_path)
        generate_latex(
            {"title": "T", "items": [ARTICLE]},
            builddir,
            {},
            ConvertOptions(bundle=bundle_dir),
            StatusReporter(1, events.append),
        )
        messages = [e.message for e in events]
        assert messages[0] == "Processing collection"
        assert "Processing article" in messages
        assert messages[-1] == "Processing attribution (skipped)"
