#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/collection.py
r"""Generate the LaTeX sources for a whole collection.

:func:`generate_latex` writes ``output.tex`` (preamble, title page, table
of contents and one ``\input`` per article) plus one file per article under
``latex/`` and the ``languages.tex`` font setup. :func:`render_article`
translates a single HTML document and is usable on its own.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Optional

from bs4 import BeautifulSoup

from wiki2latex.bundle import BUNDLE_DIR, IMAGE_DIR, LATEX_DIR, Db
from wiki2latex.exceptions import BundleError
from wiki2latex.formatter import Formatter
from wiki2latex.languages import SCRIPT_FONTS, lookup, render_language_setup
from wiki2latex.options.convert import ConvertOptions
from wiki2latex.options.visitor import VisitorOptions
from wiki2latex.progress import StatusReporter
from wiki2latex.utils.dom import get_attr
from wiki2latex.utils.escape import tex_escape
from wiki2latex.visitor import Visitor

logger = logging.getLogger(__name__)

OUTPUT_FILE = "output.tex"
LANGUAGES_FILE = "languages.tex"
ATTRIBUTION_FILE = "attribution.html"

_DEFAULT_FONT = SCRIPT_FONTS["default"]

STD_HEADER = "\n".join(
    [
        "%!TEX TS-program = xelatex",
        "%!TEX encoding = UTF-8 Unicode",
        "",
        "\\documentclass[10pt,twocolumn,twoside,fleqn]{article}",
        "\\pagestyle{headings}",
        "\\usepackage{fontspec, xunicode, polyglossia, graphicx, xltxtra}",
        "\\usepackage{amsmath,amsthm,amstext,amssymb}",
        "\\usepackage[usenames]{xcolor}",
        "\\definecolor{linkcolor}{rgb}{.27,0,0}",
        "\\definecolor{citecolor}{rgb}{0,0,.27}",
        "\\usepackage[unicode,colorlinks,breaklinks,allcolors=linkcolor,linkcolor=citecolor]{hyperref}",
        "\\urlstyle{same}",
        f"\\setmainfont[{_DEFAULT_FONT.options}]{{{_DEFAULT_FONT.name}}}",
        "\\newcommand{\\LTRfont}{}",
        "\\newcommand{\\textsmall}[1]{{\\small #1}}",
        # smaller type and one column for attributions
        "\\newcommand{\\attributions}{"
        "\\renewcommand{\\textsmall}[1]{{\\scriptsize ##1}}"
        "\\footnotesize\\onecolumn"
        "}",
        "\\date{}\\author{}",
    ]
)

STD_FOOTER = "\\end{document}"


def get_base_href(soup: BeautifulSoup) -> str:
    """Return the document's ``<base href>``, with protocol-relative URLs made https."""
    base = soup.select_one("head > base[href]")
    if base is None:
        return ""
    href = get_attr(base, "href") or ""
    return "https://" + href[2:] if href.startswith("//") else href


def count_items(item: dict[str, Any]) -> int:
    """Count an outline node and all of its descendants."""
    return 1 + sum(count_items(child) for child in item.get("items") or [])


def render_article(
    html: str,
    stream: IO[str],
    options: Optional[VisitorOptions] = None,
    title: Optional[str] = None,
    article_language: Optional[str] = None,
) -> set[str]:
    """Translate one HTML document to LaTeX.

    Parameters
    ----------
    html : str
        Document HTML; a fragment without ``<body>`` is accepted
    stream : IO[str]
        Output sink
    options : VisitorOptions, optional
        Visitor options; ``base_url`` is taken from the document's
        ``<base href>`` when not set
    title : str, optional
        Article title, emitted as a level-1 heading in the article language
    article_language : str, optional
        Language of the article text, default the collection language

    Returns
    -------
    set of str
        Languages used by the document

    """
    options = options or VisitorOptions()
    soup = BeautifulSoup(html, "html.parser")
    if not options.base_url:
        options = options.create_updated(base_url=get_base_href(soup))
    article_language = article_language or options.lang

    formatter = Formatter(stream, direction=options.dir)
    visitor = Visitor(formatter, options)

    if title is not None:
        heading = soup.new_tag("h1")
        span = soup.new_tag("span", attrs={"lang": article_language})
        span.string = title
        heading.append(span)
        visitor.visit(heading)

    body = soup.body
    if body is None:
        body = soup.new_tag("body")
        body.extend(list(soup.contents))
        soup.append(body)
    if not get_attr(body, "lang"):
        body["lang"] = article_language
    if not get_attr(body, "dir"):
        body["dir"] = lookup(get_attr(body, "lang")).dir

    visitor.visit(body)
    formatter.paragraph_break()
    formatter.flush()
    return visitor.used_languages


def build_header(metabook: dict[str, Any], builddir: Path, options: ConvertOptions) -> tuple[str, dict[str, Any]]:
    r"""Build the preamble and front matter of ``output.tex``.

    Returns
    -------
    tuple
        The header text and the layout facts the article pass needs:
        ``columns``, ``has_chapters``, ``single_item`` and ``language``

    """
    items = metabook.get("items") or []
    head = STD_HEADER
    columns = 2
    if options.onecolumn or metabook.get("columns") == 1:
        head = head.replace("twocolumn", "onecolumn", 1)
        columns = 1

    toc = len(items) > 1
    if isinstance(metabook.get("toc"), bool):
        toc = metabook["toc"]
    if options.toc is not None:
        toc = options.toc
    if toc:
        head = head.replace("]{article}", ",titlepage]{article}", 1)
    if not options.parindent:
        head += "\n\\setlength{\\parindent}{0pt}\\setlength{\\parskip}{5pt}"

    has_chapters = any(item.get("type") == "chapter" for item in items)
    single_item = not has_chapters and len(items) <= 1
    if not single_item:
        head = head.replace("]{article}", "]{report}", 1)

    language = options.lang or metabook.get("lang") or "en"
    head += f"\n\\input{{{(builddir / LANGUAGES_FILE).as_posix()}}}"

    title = metabook.get("title") or ""
    if not title and len(items) == 1:
        title = items[0].get("title") or ""
    head += f"\n\\hypersetup{{pdftitle={{{tex_escape(title)}}}}}"
    head += f"\n\\title{{{{\\Huge {tex_escape(title)}}}"
    if metabook.get("subtitle"):
        head += f" \\\\ {tex_escape(metabook['subtitle'])}"
    head += "}"
    head += f"\n\\graphicspath{{{{{(builddir / BUNDLE_DIR / IMAGE_DIR).as_posix()}/}}}}"
    head += "\n\\begin{document}\\maketitle"
    if toc:
        head += "\n\\pagenumbering{roman}\\tableofcontents\\newpage"
        head += "\n\\pagenumbering{arabic}"
    if metabook.get("summary"):
        head += f"\n\\begin{{abstract}}\n{tex_escape(metabook['summary'])}"
        head += "\n\\end{abstract}"
    head += "\n"

    layout = {"columns": columns, "has_chapters": has_chapters, "single_item": single_item, "language": language}
    return head, layout


class _CollectionWriter:
    """Walks the metabook outline, writing one LaTeX file per article."""

    def __init__(
        self,
        metabook: dict[str, Any],
        builddir: Path,
        image_map: dict[str, str],
        options: ConvertOptions,
        layout: dict[str, Any],
        output: IO[str],
        status: Optional[StatusReporter],
    ):
        self.metabook = metabook
        self.builddir = builddir
        self.output = output
        self.status = status
        self.columns = layout["columns"]
        self.language = layout["language"]
        self.used_languages = {self.language}
        self.visitor_options = VisitorOptions(
            lang=self.language,
            dir=lookup(self.language).dir,
            image_map=image_map,
            image_dir=builddir / BUNDLE_DIR / IMAGE_DIR,
            single_item=layout["single_item"],
            has_chapters=layout["has_chapters"],
            parindent=options.parindent,
        )
        self.parsoid_db = Db(builddir / BUNDLE_DIR / "parsoid.db")
        self.siteinfo_db = Db(builddir / BUNDLE_DIR / "siteinfo.db")

    def close(self) -> None:
        self.parsoid_db.close()
        self.siteinfo_db.close()

    def _report(self, message: str, file: Optional[str] = None) -> None:
        if self.status is not None:
            self.status.report(message, file)

    def _article_language(self, wiki: Any) -> str:
        wikis = self.metabook.get("wikis") or []
        try:
            baseurl = wikis[wiki]["baseurl"]
        except (IndexError, KeyError, TypeError):
            logger.warning("No wiki %r in metabook, using the collection language", wiki)
            return self.language
        siteinfo = self.siteinfo_db.get(baseurl) or {}
        return (siteinfo.get("general") or {}).get("lang") or self.language

    def write_item(self, item: dict[str, Any]) -> None:
        kind = item.get("type")
        if kind == "article":
            self.write_article(item)
        elif kind == "chapter":
            self.write_chapter(item)
        else:
            logger.warning("Unknown item type '%s', ignoring", kind)

    def write_chapter(self, item: dict[str, Any]) -> None:
        self._report("Processing chapter", item.get("title"))
        if "columns" in item and item["columns"] != self.columns:
            self.columns = item["columns"]
            self.output.write("\\onecolumn\n" if self.columns == 1 else "\\twocolumn\n")
        self.output.write(f"\\chapter{{{tex_escape(item.get('title') or '')}}}\n")
        for child in item.get("items") or []:
            self.write_article(child)

    def write_article(self, item: dict[str, Any], attribution: Optional[Path] = None) -> None:
        if attribution is None and item.get("type") != "article":
            logger.warning("Unknown item type '%s' inside chapter, ignoring", item.get("type"))
            return
        wiki = item.get("wiki", 0)
        revision = item.get("revision")
        self._report(f"Processing {item.get('type', 'article')}", item.get("title"))

        if attribution is not None:
            outfile = self.builddir / LATEX_DIR / "attribution.tex"
            html = attribution.read_text(encoding="utf-8")
        else:
            outfile = self.builddir / LATEX_DIR / f"{wiki}-{revision}.tex"
            key = f"{wiki}|{revision}" if wiki else str(revision)
            html = self.parsoid_db.get(key, raw=True)
            if html is None:
                raise BundleError(f"Article {item.get('title')!r} (revision {revision}) missing from parsoid.db")
        self.output.write(f"\\input{{{outfile.as_posix()}}}\n")

        options = self.visitor_options.create_updated(is_attribution=attribution is not None)
        with open(outfile, "w", encoding="utf-8") as stream:
            used = render_article(
                html,
                stream,
                options,
                title=None if attribution is not None else item.get("title") or "",
                article_language=self._article_language(wiki),
            )
        self.used_languages |= used


def generate_latex(
    metabook: dict[str, Any],
    builddir: Path,
    image_map: dict[str, str],
    options: ConvertOptions,
    status: Optional[StatusReporter] = None,
) -> set[str]:
    """Write the LaTeX sources for a collection into ``builddir``.

    Parameters
    ----------
    metabook : dict
        Collection outline from the bundle
    builddir : Path
        Build directory holding the unpacked bundle
    image_map : dict
        Resource URL to image file name, from the media stage
    options : ConvertOptions
        Conversion options
    status : StatusReporter, optional
        Progress reporter

    Returns
    -------
    set of str
        Every language used in the collection

    Raises
    ------
    BundleError
        If an article or a bundle database is missing

    """
    builddir = Path(builddir)
    if status is not None:
        # one more for the attribution pseudo-chapter
        status.create_stage(count_items(metabook) + 1, "Processing collection")
        status.report(None, metabook.get("title"))

    head, layout = build_header(metabook, builddir, options)
    with open(builddir / OUTPUT_FILE, "w", encoding="utf-8") as output:
        output.write(head)
        writer = _CollectionWriter(metabook, builddir, image_map, options, layout, output, status)
        try:
            for item in metabook.get("items") or []:
                writer.write_item(item)

            attribution = builddir / BUNDLE_DIR / ATTRIBUTION_FILE
            if attribution.exists():
                output.write("\\attributions\n")
                writer.write_article({"type": "attribution", "title": "", "wiki": 0}, attribution=attribution)
            elif status is not None:
                status.report("Processing attribution (skipped)")
        finally:
            writer.close()
        output.write(STD_FOOTER)

    used_languages = writer.used_languages
    (builddir / LANGUAGES_FILE).write_text(render_language_setup(used_languages, layout["language"]), encoding="utf-8")
    logger.info("Wrote LaTeX for %d languages: %s", len(used_languages), ", ".join(sorted(used_languages)))
    return used_languages
