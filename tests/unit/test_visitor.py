"""Unit tests for the HTML to LaTeX visitor."""

import io
import json
from html import escape
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from wiki2latex.api import html_to_latex
from wiki2latex.exceptions import DecorationBalanceError, InvalidOptionsError
from wiki2latex.formatter import Formatter
from wiki2latex.options import ConvertOptions, VisitorOptions
from wiki2latex.visitor import NodeHandler, Visitor

BASE_URL = "https://en.wikipedia.org/wiki/"


def render(html, **options):
    return html_to_latex(html, **options).latex


def math_span(source, **attrs):
    data = {"body": {"extsrc": source}}
    if attrs:
        data["attrs"] = attrs
    return f'<span typeof="mw:Extension/math" data-mw="{escape(json.dumps(data))}"></span>'


def classify(html, **options):
    visitor = Visitor(Formatter(io.StringIO()), VisitorOptions(**options))
    node = next(iter(BeautifulSoup(html, "html.parser").children))
    return visitor.classify(node)


@pytest.mark.unit
class TestClassify:
    """Test element classification."""

    @pytest.mark.parametrize(
        "html, expected",
        [
            ('<span lang="he">x</span>', NodeHandler.LANGUAGE),
            ('<span lang="en">x</span>', NodeHandler.CHILDREN),
            ('<div class="navbox">x</div>', NodeHandler.HIDDEN),
            ('<span class="noprint" lang="he">x</span>', NodeHandler.HIDDEN),
            ('<span dir="rtl">x</span>', NodeHandler.DIRECTION),
            ('<span dir="RTL">x</span>', NodeHandler.DIRECTION),
            ('<span dir="auto">x</span>', NodeHandler.CHILDREN),
            ('<span dir="sideways">x</span>', NodeHandler.CHILDREN),
            ('<figure typeof="mw:Image/Thumb"></figure>', NodeHandler.IMAGE),
            ('<span typeof="mw:File mw:Error"></span>', NodeHandler.IMAGE),
            ('<span typeof="mw:Extension/math"></span>', NodeHandler.MATH),
            ('<ol typeof="mw:Extension/references"></ol>', NodeHandler.REFERENCES),
            ('<sup rel="dc:references">1</sup>', NodeHandler.CITATION),
            ('<span rel="mw:referencedBy">^</span>', NodeHandler.BACK_LINK),
            ("<h3>x</h3>", NodeHandler.HEADING),
            ("<ul></ul>", NodeHandler.LIST),
            ("<table></table>", NodeHandler.TABLE),
            ("<marquee>x</marquee>", NodeHandler.CHILDREN),
        ],
    )
    def test_classify(self, html, expected):
        assert classify(html) == expected

    def test_language_change_takes_priority_over_semantics(self):
        assert classify('<span lang="he" typeof="mw:Extension/math"></span>') == NodeHandler.LANGUAGE

    def test_direction_matching_context_is_not_a_change(self):
        assert classify('<span dir="rtl">x</span>', dir="rtl") == NodeHandler.CHILDREN

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            Visitor(Formatter(io.StringIO()), ConvertOptions(bundle=Path("x.zip")))


@pytest.mark.unit
class TestTextStructure:
    """Test paragraphs, inline formatting and breaks."""

    def test_paragraphs(self):
        assert render("<p>a</p><p>b</p>") == "a\n\nb\n\n"

    def test_inline_formatting(self):
        assert render("<p><b>a</b><i>b</i><small>c</small></p>") == "\\textbf{a}\\emph{b}\\textsmall{c}\n\n"

    def test_numeric_scripts_use_math(self):
        assert render("<p>x<sup>2</sup></p>") == "x$^{2}$\n\n"
        assert render("<p>H<sub>2</sub>O</p>") == "H$_{2}$O\n\n"

    def test_text_scripts(self):
        assert render("<p>x<sub>n</sub></p>") == "x\\textsubscript{n}\n\n"

    def test_line_break(self):
        assert render("<p>a<br/>b</p>") == "a\n\\\\\nb\n\n"

    def test_word_break(self):
        assert render("<p>a<wbr/>b</p>") == "a\u200bb\n\n"

    def test_hidden_content_is_dropped(self):
        assert render('<p>a<span class="noprint">x</span></p>') == "a\n\n"

    def test_tables_are_skipped(self):
        assert render("<table><tr><td>x</td></tr></table>") == ""

    def test_blockquote(self):
        assert render("<blockquote><p>q</p></blockquote>") == "\\begin{quotation}\nq\n\n\\end{quotation}\n"

    def test_comments_are_ignored(self):
        assert render("<p>a<!-- hidden -->b</p>") == "ab\n\n"


@pytest.mark.unit
class TestLinks:
    """Test anchors, citations and references."""

    def test_external_link(self):
        html = '<p><a href="./Foo">Foo</a></p>'
        assert render(html, base_url=BASE_URL) == f"\\href{{{BASE_URL}Foo}}{{Foo}}\n\n"

    def test_link_url_is_escaped(self):
        assert "\\href{https://example.org/a\\%20b}" in render('<p><a href="https://example.org/a%20b">x</a></p>')

    def test_base_href_from_document(self):
        html = (
            '<html><head><base href="//en.wikipedia.org/wiki/"></head>'
            '<body><p><a href="./Foo">Foo</a></p></body></html>'
        )
        assert render(html) == f"\\href{{{BASE_URL}Foo}}{{Foo}}\n\n"

    def test_citation(self):
        html = '<p>Fact<sup rel="dc:references"><a href="#cite_note-1">1</a></sup></p>'
        assert render(html) == "Fact\\textsuperscript*{\\hyperlink{cite_note-1}{1}}\n\n"

    def test_back_links_are_dropped(self):
        assert render('<p>x<span rel="mw:referencedBy">^</span></p>') == "x\n\n"

    def test_references(self):
        html = (
            '<ol typeof="mw:Extension/references">'
            '<li id="cite_note-1">Ref one</li><li>Ref two</li></ol>'
        )
        latex = render(html)
        assert latex.startswith("\\begin{enumerate}\n\\small\n")
        assert "\\item[\\hypertarget{cite_note-1}{[1]}]{}Ref one" in latex
        assert "\\item[{[2]}]{}Ref two" in latex
        assert latex.endswith("\\end{enumerate}\n")

    def test_empty_references(self):
        assert render('<ol typeof="mw:Extension/references"></ol>') == ""


@pytest.mark.unit
class TestHeadings:
    """Test section headings."""

    def test_heading(self):
        assert render("<h2>Intro</h2>") == "\\section[Intro]{Intro}\n\n"

    def test_heading_levels_with_chapters(self):
        assert render("<h2>Intro</h2>", has_chapters=True) == "\\subsection[Intro]{Intro}\n\n"

    def test_attribution_headings_shift_the_other_way(self):
        assert render("<h1>Credits</h1>", is_attribution=True) == "\\section[Credits]{Credits}\n\n"
        assert render("<h1>Credits</h1>", is_attribution=True, has_chapters=True) == "\\chapter[Credits]{Credits}\n\n"

    def test_single_item_title_is_suppressed(self):
        assert render("<h1>Title</h1>", single_item=True) == ""

    def test_nested_headings_are_suppressed(self):
        assert render("<h2>A<h3>B</h3></h2>") == "\\section[A]{A}\n\n"

    def test_heading_in_other_language_has_no_empty_commands(self):
        latex = render('<div lang="ar"><h2>عنوان</h2></div>')
        assert "\\textarabic{}" not in latex
        assert "\\section[\\textarabic{عنوان}]" in latex
        assert latex.count("\\textarabic{عنوان}") == 2

    def test_link_only_in_long_form(self):
        html = '<h2><a href="https://example.org/">X</a></h2>'
        assert render(html) == "\\section[X]{\\href{https://example.org/}{X}}\n\n"


@pytest.mark.unit
class TestLists:
    """Test itemized and description lists."""

    def test_itemize(self):
        assert render("<ul><li>a</li><li>b</li></ul>") == "\\begin{itemize}\n\\item{}a\n\\item{}b\n\\end{itemize}\n"

    def test_enumerate(self):
        assert render("<ol><li>a</li></ol>") == "\\begin{enumerate}\n\\item{}a\n\\end{enumerate}\n"

    def test_list_content_before_first_item(self):
        expected = "\\begin{itemize}\n\\item{}text\n\\item{}a\n\\end{itemize}\n"
        assert render("<ul>text<li>a</li></ul>") == expected

    def test_empty_list(self):
        assert render("<ul> </ul>") == ""

    def test_orphan_list_item_is_a_paragraph(self):
        assert render("<li>x</li>") == "x\n\n"

    def test_description_list(self):
        expected = "\\begin{description}\n\\item[Term]Def\n\\end{description}\n"
        assert render("<dl><dt>Term</dt><dd>Def</dd></dl>") == expected

    def test_long_terms_are_boxed(self):
        term = "t" * 61
        latex = render(f"<dl><dt>{term}</dt><dd>d</dd></dl>")
        assert f"\\item[\\parbox{{\\columnwidth}}{{{term}}}]" in latex

    def test_indentation_list(self):
        assert render("<dl><dd>Indented</dd></dl>") == "\\begin{quote}\nIndented\n\n\\end{quote}\n"
        assert render("<dl><dd>Indented</dd></dl>", parindent=True).startswith("\\begin{quotation}")


@pytest.mark.unit
class TestMath:
    """Test formulas."""

    def test_inline_math(self):
        assert "${x^2}$" in render(f"<p>a {math_span('x^2')} b</p>")

    def test_display_math(self):
        latex = render(f"<p>{math_span('x^2', display='block')}</p>")
        assert "\\begin{equation*}\n{x^2}\n\\end{equation*}" in latex

    def test_indented_formulas_become_display_math(self):
        latex = render(f"<dl><dd>{math_span('E=mc^2')}</dd></dl>")
        assert "\\begin{equation*}" in latex
        assert "quote" not in latex

    def test_broken_math_is_skipped(self):
        assert "$" not in render("<p>" + math_span(r"\frac{1") + "</p>")

    def test_math_needing_unloaded_package_is_skipped(self):
        html = "<p>" + math_span(r"\cancel{x}") + "</p>"
        assert "cancel" not in render(html)
        options = VisitorOptions(math_packages=frozenset({"amsmath", "cancel"}))
        assert "${\\cancel{x}}$" in html_to_latex(html, options).latex

    def test_math_without_source_is_skipped(self):
        assert render('<p><span typeof="mw:Extension/math"></span></p>') == ""


@pytest.mark.unit
class TestImages:
    """Test figures."""

    IMAGE_MAP = {
        BASE_URL + "File:X.png": "X_1.png",
        BASE_URL + "File:Doc.pdf": "Doc.pdf",
        BASE_URL + "File:Anim.gif": "Anim.gif",
        BASE_URL + "File:A.png": "A.png",
    }

    def render_image(self, html, **options):
        return render(html, base_url=BASE_URL, image_map=self.IMAGE_MAP, **options)

    def test_figure_with_caption(self):
        html = (
            '<figure typeof="mw:Image/Thumb"><a href="./File:X.png">'
            '<img resource="./File:X.png" width="200" height="100"/></a>'
            "<figcaption>Cap</figcaption></figure>"
        )
        latex = self.render_image(html)
        assert latex.startswith("\\begin{figure}[tbh!]\n\\begin{center}\n")
        assert "\\includegraphics[width=0.95\\columnwidth]{X\\_1.png}" in latex
        assert "\\small\\itshape\nCap" in latex
        assert latex.endswith("\\end{figure}\n")

    def test_icons_are_skipped(self):
        html = '<span typeof="mw:Image"><img resource="./File:X.png" width="16" height="12"/></span>'
        assert self.render_image(html) == ""

    def test_unmapped_images_are_skipped(self):
        html = '<figure typeof="mw:Image"><img resource="./File:Missing.png" width="200"/></figure>'
        assert self.render_image(html) == ""

    def test_unsupported_formats_are_skipped(self):
        html = '<figure typeof="mw:Image"><img resource="./File:Anim.gif" width="200"/></figure>'
        assert self.render_image(html) == ""

    def test_pdf_page(self):
        data = escape(json.dumps({"optList": [{"ck": "page", "ak": "page=3"}]}))
        html = (
            f'<figure typeof="mw:Image" data-parsoid="{data}">'
            '<img resource="./File:Doc.pdf" width="200"/></figure>'
        )
        assert "{Doc.pdf/3.pdf}" in self.render_image(html)

    def test_missing_pdf_page_falls_back_to_first(self, tmp_path):
        data = escape(json.dumps({"optList": [{"ck": "page", "ak": "page=3"}]}))
        html = (
            f'<figure typeof="mw:Image" data-parsoid="{data}">'
            '<img resource="./File:Doc.pdf" width="200"/></figure>'
        )
        assert "{Doc.pdf/1.pdf}" in self.render_image(html, image_dir=tmp_path)

    def test_multiple_image_template(self):
        data = escape(json.dumps({"parts": [{"template": {"target": {"href": "./Template:Double_image"}}}]}))
        html = (
            f'<table typeof="mw:Transclusion" about="#mwt1" data-mw="{data}">'
            '<tr><td><figure typeof="mw:Image"><img resource="./File:A.png" width="100" height="100"/></figure></td></tr>'
            '<tr><td><div class="thumbcaption">Cap A</div></td></tr></table>'
        )
        latex = self.render_image(html)
        assert "\\includegraphics[width=0.95\\columnwidth]{A.png}" in latex
        assert "Cap A" in latex


@pytest.mark.unit
class TestLanguages:
    """Test language and direction switching."""

    def test_inline_language(self):
        assert render('<p>Hello <span lang="he">שלום</span></p>') == "Hello \\texthebrew{שלום}\n\n"

    def test_block_language(self):
        expected = "\\begin{hebrew}\n\\renewcommand{\\LTRfont}{\\LTRhebrewfont}\nשלום\n\n\\end{hebrew}\n"
        assert render('<p lang="he">שלום</p>') == expected

    def test_used_languages(self):
        html = '<p>Hello <span lang="he">שלום</span> <span lang="ar">مرحبا</span></p>'
        assert html_to_latex(html).used_languages == frozenset({"he", "ar"})

    def test_rtl_document(self):
        result = html_to_latex("<p>שלום</p>", lang="he", dir="rtl")
        assert result.latex == "שלום\n\n"
        assert result.used_languages == frozenset()

    def test_ltr_paragraph_in_rtl_document(self):
        assert render("<p>abc</p>", lang="he", dir="rtl") == "\\LRE{\\LTRfont abc}\n\n"

    def test_direction_change(self):
        expected = "\\setRTL\nשלום\n\n\\setLTR\nabc\n\n"
        assert render('<p dir="rtl">שלום</p><p>abc</p>') == expected

    def test_language_restored_after_error_free_traversal(self):
        visitor = Visitor(Formatter(io.StringIO()))
        soup = BeautifulSoup('<p>a <span lang="he">ב</span> c</p>', "html.parser")
        visitor.visit(soup.p)
        assert visitor.current_language == "en"
        assert visitor.format.latin_switch is False
        assert visitor.format.context_dir == "ltr"

    def test_inline_language_in_second_paragraph(self):
        out = io.StringIO()
        formatter = Formatter(out, direction="ltr")
        visitor = Visitor(formatter, VisitorOptions())
        soup = BeautifulSoup('<p>English text</p><p>More <span lang="ar">مرحبا</span> text</p>', "html.parser")
        visitor.visit_children(soup)
        assert formatter.context_dir == "ltr"
        formatter.paragraph_break()
        formatter.flush()

        latex = out.getvalue()
        first, second = latex.split("\n\n", 1)
        assert first == "English text"
        assert "More \\textarabic{مرحبا} text" in second
        for command in ("\\setRTL", "\\RLE", "\\LRE"):
            assert command not in latex


@pytest.mark.unit
class TestErrorRecovery:
    """Test formatter state after an error escapes a node."""

    @pytest.mark.parametrize(
        "html",
        [
            "<h2>Intro</h2>",
            "<ul><li>a</li></ul>",
            "<dl><dt>T</dt><dd>d</dd></dl>",
            '<ol typeof="mw:Extension/references"><li id="cite-1">r</li></ol>',
            '<div lang="he"><h2>כותרת</h2></div>',
        ],
    )
    def test_counters_restored(self, html, monkeypatch):
        visitor = Visitor(Formatter(io.StringIO()))
        original = visitor.visit_children

        def fail(node):
            if node.name in ("h2", "ul", "dl", "li"):
                raise DecorationBalanceError("unbalanced")
            original(node)

        monkeypatch.setattr(visitor, "visit_children", fail)
        with pytest.raises(DecorationBalanceError):
            visitor.visit(next(iter(BeautifulSoup(html, "html.parser").children)))
        assert visitor.format.in_list == 0
        assert visitor.format.in_toc == 0
        assert visitor.heading_depth == 0
