#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/visitor.py
r"""Translate wiki HTML to LaTeX.

The :class:`Visitor` walks a BeautifulSoup tree of wiki (Parsoid) HTML and
drives a :class:`~wiki2latex.formatter.Formatter`. Each element is first
classified into a :class:`NodeHandler`, then rendered by the handler bound
to that category. Classification looks at, in order: hidden content,
language changes, direction changes, the ``typeof`` annotation, the ``rel``
annotation and finally the tag name. Elements that match nothing are
transparent: only their children are rendered.

Examples
--------
    >>> import io
    >>> from bs4 import BeautifulSoup
    >>> from wiki2latex.formatter import Formatter
    >>> soup = BeautifulSoup("<p>Some <b>bold</b> text</p>", "html.parser")
    >>> out = io.StringIO()
    >>> fmt = Formatter(out)
    >>> Visitor(fmt).visit(soup.p)
    >>> fmt.flush()
    >>> out.getvalue()
    'Some \\textbf{bold} text\n\n'

"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from urllib.parse import urljoin

from bs4.element import PageElement, Tag

from wiki2latex.constants import (
    BLOCK_ENVIRONMENTS,
    FIGURE_PLACEMENT,
    FIGURE_WIDTH,
    ICON_MAX_PIXELS,
    INLINE_COMMANDS,
    LONG_TERM_LENGTH,
    SECTION_LEVELS,
    SKIPPED_IMAGE_FORMATS,
    ZERO_WIDTH_SPACE,
)
from wiki2latex.exceptions import InvalidOptionsError
from wiki2latex.formatter import Formatter
from wiki2latex.languages import LanguageDescriptor, lookup, ltr_font_command
from wiki2latex.options.visitor import VisitorOptions
from wiki2latex.texmath import check as check_math
from wiki2latex.utils.dom import (
    child_selector,
    element_children,
    first_child,
    get_attr,
    is_element,
    is_hidden,
    is_multiple_image_template,
    is_paragraph,
    is_text,
    load_json_attr,
    node_before,
)
from wiki2latex.utils.escape import escape_filename, escape_url, tex_escape

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"[0-9]+")
_PAGE_OPTION_RE = re.compile(r"=(\d+)$")


class NodeHandler(Enum):
    """Rendering categories an element is classified into."""

    HIDDEN = "hidden"
    LANGUAGE = "language"
    DIRECTION = "direction"
    # typeof annotations
    IMAGE = "image"
    MATH = "math"
    REFERENCES = "references"
    MULTIPLE_IMAGE = "multiple-image"
    # rel annotations
    CITATION = "citation"
    BACK_LINK = "back-link"
    # tags
    ANCHOR = "anchor"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    INLINE = "inline"
    SCRIPT = "script"
    LINE_BREAK = "line-break"
    WORD_BREAK = "word-break"
    ENVIRONMENT = "environment"
    LIST = "list"
    DESCRIPTION_LIST = "description-list"
    TERM = "term"
    DEFINITION = "definition"
    LIST_ITEM = "list-item"
    TABLE = "table"
    FIGURE = "figure"
    DIV = "div"
    CHILDREN = "children"


TYPEOF_HANDLERS = {
    "mw:Image": NodeHandler.IMAGE,
    "mw:Image/Thumb": NodeHandler.IMAGE,
    "mw:File": NodeHandler.IMAGE,
    "mw:File/Thumb": NodeHandler.IMAGE,
    "mw:Extension/math": NodeHandler.MATH,
    "mw:Extension/references": NodeHandler.REFERENCES,
}

REL_HANDLERS = {
    "dc:references": NodeHandler.CITATION,
    "mw:referencedBy": NodeHandler.BACK_LINK,
}

TAG_HANDLERS = {
    "a": NodeHandler.ANCHOR,
    "p": NodeHandler.PARAGRAPH,
    "h1": NodeHandler.HEADING,
    "h2": NodeHandler.HEADING,
    "h3": NodeHandler.HEADING,
    "h4": NodeHandler.HEADING,
    "h5": NodeHandler.HEADING,
    "h6": NodeHandler.HEADING,
    "b": NodeHandler.INLINE,
    "strong": NodeHandler.INLINE,
    "i": NodeHandler.INLINE,
    "em": NodeHandler.INLINE,
    "small": NodeHandler.INLINE,
    "sub": NodeHandler.SCRIPT,
    "sup": NodeHandler.SCRIPT,
    "br": NodeHandler.LINE_BREAK,
    "wbr": NodeHandler.WORD_BREAK,
    "blockquote": NodeHandler.ENVIRONMENT,
    "center": NodeHandler.ENVIRONMENT,
    "ul": NodeHandler.LIST,
    "ol": NodeHandler.LIST,
    "dl": NodeHandler.DESCRIPTION_LIST,
    "dt": NodeHandler.TERM,
    "dd": NodeHandler.DEFINITION,
    "li": NodeHandler.LIST_ITEM,
    "table": NodeHandler.TABLE,
    "figure": NodeHandler.FIGURE,
    "div": NodeHandler.DIV,
}

# Containers rendered through their children without a debug message
TRANSPARENT_TAGS = frozenset(
    {"[document]", "abbr", "body", "cite", "code", "html", "span", "section", "main", "article", "bdi", "font", "u"}
)


@dataclass
class ListInfo:
    """The list-like element enclosing the current node.

    ``type`` is ``"ul"``, ``"ol"``, ``"dl"``, ``"blockquote"`` (a description
    list used only for indentation) or None outside any list.
    """

    type: Optional[str] = None
    saw_dt: bool = False


def _dimension(value: Optional[str]) -> float:
    try:
        return float(value) if value else 0
    except ValueError:
        return 0


class Visitor:
    r"""Render a wiki HTML tree through a Formatter.

    Parameters
    ----------
    formatter : Formatter
        Output formatter; the caller flushes it after the traversal
    options : VisitorOptions, optional
        Rendering options; defaults are used if omitted

    Attributes
    ----------
    current_language : str
        Language of the node being rendered
    toc_language : str
        Collection language, used for the table-of-contents form of headings
    current_directionality : {"ltr", "rtl"}
        Direction of the node being rendered
    used_languages : set of str
        Every language switched to during the traversal, consumed when the
        language setup file is written
    templates : set of str
        ``about`` ids of multi-image templates already rendered
    in_heading : bool
        Rendering the bracketed short form of a heading, where commands with
        optional arguments and links are not allowed
    in_float : bool
        Rendering a figure, which cannot nest

    """

    def __init__(self, formatter: Formatter, options: Optional[VisitorOptions] = None):
        if options is not None and not isinstance(options, VisitorOptions):
            raise InvalidOptionsError(
                component_name="Visitor",
                expected_type=VisitorOptions,
                received_type=type(options),
            )
        self.format = formatter
        self.options = options or VisitorOptions()
        self.current_language = self.toc_language = self.options.lang
        self.current_directionality = self.options.dir
        self.used_languages: set[str] = set()
        self.templates: set[str] = set()
        self.list_info = ListInfo()
        self.in_heading = False
        self.heading_depth = 0
        self.in_float = False
        self.format.set_coverage(lookup(self.current_language))

        self._handlers: dict[NodeHandler, Callable[[Tag], None]] = {
            NodeHandler.HIDDEN: self._skip,
            NodeHandler.LANGUAGE: self._visit_language,
            NodeHandler.DIRECTION: self._visit_direction,
            NodeHandler.IMAGE: self._visit_image,
            NodeHandler.MATH: self._visit_math,
            NodeHandler.REFERENCES: self._visit_references,
            NodeHandler.MULTIPLE_IMAGE: self._visit_multiple_image,
            NodeHandler.CITATION: self._visit_citation,
            NodeHandler.BACK_LINK: self._skip,
            NodeHandler.ANCHOR: self._visit_anchor,
            NodeHandler.PARAGRAPH: self._visit_paragraph,
            NodeHandler.HEADING: self._visit_heading,
            NodeHandler.INLINE: self._visit_inline,
            NodeHandler.SCRIPT: self._visit_script,
            NodeHandler.LINE_BREAK: self._visit_line_break,
            NodeHandler.WORD_BREAK: self._visit_word_break,
            NodeHandler.ENVIRONMENT: self._visit_environment,
            NodeHandler.LIST: self._visit_list,
            NodeHandler.DESCRIPTION_LIST: self._visit_description_list,
            NodeHandler.TERM: self._visit_term,
            NodeHandler.DEFINITION: self._visit_definition,
            NodeHandler.LIST_ITEM: self._visit_list_item,
            NodeHandler.TABLE: self._visit_table,
            NodeHandler.FIGURE: self._visit_figure,
            NodeHandler.DIV: self._visit_div,
            NodeHandler.CHILDREN: self.visit_children,
        }

    # ------------------------------------------------------------------
    # Traversal

    def _element_direction(self, node: Tag) -> str:
        direction = (get_attr(node, "dir") or "").lower()
        if direction in ("ltr", "rtl"):
            return direction
        # "auto" and invalid values inherit
        return self.current_directionality

    def classify(self, node: Tag) -> NodeHandler:
        """Decide how an element is rendered.

        Parameters
        ----------
        node : Tag
            Element to classify

        Returns
        -------
        NodeHandler
            Handler category; language and direction changes take priority
            over the element's own semantics, which are rendered once the
            change has been applied.

        """
        if is_hidden(node):
            return NodeHandler.HIDDEN
        lang = get_attr(node, "lang") or self.current_language
        if lang != self.current_language:
            return NodeHandler.LANGUAGE
        if self._element_direction(node) != self.current_directionality:
            return NodeHandler.DIRECTION

        for token in (get_attr(node, "typeof") or "").split():
            if token in TYPEOF_HANDLERS:
                return TYPEOF_HANDLERS[token]
        if is_multiple_image_template(node):
            return NodeHandler.MULTIPLE_IMAGE

        for token in (get_attr(node, "rel") or "").split():
            if token in REL_HANDLERS:
                return REL_HANDLERS[token]

        handler = TAG_HANDLERS.get(node.name)
        if handler is None:
            if node.name not in TRANSPARENT_TAGS:
                logger.debug("Rendering children of unhandled <%s>", node.name)
            return NodeHandler.CHILDREN
        return handler

    def visit(self, node: PageElement) -> None:
        """Render one node.

        Text and CDATA are written; comments and other non-content nodes are
        ignored.
        """
        if is_element(node):
            self._handlers[self.classify(node)](node)
        elif is_text(node):
            self.format.write(str(node))

    def visit_children(self, node: Tag) -> None:
        """Render every child of ``node`` in document order."""
        for child in list(node.children):
            self.visit(child)

    def _wrap(self, command: str, node: Tag) -> None:
        self.format.write_decorated(command, lambda: self.visit_children(node))

    def _skip(self, node: Tag) -> None:
        pass

    # ------------------------------------------------------------------
    # Language and direction

    def _update_ltr_font(self, descriptor: LanguageDescriptor) -> None:
        command = ltr_font_command(descriptor)
        if command:
            self.format.write_decorated(command)
            self.format.env_break()
            self.format.reset_sol()

    def _visit_language(self, node: Tag) -> None:
        lang = get_attr(node, "lang")
        self.used_languages.add(lang)
        saved_language = self.current_language
        saved_context = self.format.context_dir
        previous = lookup(saved_language)
        descriptor = lookup(lang)
        self.current_language = lang
        try:
            if self.in_heading:
                # no optional arguments allowed here
                self.visit(node)
            elif is_paragraph(node):
                self.format.begin(descriptor.env, descriptor.options)
                self._update_ltr_font(descriptor)
                self.format.set_coverage(descriptor)
                self.format.switch_dir(descriptor.dir, implicit=True)
                self.visit(node)
                self.format.end(descriptor.env)
                self.format.set_coverage(previous)
                self.format.switch_dir(saved_context, implicit=True)
            else:
                command = f"\\text{descriptor.lang}"
                if descriptor.options:
                    command += f"[{descriptor.options}]"

                def content() -> None:
                    self.format.switch_dir(descriptor.dir, implicit=True)
                    self.format.set_coverage(descriptor)
                    self.visit(node)

                self.format.write_decorated(command, content)
                self.format.set_coverage(previous)
                self.format.switch_dir(saved_context, implicit=True)
        finally:
            self.current_language = saved_language

    def _visit_direction(self, node: Tag) -> None:
        direction = self._element_direction(node)
        saved = self.current_directionality
        self.current_directionality = direction
        try:
            if self.in_heading:
                self.visit(node)
            else:
                self.format.switch_dir(direction)
                self.visit(node)
                self.format.switch_dir(saved)
        finally:
            self.current_directionality = saved

    # ------------------------------------------------------------------
    # Text structure

    def _visit_paragraph(self, node: Tag) -> None:
        self.format.paragraph_break()
        self.visit_children(node)
        self.format.paragraph_break()

    def _visit_div(self, node: Tag) -> None:
        self.format.line_break()
        self.visit_children(node)
        self.format.line_break()

    def _visit_line_break(self, node: Tag) -> None:
        self.format.line_break()

    def _visit_word_break(self, node: Tag) -> None:
        self.format.write(ZERO_WIDTH_SPACE)

    def _visit_inline(self, node: Tag, name: Optional[str] = None) -> None:
        self._wrap(INLINE_COMMANDS[name or node.name], node)

    def _visit_script(self, node: Tag, name: Optional[str] = None) -> None:
        name = name or node.name
        children = list(node.children)
        if len(children) == 1 and is_text(children[0]) and _DIGITS_RE.fullmatch(str(children[0])):
            # footnote-style numbers look better as math scripts
            script = "^" if name == "sup" else "_"
            self.format.write_decorated(f"${script}{{{children[0]}}}$")
            return
        self._visit_inline(node, name)

    def _visit_citation(self, node: Tag) -> None:
        self._visit_script(node, "sup")

    def _visit_anchor(self, node: Tag) -> None:
        href = get_attr(node, "href")
        if href and not self.in_heading and node.find("img") is None:
            if href.startswith("#"):
                self._wrap(f"\\hyperlink{{{href[1:]}}}", node)
            else:
                url = escape_url(urljoin(self.options.base_url, href))
                self._wrap(f"\\href{{{url}}}", node)
            return
        self.visit_children(node)

    def _visit_heading(self, node: Tag) -> None:
        level = int(node.name[1])
        if self.options.is_attribution:
            if self.options.has_chapters:
                level -= 1
        elif not self.options.has_chapters:
            level -= 1
        if self.options.single_item and level == 0:
            # the document title is already set by \maketitle
            return
        if self.in_heading or self.heading_depth:
            return

        self.format.paragraph_break()
        toc = lookup(self.toc_language)
        current = lookup(self.current_language)
        saved_context = self.format.context_dir
        switch = self.current_language != self.toc_language
        if switch:
            # the toc entry is in the collection language
            self.format.begin(toc.env, toc.options)
            self._update_ltr_font(toc)
            self.format.switch_dir(toc.dir, implicit=True)

        self.format.in_list += 1
        self.heading_depth += 1
        try:
            with self.format.no_stack():
                self.in_heading = True
                self.format.in_toc += 1
                try:
                    self.format.write_decorated(f"\\{SECTION_LEVELS[level]}[")
                    self._visit_heading_text(node, current, switch)
                finally:
                    self.format.in_toc -= 1
                self.format.write_decorated("]{")
                self.in_heading = False
                self._visit_heading_text(node, current, switch)
                self.format.write_decorated("}")
        finally:
            self.in_heading = False
            self.heading_depth -= 1
            self.format.in_list -= 1

        if switch:
            self.format.end(toc.env)
            self.format.switch_dir(saved_context, implicit=True)
            self.format.switch_dir(self.current_directionality)
        self.format.paragraph_break()

    def _visit_heading_text(self, node: Tag, current: LanguageDescriptor, switch: bool) -> None:
        self.format.dir_break()
        if not switch:
            self.format.reset_sol()
            self.visit_children(node)
            self.format.dir_break()
            return

        command = f"\\text{current.lang}"
        if current.options and not self.in_heading:
            command += f"[{current.options}]"

        def content() -> None:
            self.format.switch_dir(current.dir, implicit=True)
            self.format.switch_dir(self.current_directionality)
            self.format.reset_sol()
            self.visit_children(node)

        # the command must close before the runs are flushed
        self.format.write_decorated(command, content)
        self.format.dir_break()

    # ------------------------------------------------------------------
    # Lists

    def _visit_environment(self, node: Tag) -> None:
        env = BLOCK_ENVIRONMENTS[node.name]
        self.format.begin(env)
        self.visit_children(node)
        self.format.end(env)

    def _visit_list(self, node: Tag) -> None:
        child = first_child(node)
        if child is None:
            return
        env = BLOCK_ENVIRONMENTS[node.name]
        self.format.begin(env)
        saved = self.list_info
        self.list_info = ListInfo(node.name)
        self.format.in_list += 1
        try:
            if not (is_element(child) and child.name == "li"):
                # \item must come before any list content
                self.format.write_decorated("\\item{}")
                self.format.dir_break()
                self.format.reset_sol()
            self.visit_children(node)
            self.format.end(env)
        finally:
            self.format.in_list -= 1
            self.list_info = saved

    def _visit_list_item(self, node: Tag) -> None:
        if self.list_info.type not in ("ul", "ol"):
            self._visit_paragraph(node)
            return
        self.format.env_break()
        self.format.write_decorated("\\item{}")
        self.format.dir_break()
        self.format.reset_sol()
        self.visit_children(node)

    def _visit_description_list(self, node: Tag) -> None:
        child = first_child(node)
        if child is None:
            return

        items = element_children(node)
        saw_dt = False
        all_math = bool(items)
        for item in items:
            saw_dt = item.name == "dt"
            elements = element_children(item)
            if not (len(elements) == 1 and get_attr(elements[0], "typeof") == "mw:Extension/math"):
                all_math = False
            if saw_dt:
                break
        if all_math and not saw_dt:
            # indented formulas: set them as display math
            for item in items:
                self._visit_math(element_children(item)[0], display=True)
            return

        saved = self.list_info
        self.list_info = ListInfo("dl" if saw_dt else "blockquote")
        if saw_dt:
            env = "description"
        elif self.options.parindent:
            env = "quotation"
        else:
            env = "quote"
        try:
            self.format.begin(env)
            if saw_dt:
                self.format.in_list += 1
            try:
                if saw_dt and not (is_element(child) and child.name == "dt"):
                    self.format.write_decorated("\\item{}")
                    self.format.dir_break()
                    self.format.reset_sol()
                    self.list_info.saw_dt = True
                self.visit_children(node)
                self.format.end(env)
            finally:
                if saw_dt:
                    self.format.in_list -= 1
        finally:
            self.list_info = saved

    def _visit_term(self, node: Tag) -> None:
        if self.list_info.type != "dl":
            self._visit_paragraph(node)
            return
        long_term = len(node.get_text()) > LONG_TERM_LENGTH
        self.list_info.saw_dt = False
        self.format.env_break()
        self.format.write_decorated("\\item[")
        if long_term:
            self.format.write_decorated("\\parbox{\\columnwidth}{")
        self.format.dir_break()
        self.format.reset_sol()
        self.visit_children(node)
        self.format.dir_break()
        if long_term:
            self.format.write_decorated("}")
        self.format.write_decorated("]")
        self.format.dir_break()
        self.list_info.saw_dt = True

    def _visit_definition(self, node: Tag) -> None:
        if self.list_info.type != "dl":
            self._visit_paragraph(node)
            return
        previous = node_before(node)
        if not (previous is None or (is_element(previous) and previous.name == "dt")):
            self.format.env_break()
            self.format.write_decorated("\\item{}")
            self.format.dir_break()
            self.format.reset_sol()
        self.visit_children(node)

    def _visit_references(self, node: Tag) -> None:
        refs = element_children(node)
        if not refs:
            return
        self.format.begin("enumerate")
        self.format.in_list += 1
        try:
            self.format.write_decorated("\\small\n")
            for i, ref in enumerate(refs, start=1):
                name = tex_escape(f"[{i}]")
                ref_id = get_attr(ref, "id")
                name = f"\\hypertarget{{{ref_id}}}{{{name}}}" if ref_id else f"{{{name}}}"
                self.format.env_break()
                self.format.write_decorated(f"\\item[{name}]{{}}")
                self.format.dir_break()
                self.format.reset_sol()
                self.visit_children(ref)
            self.format.end("enumerate")
        finally:
            self.format.in_list -= 1

    # ------------------------------------------------------------------
    # Tables, figures and math

    def _visit_table(self, node: Tag) -> None:
        if get_attr(node, "about") not in self.templates:
            logger.debug("Skipping table")

    def _visit_image(self, node: Tag) -> None:
        img = node.select_one("img[resource]")
        if img is None:
            return
        height = _dimension(get_attr(img, "height"))
        width = _dimension(get_attr(img, "width"))
        if (height or width) and height <= ICON_MAX_PIXELS and width <= ICON_MAX_PIXELS:
            logger.debug("Skipping icon-sized image %s", get_attr(img, "resource"))
            return
        self._visit_figure(node)

    def _visit_multiple_image(self, node: Tag) -> None:
        about = get_attr(node, "about") or ""
        self.templates.add(about)
        scope = node.parent or node
        rows = f'table[about="{about}"] tr'
        images = scope.select(f'{rows} > td > *[typeof="mw:Image"]')
        captions = scope.select(f'{rows} + tr > td > *[class="thumbcaption"]')
        for i, image in enumerate(images):
            self._visit_figure(image, captions[i] if i < len(captions) else None)

    def _pdf_page(self, node: Tag, filename: str) -> str:
        page = "1"
        data = load_json_attr(node, "data-parsoid")
        options = data.get("optList") if isinstance(data, dict) else None
        for option in options or []:
            if not isinstance(option, dict) or option.get("ck") != "page":
                continue
            match = _PAGE_OPTION_RE.search(str(option.get("ak", "")))
            if match:
                page = match.group(1)
        path = posixpath.join(filename, f"{page}.pdf")
        image_dir = self.options.image_dir
        if page != "1" and image_dir is not None and not (image_dir / path).exists():
            logger.info("Page %s of %s not found, using page 1", page, filename)
            path = posixpath.join(filename, "1.pdf")
        return path

    def _visit_figure(self, node: Tag, extra_caption: Optional[Tag] = None) -> None:
        img = node.select_one("img[resource]")
        if img is None:
            return
        caption = child_selector(node, "figcaption") or extra_caption
        resource = urljoin(self.options.base_url, get_attr(img, "resource"))
        filename = self.options.image_map.get(resource)
        if not filename:
            logger.info("Skipping %s (download/convert)", resource)
            return
        if SKIPPED_IMAGE_FORMATS.search(filename):
            logger.info("Skipping %s (format)", resource)
            return
        if self.in_float:
            logger.info("Skipping %s (nested float)", resource)
            return
        if resource.lower().endswith(".pdf"):
            filename = self._pdf_page(node, filename)

        self.in_float = True
        try:
            self.format.begin("figure", FIGURE_PLACEMENT)
            self.format.begin("center")
            self.format.write_decorated(f"\\includegraphics[width={FIGURE_WIDTH}]{{{escape_filename(filename)}}}")
            self.format.end("center")
            if caption is not None:
                self._visit_caption(caption)
            self.format.end("figure")
        finally:
            self.in_float = False

    def _visit_caption(self, caption: Tag) -> None:
        current = lookup(self.current_language)
        saved_context = self.format.context_dir
        switch = self.current_language != self.toc_language
        if switch:
            self.format.begin(current.env, current.options)
            self._update_ltr_font(current)
            self.format.switch_dir(current.dir, implicit=True)
        self.format.write_decorated("\\small\\itshape\n")
        self.visit_children(caption)
        if switch:
            self.format.end(current.env)
            self.format.switch_dir(saved_context, implicit=True)

    def _visit_math(self, node: Tag, display: bool = False) -> None:
        self.format.env_break()
        data = load_json_attr(node, "data-mw")
        try:
            source = data["body"]["extsrc"]
        except (KeyError, TypeError):
            logger.info("Skipping math without source")
            return
        try:
            display = display or data["attrs"]["display"] == "block"
        except (KeyError, TypeError):
            pass

        result = check_math(str(source))
        if not result.ok:
            logger.info("Skipping broken math %r: %s", source, result.details)
            return
        if not result.supported_by(self.options.math_packages):
            logger.info(
                "Skipping math %r: needs %s", source, ", ".join(sorted(result.required_packages))
            )
            return

        if display:
            self.format.begin("equation*")
            self.format.write_decorated(result.output)
            self.format.end("equation*")
        else:
            self.format.write_decorated(f"${result.output}$")
            self.format.env_break()
