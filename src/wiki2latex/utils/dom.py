#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/utils/dom.py
"""BeautifulSoup helpers for walking wiki HTML.

These wrap the few DOM queries the visitor needs (attribute lookup that
flattens BeautifulSoup's multi-valued attributes, direct-child selection,
whitespace-insensitive sibling navigation) and the predicates that decide
how an element is rendered.

"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from bs4.element import CData, NavigableString, PageElement, Tag

from wiki2latex.constants import HIDDEN_CLASSES, MULTIPLE_IMAGE_TEMPLATES, PARAGRAPH_TAGS

logger = logging.getLogger(__name__)

_DISPLAY_NONE_RE = re.compile(r"(^|;)\s*display\s*:\s*none\s*(;|$)", re.IGNORECASE)


def is_element(node: Any) -> bool:
    """Return True for element nodes."""
    return isinstance(node, Tag)


def is_text(node: Any) -> bool:
    """Return True for text and CDATA nodes.

    Comments, doctypes, processing instructions and the text of script
    and style elements are NavigableString subclasses too; they are not
    document text.
    """
    return type(node) is NavigableString or isinstance(node, CData)


def get_attr(node: Tag, name: str, default: Optional[str] = None) -> Optional[str]:
    """Return an attribute as a string.

    BeautifulSoup returns multi-valued attributes such as ``class`` and
    ``rel`` as lists; they are joined with single spaces.
    """
    value = node.get(name)
    if value is None:
        return default
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def class_list(node: Tag) -> list[str]:
    """Return the element's classes."""
    value = node.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def load_json_attr(node: Tag, name: str) -> Optional[Any]:
    """Parse a JSON-valued attribute such as ``data-mw``.

    Returns None when the attribute is missing or malformed.
    """
    raw = node.get(name)
    if not raw:
        return None
    try:
        return json.loads(str(raw))
    except ValueError:
        logger.debug("Ignoring malformed %s attribute on <%s>", name, node.name)
        return None


def child_selector(node: Tag, selector: str) -> Optional[Tag]:
    """Like ``select_one`` but only considers direct children of ``node``."""
    for child in node.children:
        if isinstance(child, Tag) and child.css.match(selector):
            return child
    return None


def _is_skippable(node: PageElement) -> bool:
    if isinstance(node, Tag):
        return False
    if is_text(node):
        return not str(node).strip()
    # comments and other non-content nodes
    return True


def first_child(node: Tag) -> Optional[PageElement]:
    """Return the first child that is an element or non-blank text."""
    for child in node.children:
        if not _is_skippable(child):
            return child
    return None


def node_before(node: PageElement) -> Optional[PageElement]:
    """Return the previous sibling, ignoring blank text and comments."""
    sibling = node.previous_sibling
    while sibling is not None and _is_skippable(sibling):
        sibling = sibling.previous_sibling
    return sibling


def element_children(node: Tag) -> list[Tag]:
    """Return the element children of ``node``."""
    return [child for child in node.children if isinstance(child, Tag)]


def is_paragraph(node: Tag) -> bool:
    """Return True if the element starts a paragraph context in LaTeX."""
    return node.name in PARAGRAPH_TAGS


def is_multiple_image_template(node: Tag) -> bool:
    """Recognize the double and triple image templates used on some wikis."""
    if get_attr(node, "typeof") != "mw:Transclusion":
        return False
    data = load_json_attr(node, "data-mw")
    try:
        href = data["parts"][0]["template"]["target"]["href"]
    except (KeyError, IndexError, TypeError):
        return False
    return href in MULTIPLE_IMAGE_TEMPLATES


def is_hidden(node: Tag) -> bool:
    """Return True for content that should not appear in print.

    This covers explicit ``noprint`` markers, ``display:none`` styling and
    page chrome such as infoboxes and navigation boxes.
    """
    if is_multiple_image_template(node):
        return False
    classes = class_list(node)
    if "noprint" in classes:
        return True
    if _DISPLAY_NONE_RE.search(get_attr(node, "style", "") or ""):
        return True
    return any(c in classes for c in HIDDEN_CLASSES)
