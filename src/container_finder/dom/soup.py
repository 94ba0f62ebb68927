# src/container_finder/dom/soup.py
from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, FeatureNotFound, Tag

from container_finder.core.errors import DocumentParseError

from .core import DomDocument, DomElement

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = "html.parser"


class SoupElement(DomElement):
    """
    DomElement backed by a BeautifulSoup Tag.

    Wrappers compare by identity, never by markup: two identical product
    cards are still two different elements.
    """

    def __init__(self, tag: Tag):
        self._tag = tag

    def __repr__(self) -> str:
        return f"<SoupElement {self.tag_name} class={self.class_name!r}>"

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def tag_name(self) -> str:
        # Browser DOMs report HTML tag names upper-cased.
        return self._tag.name.upper()

    @property
    def class_name(self) -> str:
        value = self._tag.get("class")
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            # Only when the tree was built with multi-valued attributes enabled
            return " ".join(value)
        return value

    @property
    def children(self) -> List[DomElement]:
        return [SoupElement(child) for child in self._tag.children if isinstance(child, Tag)]

    @property
    def text_content(self) -> str:
        return self._tag.get_text()

    @property
    def parent_element(self) -> Optional[DomElement]:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return SoupElement(parent)

    def query_selector(self, selector: str) -> Optional[DomElement]:
        found = self._tag.select_one(selector)
        return SoupElement(found) if found is not None else None

    def query_selector_all(self, selector: str) -> List[DomElement]:
        return [SoupElement(tag) for tag in self._tag.select(selector)]


class SoupDocument(DomDocument):
    """DomDocument wrapping a BeautifulSoup tree."""

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    @property
    def body(self) -> DomElement:
        # html.parser does not synthesize <body> for fragments; scan the whole tree then.
        body = self.soup.body
        return SoupElement(body if body is not None else self.soup)


def parse_html(html: str, features: str = DEFAULT_FEATURES) -> SoupDocument:
    """
    Parses raw HTML into a SoupDocument.

    The class attribute is kept as one raw string (multi_valued_attributes=None),
    because candidates are grouped by the verbatim attribute value.

    The default 'html.parser' is lenient but not HTML5-conformant: unclosed
    <p> or <li> tags nest instead of closing implicitly, which changes child
    counts. Use 'html5lib' (installed separately) for trees that match what a
    browser builds.

    Args:
        html (str): The raw HTML text. A full document or a fragment.
        features (str): BeautifulSoup tree builder, e.g. 'html.parser' or 'lxml'.

    Raises:
        DocumentParseError: If the input is not text or the tree builder is unknown.
    """
    if not isinstance(html, str):
        raise DocumentParseError(f"Expected HTML text, got {type(html).__name__}.")

    clean_html = html.replace('\ufeff', '')
    try:
        soup = BeautifulSoup(clean_html, features, multi_valued_attributes=None)
    except FeatureNotFound as e:
        raise DocumentParseError(f"Unknown HTML tree builder '{features}'.") from e

    logger.debug("Parsed %d characters of HTML with '%s'.", len(clean_html), features)
    return SoupDocument(soup)
