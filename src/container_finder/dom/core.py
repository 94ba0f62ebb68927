# src/container_finder/dom/core.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional


class DomElement(ABC):
    """
    Read-only view of a single element, as needed by the container heuristic.

    Backends (BeautifulSoup, a browser bridge, ...) implement this so the
    heuristic never touches a parser library directly.
    """

    @property
    @abstractmethod
    def tag_name(self) -> str:
        """Tag name as the backend renders it (e.g. 'DIV')."""
        raise NotImplementedError

    @property
    @abstractmethod
    def class_name(self) -> str:
        """Raw class attribute, '' when absent."""
        raise NotImplementedError

    @property
    @abstractmethod
    def children(self) -> List["DomElement"]:
        """Direct child elements (text nodes excluded)."""
        raise NotImplementedError

    @property
    @abstractmethod
    def text_content(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def parent_element(self) -> Optional["DomElement"]:
        raise NotImplementedError

    @abstractmethod
    def query_selector(self, selector: str) -> Optional["DomElement"]:
        """First descendant matching a CSS selector, or None."""
        raise NotImplementedError

    @abstractmethod
    def query_selector_all(self, selector: str) -> List["DomElement"]:
        """All descendants matching a CSS selector, in document order."""
        raise NotImplementedError


class DomDocument(ABC):
    """A parsed HTML document. Only its body is ever scanned."""

    @property
    @abstractmethod
    def body(self) -> DomElement:
        raise NotImplementedError
