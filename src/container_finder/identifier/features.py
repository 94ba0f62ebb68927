# src/container_finder/identifier/features.py
import re
from typing import Iterable

from container_finder.dom.core import DomElement
from container_finder.identifier.constants import (
    CURRENCY_CODES,
    CURRENCY_SYMBOLS,
    PRICE_KEYWORDS,
    PRODUCT_LINK_FRAGMENTS,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    TITLE_TAGS,
)

# Matches $99.99, 99.99 tl, €50,00 ... anywhere in the text. Only the digits are mandatory,
# and only ASCII 0-9 count as digits (full-width or Arabic-Indic numerals do not).
PRICE_PATTERN = re.compile(
    r"[{symbols}]?\s*\d+([.,]\d{{1,2}})?\s*({codes})?".format(
        symbols="".join(re.escape(s) for s in CURRENCY_SYMBOLS),
        codes="|".join(CURRENCY_CODES),
    ),
    re.ASCII,
)
NUMERIC_PATTERN = re.compile(r"\d+", re.ASCII)

_TITLE_SELECTOR = ", ".join(TITLE_TAGS)


def _normalized_text(element: DomElement) -> str:
    return (element.text_content or "").strip()


def is_price_element(element: DomElement) -> bool:
    """Loose price test: a number (optionally with currency) or a price keyword in the text."""
    text = _normalized_text(element).lower()
    if PRICE_PATTERN.search(text):
        return True
    return any(keyword in text for keyword in PRICE_KEYWORDS)


def is_title_element(element: DomElement) -> bool:
    """Text of plausible title length that is not a price, not an image wrapper and not a bare number."""
    text = _normalized_text(element)
    return (
        TITLE_MIN_LENGTH < len(text) < TITLE_MAX_LENGTH
        and not is_price_element(element)
        and element.query_selector("img") is None
        and not NUMERIC_PATTERN.fullmatch(text)
    )


def has_product_link(element: DomElement, fragments: Iterable[str] = PRODUCT_LINK_FRAGMENTS) -> bool:
    return any(element.query_selector(f'a[href*="{fragment}"]') is not None for fragment in fragments)


def has_product_image(element: DomElement) -> bool:
    return element.query_selector('img[src]:not([src=""])') is not None


def has_price_descendant(element: DomElement) -> bool:
    return any(is_price_element(descendant) for descendant in element.query_selector_all("*"))


def has_title_descendant(element: DomElement) -> bool:
    return any(is_title_element(descendant) for descendant in element.query_selector_all(_TITLE_SELECTOR))
