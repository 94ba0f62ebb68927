# src/container_finder/identifier/constants.py
"""
Lookup tables used by the product container heuristic.

Bump TABLES_VERSION whenever one of the tables changes, so results can be
traced back to the vocabulary that produced them.
"""
from typing import Dict, FrozenSet, Tuple

TABLES_VERSION = "1"

# Grouping key for candidates without a class attribute.
NO_CLASS = "no-class"

# Tags too coarse to be a single product card.
SKIP_TAGS: FrozenSet[str] = frozenset({
    "body", "html", "main", "section", "header", "nav", "footer", "aside",
})

MIN_CHILDREN = 2
MIN_FEATURES = 3
FALLBACK_LIMIT = 5

# --- Price detection ---
CURRENCY_SYMBOLS: Tuple[str, ...] = ("$", "€", "£", "₺", "¥")
CURRENCY_CODES: Tuple[str, ...] = ("tl", "usd", "eur", "gbp", "try", "jpy")
PRICE_KEYWORDS: Tuple[str, ...] = ("price", "fiyat", "cost", "₺", "lira")

# --- Title detection ---
TITLE_MIN_LENGTH = 5  # exclusive
TITLE_MAX_LENGTH = 200  # exclusive
TITLE_TAGS: Tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6", "span", "a", "div", "p")

# --- Link detection ---
PRODUCT_LINK_FRAGMENTS: Tuple[str, ...] = ("/product", "/detail", "/item", "/p/")
# Narrower set used when scoring confidence
CONFIDENCE_LINK_FRAGMENTS: Tuple[str, ...] = ("/product", "/detail")

# --- Class name scoring ---
CLASS_VOCABULARY: Tuple[str, ...] = ("product", "item", "card", "tile", "wrapper", "container", "box")

# --- Confidence ---
# (minimum exclusive group size, weight), checked top-down; the last entry always applies.
VOLUME_WEIGHTS: Tuple[Tuple[int, float], ...] = ((5, 0.3), (2, 0.2), (0, 0.1))
VOCABULARY_WEIGHTS: Dict[str, float] = {"product": 0.3, "item": 0.2, "card": 0.2}
FEATURE_WEIGHT = 0.3
MAX_CONFIDENCE = 1.0
