# src/container_finder/identifier/scoring.py
import logging

from container_finder.dom.core import DomElement
from container_finder.identifier.constants import (
    CLASS_VOCABULARY,
    CONFIDENCE_LINK_FRAGMENTS,
    FEATURE_WEIGHT,
    MAX_CONFIDENCE,
    VOCABULARY_WEIGHTS,
    VOLUME_WEIGHTS,
)
from container_finder.identifier.features import (
    has_price_descendant,
    has_product_image,
    has_product_link,
    has_title_descendant,
)

logger = logging.getLogger(__name__)


def class_score(class_name: str) -> int:
    """
    Counts how many product-container terms occur in a class string.

    Each term counts once, so 'product-card' scores 2 and 'item-box' scores 2.
    """
    lowered = class_name.lower()
    return sum(1 for term in CLASS_VOCABULARY if term in lowered)


def volume_score(group_size: int) -> float:
    for threshold, weight in VOLUME_WEIGHTS:
        if group_size > threshold:
            return weight
    return VOLUME_WEIGHTS[-1][1]


def vocabulary_score(class_name: str) -> float:
    lowered = class_name.lower()
    return sum(weight for term, weight in VOCABULARY_WEIGHTS.items() if term in lowered)


def feature_count(container: DomElement) -> int:
    """Number of the four product features present on the container (narrow link check)."""
    features = [
        has_product_link(container, CONFIDENCE_LINK_FRAGMENTS),
        has_product_image(container),
        has_price_descendant(container),
        has_title_descendant(container),
    ]
    return sum(1 for present in features if present)


def calculate_confidence(container: DomElement, group_size: int) -> float:
    """
    Descriptive confidence in [0, 1] for the selected container.

    Args:
        container (DomElement): The representative element.
        group_size (int): How many elements were selected alongside it.

    Returns:
        float: volume + class vocabulary + feature completeness, capped at 1.0.
    """
    volume = volume_score(group_size)
    vocabulary = vocabulary_score(container.class_name)
    features = feature_count(container)
    completeness = (features / 4) * FEATURE_WEIGHT

    confidence = min(volume + vocabulary + completeness, MAX_CONFIDENCE)
    logger.debug(
        "Confidence for %s.%s: volume=%.2f vocabulary=%.2f features=%d/4 -> %.2f",
        container.tag_name, container.class_name, volume, vocabulary, features, confidence
    )
    return confidence
