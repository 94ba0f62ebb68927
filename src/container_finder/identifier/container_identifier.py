# src/container_finder/identifier/container_identifier.py
from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Dict, List, Optional

from container_finder.dom.core import DomDocument, DomElement
from container_finder.dom.soup import DEFAULT_FEATURES, parse_html
from container_finder.identifier.constants import (
    FALLBACK_LIMIT,
    MIN_CHILDREN,
    MIN_FEATURES,
    NO_CLASS,
    SKIP_TAGS,
)
from container_finder.identifier.features import (
    has_price_descendant,
    has_product_image,
    has_product_link,
    has_title_descendant,
)
from container_finder.identifier.model import ContainerResult, IdentificationTrace
from container_finder.identifier.scoring import calculate_confidence, class_score

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class ContainerIdentifier:
    """
    Finds the repeating "product card" element on a category / listing page
    without any site-specific selectors.

    Every element in the body is tested for four features (product link, image,
    price, title). Elements with at least three of them are candidates; candidates
    are grouped by their raw class attribute and the most repeated group wins.
    """

    def identify(self, document: DomDocument) -> Optional[ContainerResult]:
        """Returns the best guess for the product container, or None when nothing qualifies."""
        return self.identify_with_trace(document).result

    def identify_html(self, html: str, features: str = DEFAULT_FEATURES) -> Optional[ContainerResult]:
        """Parses `html` with the BeautifulSoup backend and identifies its product container."""
        return self.identify(parse_html(html, features))

    def identify_with_trace(self, document: DomDocument) -> IdentificationTrace:
        """
        Runs the full heuristic and returns every intermediate stage.

        Args:
            document (DomDocument): A freshly parsed document. It is only read.

        Returns:
            IdentificationTrace: Candidate statistics plus the result (None if absent).
        """
        trace = IdentificationTrace()

        # Step 1: candidates
        candidates = self._find_candidates(document.body)
        trace.candidate_count = len(candidates)
        logger.debug("Found %d potential product container candidates.", len(candidates))

        # Step 2: group by class signature
        class_counts = Counter(c.class_name or NO_CLASS for c in candidates)
        trace.class_counts = dict(class_counts)
        trace.common_classes = self._rank_common_classes(class_counts)
        logger.debug("Common classes found: %s", trace.common_classes)

        # Step 3: pick the group
        if trace.common_classes:
            best_class = trace.common_classes[0]
            likely_containers = [c for c in candidates if c.class_name == best_class]
        else:
            trace.used_fallback = True
            likely_containers = candidates[:FALLBACK_LIMIT]
        trace.selected_count = len(likely_containers)

        if not likely_containers:
            logger.debug("No suitable product container found.")
            return trace

        # Step 4: describe the first one
        trace.result = self._build_result(likely_containers[0], likely_containers, class_counts)
        logger.info(
            "Identified container %s (count=%d, confidence=%.2f).",
            trace.result.selector, trace.result.count, trace.result.confidence
        )
        return trace

    # ---------- Helpers ----------

    @staticmethod
    def is_candidate(element: DomElement) -> bool:
        """True if the element could be a single product card (3 of 4 features)."""
        if element.tag_name.lower() in SKIP_TAGS:
            return False
        if len(element.children) < MIN_CHILDREN:
            return False

        features = [
            has_product_link(element),
            has_product_image(element),
            has_price_descendant(element),
            has_title_descendant(element),
        ]
        return sum(1 for present in features if present) >= MIN_FEATURES

    def _find_candidates(self, root: DomElement) -> List[DomElement]:
        return [element for element in root.query_selector_all("*") if self.is_candidate(element)]

    @staticmethod
    def _rank_common_classes(class_counts: Counter) -> List[str]:
        """Repeated class signatures, most members first, class vocabulary as tie-break."""
        common = [name for name, count in class_counts.items() if count > 1 and name != NO_CLASS]
        # sorted() is stable: full ties keep document order
        return sorted(common, key=lambda name: (-class_counts[name], -class_score(name)))

    @staticmethod
    def build_selector(element: DomElement) -> str:
        if element.class_name:
            return "." + _WHITESPACE.sub(".", element.class_name)
        return element.tag_name.lower()

    def _build_result(
            self,
            container: DomElement,
            likely_containers: List[DomElement],
            class_counts: Dict[str, int],
    ) -> ContainerResult:
        return ContainerResult(
            tag_name=container.tag_name,
            class_name=container.class_name,
            selector=self.build_selector(container),
            count=class_counts.get(container.class_name, 0) or 1,
            confidence=calculate_confidence(container, len(likely_containers)),
        )


def identify_product_container(html: str, features: str = DEFAULT_FEATURES) -> Optional[ContainerResult]:
    """Convenience wrapper: parse `html` and return its product container, or None."""
    return ContainerIdentifier().identify_html(html, features)
