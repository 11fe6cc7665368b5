"""Content extraction layers.

Each layer implements the ExtractionLayer protocol: given a parsed
document, return the first meaningful content container it can find, or
None. Layers never raise for "not found"; the orchestrator moves on to the
next layer.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from bs4 import BeautifulSoup, Tag

from ..models.config import ExtractParam, MeaningfulThreshold
from .chrome import remove_chrome
from .selectors import get_all_selectors, merge_selectors
from .stats import content_score, is_meaningful

logger = logging.getLogger(__name__)

SEMANTIC_SELECTORS = ("main", "article", '[role="main"]')

CANDIDATE_TAGS = ("div", "section", "body")


class ExtractionLayer(Protocol):
    """Protocol for one content extraction strategy."""

    name: str

    def try_extract(self, soup: BeautifulSoup) -> Optional[Tag]:
        """Return a meaningful content node, or None if this layer finds none."""
        ...


def _first_meaningful(
    soup: BeautifulSoup,
    selectors: Sequence[str],
    threshold: MeaningfulThreshold,
) -> Optional[Tag]:
    # Only the first match of each selector is considered
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None and is_meaningful(element, threshold):
            logger.debug("Selector %r matched meaningful content", selector)
            return element
    return None


class SemanticContainerLayer:
    """Layer 1: <main>, then <article>, then [role="main"]."""

    name = "semantic"

    def __init__(self, threshold: Optional[MeaningfulThreshold] = None) -> None:
        self._threshold = threshold or MeaningfulThreshold()

    def try_extract(self, soup: BeautifulSoup) -> Optional[Tag]:
        return _first_meaningful(soup, SEMANTIC_SELECTORS, self._threshold)


class KnownTemplateLayer:
    """
    Layer 2: container selectors of known documentation frameworks.

    Built-in selectors are tried first, then caller-supplied custom
    selectors; duplicates are dropped and priority order is kept.
    """

    name = "known_template"

    def __init__(
        self,
        custom_selectors: Sequence[str] = (),
        threshold: Optional[MeaningfulThreshold] = None,
    ) -> None:
        self._selectors = merge_selectors(get_all_selectors(), custom_selectors)
        self._threshold = threshold or MeaningfulThreshold()

    @property
    def selectors(self) -> list[str]:
        return list(self._selectors)

    def try_extract(self, soup: BeautifulSoup) -> Optional[Tag]:
        return _first_meaningful(soup, self._selectors, self._threshold)


class DensityScoringLayer:
    """
    Layer 3: chrome removal followed by text-density scoring.

    Works on a cleaned clone; the document passed in is not modified.
    Candidates are every <div>, <section> and <body> left after cleaning,
    scored and compared in document order so that ties always resolve to
    the earliest node.
    """

    name = "density"

    def __init__(self, params: Optional[ExtractParam] = None) -> None:
        self._params = params or ExtractParam()

    def score_candidates(self, root: Tag) -> list[tuple[Tag, float]]:
        """Score every candidate container under root, in document order."""
        return [
            (
                candidate,
                content_score(
                    candidate,
                    self._params.link_density_threshold,
                    self._params.score_multiplier,
                ),
            )
            for candidate in root.find_all(CANDIDATE_TAGS)
        ]

    def find_best_candidate(self, root: Tag) -> Optional[Tag]:
        """
        Pick the highest-scoring candidate, preferring a specific container over <body>.

        When <body> wins, the first other candidate (in document order) scoring
        at least body_specificity_bias * body_score and more than 90% of the
        best score replaces it.
        """
        scored = self.score_candidates(root)
        if not scored:
            return None

        best_node: Optional[Tag] = None
        best_score = 0.0
        for node, score in scored:
            if score > best_score:
                best_node, best_score = node, score

        if best_node is not None and best_node.name == "body":
            body_score = best_score
            for node, score in scored:
                if node is best_node:
                    continue
                if score >= self._params.body_specificity_bias * body_score and score > best_score * 0.9:
                    logger.debug("Specificity bias: preferring <%s> over <body>", node.name)
                    best_node, best_score = node, score
                    break

        return best_node

    def try_extract(self, soup: BeautifulSoup) -> Optional[Tag]:
        cleaned = remove_chrome(soup)
        best = self.find_best_candidate(cleaned)
        if best is None or not is_meaningful(best, self._params.threshold):
            return None
        return best


def default_layers(params: Optional[ExtractParam] = None) -> list[ExtractionLayer]:
    """The standard layer sequence: semantic, known template, density scoring."""
    params = params or ExtractParam()
    return [
        SemanticContainerLayer(params.threshold),
        KnownTemplateLayer(params.custom_selectors, params.threshold),
        DensityScoringLayer(params),
    ]
