"""Text and structure statistics over DOM subtrees.

The same walk feeds two consumers:

- is_meaningful(): the single predicate every extraction layer uses to
  decide whether a container holds real documentation content.
- content_score(): the weighted text-density score used by the fallback
  layer to rank candidate containers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from bs4 import NavigableString, PageElement, Tag
from bs4.element import PreformattedString

from ..models.config import ContentScoreMultiplier, MeaningfulThreshold

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
MAJOR_HEADING_TAGS = frozenset({"h1", "h2", "h3"})


@dataclass
class SubtreeStats:
    """Counts collected from one subtree."""

    text_length: int = 0
    non_whitespace: int = 0
    paragraphs: int = 0
    headings: int = 0
    major_headings: int = 0
    code_blocks: int = 0
    list_items: int = 0
    links: int = 0
    link_text_length: int = 0

    @property
    def link_density(self) -> float:
        """Share of text characters inside links (0.0 for an empty subtree)."""
        if self.text_length == 0:
            return 0.0
        return self.link_text_length / self.text_length


def is_text(node: PageElement) -> bool:
    """True for character data; comments, doctypes and CDATA are not text."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _walk(node: Tag) -> Iterator[PageElement]:
    yield node
    yield from node.descendants


def _direct_text_length(tag: Tag) -> int:
    return sum(len(child.strip()) for child in tag.children if is_text(child))


def _is_code_block(tag: Tag) -> bool:
    return any(isinstance(child, Tag) and child.name == "code" for child in tag.children)


def collect_stats(node: Tag) -> SubtreeStats:
    """
    Walk a subtree once and collect its statistics.

    A <pre> with a <code> child counts as one code block; a <code> whose
    parent is not a <pre> counts as one inline code block. Link text only
    counts the direct text children of each <a>.
    """
    stats = SubtreeStats()

    for el in _walk(node):
        if is_text(el):
            stats.text_length += len(el)
            stats.non_whitespace += sum(1 for ch in el if not ch.isspace())
            continue

        if not isinstance(el, Tag):
            continue

        name = el.name
        if name == "p":
            stats.paragraphs += 1
        elif name in HEADING_TAGS:
            stats.headings += 1
            if name in MAJOR_HEADING_TAGS:
                stats.major_headings += 1
        elif name == "pre":
            if _is_code_block(el):
                stats.code_blocks += 1
        elif name == "code":
            if el.parent is None or el.parent.name != "pre":
                stats.code_blocks += 1
        elif name == "li":
            stats.list_items += 1
        elif name == "a":
            stats.links += 1
            stats.link_text_length += _direct_text_length(el)

    return stats


def is_meaningful(node: Optional[Tag], threshold: Optional[MeaningfulThreshold] = None) -> bool:
    """
    Decide whether a subtree holds real content rather than chrome.

    A node is meaningful when it has enough non-whitespace text, is not
    dominated by links (navigation), and has at least a paragraph or code
    block, or headings backed by some text.

    Args:
        node: Subtree root (None is never meaningful)
        threshold: Thresholds to apply (defaults if None)

    Returns:
        True if the subtree passes every check
    """
    if node is None:
        return False
    threshold = threshold or MeaningfulThreshold()
    stats = collect_stats(node)

    if stats.non_whitespace < threshold.min_non_whitespace:
        return False

    # Navigation-only blocks are mostly link text
    if stats.link_density > threshold.max_link_density and stats.links > 2:
        return False

    has_content = (
        stats.paragraphs >= threshold.min_paragraphs_or_code
        or stats.code_blocks >= threshold.min_paragraphs_or_code
    )
    has_headings_with_text = (
        stats.headings > threshold.min_headings and stats.non_whitespace >= threshold.min_heading_text
    )
    return has_content or has_headings_with_text


def content_score(
    node: Tag,
    link_density_threshold: float,
    multiplier: Optional[ContentScoreMultiplier] = None,
) -> float:
    """
    Weighted content score of a candidate container.

    score = non_whitespace / divisor + paragraphs * w_p + h1..h3 * w_h
            + code blocks * w_c + list items * w_li

    When link density exceeds the threshold the score is reduced by
    (density - threshold) * score.
    """
    m = multiplier or ContentScoreMultiplier()
    stats = collect_stats(node)

    score = stats.non_whitespace / m.non_whitespace_divisor
    score += stats.paragraphs * m.paragraphs
    score += stats.major_headings * m.headings
    score += stats.code_blocks * m.code_blocks
    score += stats.list_items * m.list_items

    if stats.text_length > 0:
        density = stats.link_density
        if density > link_density_threshold:
            score -= (density - link_density_threshold) * score

    return score
