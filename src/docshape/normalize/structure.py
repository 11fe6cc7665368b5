"""Structural validation of rendered Markdown.

A document is accepted only if:

- it has exactly one level-1 heading
- heading levels never increase by more than one step
- no paragraph, list or table content comes before the first heading
- no section is empty (a heading followed by no content before the
  next heading of equal or higher rank)
- no heading is swallowed by a code fence that never closes

Validation parses the Markdown into a block token stream (markdown-it-py,
CommonMark with GFM tables) and walks it once in document order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..errors import ErrorCause, NormalizationError

logger = logging.getLogger(__name__)

# Block tokens that count as content for the orphan-content check
ORPHAN_CONTENT_TOKENS = frozenset(
    {
        "paragraph_open",
        "bullet_list_open",
        "ordered_list_open",
        "table_open",
    }
)

# Block tokens that make a section non-empty
SECTION_CONTENT_TOKENS = ORPHAN_CONTENT_TOKENS | {
    "fence",
    "code_block",
    "blockquote_open",
    "html_block",
}

_ATX_HEADING_LINE = re.compile(r"^ {0,3}#{1,6}(?:[ \t]|$)", re.MULTILINE)


@dataclass(frozen=True)
class Heading:
    """A heading observed during the walk."""

    level: int
    text: str
    line: int


class _Content:
    """Marker for a content block in the outline sequence."""


_CONTENT = _Content()


@dataclass
class DocumentOutline:
    """Result of the structural walk."""

    headings: list[Heading] = field(default_factory=list)
    blocks: list[Union[Heading, _Content]] = field(default_factory=list)
    content_before_first_heading: bool = False
    broken_fence_line: Optional[int] = None

    @property
    def h1s(self) -> list[Heading]:
        return [h for h in self.headings if h.level == 1]

    @property
    def title_heading(self) -> Optional[Heading]:
        h1s = self.h1s
        return h1s[0] if h1s else None


def _new_parser() -> MarkdownIt:
    return MarkdownIt("commonmark").enable("table")


def _inline_text(token: Optional[Token]) -> str:
    """Plain text of an inline token with all emphasis, code and link markup dropped."""
    if token is None or token.type != "inline":
        return ""
    parts: list[str] = []
    for child in token.children or []:
        if child.type in ("text", "code_inline", "image"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return "".join(parts)


def _line_count(text: str) -> int:
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


def _fence_is_closed(token: Token) -> bool:
    """
    Whether the parser found a closing marker for a fence.

    The fence map covers the opening line, the body and, only when the fence
    was closed, the closing line. An unclosed fence runs to the end of its
    container, so its map is only the opening line plus the body.
    """
    start, end = token.map or (0, 0)
    return end - start - 1 > _line_count(token.content)


def scan_outline(text: str) -> DocumentOutline:
    """
    Walk the Markdown block tokens once, in document order.

    The walk stops at the first unterminated fence whose body contains a
    heading line.
    """
    tokens = _new_parser().parse(text)
    outline = DocumentOutline()

    for index, token in enumerate(tokens):
        if token.type == "heading_open":
            inline = tokens[index + 1] if index + 1 < len(tokens) else None
            heading = Heading(
                level=int(token.tag[1:]),
                text=_inline_text(inline).strip(),
                line=(token.map or (0, 0))[0] + 1,
            )
            outline.headings.append(heading)
            outline.blocks.append(heading)
            continue

        if token.type == "fence" and not _fence_is_closed(token):
            if _ATX_HEADING_LINE.search(token.content):
                outline.broken_fence_line = (token.map or (0, 0))[0] + 1
                break

        if token.type in ORPHAN_CONTENT_TOKENS and not outline.headings:
            outline.content_before_first_heading = True

        # Only top-level blocks open a section's content; nested tokens add nothing new
        if token.type in SECTION_CONTENT_TOKENS and token.level == 0:
            outline.blocks.append(_CONTENT)

    return outline


def find_empty_section(outline: DocumentOutline) -> Optional[Heading]:
    """Return the first heading whose section has no content, if any."""
    blocks = outline.blocks
    for i, block in enumerate(blocks):
        if not isinstance(block, Heading):
            continue
        has_content = False
        for following in blocks[i + 1 :]:
            if isinstance(following, Heading):
                if following.level <= block.level:
                    break
                continue
            has_content = True
            break
        if not has_content:
            return block
    return None


def validate_structure(content: bytes) -> DocumentOutline:
    """
    Validate the structure of a Markdown document.

    Check order: empty content, unterminated fences, H1 count, orphan
    content, skipped levels, empty sections.

    Args:
        content: Raw Markdown bytes (UTF-8)

    Returns:
        The document outline, for title extraction

    Raises:
        NormalizationError: On the first violated invariant
    """
    if not content.strip():
        raise NormalizationError("markdown content is empty", ErrorCause.EMPTY_CONTENT)

    text = content.decode("utf-8", errors="replace").replace("\r\n", "\n").replace("\r", "\n")
    outline = scan_outline(text)

    if outline.broken_fence_line is not None:
        raise NormalizationError(
            f"heading detected inside unterminated code block at line {outline.broken_fence_line}",
            ErrorCause.BROKEN_ATOMIC_BLOCK,
        )

    h1_count = len(outline.h1s)
    if h1_count == 0:
        raise NormalizationError("document has no H1 heading", ErrorCause.BROKEN_H1_INVARIANT)
    if h1_count > 1:
        raise NormalizationError(
            f"document has {h1_count} H1 headings, expected exactly one",
            ErrorCause.BROKEN_H1_INVARIANT,
        )

    if outline.content_before_first_heading:
        raise NormalizationError("content exists before the first heading", ErrorCause.ORPHAN_CONTENT)

    prev_level = 0
    for heading in outline.headings:
        if prev_level and heading.level > prev_level + 1:
            raise NormalizationError(
                f"heading level skipped: H{heading.level} follows H{prev_level} at line {heading.line}",
                ErrorCause.SKIPPED_HEADING_LEVELS,
            )
        prev_level = heading.level

    empty = find_empty_section(outline)
    if empty is not None:
        raise NormalizationError(
            f"section '{empty.text}' (H{empty.level}, line {empty.line}) has no content",
            ErrorCause.EMPTY_SECTION,
        )

    logger.debug("Markdown structure valid: %d headings", len(outline.headings))
    return outline
