"""Frontmatter derivation: title, section and content-addressed identifiers."""

from __future__ import annotations

from typing import Callable, Sequence

from ..errors import ErrorCause, NormalizationError
from ..hashing import UnsupportedHashAlgorithm, prefixed_hash
from ..models.config import NormalizeParam
from ..models.documents import Frontmatter
from ..urls import canonicalize, url_path
from .structure import DocumentOutline

Canonicalizer = Callable[[str], str]


def extract_title(outline: DocumentOutline) -> str:
    """
    Take the title from the document's H1.

    The heading text comes from the parsed inline content, so emphasis,
    code and link markup are already gone and headings inside code blocks
    are never considered.
    """
    heading = outline.title_heading
    if heading is None:
        raise NormalizationError("no H1 heading found in document", ErrorCause.TITLE_EXTRACTION_FAILED)
    title = heading.text.strip()
    if not title:
        raise NormalizationError("H1 heading contains no text", ErrorCause.TITLE_EXTRACTION_FAILED)
    return title


def derive_section(canonical_url: str, allowed_path_prefixes: Sequence[str] = ()) -> str:
    """
    Derive the section from the first path segment of a canonical URL.

    The path is percent-decoded before matching. The first allowed prefix (normalized to a leading "/") that literally
    prefixes the path is stripped first; remaining prefixes are ignored.

    Examples:
        derive_section("https://x.com/docs/api/login", ["/docs"])  # "api"
        derive_section("https://x.com/guide/page")                  # "guide"

    Raises:
        NormalizationError: SECTION_DERIVATION_FAILED for a root path or when
            nothing remains after stripping the prefix
    """
    path = url_path(canonical_url)
    if path in ("", "/"):
        raise NormalizationError(
            "URL path is empty, cannot derive section",
            ErrorCause.SECTION_DERIVATION_FAILED,
        )

    for prefix in allowed_path_prefixes:
        if not prefix:
            continue
        if not prefix.startswith("/"):
            prefix = "/" + prefix
        if path.startswith(prefix):
            path = path[len(prefix) :]
            break

    path = path.lstrip("/")
    if not path:
        raise NormalizationError(
            "URL path has no segments after stripping allowed path prefix",
            ErrorCause.SECTION_DERIVATION_FAILED,
        )

    for segment in path.split("/"):
        if segment:
            return segment

    raise NormalizationError("URL path has no valid segments", ErrorCause.SECTION_DERIVATION_FAILED)


def _hash(data: str | bytes, param: NormalizeParam, field_name: str) -> str:
    try:
        return prefixed_hash(data, param.hash_algo)
    except UnsupportedHashAlgorithm as e:
        raise NormalizationError(
            f"failed to compute {field_name}: {e}",
            ErrorCause.HASH_COMPUTATION_FAILED,
        ) from e


def generate_frontmatter(
    source_url: str,
    content: bytes,
    outline: DocumentOutline,
    param: NormalizeParam,
    canonicalizer: Canonicalizer = canonicalize,
) -> Frontmatter:
    """
    Build the frontmatter for a structurally valid document.

    doc_id hashes the canonical URL and content_hash hashes the raw Markdown
    bytes, both as "<algo>:<hexdigest>". Every field is gathered before the
    Frontmatter is constructed.
    """
    title = extract_title(outline)
    try:
        canonical_url = canonicalizer(source_url)
    except ValueError as e:
        raise NormalizationError(
            f"cannot canonicalize source URL {source_url!r}: {e}",
            ErrorCause.SECTION_DERIVATION_FAILED,
        ) from e
    section = derive_section(canonical_url, param.allowed_path_prefixes)
    doc_id = _hash(canonical_url, param, "doc_id")
    content_hash = _hash(content, param, "content_hash")

    return Frontmatter(
        title=title,
        source_url=source_url,
        canonical_url=canonical_url,
        crawl_depth=param.crawl_depth,
        section=section,
        doc_id=doc_id,
        content_hash=content_hash,
        fetched_at=param.fetched_at,
        crawler_version=param.app_version,
    )
