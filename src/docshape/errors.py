"""docshape exception hierarchy.

Every failure raised by the extraction and normalization core is a
ClassifiedError: a message, a retryable flag and a cause tag. Severity is
derived from the retryable flag alone, so callers never need to inspect the
concrete subclass to decide whether a page should be dropped.

Inputs to the core are deterministic, so every error raised here is
currently non-retryable: re-running on the same bytes gives the same result.
"""

from __future__ import annotations

from enum import Enum

from .models.events import MetadataCause


class Severity(str, Enum):
    """How the scheduler should treat a failure."""

    FATAL = "fatal"
    RECOVERABLE = "recoverable"


class ErrorCause(str, Enum):
    """Cause tags for every failure the core can raise."""

    # Input shape
    NOT_HTML = "not html"
    NO_CONTENT = "no content"
    EMPTY_CONTENT = "empty content"

    # Structural invariants
    BROKEN_H1_INVARIANT = "broken H1 invariant"
    SKIPPED_HEADING_LEVELS = "skipped heading levels"
    ORPHAN_CONTENT = "orphan content"
    EMPTY_SECTION = "empty section"
    BROKEN_ATOMIC_BLOCK = "broken atomic block"

    # Frontmatter derivation
    SECTION_DERIVATION_FAILED = "section derivation failed"
    TITLE_EXTRACTION_FAILED = "title extraction failed"
    HASH_COMPUTATION_FAILED = "hash computation failed"


class ClassifiedError(Exception):
    """Base exception for all docshape failures."""

    component = "docshape"

    def __init__(self, message: str, cause: ErrorCause, retryable: bool = False):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.retryable = retryable

    @property
    def severity(self) -> Severity:
        return Severity.RECOVERABLE if self.retryable else Severity.FATAL

    def __str__(self) -> str:
        return f"{self.component} error: {self.cause.value}: {self.message}"


class ExtractionError(ClassifiedError):
    """Raised when no meaningful content can be isolated from an HTML page."""

    component = "extraction"


class NormalizationError(ClassifiedError):
    """Raised when Markdown violates a structural invariant or frontmatter cannot be derived."""

    component = "normalization"


_METADATA_CAUSES = {
    ErrorCause.NOT_HTML: MetadataCause.CONTENT_INVALID,
    ErrorCause.NO_CONTENT: MetadataCause.CONTENT_INVALID,
    ErrorCause.EMPTY_CONTENT: MetadataCause.CONTENT_INVALID,
    ErrorCause.BROKEN_H1_INVARIANT: MetadataCause.INVARIANT_VIOLATION,
    ErrorCause.SKIPPED_HEADING_LEVELS: MetadataCause.INVARIANT_VIOLATION,
    ErrorCause.ORPHAN_CONTENT: MetadataCause.INVARIANT_VIOLATION,
    ErrorCause.EMPTY_SECTION: MetadataCause.INVARIANT_VIOLATION,
    ErrorCause.BROKEN_ATOMIC_BLOCK: MetadataCause.INVARIANT_VIOLATION,
    ErrorCause.SECTION_DERIVATION_FAILED: MetadataCause.CONTENT_INVALID,
    ErrorCause.TITLE_EXTRACTION_FAILED: MetadataCause.CONTENT_INVALID,
}


def map_to_metadata_cause(err: ClassifiedError) -> MetadataCause:
    """
    Map a local error cause onto the canonical observability table.

    The result is for logging and reporting only and must never be used
    to decide retries, continuation or aborts.
    """
    return _METADATA_CAUSES.get(err.cause, MetadataCause.UNKNOWN)
