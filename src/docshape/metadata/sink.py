"""Metadata sinks receiving terminal failures and produced artifacts."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Protocol, Sequence

from ..models.events import (
    ArtifactKind,
    ArtifactRecord,
    Attribute,
    AttributeKey,
    ErrorRecord,
    MetadataCause,
)

logger = logging.getLogger(__name__)


class MetadataSink(Protocol):
    """
    Protocol for observability sinks.

    Sinks are called once per terminal failure or produced artifact, from
    many worker threads at once. Implementations must be safe for concurrent
    use and must never influence the control flow of the caller.
    """

    def record_error(
        self,
        observed_at: datetime,
        component: str,
        action: str,
        cause: MetadataCause,
        details: str,
        attrs: Sequence[Attribute],
    ) -> None:
        """Record a terminal failure."""
        ...

    def record_artifact(
        self,
        kind: ArtifactKind,
        path: str,
        attrs: Sequence[Attribute],
    ) -> None:
        """Record a produced artifact."""
        ...


def new_attr(key: AttributeKey, value: object) -> Attribute:
    """Build an Attribute, stringifying the value."""
    return Attribute(key=key, value=str(value))


class NoopSink:
    """Sink that discards everything."""

    def record_error(self, observed_at, component, action, cause, details, attrs) -> None:
        pass

    def record_artifact(self, kind, path, attrs) -> None:
        pass


class LoggingSink:
    """
    Sink that writes every record to a logger.

    Example:
        sink = LoggingSink()
        extractor = DomExtractor(sink)
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def record_error(
        self,
        observed_at: datetime,
        component: str,
        action: str,
        cause: MetadataCause,
        details: str,
        attrs: Sequence[Attribute],
    ) -> None:
        self._log.warning(
            "%s %s failed [%s]: %s %s",
            component,
            action,
            cause.value,
            details,
            _format_attrs(attrs),
        )

    def record_artifact(self, kind: ArtifactKind, path: str, attrs: Sequence[Attribute]) -> None:
        self._log.info("%s artifact %s %s", kind.value, path, _format_attrs(attrs))


class MemorySink:
    """
    Thread-safe sink that keeps records in memory.

    Useful for tests and for collecting a post-run report.
    """

    def __init__(self) -> None:
        self._errors: list[ErrorRecord] = []
        self._artifacts: list[ArtifactRecord] = []
        self._lock = threading.Lock()

    def record_error(
        self,
        observed_at: datetime,
        component: str,
        action: str,
        cause: MetadataCause,
        details: str,
        attrs: Sequence[Attribute],
    ) -> None:
        record = ErrorRecord(
            component=component,
            action=action,
            cause=cause,
            details=details,
            attrs=tuple(attrs),
            observed_at=observed_at,
        )
        with self._lock:
            self._errors.append(record)

    def record_artifact(self, kind: ArtifactKind, path: str, attrs: Sequence[Attribute]) -> None:
        record = ArtifactRecord(kind=kind, path=path, attrs=tuple(attrs))
        with self._lock:
            self._artifacts.append(record)

    @property
    def errors(self) -> list[ErrorRecord]:
        """Snapshot of recorded errors, in arrival order."""
        with self._lock:
            return list(self._errors)

    @property
    def artifacts(self) -> list[ArtifactRecord]:
        """Snapshot of recorded artifacts, in arrival order."""
        with self._lock:
            return list(self._artifacts)

    def clear(self) -> None:
        with self._lock:
            self._errors.clear()
            self._artifacts.clear()


def _format_attrs(attrs: Sequence[Attribute]) -> str:
    return " ".join(f"{a.key.value}={a.value}" for a in attrs)


def safe_record_error(sink: MetadataSink, **kwargs) -> None:
    """Forward an error record, logging (not raising) if the sink fails."""
    try:
        sink.record_error(**kwargs)
    except Exception as e:
        logger.error("Metadata sink failed to record error: %s", e)


def safe_record_artifact(sink: MetadataSink, **kwargs) -> None:
    """Forward an artifact record, logging (not raising) if the sink fails."""
    try:
        sink.record_artifact(**kwargs)
    except Exception as e:
        logger.error("Metadata sink failed to record artifact: %s", e)
