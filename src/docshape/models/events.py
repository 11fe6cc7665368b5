"""Observability records handed to a metadata sink."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class MetadataCause(str, Enum):
    """
    Closed, canonical classification of failures for observability.

    Used for logging, metrics and reporting only. A cause never implies
    severity or retryability and must not influence control flow. Failures
    that do not clearly match a category use UNKNOWN.
    """

    UNKNOWN = "unknown"
    NETWORK_FAILURE = "network_failure"
    POLICY_DISALLOW = "policy_disallow"
    CONTENT_INVALID = "content_invalid"
    STORAGE_FAILURE = "storage_failure"
    INVARIANT_VIOLATION = "invariant_violation"


class AttributeKey(str, Enum):
    """Keys for contextual attributes attached to records."""

    TIME = "time"
    URL = "url"
    HOST = "host"
    PATH = "path"
    DEPTH = "depth"
    FIELD = "field"
    HTTP_STATUS = "http_status"
    ASSET_URL = "asset_url"
    WRITE_PATH = "write_path"


class ArtifactKind(str, Enum):
    """Kinds of artifacts produced by a successful run."""

    MARKDOWN = "markdown"
    ASSET = "asset"


@dataclass(frozen=True)
class Attribute:
    """A single (key, value) attribute. Values are always strings."""

    key: AttributeKey
    value: str


@dataclass(frozen=True)
class ErrorRecord:
    """A terminal failure observed by one component."""

    component: str
    action: str
    cause: MetadataCause
    details: str
    attrs: tuple[Attribute, ...] = ()
    observed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def attr(self, key: AttributeKey) -> str | None:
        """Return the first attribute value for key, if any."""
        for attribute in self.attrs:
            if attribute.key == key:
                return attribute.value
        return None


@dataclass(frozen=True)
class ArtifactRecord:
    """A successfully produced artifact."""

    kind: ArtifactKind
    path: str
    attrs: tuple[Attribute, ...] = ()

    def attr(self, key: AttributeKey) -> str | None:
        for attribute in self.attrs:
            if attribute.key == key:
                return attribute.value
        return None
