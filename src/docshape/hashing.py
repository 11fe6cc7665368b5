"""Content hashing for content-addressed document identifiers."""

from __future__ import annotations

import hashlib
from enum import Enum

from blake3 import blake3


class HashAlgo(str, Enum):
    """Supported hash algorithms."""

    SHA256 = "sha256"
    BLAKE3 = "blake3"


class UnsupportedHashAlgorithm(ValueError):
    """Raised for an algorithm the hash provider does not implement."""


def hash_bytes(data: str | bytes, algo: HashAlgo | str) -> str:
    """
    Hash data and return the hex digest.

    Args:
        data: Content to hash (str is encoded as UTF-8)
        algo: "sha256" or "blake3"

    Returns:
        Hex-encoded 256-bit digest

    Raises:
        UnsupportedHashAlgorithm: If algo is not one of HashAlgo
    """
    try:
        algo = HashAlgo(algo)
    except ValueError as err:
        raise UnsupportedHashAlgorithm(f"unsupported hash algorithm: {algo}") from err

    if isinstance(data, str):
        data = data.encode("utf-8")

    if algo is HashAlgo.SHA256:
        return hashlib.sha256(data).hexdigest()
    return blake3(data).hexdigest()


def prefixed_hash(data: str | bytes, algo: HashAlgo | str) -> str:
    """Return "<algo>:<hexdigest>", the form used for doc_id and content_hash."""
    digest = hash_bytes(data, algo)
    return f"{HashAlgo(algo).value}:{digest}"
