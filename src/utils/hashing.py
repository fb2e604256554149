"""SHA-256 digests over canonical text."""

from __future__ import annotations

import hashlib


def hash_sha256_hex(payload: bytes, *, length: int | None = None) -> str:
    """Return the SHA-256 hex digest of *payload*, truncated to *length* if given.

    Returns
    -------
    str
        Lowercase hex digest.
    """
    digest = hashlib.sha256(payload).hexdigest()
    if length is None:
        return digest
    return digest[:length]


def hash_text_sha256(text: str, *, length: int | None = None) -> str:
    """Return the SHA-256 hex digest of *text* encoded as UTF-8.

    Returns
    -------
    str
        Lowercase hex digest.
    """
    return hash_sha256_hex(text.encode("utf-8"), length=length)


__all__ = ["hash_sha256_hex", "hash_text_sha256"]
