"""Shared utilities for flat_schema."""

from utils.coercion import coerce_non_negative_int, is_integer_text
from utils.hashing import hash_sha256_hex, hash_text_sha256

__all__ = [
    "coerce_non_negative_int",
    "hash_sha256_hex",
    "hash_text_sha256",
    "is_integer_text",
]
