"""Hashing utilities for iblm.

This module provides deterministic hash functions for generating
stable identifiers for content items and cache keys.
"""

import hashlib
from typing import Any

__all__ = [
    "generate_item_id",
    "hash_text",
    "stable_hash",
]


def hash_text(text: str) -> str:
    """Generate SHA256 hash of text.

    Args:
        text: Input text to hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def generate_item_id(seed_topic: str, title: str, position: int) -> str:
    """Generate deterministic content item ID.

    The position in the buffer is included so the same title generated
    twice in one session still yields distinct items.

    Args:
        seed_topic: Topic the batch was seeded with
        title: Item title
        position: Index the item occupies in the buffer

    Returns:
        Hexadecimal SHA256 hash string
    """
    combined = f"item|{seed_topic}|{title}|{position}"
    return hash_text(combined)


def stable_hash(*args: Any) -> str:
    """Generate a stable hash from multiple arguments.

    Converts all arguments to strings and joins them with pipe separator.
    Useful for creating composite keys.

    Args:
        *args: Values to include in the hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    combined = "|".join(str(arg) for arg in args)
    return hash_text(combined)
