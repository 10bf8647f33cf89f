"""Utility helpers for iblm."""

from iblm.utils.hashing import generate_item_id, hash_text, stable_hash

__all__ = [
    "generate_item_id",
    "hash_text",
    "stable_hash",
]
