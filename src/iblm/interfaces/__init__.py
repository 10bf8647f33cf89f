"""Interface contracts for iblm.

This module exports all Protocol-based interfaces for dependency injection.
"""

from iblm.interfaces.content import ContentGeneratorInterface

__all__ = [
    "ContentGeneratorInterface",
]
