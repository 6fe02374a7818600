"""Hierarchy walk and document generation."""

from .driver import DocumentDriver, GenerationError, generate
from .walker import HierarchyWalker, WalkStatistics

__all__ = [
    "DocumentDriver",
    "GenerationError",
    "generate",
    "HierarchyWalker",
    "WalkStatistics",
]
