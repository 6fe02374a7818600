"""Character-level processing for documentation text.

Provides escape-sequence decoding for documentation comments and XML 1.0
character sanitizing for everything the emitter writes.
"""

from .transformation import (
    CharacterSanitizer,
    SanitizeChange,
    SanitizeResult,
    SanitizeStrategy,
    XML10Validator,
)
from .unescape import escape, unescape

__all__ = [
    "CharacterSanitizer",
    "SanitizeChange",
    "SanitizeResult",
    "SanitizeStrategy",
    "XML10Validator",
    "escape",
    "unescape",
]
