"""XML 1.0 character validation and sanitizing for emitted text.

Documentation text may contain characters XML 1.0 cannot carry at all, not
even as character references: C0 control characters other than tab, line
feed and carriage return, lone surrogates and the non-characters U+FFFE and
U+FFFF. Unescaping ``\\b`` or ``\\0`` produces exactly such characters. The
sanitizer removes or replaces them before text reaches the XML writer so the
emitted document is always well-formed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Tuple

# XML 1.0 valid character ranges
XML_VALID_RANGES: List[Tuple[int, int]] = [
    (0x0009, 0x0009),  # Tab
    (0x000A, 0x000A),  # Line Feed
    (0x000D, 0x000D),  # Carriage Return
    (0x0020, 0xD7FF),  # Basic Multilingual Plane excluding surrogates
    (0xE000, 0xFFFD),  # Private Use and extended characters
    (0x10000, 0x10FFFF),  # Supplementary planes
]

SURROGATE_RANGE_START = 0xD800
SURROGATE_RANGE_END = 0xDFFF

CONTROL_CHARS_END = 0x001F
FAST_PATH_ASCII_MIN = 0x20
FAST_PATH_ASCII_MAX = 0x7E
CACHE_SIZE_LIMIT = 1000

REPLACEMENT_CHAR = "\uFFFD"  # Unicode replacement character


class SanitizeStrategy(Enum):
    """What to do with a character XML 1.0 cannot represent."""
    REMOVAL = "removal"
    REPLACEMENT = "replacement"


@dataclass
class SanitizeChange:
    """Record of a single sanitized character."""
    position: int
    original_char: str
    replacement: str
    reason: str


@dataclass
class SanitizeResult:
    """Sanitized text with the list of changes applied."""
    text: str
    changes: List[SanitizeChange] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changes)


class XML10Validator:
    """XML 1.0 character validity checker."""

    # Cache for validation results to improve performance
    _validation_cache: ClassVar[Dict[int, bool]] = {}

    @classmethod
    def is_valid_xml_char(cls, char_code: int) -> bool:
        """Check if character code is valid in XML 1.0.

        Args:
            char_code: Unicode code point

        Returns:
            True if character is valid in XML 1.0
        """
        if char_code in cls._validation_cache:
            return cls._validation_cache[char_code]

        is_valid = any(start <= char_code <= end for start, end in XML_VALID_RANGES)

        if len(cls._validation_cache) < CACHE_SIZE_LIMIT:
            cls._validation_cache[char_code] = is_valid

        return is_valid

    @classmethod
    def describe_invalid(cls, char_code: int) -> str:
        """Human-readable reason why a code point is rejected."""
        if SURROGATE_RANGE_START <= char_code <= SURROGATE_RANGE_END:
            return f"Surrogate character: U+{char_code:04X}"
        if char_code <= CONTROL_CHARS_END:
            return f"Control character: U+{char_code:04X}"
        if char_code in (0xFFFE, 0xFFFF):
            return f"Non-character: U+{char_code:04X}"
        return f"Invalid XML character: U+{char_code:04X}"

    @classmethod
    def clear_cache(cls) -> None:
        """Clear validation cache."""
        cls._validation_cache.clear()


class CharacterSanitizer:
    """Strip or replace characters that XML 1.0 cannot carry."""

    def __init__(
        self,
        strategy: SanitizeStrategy = SanitizeStrategy.REPLACEMENT,
        replacement_char: str = REPLACEMENT_CHAR,
    ) -> None:
        if strategy == SanitizeStrategy.REPLACEMENT and not all(
            XML10Validator.is_valid_xml_char(ord(c)) for c in replacement_char
        ):
            raise ValueError("replacement_char must itself be valid XML 1.0")
        self.strategy = strategy
        self.replacement_char = replacement_char
        self.total_changes = 0

    def sanitize(self, text: str) -> SanitizeResult:
        """Return text with every invalid XML 1.0 character handled."""
        if not text or self._is_plain_ascii(text):
            return SanitizeResult(text=text)

        chars = []
        changes = []
        replacement = (
            self.replacement_char if self.strategy == SanitizeStrategy.REPLACEMENT else ""
        )

        for position, char in enumerate(text):
            code = ord(char)
            if XML10Validator.is_valid_xml_char(code):
                chars.append(char)
                continue
            chars.append(replacement)
            changes.append(SanitizeChange(
                position=position,
                original_char=char,
                replacement=replacement,
                reason=XML10Validator.describe_invalid(code),
            ))

        self.total_changes += len(changes)
        return SanitizeResult(text="".join(chars), changes=changes)

    @staticmethod
    def _is_plain_ascii(text: str) -> bool:
        """Fast path: printable ASCII plus tab, LF and CR needs no work."""
        return all(
            FAST_PATH_ASCII_MIN <= ord(char) <= FAST_PATH_ASCII_MAX or char in "\t\n\r"
            for char in text
        )
