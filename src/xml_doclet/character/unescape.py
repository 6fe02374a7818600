"""Backslash escape-sequence decoding for documentation text.

Documentation comments handed over by a front end may carry non-ASCII and
control characters in their escaped source form (``\\uc548\\ub155`` instead
of the literal glyphs). ``unescape`` turns such text back into literal
characters; ``escape`` is the inverse used to produce that form.

Recognized sequences, in order of precedence:

- ``\\N``, ``\\NN``, ``\\NNN``: octal code point, up to three digits
- ``\\\\ \\b \\f \\n \\r \\t \\" \\'``: named single-character escapes
- ``\\uXXXX``: four hex digits; a short or non-hex tail yields a literal ``u``
- anything else: the backslash is dropped and the character kept
"""

from typing import Dict, Optional

OCTAL_DIGITS = frozenset("01234567")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
MAX_OCTAL_DIGITS = 3
UNICODE_ESCAPE_DIGITS = 4

NAMED_ESCAPES: Dict[str, str] = {
    "\\": "\\",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "'": "'",
}

# Reverse table for escape(): literal character -> escape letter
_ESCAPE_LETTERS: Dict[str, str] = {value: key for key, value in NAMED_ESCAPES.items()}

_SURROGATE_START = 0xD800
_SURROGATE_END = 0xDFFF
_PRINTABLE_ASCII_START = 0x20
_PRINTABLE_ASCII_END = 0x7E


def unescape(text: Optional[str]) -> str:
    """Decode backslash escape sequences into literal characters.

    Never raises. ``None`` yields an empty string. UTF-16 surrogate pairs
    written as two consecutive ``\\u`` escapes are joined into a single
    supplementary character.

    Args:
        text: Text optionally containing escape sequences

    Returns:
        The decoded text

    Examples:
        >>> unescape("\\\\101")
        'A'
        >>> unescape("a\\\\nb")
        'a\\nb'
        >>> unescape("ab\\\\u12")
        'abu12'
    """
    if not text:
        return ""
    if "\\" not in text:
        return text

    chars = []
    length = len(text)
    i = 0

    while i < length:
        ch = text[i]
        if ch != "\\":
            chars.append(ch)
            i += 1
            continue

        if i == length - 1:
            # Trailing lone backslash
            chars.append("\\")
            break

        next_char = text[i + 1]

        if next_char in OCTAL_DIGITS:
            end = i + 1
            limit = min(i + 1 + MAX_OCTAL_DIGITS, length)
            while end < limit and text[end] in OCTAL_DIGITS:
                end += 1
            chars.append(chr(int(text[i + 1:end], 8)))
            i = end
            continue

        named = NAMED_ESCAPES.get(next_char)
        if named is not None:
            chars.append(named)
            i += 2
            continue

        if next_char == "u":
            digits = text[i + 2:i + 2 + UNICODE_ESCAPE_DIGITS]
            if len(digits) == UNICODE_ESCAPE_DIGITS and all(d in HEX_DIGITS for d in digits):
                chars.append(chr(int(digits, 16)))
                i += 2 + UNICODE_ESCAPE_DIGITS
                continue
            # Short or malformed tail: keep the letter, rescan what follows it
            chars.append("u")
            i += 2
            continue

        chars.append(next_char)
        i += 2

    return _join_surrogate_pairs("".join(chars))


def escape(text: Optional[str]) -> str:
    """Encode text into the escaped form understood by unescape().

    Named escapes are used where one exists, printable ASCII is kept as is,
    and every other character becomes ``\\uXXXX`` (lowercase hex; two
    escapes for characters outside the Basic Multilingual Plane).

    Examples:
        >>> escape("안녕")
        '\\\\uc548\\\\ub155'
    """
    if not text:
        return ""

    parts = []
    for ch in text:
        letter = _ESCAPE_LETTERS.get(ch)
        code = ord(ch)
        if letter is not None:
            parts.append("\\" + letter)
        elif _PRINTABLE_ASCII_START <= code <= _PRINTABLE_ASCII_END:
            parts.append(ch)
        elif code > 0xFFFF:
            code -= 0x10000
            parts.append(f"\\u{0xD800 + (code >> 10):04x}\\u{0xDC00 + (code & 0x3FF):04x}")
        else:
            parts.append(f"\\u{code:04x}")
    return "".join(parts)


def _join_surrogate_pairs(text: str) -> str:
    """Combine adjacent high/low surrogates; lone surrogates are left alone."""
    if not any(_SURROGATE_START <= ord(ch) <= _SURROGATE_END for ch in text):
        return text
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
