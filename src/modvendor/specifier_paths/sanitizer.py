"""
Escaping of characters that are not allowed in a single path segment.
"""

BANNED_SEGMENT_CHARS = frozenset(["<", ">", ":", "|", "?", "*", "/", "\\"])

REPLACEMENT_CHAR = "_"


def is_banned_segment_char(c: str) -> bool:
    return c in BANNED_SEGMENT_CHARS


def sanitize_segment(text: str) -> str:
    """
    Replace every banned character in ``text`` with an underscore.

    Iterates per code point, so the result has the same length in characters
    as the input and multi-byte characters pass through untouched.
    """
    return "".join(REPLACEMENT_CHAR if is_banned_segment_char(c) else c for c in text)
