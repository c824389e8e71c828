"""Small string helpers with the exact semantics the shell relies on."""

from __future__ import annotations

import re
from itertools import zip_longest

__all__ = [
    "atoi",
    "itoa",
    "split",
    "strtrim",
    "strnstr",
    "strncmp",
    "strcmp",
    "substr",
]

_ATOI_RE = re.compile(r"[\t\n\v\f\r ]*([+-]?)([0-9]*)")


def atoi(text: str) -> int:
    """Parse a leading decimal integer; trailing garbage is ignored, no digits gives 0."""
    match = _ATOI_RE.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def itoa(number: int) -> str:
    """Render an integer in decimal."""
    return str(int(number))


def split(text: str, sep: str) -> list[str]:
    """Split on a single separator character, dropping empty fields."""
    return [word for word in text.split(sep) if word]


def strtrim(text: str | None, charset: str | None) -> str:
    """Strip every character of ``charset`` from both ends of ``text``."""
    if text is None or charset is None:
        return ""
    if not charset:
        return text
    return text.strip(charset)


def strnstr(haystack: str, needle: str, limit: int) -> int | None:
    """Index of ``needle`` lying wholly within the first ``limit`` characters, else None."""
    if not needle:
        return 0
    index = haystack[: max(limit, 0)].find(needle)
    return None if index < 0 else index


def strncmp(first: str, second: str, limit: int) -> int:
    """Compare at most ``limit`` characters; the result's sign orders the strings."""
    if limit <= 0:
        return 0
    pairs = zip_longest(first[:limit], second[:limit], fillvalue="\0")
    for left, right in pairs:
        if left != right or left == "\0":
            return ord(left) - ord(right)
    return 0


def strcmp(first: str, second: str) -> int:
    """Compare two whole strings; the result's sign orders them."""
    return strncmp(first, second, max(len(first), len(second)) + 1)


def substr(text: str, start: int, length: int) -> str:
    """Up to ``length`` characters of ``text`` from ``start``; empty when start is past the end."""
    if start > len(text):
        return ""
    return text[start : start + max(length, 0)]