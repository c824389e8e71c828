"""Expansion of variables, quotes, tildes and escapes inside a word."""

from __future__ import annotations

import re

from minish.strutil import itoa
from minish.tokens import ShellEnv

__all__ = [
    "get_escape",
    "ansi_c_quote",
    "expand_env",
    "process_quoted",
    "expand_tilde",
    "read_backslash",
]

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "$": "$",
}

_NAME_RE = re.compile(r"[A-Za-z0-9_]*")
_NAME_START = re.compile(r"[A-Za-z0-9_?]")


def get_escape(char: str) -> str:
    """The character a backslash escape stands for; unknown escapes stand for themselves."""
    return _ESCAPES.get(char, char)


def ansi_c_quote(text: str) -> str:
    """Resolve backslash escapes as in ``$'...'`` quoting; a trailing backslash is dropped."""
    out: list[str] = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            escaped = next(chars, None)
            if escaped is None:
                break
            out.append(get_escape(escaped))
        else:
            out.append(char)
    return "".join(out)


def expand_env(line: str, pos: int, env: ShellEnv) -> tuple[str, int]:
    """Expand the ``$`` construct at ``pos``.

    Handles ``$?``, ``$'...'`` and ``$NAME``. Returns the expansion and the
    position just past the construct. Unset variables expand to "".
    """
    pos += 1
    following = line[pos : pos + 1]
    if following == "?":
        return itoa(env.exit_code), pos + 1
    if following == "'":
        end = line.find("'", pos + 1)
        if end < 0:
            return ansi_c_quote(line[pos + 1 :]), len(line)
        return ansi_c_quote(line[pos + 1 : end]), end + 1
    match = _NAME_RE.match(line, pos)
    value = env.get_var(match.group())
    return (value if value is not None else ""), match.end()


def process_quoted(line: str, pos: int, quote: str, env: ShellEnv) -> tuple[str, int]:
    """Read the quoted section opening at ``pos`` with ``quote``.

    Inside double quotes ``$NAME`` and ``$?`` are expanded; single quotes keep
    everything literally. Returns the contents and the position past the
    closing quote. Raises ValueError when the quote is never closed.
    """
    out: list[str] = []
    pos += 1
    while pos < len(line) and line[pos] != quote:
        if (
            quote == '"'
            and line[pos] == "$"
            and _NAME_START.match(line, pos + 1)
        ):
            value, pos = expand_env(line, pos, env)
            out.append(value)
        else:
            out.append(line[pos])
            pos += 1
    if pos >= len(line):
        raise ValueError(f"unclosed quote {quote}")
    return "".join(out), pos + 1


def expand_tilde(line: str, pos: int, env: ShellEnv) -> tuple[str, int]:
    """Expand the ``~`` at ``pos`` to HOME when it stands alone or before ``/``.

    Returns the replacement text and the position past the tilde.
    """
    following = line[pos + 1 : pos + 2]
    if following in ("/", "", " "):
        home = env.home()
        return (home if home is not None else "~"), pos + 1
    return "~", pos + 1


def read_backslash(line: str, pos: int) -> tuple[str, int]:
    """Read the backslash escape at ``pos`` outside quotes.

    The escaped character is taken literally. ``\\\\`` before ``$`` yields one
    backslash and leaves the ``$`` to be expanded. Returns the text and the
    new position.
    """
    pos += 1
    if line[pos : pos + 1] == "\\" and line[pos + 1 : pos + 2] == "$":
        return "\\", pos + 1
    if pos >= len(line):
        return "", len(line)
    return line[pos], pos + 1