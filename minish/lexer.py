"""Splitting a command line into tokens, with quoting and expansion applied to words."""

from __future__ import annotations

import re

from minish.expansion import (
    expand_env,
    expand_tilde,
    process_quoted,
    read_backslash,
)
from minish.tokens import ShellEnv, Token, TokenType

__all__ = ["tokenize", "read_word", "read_delimiter", "skip_whitespace"]

_WORD_STOP = frozenset(" \t|><;")
_NO_DELIMITER = frozenset("\n|<>;")
_DELIMITER_RE = re.compile(r"[^ \t|<>;]*")
_DOLLAR_EXPANDS = re.compile(r"""[A-Za-z0-9_?"']""")

_OPERATORS = (
    (">>", TokenType.REDIRECT_APPEND),
    ("|", TokenType.PIPE),
    ("<", TokenType.REDIRECT_IN),
    (">", TokenType.REDIRECT_OUT),
    (";", TokenType.SEMIC),
)


def skip_whitespace(line: str, pos: int) -> int:
    """Position of the first character at or after ``pos`` that is not a space or tab."""
    while pos < len(line) and line[pos] in " \t":
        pos += 1
    return pos


def read_delimiter(line: str, pos: int) -> tuple[str, int]:
    """Read a heredoc delimiter literally, up to whitespace or an operator character."""
    match = _DELIMITER_RE.match(line, pos)
    return match.group(), match.end()


def _read_piece(line: str, pos: int, env: ShellEnv) -> tuple[str, int]:
    char = line[pos]
    if char == "$":
        if _DOLLAR_EXPANDS.fullmatch(line[pos + 1 : pos + 2]):
            return expand_env(line, pos, env)
        return "$", pos + 1
    if char in "'\"":
        return process_quoted(line, pos, char, env)
    if char == "\\":
        return read_backslash(line, pos)
    if char == "~":
        return expand_tilde(line, pos, env)
    return char, pos + 1


def read_word(line: str, pos: int, env: ShellEnv) -> tuple[str, int]:
    """Read one word starting at ``pos``, applying quotes and expansions.

    Returns the word and the position just past it. Raises ValueError when a
    quote inside the word is never closed.
    """
    parts: list[str] = []
    while pos < len(line) and line[pos] not in _WORD_STOP:
        piece, pos = _read_piece(line, pos, env)
        parts.append(piece)
    return "".join(parts), pos


def _match_operator(line: str, pos: int) -> tuple[str, TokenType] | None:
    for text, kind in _OPERATORS:
        if line.startswith(text, pos):
            return text, kind
    return None


def tokenize(line: str, env: ShellEnv) -> list[Token]:
    """Split ``line`` into tokens.

    A word with an unclosed quote ends lexing: it is dropped and the tokens
    read before it are returned.
    """
    tokens: list[Token] = []
    pos = 0
    while True:
        pos = skip_whitespace(line, pos)
        if pos >= len(line):
            break
        if line.startswith("<<", pos):
            tokens.append(Token(TokenType.HEREDOC, "<<"))
            pos = skip_whitespace(line, pos + 2)
            if pos < len(line) and line[pos] not in _NO_DELIMITER:
                delimiter, pos = read_delimiter(line, pos)
                tokens.append(Token(TokenType.WORD, delimiter))
            continue
        operator = _match_operator(line, pos)
        if operator is not None:
            text, kind = operator
            tokens.append(Token(kind, text))
            pos += len(text)
            continue
        try:
            word, pos = read_word(line, pos, env)
        except ValueError:
            break
        tokens.append(Token(TokenType.WORD, word))
    return tokens