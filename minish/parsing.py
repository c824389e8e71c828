"""Splitting token lists into pipeline segments and applying their redirections."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator

from minish.strutil import atoi
from minish.tokens import Token, TokenType

__all__ = [
    "RedirectionError",
    "split_pipeline",
    "count_args",
    "segment_args",
    "apply_redirections",
]

STDIN_FD = 0
STDOUT_FD = 1
FILE_MODE = 0o644

_TARGET_PREFIXES = frozenset(
    {
        TokenType.REDIRECT_IN,
        TokenType.REDIRECT_OUT,
        TokenType.REDIRECT_APPEND,
        TokenType.HEREDOC,
    }
)
_HEREDOC_KINDS = frozenset({TokenType.HEREDOC, TokenType.HEREDOC_PROCESSED})
_OUTPUT_FLAGS = {
    TokenType.REDIRECT_OUT: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    TokenType.REDIRECT_APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}

HeredocReader = Callable[[str, bool], str]


class RedirectionError(Exception):
    """A redirection target could not be opened."""

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"open failed: {path}: {error.strerror or error}")


def split_pipeline(tokens: Iterable[Token]) -> list[list[Token]]:
    """Split the tokens before the first ``;`` into pipe-separated segments.

    There is always at least one segment; the pipe tokens themselves are dropped.
    """
    segments: list[list[Token]] = [[]]
    for token in tokens:
        if token.type is TokenType.SEMIC:
            break
        if token.type is TokenType.PIPE:
            segments.append([])
        else:
            segments[-1].append(token)
    return segments


def _until_pipe(segment: Iterable[Token]) -> Iterator[Token]:
    for token in segment:
        if token.type is TokenType.PIPE:
            return
        yield token


def segment_args(segment: Iterable[Token]) -> list[str]:
    """The command's argument words, leaving out redirections and heredoc parts."""
    args: list[str] = []
    previous: Token | None = None
    for token in _until_pipe(segment):
        prev_type = previous.type if previous is not None else None
        previous = token
        if token.type is TokenType.HEREDOC_PROCESSED or prev_type in _HEREDOC_KINDS:
            continue
        if token.type is TokenType.WORD and prev_type not in _TARGET_PREFIXES:
            args.append(token.value)
    return args


def count_args(segment: Iterable[Token]) -> int:
    """How many argument words the segment holds."""
    return len(segment_args(segment))


def _open(path: str, flags: int) -> int:
    try:
        return os.open(path, flags, FILE_MODE)
    except OSError as error:
        raise RedirectionError(path, error) from error


def _replace(old: int, new: int, standard: int) -> int:
    if old != standard:
        os.close(old)
    return new


def _heredoc_pipe(body: str) -> int:
    read_end, write_end = os.pipe()
    with open(write_end, "w", encoding="utf-8", closefd=True) as stream:
        stream.write(body)
    return read_end


def apply_redirections(
    segment: Iterable[Token],
    in_fd: int,
    out_fd: int,
    read_heredoc: HeredocReader,
) -> tuple[int, int]:
    """Open every redirection of the segment and return the final ``(in_fd, out_fd)``.

    A replaced descriptor that is not standard input or output is closed.
    ``read_heredoc(delimiter, quoted)`` supplies the body of an unprocessed
    heredoc, which is fed through a pipe. Raises RedirectionError when a file
    cannot be opened.
    """
    tokens = list(_until_pipe(segment))
    original_in, original_out = in_fd, out_fd
    index = 0
    try:
        while index < len(tokens):
            token = tokens[index]
            target = tokens[index + 1] if index + 1 < len(tokens) else None
            has_word = target is not None and target.type is TokenType.WORD
            kind = token.type
            if kind is TokenType.HEREDOC_PROCESSED:
                in_fd = _replace(in_fd, atoi(token.value), STDIN_FD)
                index += 2
                continue
            if kind in _OUTPUT_FLAGS and has_word:
                out_fd = _replace(out_fd, _open(target.value, _OUTPUT_FLAGS[kind]), STDOUT_FD)
            elif kind is TokenType.REDIRECT_IN and has_word:
                in_fd = _replace(in_fd, _open(target.value, os.O_RDONLY), STDIN_FD)
            elif kind is TokenType.HEREDOC and has_word:
                body = read_heredoc(target.value, target.quote_mode)
                in_fd = _replace(in_fd, _heredoc_pipe(body), STDIN_FD)
            index += 1
    except RedirectionError:
        for fd, original, standard in (
            (in_fd, original_in, STDIN_FD),
            (out_fd, original_out, STDOUT_FD),
        ):
            if fd not in (original, standard):
                os.close(fd)
        raise
    return in_fd, out_fd