"""Token types and the shell environment shared by the lexer and parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

__all__ = ["TokenType", "Token", "ShellEnv"]


class TokenType(Enum):
    """Kinds of token the lexer produces."""

    WORD = auto()
    PIPE = auto()
    REDIRECT_IN = auto()
    REDIRECT_OUT = auto()
    REDIRECT_APPEND = auto()
    HEREDOC = auto()
    SEMIC = auto()
    HEREDOC_PROCESSED = auto()


@dataclass
class Token:
    """One lexical token; ``quote_mode`` marks a quoted heredoc delimiter."""

    type: TokenType
    value: str
    quote_mode: bool = False


@dataclass
class ShellEnv:
    """Environment variables plus the status of the last command."""

    variables: dict[str, str] = field(default_factory=dict)
    exit_code: int = 0

    def get_var(self, name: str) -> str | None:
        """Value of ``name``, or None when it is not set."""
        return self.variables.get(name)

    def home(self) -> str | None:
        """The HOME directory, or None when HOME is not set."""
        return self.get_var("HOME")