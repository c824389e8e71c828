"""Checks that redirections and pipes in a token list are well placed."""

from __future__ import annotations

from minish.tokens import ShellEnv, Token, TokenType

__all__ = ["ShellSyntaxError", "validate_syntax"]

SYNTAX_ERROR_STATUS = 258

_REDIRECTS = frozenset(
    {
        TokenType.REDIRECT_IN,
        TokenType.REDIRECT_OUT,
        TokenType.REDIRECT_APPEND,
        TokenType.HEREDOC,
    }
)


class ShellSyntaxError(Exception):
    """A token stands where the grammar does not allow it."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"minishell: syntax error near unexpected token `{token}'")


def _fail(token: str, env: ShellEnv) -> None:
    env.exit_code = SYNTAX_ERROR_STATUS
    raise ShellSyntaxError(token)


def _check_redirects(tokens: list[Token], env: ShellEnv) -> None:
    for token, following in zip(tokens, [*tokens[1:], None]):
        if token.type not in _REDIRECTS:
            continue
        if following is None:
            _fail("newline", env)
        if following.type is not TokenType.WORD:
            _fail(following.value, env)


def _check_pipes(tokens: list[Token], env: ShellEnv) -> None:
    if tokens[0].type is TokenType.PIPE:
        _fail("|", env)
    neighbours = zip([None, *tokens[:-1]], tokens, [*tokens[1:], None])
    for previous, token, following in neighbours:
        if token.type is not TokenType.PIPE:
            continue
        if following is None or following.type is TokenType.PIPE:
            _fail("|", env)
        if previous is not None and previous.type is TokenType.PIPE:
            _fail("|", env)


def validate_syntax(tokens: list[Token], env: ShellEnv) -> None:
    """Raise ShellSyntaxError for a misplaced redirection or pipe.

    A non-empty valid list resets the exit status to 0; an error sets it to 258.
    """
    if not tokens:
        return
    env.exit_code = 0
    _check_redirects(tokens, env)
    _check_pipes(tokens, env)