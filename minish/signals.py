"""Signal dispositions for the shell's reading, running and heredoc phases."""

from __future__ import annotations

import os
import signal
import termios

__all__ = [
    "turn_off_echo",
    "signal_mode_read",
    "signal_mode_command",
    "set_signal_heredoc",
    "set_signal_pipe",
    "set_signal_backslash",
    "set_for_cat",
]

STDIN_FD = 0
STDOUT_FD = 1


def turn_off_echo() -> bool:
    """Stop the terminal on standard input from echoing control characters.

    Returns False when standard input is not a terminal.
    """
    try:
        attrs = termios.tcgetattr(STDIN_FD)
    except (termios.error, OSError):
        return False
    attrs[3] &= ~termios.ECHOCTL
    termios.tcsetattr(STDIN_FD, termios.TCSAFLUSH, attrs)
    return True


def _sigint_handler_command(signo, frame) -> None:
    """Let the running command handle the interrupt; the shell does nothing."""


def _sigint_handler_read(signo, frame) -> None:
    """Start a fresh prompt line."""
    os.write(STDOUT_FD, b"\n")


def _sigint_handler_heredoc(signo, frame) -> None:
    """End the heredoc prompt line."""
    os.write(STDOUT_FD, b"\n")


def _install(signo: int, handler, restart: bool) -> None:
    signal.signal(signo, handler)
    if callable(handler):
        signal.siginterrupt(signo, not restart)


def signal_mode_command() -> None:
    """Dispositions while a command runs: SIGINT is swallowed, SIGQUIT ignored."""
    _install(signal.SIGINT, _sigint_handler_command, restart=True)
    _install(signal.SIGQUIT, signal.SIG_IGN, restart=False)


def signal_mode_read() -> None:
    """Dispositions while reading input: SIGINT starts a new line, SIGQUIT ignored."""
    turn_off_echo()
    _install(signal.SIGINT, _sigint_handler_read, restart=True)
    _install(signal.SIGQUIT, signal.SIG_IGN, restart=False)


def set_signal_heredoc() -> None:
    """SIGINT during heredoc input prints a newline and interrupts the read."""
    _install(signal.SIGINT, _sigint_handler_heredoc, restart=False)


def set_signal_pipe() -> None:
    """Ignore SIGINT and SIGQUIT while a pipeline runs."""
    _install(signal.SIGINT, signal.SIG_IGN, restart=True)
    _install(signal.SIGQUIT, signal.SIG_IGN, restart=False)
    turn_off_echo()


def set_signal_backslash() -> None:
    """Restore the default SIGQUIT action."""
    _install(signal.SIGQUIT, signal.SIG_DFL, restart=False)


def set_for_cat() -> None:
    """Ignore SIGQUIT."""
    _install(signal.SIGQUIT, signal.SIG_IGN, restart=False)