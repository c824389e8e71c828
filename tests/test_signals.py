import os
import signal
import termios

import pytest

from minish.signals import (
    set_for_cat,
    set_signal_backslash,
    set_signal_heredoc,
    set_signal_pipe,
    signal_mode_command,
    signal_mode_read,
    turn_off_echo,
)


@pytest.fixture(autouse=True)
def restore_handlers():
    saved = {
        signo: signal.getsignal(signo) for signo in (signal.SIGINT, signal.SIGQUIT)
    }
    yield
    for signo, handler in saved.items():
        signal.signal(signo, handler)


@pytest.fixture
def stdin_on_pty():
    master, slave = os.openpty()
    attrs = termios.tcgetattr(slave)
    attrs[3] |= termios.ECHOCTL
    termios.tcsetattr(slave, termios.TCSANOW, attrs)
    saved = os.dup(0)
    os.dup2(slave, 0)
    try:
        yield slave
    finally:
        os.dup2(saved, 0)
        os.close(saved)
        os.close(slave)
        os.close(master)


@pytest.fixture
def stdin_on_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("data")
    fd = os.open(path, os.O_RDONLY)
    saved = os.dup(0)
    os.dup2(fd, 0)
    try:
        yield
    finally:
        os.dup2(saved, 0)
        os.close(saved)
        os.close(fd)


def test_turn_off_echo_clears_echoctl(stdin_on_pty):
    assert turn_off_echo() is True
    assert termios.tcgetattr(stdin_on_pty)[3] & termios.ECHOCTL == 0


def test_turn_off_echo_without_terminal(stdin_on_file):
    assert turn_off_echo() is False


def test_command_mode_ignores_quit(capfd):
    signal_mode_command()
    handler = signal.getsignal(signal.SIGINT)
    assert handler not in (signal.SIG_IGN, signal.SIG_DFL, signal.default_int_handler)
    assert handler(signal.SIGINT, None) is None
    assert capfd.readouterr().out == ""
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_IGN


def test_command_mode_interrupt_is_silent(capfd):
    signal_mode_command()
    signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
    assert capfd.readouterr().out == ""


def test_read_mode_interrupt_prints_newline(capfd, stdin_on_file):
    signal_mode_read()
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_IGN
    signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
    assert capfd.readouterr().out == "\n"


def test_read_mode_turns_off_echo(capfd, stdin_on_pty):
    signal_mode_read()
    signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
    assert capfd.readouterr().out == "\n"
    assert termios.tcgetattr(stdin_on_pty)[3] & termios.ECHOCTL == 0


def test_heredoc_interrupt_prints_newline(capfd):
    set_signal_heredoc()
    signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
    assert capfd.readouterr().out == "\n"


def test_heredoc_leaves_quit_alone(capfd):
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)
    set_signal_heredoc()
    signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
    assert capfd.readouterr().out == "\n"
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_DFL


def test_pipe_mode_ignores_both(stdin_on_pty):
    assert set_signal_pipe() is None
    assert signal.getsignal(signal.SIGINT) == signal.SIG_IGN
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_IGN
    assert termios.tcgetattr(stdin_on_pty)[3] & termios.ECHOCTL == 0
    os.kill(os.getpid(), signal.SIGINT)


def test_backslash_restores_default_quit():
    assert set_for_cat() is None
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_IGN
    assert set_signal_backslash() is None
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_DFL