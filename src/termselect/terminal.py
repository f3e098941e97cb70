"""Scoped raw-input terminal mode with guaranteed restoration.

``TerminalSession`` is the only place that touches terminal attributes.
Used as a context manager it restores the captured mode on every way out of
the ``with`` block: normal exit, exceptions, Ctrl-C and SIGTERM/SIGHUP
(which are turned into ``TerminalSignal`` while the session is held).
"""

from __future__ import annotations

import logging
import os
import select
import signal
import sys
import threading
from typing import IO, Any, Callable

from .errors import InputClosed, NotATerminal, SelectorError, TerminalSignal

try:
    import termios
except ImportError:  # pragma: no cover - Windows
    termios = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

CONTROLLING_TTY = "/dev/tty"
HANDLED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)


def _raise_terminal_signal(signum: int, frame: Any) -> None:
    raise TerminalSignal(signum)


class TerminalSession:
    """Exclusive byte-at-a-time, non-echoing input on one terminal."""

    # One session per terminal at a time.
    _held_fds: set[int] = set()

    def __init__(
        self,
        fd: int | None = None,
        output: IO[str] | None = None,
        fallback_tty: str | None = CONTROLLING_TTY,
    ) -> None:
        self._requested_fd = fd
        self._output = output
        self._fallback_tty = fallback_tty
        self._fd: int | None = None
        self._owns_fd = False
        self._token: list[Any] | None = None
        self._previous_handlers: dict[int, Callable[..., Any] | int | None] = {}

    @property
    def fd(self) -> int | None:
        return self._fd

    @property
    def active(self) -> bool:
        return self._token is not None

    def __enter__(self) -> "TerminalSession":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    def _stdin_fd(self) -> int | None:
        try:
            return sys.stdin.fileno()
        except (AttributeError, ValueError, OSError):
            return None

    def _resolve_fd(self) -> int:
        if self._requested_fd is not None:
            if not os.isatty(self._requested_fd):
                raise NotATerminal(f"fd {self._requested_fd} is not a tty")
            return self._requested_fd

        stdin_fd = self._stdin_fd()
        if stdin_fd is not None and os.isatty(stdin_fd):
            return stdin_fd

        if self._fallback_tty is None:
            raise NotATerminal("stdin is not a tty")
        try:
            fd = os.open(self._fallback_tty, os.O_RDWR | getattr(os, "O_NOCTTY", 0))
        except OSError as exc:
            raise NotATerminal(f"stdin is not a tty and {self._fallback_tty} is unavailable") from exc
        self._owns_fd = True
        logger.debug("stdin is not a tty, reading keys from %s", self._fallback_tty)
        return fd

    def _check_output(self) -> None:
        if self._output is None:
            return
        isatty = getattr(self._output, "isatty", None)
        if isatty is None or not isatty():
            raise NotATerminal("output is not a tty")

    def acquire(self) -> "TerminalSession":
        """Capture the current mode and switch to raw byte input."""
        if self.active:
            raise SelectorError("Terminal session already acquired")
        if termios is None:
            raise NotATerminal("termios is not available on this platform")

        self._check_output()
        fd = self._resolve_fd()
        if fd in TerminalSession._held_fds:
            self._close_owned(fd)
            raise SelectorError(f"Another selector session already holds fd {fd}")

        try:
            token = termios.tcgetattr(fd)
            raw = termios.tcgetattr(fd)
            raw[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
            raw[6][termios.VMIN] = 1
            raw[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSANOW, raw)
        except termios.error as exc:
            self._close_owned(fd)
            raise NotATerminal(str(exc)) from exc

        self._fd = fd
        self._token = token
        TerminalSession._held_fds.add(fd)
        self._install_signal_handlers()
        logger.debug("terminal fd %s switched to raw input", fd)
        return self

    def release(self) -> None:
        """Restore the captured mode. Safe to call more than once."""
        if self._token is None or self._fd is None:
            return
        fd, token = self._fd, self._token
        self._token = None
        try:
            termios.tcsetattr(fd, termios.TCSAFLUSH, token)
        except termios.error as exc:
            logger.warning("Failed to restore terminal mode on fd %s: %s", fd, exc)
        finally:
            self._restore_signal_handlers()
            TerminalSession._held_fds.discard(fd)
            self._close_owned(fd)
            self._fd = None
        logger.debug("terminal fd %s restored", fd)

    def _close_owned(self, fd: int) -> None:
        if self._owns_fd:
            self._owns_fd = False
            os.close(fd)

    def _install_signal_handlers(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        for signum in HANDLED_SIGNALS:
            self._previous_handlers[signum] = signal.getsignal(signum)
            signal.signal(signum, _raise_terminal_signal)

    def _restore_signal_handlers(self) -> None:
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()

    def read_byte(self, timeout: float | None = None) -> bytes:
        """Read one byte; ``b""`` if *timeout* elapses first."""
        if self._fd is None:
            raise SelectorError("Terminal session is not acquired")
        if timeout is not None:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            if not ready:
                return b""
        data = os.read(self._fd, 1)
        if not data:
            raise InputClosed()
        return data


__all__ = ["TerminalSession", "CONTROLLING_TTY"]
