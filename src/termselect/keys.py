"""Decode raw terminal bytes into logical selector commands.

Only the bytes the menu cares about are recognised; everything else decodes
to ``Command.NOOP`` so stray input is inert rather than fatal.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

import readchar

from .errors import InputClosed

logger = logging.getLogger(__name__)

ESC = readchar.key.ESC
CSI_PREFIX = "["
# Unrecognised CSI sequences longer than this are abandoned mid-drain.
MAX_SEQUENCE_LENGTH = 16


class Command(Enum):
    """Platform-independent user intents."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    TOGGLE_OR_SELECT = "toggle_or_select"
    CONFIRM = "confirm"
    QUIT = "quit"
    NOOP = "noop"


class ByteSource(Protocol):
    """Anything that yields single input bytes."""

    def read_byte(self, timeout: float | None = None) -> bytes:
        """Return one byte, ``b""`` on timeout; raise InputClosed on EOF."""
        ...


# ANSI (normal cursor mode) from readchar's table, plus SS3 variants that
# terminals emit in application cursor mode.
ESCAPE_SEQUENCES: dict[str, Command] = {
    readchar.key.UP: Command.MOVE_UP,
    readchar.key.DOWN: Command.MOVE_DOWN,
    ESC + "OA": Command.MOVE_UP,
    ESC + "OB": Command.MOVE_DOWN,
}

SINGLE_KEYS: dict[str, Command] = {
    "k": Command.MOVE_UP,
    "j": Command.MOVE_DOWN,
    readchar.key.SPACE: Command.TOGGLE_OR_SELECT,
    readchar.key.CR: Command.CONFIRM,
    readchar.key.LF: Command.CONFIRM,
    "q": Command.QUIT,
    "Q": Command.QUIT,
}


def _is_csi_final(char: str) -> bool:
    return "\x40" <= char <= "\x7e"


class KeyDecoder:
    """Turn a ByteSource into a stream of ``Command`` values."""

    def __init__(self, source: ByteSource, escape_timeout: float = 0.1) -> None:
        self._source = source
        self._escape_timeout = escape_timeout

    def _read(self, timeout: float | None = None) -> str:
        data = self._source.read_byte(timeout)
        if not data:
            return ""
        return data.decode("latin-1")

    def next(self) -> Command:
        """Block for one logical key and return its command."""
        char = self._read()
        if not char:
            # A blocking read only comes back empty when the stream is gone.
            raise InputClosed()

        if char == readchar.key.CTRL_C:
            raise KeyboardInterrupt

        if char == ESC:
            command = self._decode_escape()
        else:
            command = SINGLE_KEYS.get(char, Command.NOOP)

        logger.debug("key %r -> %s", char, command.value)
        return command

    def _decode_escape(self) -> Command:
        first = self._read(self._escape_timeout)
        if not first:
            logger.debug("bare escape")
            return Command.NOOP

        second = self._read(self._escape_timeout)
        sequence = ESC + first + second
        command = ESCAPE_SEQUENCES.get(sequence)
        if command is not None:
            return command

        if first == CSI_PREFIX and second and not _is_csi_final(second):
            sequence += self._drain_csi()
        logger.debug("unrecognised escape sequence %r", sequence)
        return Command.NOOP

    def _drain_csi(self) -> str:
        """Consume the rest of an open CSI sequence up to its final byte."""
        drained = ""
        while len(drained) < MAX_SEQUENCE_LENGTH:
            char = self._read(self._escape_timeout)
            if not char:
                break
            drained += char
            if _is_csi_final(char):
                break
        return drained


__all__ = ["ByteSource", "Command", "KeyDecoder", "ESCAPE_SEQUENCES", "SINGLE_KEYS"]
