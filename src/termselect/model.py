"""Selection state for one selector session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .keys import Command


class Mode(Enum):
    """How Space and Enter behave."""

    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True, slots=True)
class SessionResult:
    """Outcome handed back to the caller of a selector session."""

    selected_indices: tuple[int, ...] = ()
    cancelled: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.selected_indices

    def labels(self, options: Sequence[str]) -> list[str]:
        return [options[i] for i in self.selected_indices]


class SelectionModel:
    """Cursor, per-option selection and mode.

    ``apply`` returns True once the session should end. With no options the
    model is terminated from the start and yields an empty, non-cancelled
    result.
    """

    def __init__(self, option_count: int, mode: Mode = Mode.MULTI) -> None:
        if option_count < 0:
            raise ValueError(f"option_count must be ≥ 0, got {option_count}")
        self.option_count = option_count
        self.mode = mode
        self.cursor = 0
        self.selected: set[int] = set()
        self._terminated = option_count == 0
        self._cancelled = False

    @property
    def terminated(self) -> bool:
        return self._terminated

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def apply(self, command: Command) -> bool:
        if self._terminated:
            return True
        if command is Command.MOVE_UP:
            self.move_up()
        elif command is Command.MOVE_DOWN:
            self.move_down()
        elif command is Command.TOGGLE_OR_SELECT:
            self.toggle_or_select()
        elif command is Command.CONFIRM:
            self.confirm()
        elif command is Command.QUIT:
            self.quit()
        return self._terminated

    def move_up(self) -> None:
        self.cursor = max(0, min(self.option_count - 1, self.cursor - 1))

    def move_down(self) -> None:
        self.cursor = max(0, min(self.option_count - 1, self.cursor + 1))

    def toggle_or_select(self) -> None:
        if self.mode is Mode.SINGLE:
            self._choose_cursor()
            return
        if self.cursor in self.selected:
            self.selected.remove(self.cursor)
        else:
            self.selected.add(self.cursor)

    def confirm(self) -> None:
        if self.mode is Mode.SINGLE:
            self._choose_cursor()
            return
        self._terminated = True

    def quit(self) -> None:
        self.selected.clear()
        self._cancelled = True
        self._terminated = True

    def _choose_cursor(self) -> None:
        self.selected = {self.cursor}
        self._terminated = True

    def result(self) -> SessionResult:
        return SessionResult(
            selected_indices=tuple(sorted(self.selected)),
            cancelled=self._cancelled,
        )


__all__ = ["Mode", "SelectionModel", "SessionResult"]
