"""Read → decode → update → render loop for one selector session."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence

from rich.console import Console

from .config import SelectorSettings
from .errors import InputClosed
from .keys import Command, KeyDecoder
from .model import Mode, SelectionModel, SessionResult
from .render import frame_chrome_lines, render_frame
from .terminal import TerminalSession
from .window import ViewWindow

logger = logging.getLogger(__name__)


class SelectorState(Enum):
    RUNNING = "running"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class SelectorController:
    """Drive one interactive selection and produce its SessionResult.

    The terminal is only acquired when there is something to choose from;
    an empty option list returns immediately without touching input.
    """

    def __init__(
        self,
        prompt: str,
        options: Sequence[str],
        mode: Mode = Mode.MULTI,
        *,
        console: Console | None = None,
        settings: SelectorSettings | None = None,
        session_factory: Callable[[], TerminalSession] | None = None,
    ) -> None:
        self.prompt = prompt
        self.options = [str(option) for option in options]
        self.mode = mode
        self.console = console or Console(stderr=True)
        self.settings = settings or SelectorSettings.from_env()
        self._session_factory = session_factory or self._default_session
        self.state = SelectorState.RUNNING

    def _default_session(self) -> TerminalSession:
        return TerminalSession(output=self.console.file)

    def window_size(self) -> int:
        return self.settings.window_size(self.console.size.height, frame_chrome_lines())

    def run(self) -> SessionResult:
        model = SelectionModel(len(self.options), self.mode)
        if model.terminated:
            self.state = SelectorState.CONFIRMED
            logger.debug("no options to choose from")
            return model.result()

        with self._session_factory() as session:
            try:
                self._loop(session, model)
            finally:
                self.console.clear()
                self.console.show_cursor(True)

        result = model.result()
        logger.debug("selector finished: state=%s indices=%s", self.state.value, list(result.selected_indices))
        return result

    def _loop(self, session: TerminalSession, model: SelectionModel) -> None:
        decoder = KeyDecoder(session, escape_timeout=self.settings.escape_timeout)
        window = ViewWindow(start=0, size=self.window_size())
        total = len(self.options)
        self.console.show_cursor(False)

        while self.state is SelectorState.RUNNING:
            self._draw(model, window)
            try:
                command = decoder.next()
            except InputClosed:
                logger.info("input closed, treating as quit")
                command = Command.QUIT

            if model.apply(command):
                self.state = SelectorState.CANCELLED if model.cancelled else SelectorState.CONFIRMED
            else:
                window = window.follow(model.cursor, total)

    def _draw(self, model: SelectionModel, window: ViewWindow) -> None:
        lines = render_frame(self.prompt, self.options, model, window)
        with self.console:
            self.console.clear()
            for line in lines:
                self.console.print(line, no_wrap=True, overflow="ellipsis", crop=True)


def select(
    prompt: str,
    options: Sequence[str],
    mode: Mode = Mode.MULTI,
    console: Console | None = None,
) -> SessionResult:
    """Run an interactive selector on the controlling terminal."""
    return SelectorController(prompt, options, mode, console=console).run()


__all__ = ["SelectorController", "SelectorState", "select"]
