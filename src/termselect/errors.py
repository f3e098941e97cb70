"""Exception hierarchy for the terminal selector."""

from __future__ import annotations


class SelectorError(Exception):
    """Base exception for selector errors."""
    pass


class NotATerminal(SelectorError):
    """No interactive terminal is available for raw input."""

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = "Interactive selection requires a terminal"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InputClosed(SelectorError):
    """The input stream reached end-of-file while waiting for a key."""

    def __init__(self):
        super().__init__("Input stream closed")


class TerminalSignal(SelectorError):
    """A termination signal arrived while the terminal was held in raw mode."""

    def __init__(self, signum: int):
        self.signum = signum
        super().__init__(f"Interrupted by signal {signum}")


class SelectorConfigError(SelectorError, ValueError):
    """Raised when selector configuration from the environment is invalid."""
