from __future__ import annotations

import io

import pytest
from rich.console import Console

from termselect.config import SelectorSettings


@pytest.fixture
def console() -> Console:
    """Non-terminal console with a fixed 80x24 size."""
    return Console(file=io.StringIO(), width=80, height=24, force_terminal=False, color_system=None)


@pytest.fixture
def settings() -> SelectorSettings:
    return SelectorSettings(escape_timeout=0.01)
