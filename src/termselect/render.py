"""Full-frame rendering of the selector menu.

Every keystroke redraws the whole frame from the current state; nothing is
cached between frames.
"""

from __future__ import annotations

from typing import Sequence

from rich.text import Text

from .model import Mode, SelectionModel
from .window import ViewWindow

CURSOR_MARKER = "► "
NO_MARKER = "  "
CHECKBOX_EMPTY = "[ ]"
CHECKBOX_MULTI = "[✓]"
CHECKBOX_SINGLE = "[●]"

HELP_MULTI = "Use ↑/↓ or j/k to navigate, SPACE to select/deselect, ENTER to confirm, q to quit"
HELP_SINGLE = "Use ↑/↓ or j/k to navigate, SPACE or ENTER to select, q to quit"

CURSOR_STYLE = "reverse"
INDICATOR_STYLE = "dim"


def frame_chrome_lines() -> int:
    """Rows a frame uses besides the option rows (worst case)."""
    # prompt, blank, help, blank, more-above, more-below, blank, summary,
    # plus the empty row the trailing newline moves the cursor to
    return 9


def display_text(value: str) -> str:
    """Flatten control characters so a label occupies exactly one row."""
    return "".join(char if char.isprintable() else " " for char in value)


def _checkbox(mode: Mode, selected: bool) -> str:
    if not selected:
        return CHECKBOX_EMPTY
    return CHECKBOX_SINGLE if mode is Mode.SINGLE else CHECKBOX_MULTI


def _summary(options: Sequence[str], model: SelectionModel) -> str:
    if model.mode is Mode.SINGLE:
        if model.selected:
            return f"Selected: {display_text(options[min(model.selected)])}"
        return "No selection"
    return f"Selected: {len(model.selected)} items"


def render_frame(
    prompt: str,
    options: Sequence[str],
    model: SelectionModel,
    window: ViewWindow,
) -> list[Text]:
    """Build the lines of one frame. Labels are never parsed as markup."""
    total = len(options)
    lines: list[Text] = [
        Text(display_text(prompt), style="bold"),
        Text(""),
        Text(HELP_SINGLE if model.mode is Mode.SINGLE else HELP_MULTI, style=INDICATOR_STYLE),
        Text(""),
    ]

    if window.has_more_above:
        lines.append(Text(f"  ↑ {window.start} more above", style=INDICATOR_STYLE))

    for index in window.visible_range(total):
        is_cursor = index == model.cursor
        marker = CURSOR_MARKER if is_cursor else NO_MARKER
        checkbox = _checkbox(model.mode, index in model.selected)
        line = Text(f"{marker}{checkbox} ")
        line.append(display_text(options[index]))
        if is_cursor:
            line.stylize(CURSOR_STYLE)
        lines.append(line)

    if window.has_more_below(total):
        remaining = total - (window.start + window.size)
        lines.append(Text(f"  ↓ {remaining} more below", style=INDICATOR_STYLE))

    lines.append(Text(""))
    lines.append(Text(_summary(options, model)))
    return lines


__all__ = ["display_text", "render_frame", "frame_chrome_lines"]
