"""termselect CLI - interactive selection menus for shell scripts.

Usage:
    termselect pick "Option 1" "Option 2" "Option 3"
    termselect pick --single --prompt "Select repository to clone:" -f repos.txt
    gh repo list --json name -q '.[].name' | termselect pick -f - --output labels
"""

from __future__ import annotations

import json
import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from termselect import __version__
from termselect.config import SelectorSettings
from termselect.controller import SelectorController
from termselect.errors import NotATerminal, SelectorConfigError, TerminalSignal
from termselect.logging_setup import configure_logging
from termselect.model import Mode, SessionResult

EXIT_SELECTED = 0
EXIT_NOTHING_SELECTED = 1
EXIT_NOT_A_TERMINAL = 3
EXIT_CONFIG_ERROR = 4
EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="termselect",
    help="Arrow-key selection menus for the terminal.",
    add_completion=False,
    no_args_is_help=True,
)

# The menu owns stderr so stdout stays clean for captured results.
menu_console = Console(stderr=True)


class OutputFormat(str, Enum):
    indices = "indices"
    labels = "labels"
    json = "json"


def _read_options(path: str) -> list[str]:
    if path == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            typer.secho(f"Cannot read options from {path}: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(EXIT_CONFIG_ERROR) from exc
    return [line for line in text.splitlines() if line.strip()]


def _load_settings() -> SelectorSettings:
    try:
        return SelectorSettings.from_env()
    except SelectorConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc


def _run_selector(prompt: str, options: list[str], mode: Mode, settings: SelectorSettings) -> SessionResult:
    controller = SelectorController(prompt, options, mode, console=menu_console, settings=settings)
    try:
        return controller.run()
    except NotATerminal as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(EXIT_NOT_A_TERMINAL) from exc
    except (KeyboardInterrupt, TerminalSignal) as exc:
        typer.secho("Selection cancelled", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(EXIT_INTERRUPTED) from exc


def _emit(result: SessionResult, options: list[str], output: OutputFormat) -> None:
    if output is OutputFormat.json:
        payload = {
            "selected_indices": list(result.selected_indices),
            "labels": result.labels(options),
            "cancelled": result.cancelled,
        }
        typer.echo(json.dumps(payload, ensure_ascii=False))
        return
    values = result.labels(options) if output is OutputFormat.labels else result.selected_indices
    for value in values:
        typer.echo(value)


def _exit_code(result: SessionResult, options: list[str]) -> int:
    if not options:
        return EXIT_SELECTED
    if result.cancelled or result.is_empty:
        return EXIT_NOTHING_SELECTED
    return EXIT_SELECTED


@app.command("pick")
def pick_command(
    options: Optional[List[str]] = typer.Argument(None, help="Labels to choose from."),
    prompt: str = typer.Option("Select options:", "--prompt", "-p", help="Header shown above the list."),
    single: bool = typer.Option(False, "--single", help="Choose exactly one item; SPACE or ENTER ends the menu."),
    from_file: Optional[str] = typer.Option(
        None,
        "--from-file",
        "-f",
        help="Read labels one per line from a file ('-' for stdin; keys are then read from /dev/tty).",
    ),
    output: OutputFormat = typer.Option(OutputFormat.indices, "--output", "-o", help="How to print the result."),
    debug: bool = typer.Option(False, "--debug", help="Log decoded keys and state transitions."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write log records to this file."),
) -> None:
    """Show a menu and print the chosen indices (or labels) to stdout."""
    settings = _load_settings()
    configure_logging(debug=debug or settings.debug, log_file=log_file)

    labels = list(options or [])
    if from_file is not None:
        labels.extend(_read_options(from_file))

    mode = Mode.SINGLE if single else Mode.MULTI
    result = _run_selector(prompt, labels, mode, settings)
    _emit(result, labels, output)

    code = _exit_code(result, labels)
    if code == EXIT_NOTHING_SELECTED:
        typer.secho("No selection", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code)


@app.command("demo")
def demo_command(
    count: int = typer.Option(60, "--count", "-n", min=0, help="Number of generated items."),
    single: bool = typer.Option(False, "--single", help="Run in single-select mode."),
) -> None:
    """Exercise the menu with a long generated list (scrolling, toggling)."""
    settings = _load_settings()
    configure_logging(debug=settings.debug)
    labels = [f"Item {i}" for i in range(1, count + 1)]
    mode = Mode.SINGLE if single else Mode.MULTI
    title = "Single-select demo: pick one item" if single else "Multi-select demo: pick items"
    result = _run_selector(title, labels, mode, settings)

    typer.echo("Selection result:")
    if result.cancelled:
        typer.echo("(cancelled)")
    for index, label in zip(result.selected_indices, result.labels(labels)):
        typer.echo(f"  {index}: {label}")


@app.command("version")
def version_command() -> None:
    """Print the termselect version."""
    typer.echo(__version__)


def main():
    app()


if __name__ == "__main__":
    main()
