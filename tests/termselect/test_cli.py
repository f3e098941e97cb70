"""Tests for the termselect command line."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from termselect import cli as cli_module
from termselect.cli import (
    EXIT_CONFIG_ERROR,
    EXIT_INTERRUPTED,
    EXIT_NOT_A_TERMINAL,
    EXIT_NOTHING_SELECTED,
    EXIT_SELECTED,
    app,
)
from termselect.config import ESCAPE_TIMEOUT_ENV_VAR
from termselect.model import Mode, SessionResult


@pytest.fixture
def runner():
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_selector(monkeypatch):
    """Replace the interactive controller with a canned result."""
    calls = []

    class FakeController:
        result = SessionResult(selected_indices=(0, 2))

        def __init__(self, prompt, options, mode, **kwargs):
            calls.append({"prompt": prompt, "options": list(options), "mode": mode})

        def run(self):
            return FakeController.result

    monkeypatch.setattr(cli_module, "SelectorController", FakeController)
    return FakeController, calls


def test_pick_prints_indices(runner, fake_selector) -> None:
    _, calls = fake_selector
    result = runner.invoke(app, ["pick", "a", "b", "c", "--prompt", "Choose:"])

    assert result.exit_code == EXIT_SELECTED
    assert result.stdout.splitlines() == ["0", "2"]
    assert calls == [{"prompt": "Choose:", "options": ["a", "b", "c"], "mode": Mode.MULTI}]


def test_pick_labels_from_file(runner, fake_selector, tmp_path) -> None:
    options_file = tmp_path / "repos.txt"
    options_file.write_text("owner/one\n\nowner/two\nowner/three\n", encoding="utf-8")

    result = runner.invoke(app, ["pick", "--from-file", str(options_file), "--output", "labels"])

    assert result.exit_code == EXIT_SELECTED
    assert result.stdout.splitlines() == ["owner/one", "owner/three"]


def test_pick_reads_stdin(runner, fake_selector) -> None:
    _, calls = fake_selector
    result = runner.invoke(app, ["pick", "-f", "-", "--single"], input="x\ny\nz\n")

    assert result.exit_code == EXIT_SELECTED
    assert calls[0]["options"] == ["x", "y", "z"]
    assert calls[0]["mode"] is Mode.SINGLE


def test_pick_json_output(runner, fake_selector) -> None:
    result = runner.invoke(app, ["pick", "a", "b", "c", "-o", "json"])
    payload = json.loads(result.stdout)
    assert payload == {"selected_indices": [0, 2], "labels": ["a", "c"], "cancelled": False}


@pytest.mark.parametrize(
    "outcome",
    [SessionResult(selected_indices=(), cancelled=True), SessionResult(selected_indices=(), cancelled=False)],
)
def test_nothing_selected_exit_code(runner, fake_selector, outcome) -> None:
    fake, _ = fake_selector
    fake.result = outcome
    result = runner.invoke(app, ["pick", "a", "b"])
    assert result.exit_code == EXIT_NOTHING_SELECTED
    assert "0" not in result.stdout.split()


def test_empty_option_list_exits_cleanly(runner, tmp_path) -> None:
    empty = tmp_path / "empty.txt"
    empty.write_text("", encoding="utf-8")
    result = runner.invoke(app, ["pick", "--from-file", str(empty)])
    assert result.exit_code == EXIT_SELECTED
    assert result.stdout == ""


def test_not_a_terminal_exit_code(runner) -> None:
    result = runner.invoke(app, ["pick", "a", "b"])
    assert result.exit_code == EXIT_NOT_A_TERMINAL


def test_interrupt_exit_code(runner, monkeypatch) -> None:
    class InterruptedController:
        def __init__(self, *args, **kwargs):
            pass

        def run(self):
            raise KeyboardInterrupt

    monkeypatch.setattr(cli_module, "SelectorController", InterruptedController)
    result = runner.invoke(app, ["pick", "a"])
    assert result.exit_code == EXIT_INTERRUPTED


def test_invalid_configuration_exit_code(runner, monkeypatch) -> None:
    monkeypatch.setenv(ESCAPE_TIMEOUT_ENV_VAR, "never")
    result = runner.invoke(app, ["pick", "a"])
    assert result.exit_code == EXIT_CONFIG_ERROR


def test_missing_options_file(runner, tmp_path) -> None:
    result = runner.invoke(app, ["pick", "-f", str(tmp_path / "missing.txt")])
    assert result.exit_code == EXIT_CONFIG_ERROR


def test_demo_lists_result(runner, fake_selector) -> None:
    _, calls = fake_selector
    result = runner.invoke(app, ["demo", "--count", "3"])
    assert result.exit_code == 0
    assert calls[0]["options"] == ["Item 1", "Item 2", "Item 3"]
    assert "0: Item 1" in result.stdout
    assert "2: Item 3" in result.stdout


def test_debug_log_file(runner, fake_selector, tmp_path) -> None:
    log_file = tmp_path / "logs" / "termselect.log"
    result = runner.invoke(app, ["pick", "a", "b", "c", "--debug", "--log-file", str(log_file)])
    assert result.exit_code == EXIT_SELECTED
    assert log_file.exists()


def test_version(runner) -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == cli_module.__version__
