"""Tests for the retrier CLI."""

from __future__ import annotations

from typer.testing import CliRunner

from retrier.cli import app

runner = CliRunner()


def test_demo_success() -> None:
    result = runner.invoke(app, ["demo", "--delay", "0", "--success-rate", "1", "--seed", "7"])
    assert result.exit_code == 0, result.output
    assert "We are done." in result.output
    assert "Final state: 0." in result.output


def test_demo_gives_up() -> None:
    result = runner.invoke(app, ["demo", "--delay", "0", "--max-retries", "2", "--success-rate", "0"])
    assert result.exit_code == 1
    assert result.output.count("Attempt fails") == 3
    assert "Given up after 2 retries." in result.output
    assert "Random attempt failure." in result.output


def test_demo_rejects_negative_retries() -> None:
    result = runner.invoke(app, ["demo", "--delay", "0", "--max-retries=-1", "--success-rate", "0"])
    assert result.exit_code == 2
    assert "INVALID_PARAMETER_VALUE" in result.output
    assert "Attempt" not in result.output


def test_policies_lists_builtin() -> None:
    result = runner.invoke(app, ["policies"])
    assert result.exit_code == 0
    assert "constant_delay" in result.output


def test_help_topics() -> None:
    result = runner.invoke(app, ["help"])
    assert result.exit_code == 0
    assert "policies" in result.output

    result = runner.invoke(app, ["help", "policies"])
    assert result.exit_code == 0
    assert "TOPIC: policies" in result.output
    assert "[red]" not in result.output


def test_help_unknown_topic() -> None:
    result = runner.invoke(app, ["help", "jitter"])
    assert result.exit_code == 1
    assert "Unknown topic" in result.output


def test_log_format_option() -> None:
    result = runner.invoke(app, ["--log-format", "json", "--log-level", "INFO", "demo", "--delay", "0",
                                 "--max-retries", "1", "--success-rate", "0"])
    assert result.exit_code == 1
    assert '"event":"attempt failed"' in result.output
