"""Unit tests for CLI output helpers."""

import pytest
import typer
from typer.testing import CliRunner

from mizban.cli.output import (
    confirmed,
    format_bytes,
    handle_errors,
    split_csv,
    truncate,
)
from mizban.core.exceptions import APIError, InvalidInputError


class TestFormatBytes:
    """Tests for format_bytes."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (512, "512 B"),
            (1023, "1023 B"),
            (1024, "1.00 KB"),
            (1536, "1.50 KB"),
            (1048576, "1.00 MB"),
            (5 * 1024**3, "5.00 GB"),
            (1024**4, "1.00 TB"),
        ],
    )
    def test_format(self, size, expected):
        assert format_bytes(size) == expected


class TestTruncate:
    """Tests for truncate."""

    def test_short_string_unchanged(self):
        assert truncate("web-1", 20) == "web-1"

    def test_exact_length_unchanged(self):
        assert truncate("abcde", 5) == "abcde"

    def test_long_string_ends_with_ellipsis(self):
        result = truncate("a-very-long-server-name", 10)
        assert result == "a-very-..."
        assert len(result) == 10


class TestSplitCsv:
    """Tests for split_csv."""

    def test_none(self):
        assert split_csv(None) == []

    def test_repeated_and_comma_separated(self):
        assert split_csv(["GET,POST", "PUT"]) == ["GET", "POST", "PUT"]

    def test_blank_items_dropped(self):
        assert split_csv([" US , ,DE ", ""]) == ["US", "DE"]


# A tiny app so the error boundary and prompt run under a real Typer context
probe = typer.Typer()


@probe.command()
def fail(kind: str) -> None:
    with handle_errors():
        if kind == "input":
            raise InvalidInputError("token cannot be empty")
        raise APIError("Validation failed", errors={"name": ["required", "too short"]})


@probe.command()
def ask(force: bool = False) -> None:
    if confirmed(force, "Delete it?"):
        typer.echo("deleted")


class TestHandleErrors:
    """Tests for the command error boundary."""

    def test_prints_message_and_exits_1(self):
        result = CliRunner().invoke(probe, ["fail", "input"])
        assert result.exit_code == 1
        assert "Error: token cannot be empty" in result.output

    def test_prints_field_errors(self):
        result = CliRunner().invoke(probe, ["fail", "api"])
        assert result.exit_code == 1
        assert "Error: Validation failed" in result.output
        assert "name: required; too short" in result.output


class TestConfirmed:
    """Tests for delete confirmations."""

    def test_yes_confirms(self):
        result = CliRunner().invoke(probe, ["ask"], input="yes\n")
        assert "deleted" in result.output

    @pytest.mark.parametrize("answer", ["y", "no", "YES", ""])
    def test_anything_else_aborts(self, answer):
        result = CliRunner().invoke(probe, ["ask"], input=f"{answer}\n")
        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert "deleted" not in result.output

    def test_force_skips_prompt(self):
        result = CliRunner().invoke(probe, ["ask", "--force"])
        assert "deleted" in result.output
        assert "(yes/no)" not in result.output
