"""Unit tests for the root command, login and logout."""

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from mizban import __version__
from mizban.cli.main import COMMAND_GROUPS, app
from mizban.core.config import DEFAULT_BASE_URL, Config

PROFILE = {"id": 1, "name": "Sara", "email": "sara@example.com"}


class TestMainApp:
    """Tests for main app options."""

    def test_help(self, runner: CliRunner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "MizbanCloud CLI" in result.output

    def test_help_lists_groups_but_not_aliases(self, runner: CliRunner):
        result = runner.invoke(app, ["--help"])
        for name in ("server", "domain", "log-forwarder", "ticket", "login"):
            assert name in result.output
        assert "sshkey" not in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"mizban version {__version__}"

    def test_debug_flag(self, runner: CliRunner, api):
        api.add("GET", "/v1/cdn/ng/plans", [])
        result = runner.invoke(app, ["--debug", "plan", "list"])
        assert result.exit_code == 0
        assert "Debug mode enabled" in result.output

    def test_verbose_flag(self, runner: CliRunner, api):
        api.add("GET", "/v1/cdn/ng/plans", [])
        result = runner.invoke(app, ["-v", "plan", "list"])
        assert result.exit_code == 0
        assert "No plans available" in result.output

    def test_invalid_log_format(self, runner: CliRunner):
        result = runner.invoke(app, ["--log-format", "xml", "plan", "list"])
        assert result.exit_code != 0

    @pytest.mark.parametrize(
        "alias",
        [alias for _, _, aliases in COMMAND_GROUPS for alias in aliases],
    )
    def test_aliases_resolve(self, runner: CliRunner, alias: str):
        result = runner.invoke(app, [alias, "--help"])
        assert result.exit_code == 0

    def test_alias_runs_same_command(self, runner: CliRunner, api):
        api.add("GET", "/v1/cloud/servers", [{"id": 3, "name": "web-1"}])
        result = runner.invoke(app, ["srv", "list"])
        assert result.exit_code == 0
        assert "web-1" in result.output


class TestLogin:
    """Tests for `mizban login`."""

    def test_login_saves_token_after_verification(self, runner: CliRunner, api, config_path: Path):
        api.add("GET", "/v1/auth/profile", PROFILE)
        result = runner.invoke(app, ["login", "--token", "  tok-123  "])

        assert result.exit_code == 0
        assert "Successfully logged in as Sara (sara@example.com)" in result.output
        assert api.last.headers["Authorization"] == "Bearer tok-123"
        assert yaml.safe_load(config_path.read_text())["token"] == "tok-123"

    def test_login_prompts_for_token(self, runner: CliRunner, api, config_path: Path):
        api.add("GET", "/v1/auth/profile", PROFILE)
        result = runner.invoke(app, ["login"], input="tok-from-prompt\n")

        assert result.exit_code == 0
        assert Config.load(config_path).token == "tok-from-prompt"

    def test_login_with_url_saves_base_url(self, runner: CliRunner, api, config_path: Path):
        api.add("GET", "/v1/auth/profile", PROFILE)
        result = runner.invoke(app, ["login", "--token", "t", "--url", "http://127.0.0.1:8003/api"])

        assert result.exit_code == 0
        assert str(api.last.url) == "http://127.0.0.1:8003/api/v1/auth/profile"
        assert Config.load(config_path).base_url == "http://127.0.0.1:8003/api"

    def test_empty_token_is_rejected(self, runner: CliRunner, api, config_path: Path):
        result = runner.invoke(app, ["login", "--token", "   "])

        assert result.exit_code == 1
        assert "token cannot be empty" in result.output
        assert api.requests == []
        assert not config_path.exists()

    def test_rejected_token_is_not_saved(self, runner: CliRunner, api, config_path: Path):
        api.add("GET", "/v1/auth/profile", status=401, body={"success": False, "message": "nope"})
        result = runner.invoke(app, ["login", "--token", "bad"])

        assert result.exit_code == 1
        assert "unauthorized: please login again using 'mizban login'" in result.output
        assert not config_path.exists()

    def test_undecodable_profile_still_logs_in(self, runner: CliRunner, api, config_path: Path):
        api.add("GET", "/v1/auth/profile", "not-a-profile")
        result = runner.invoke(app, ["login", "--token", "tok"])

        assert result.exit_code == 0
        assert "Successfully logged in" in result.output
        assert Config.load(config_path).token == "tok"


class TestLogout:
    """Tests for `mizban logout`."""

    def test_logout_clears_token(self, runner: CliRunner, logged_in: Config, config_path: Path):
        result = runner.invoke(app, ["logout"])

        assert result.exit_code == 0
        assert "Successfully logged out" in result.output
        saved = yaml.safe_load(config_path.read_text())
        assert saved == {"token": "", "base_url": DEFAULT_BASE_URL}

    def test_token_is_sent_once_logged_in(self, runner: CliRunner, api, logged_in: Config):
        api.add("GET", "/v1/cdn/ng/plans", [])
        runner.invoke(app, ["plan", "list"])
        assert api.last.headers["Authorization"] == "Bearer secret-token"
