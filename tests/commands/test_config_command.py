"""Unit tests for config management commands (view, get, set, reset)."""

import json

from typer.testing import CliRunner

from pom_cli.commands.config import app

runner = CliRunner()


class TestConfigView:
    def test_view_table(self, tmp_config):
        result = runner.invoke(app, ["view"])
        assert result.exit_code == 0, result.output
        assert "timer.session" in result.stdout
        assert "25m" in result.stdout

    def test_view_json(self, tmp_config):
        result = runner.invoke(app, ["view", "-o", "json"])
        data = json.loads(result.stdout)
        assert data["notifications"] == {"enabled": True, "title": "Pomodoro"}

    def test_view_yaml(self, tmp_config):
        result = runner.invoke(app, ["view", "-o", "yaml"])
        assert "sessions_before_long_break: 4" in result.stdout


class TestConfigGet:
    def test_get_value(self, tmp_config):
        result = runner.invoke(app, ["get", "timer.long_break"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "15m"

    def test_get_unknown_key(self, tmp_config):
        result = runner.invoke(app, ["get", "timer.nope"])
        assert result.exit_code == 2
        assert "not found" in result.stdout


class TestConfigSet:
    def test_set_string(self, tmp_config):
        result = runner.invoke(app, ["set", "timer.session", "50m"])
        assert result.exit_code == 0, result.output
        assert "Success:" in result.stdout
        assert tmp_config.get("timer.session") == "50m"

    def test_set_int_and_bool(self, tmp_config):
        runner.invoke(app, ["set", "timer.sessions_before_long_break", "3"])
        runner.invoke(app, ["set", "notifications.enabled", "false"])
        assert tmp_config.get("timer.sessions_before_long_break") == 3
        assert tmp_config.get("notifications.enabled") is False

    def test_numeric_text_stays_text(self, tmp_config):
        result = runner.invoke(app, ["set", "notifications.title", "42"])
        assert result.exit_code == 0, result.output
        assert tmp_config.get("notifications.title") == "42"

    def test_set_invalid_duration(self, tmp_config):
        result = runner.invoke(app, ["set", "timer.short_break", "5"])
        assert result.exit_code == 2
        assert "Invalid value" in result.stdout
        assert tmp_config.get("timer.short_break") == "5m"

    def test_set_invalid_interval(self, tmp_config):
        result = runner.invoke(app, ["set", "timer.sessions_before_long_break", "0"])
        assert result.exit_code == 2

    def test_set_unknown_key(self, tmp_config):
        result = runner.invoke(app, ["set", "colour", "red"])
        assert result.exit_code == 2


class TestConfigReset:
    def test_reset_all_with_yes(self, tmp_config):
        tmp_config.set("timer.session", "50m")
        result = runner.invoke(app, ["reset", "--yes"])
        assert result.exit_code == 0
        assert tmp_config.get("timer.session") == "25m"

    def test_reset_key(self, tmp_config):
        tmp_config.set("timer.session", "50m")
        result = runner.invoke(app, ["reset", "timer.session", "-y"])
        assert result.exit_code == 0
        assert "'timer.session' reset to default" in result.stdout
        assert tmp_config.get("timer.session") == "25m"

    def test_reset_declined(self, tmp_config):
        tmp_config.set("timer.session", "50m")
        result = runner.invoke(app, ["reset"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        assert tmp_config.get("timer.session") == "50m"

    def test_corrupted_config_reports_error(self, isolated_dirs):
        path = isolated_dirs / "config" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{broken")
        result = runner.invoke(app, ["view"])
        assert result.exit_code == 1
        assert "Failed to load config" in result.stdout
