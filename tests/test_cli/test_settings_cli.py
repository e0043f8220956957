"""Tests for settings CLI commands."""

import json
from pathlib import Path

from click.testing import CliRunner

from cwlflow.cli.commands.settings import settings
from cwlflow.cli.main import cli
from cwlflow.core.settings import SettingsManager


class TestInitCommand:
    """Test cwlflow settings init command."""

    def test_init_creates_file(self, runner: CliRunner, isolated_settings: Path) -> None:
        result = runner.invoke(settings, ["init"])

        assert result.exit_code == 0
        assert "Created settings file" in result.output
        assert isolated_settings.exists()
        assert oct(isolated_settings.stat().st_mode)[-3:] == "600"

        loaded = SettingsManager(settings_path=isolated_settings).load()
        assert loaded.document.cwl_version == "v1.0"
        assert loaded.compiler.strict is False

    def test_init_asks_before_overwriting(self, runner: CliRunner, isolated_settings: Path) -> None:
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text(json.dumps({"document": {"name": "keep-me"}}))

        result = runner.invoke(settings, ["init"], input="n\n")

        assert result.exit_code == 1
        assert "Overwrite?" in result.output
        assert json.loads(isolated_settings.read_text())["document"]["name"] == "keep-me"

    def test_init_overwrites_when_confirmed(self, runner: CliRunner, isolated_settings: Path) -> None:
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text(json.dumps({"document": {"name": "old"}}))

        result = runner.invoke(settings, ["init"], input="y\n")

        assert result.exit_code == 0
        assert json.loads(isolated_settings.read_text())["document"]["name"] == ""


class TestShowCommand:
    """Test cwlflow settings show command."""

    def test_show_defaults(self, runner: CliRunner, isolated_settings: Path) -> None:
        result = runner.invoke(settings, ["show"])

        assert result.exit_code == 0
        assert str(isolated_settings) in result.output
        assert '"step_cwl_version": "v1.2"' in result.output

    def test_show_includes_environment_overrides(
        self, runner: CliRunner, isolated_settings: Path, monkeypatch
    ) -> None:
        monkeypatch.setenv("CWLFLOW_STRICT", "true")
        result = runner.invoke(settings, ["show"])

        assert result.exit_code == 0
        assert '"strict": true' in result.output

    def test_reachable_from_main_group(self, runner: CliRunner, isolated_settings: Path) -> None:
        result = runner.invoke(cli, ["settings", "show"])

        assert result.exit_code == 0
        assert "Current settings:" in result.output
