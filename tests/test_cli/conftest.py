"""Fixtures for CLI tests."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cwlflow.core.settings import SettingsManager


@pytest.fixture
def runner() -> CliRunner:
    """Create Click CLI runner."""
    return CliRunner()


@pytest.fixture
def isolated_settings(tmp_path: Path, monkeypatch) -> Path:
    """Point the default settings location into tmp_path and clear overrides."""
    test_settings_path = tmp_path / ".cwlflow" / "settings.json"

    original_init = SettingsManager.__init__

    def mock_init(self, settings_path=None):
        original_init(self, settings_path=settings_path or test_settings_path)

    monkeypatch.setattr(SettingsManager, "__init__", mock_init)
    for name in ("CWLFLOW_CWL_VERSION", "CWLFLOW_STEP_CWL_VERSION", "CWLFLOW_STRICT"):
        monkeypatch.delenv(name, raising=False)
    return test_settings_path


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON file under tmp_path and return its path."""

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def catalog_file(write_json) -> Path:
    return write_json(
        "plugins.json",
        [
            {
                "pid": "reader",
                "name": "Reader",
                "container": "polusai/reader:1.0.0",
                "baseCommand": ["python3", "-m", "reader"],
                "inputs": [{"name": "inpDir", "type": "collection", "required": True}],
                "outputs": [{"name": "outDir", "type": "collection"}],
            },
            {
                "pid": "threshold",
                "name": "Threshold",
                "container": "polusai/threshold:2.0.0",
                "inputs": [
                    {"name": "inpDir", "type": "collection", "required": True},
                    {"name": "level", "type": "number"},
                ],
                "outputs": [{"name": "outDir", "type": "collection"}],
            },
        ],
    )


@pytest.fixture
def graph_file(write_json) -> Path:
    """Editor state export: Read images (1) -> Threshold (2)."""
    return write_json(
        "graph.json",
        {
            "state": {
                "nodes": [
                    {"id": 1, "pluginId": "reader", "name": "Read images", "settings": {"inputs": {"inpDir": "/data"}}},
                    {"id": 2, "pluginId": "threshold", "name": "Threshold", "settings": {"inputs": {"level": 3}}},
                ],
                "links": [{"sourceId": 1, "targetId": 2, "outletIndex": 0, "inletIndex": 0}],
            }
        },
    )
