"""Tests unitaires — point d'entrée `python -m cli_bridge`."""

import os

import pytest

from cli_bridge import __main__ as entrypoint
from cli_bridge.config.loader import CONFIG_PATH_ENV


@pytest.mark.unit
def test_main_runs_uvicorn_factory_with_config(monkeypatch, tmp_path):
    captured = {}

    def _fake_run(app, **kwargs):
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(entrypoint.uvicorn, "run", _fake_run)
    monkeypatch.setattr(entrypoint, "setup_logging", lambda level: captured.setdefault("log", level))
    config = tmp_path / "config.toml"
    # Restauré en fin de test: main() écrit directement dans os.environ
    monkeypatch.setenv(CONFIG_PATH_ENV, "placeholder")
    monkeypatch.setattr(
        "sys.argv",
        ["cli-bridge", "--port", "9001", "--config", str(config), "--log-level", "debug"],
    )

    entrypoint.main()

    assert captured["app"] == "cli_bridge.main:create_app"
    assert captured["factory"] is True
    assert captured["port"] == 9001
    assert captured["log"] == "debug"
    assert os.environ[CONFIG_PATH_ENV] == str(config)
