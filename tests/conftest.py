"""
Configuration des tests pytest.
"""
import os
import sys
from pathlib import Path

import pytest

# Ajoute src au path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

FAKE_CLI = Path(__file__).resolve().parent / "fixtures" / "fake_cli.py"


def pytest_configure(config):
    """Enregistre les marqueurs du projet."""
    config.addinivalue_line("markers", "unit: test unitaire (sans réseau)")
    config.addinivalue_line("markers", "integration: test de bout en bout via l'app FastAPI")


@pytest.fixture(autouse=True)
def _clear_config_cache(monkeypatch):
    """Isole le cache global de configuration entre les tests."""
    from cli_bridge.config import loader

    monkeypatch.delenv(loader.CONFIG_PATH_ENV, raising=False)
    loader._clear_config_cache()
    yield
    loader._clear_config_cache()


@pytest.fixture
def make_cli(tmp_path):
    """Fabrique un exécutable sans argument qui lance fake_cli.py dans le mode demandé.

    Le bridge appelle toujours l'exécutable sans argument: le mode est donc
    figé dans un petit script shell.
    """

    def _make(mode: str = "cli") -> Path:
        script = tmp_path / f"cli-{mode}"
        script.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{FAKE_CLI}" {mode}\n')
        script.chmod(0o755)
        return script

    return _make


@pytest.fixture
def missing_executable(tmp_path) -> Path:
    """Chemin d'un exécutable qui n'existe pas."""
    return tmp_path / "bin" / "does-not-exist"


REFERENCE_CLI = Path(__file__).resolve().parent.parent / "src" / "cli_bridge" / "bin" / "cli"


@pytest.fixture
def reference_cli(tmp_path) -> Path:
    """Exécutable de référence livré dans le package, lancé avec l'interpréteur courant."""
    script = tmp_path / "reference-cli"
    script.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{REFERENCE_CLI}"\n')
    script.chmod(0o755)
    return script
