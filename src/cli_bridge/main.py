"""
CLI Bridge - Application FastAPI Factory.
Une requête HTTP = un processus enfant neuf, corps entier en entrée et en sortie.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.router import build_api_router
from .bridge.executable import describe_executable
from .bridge.handler import Bridge
from .config.loader import load_config
from .config.settings import BridgeSettings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[BridgeSettings] = None, config_path: Optional[str] = None) -> FastAPI:
    """
    Factory pour créer l'application FastAPI.

    Args:
        settings: Configuration explicite (sinon lue depuis config.toml)
        config_path: Chemin du fichier de configuration (optionnel)

    Returns:
        Instance configurée de FastAPI
    """
    if settings is None:
        settings = BridgeSettings.from_config(load_config(config_path))

    bridge = Bridge.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Gestion du cycle de vie de l'application."""
        _startup(app)
        yield
        _shutdown(app)

    app = FastAPI(
        title="CLI Bridge",
        description="Transmet le corps des requêtes à un exécutable local via stdin",
        version=__version__,
        lifespan=lifespan
    )

    # CORS: le formulaire navigateur est l'appelant
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.bridge = bridge
    app.state.settings = settings

    app.include_router(build_api_router(settings))

    return app


def _startup(app: FastAPI):
    """Initialisation au démarrage."""
    print("🚀 Démarrage de CLI Bridge...")

    bridge: Bridge = app.state.bridge
    settings: BridgeSettings = app.state.settings
    executable = describe_executable(bridge.executable)

    if executable["executable"]:
        print(f"✅ Exécutable: {executable['path']}")
    else:
        # Le service démarre quand même: chaque requête renverra une `proxy error`
        print(f"⚠️ Exécutable indisponible: {executable['path']}")
        logger.warning("Exécutable indisponible: %s", executable)

    timeout = f"{settings.timeout_s:g}s" if settings.timeout_enabled else "aucun"
    print(f"✅ Route: POST {settings.route} (délai: {timeout})")


def _shutdown(app: FastAPI):
    """Arrêt de l'application."""
    print("\n👋 Arrêt du serveur...")
    print("✅ Serveur arrêté proprement")
