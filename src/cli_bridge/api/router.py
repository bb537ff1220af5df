"""
Router principal de l'API.
"""
from fastapi import APIRouter

from ..config.settings import BridgeSettings
from .routes import health, proxy


def build_api_router(settings: BridgeSettings) -> APIRouter:
    """Assemble les sous-routers; la route du bridge vient de la configuration."""
    api_router = APIRouter()

    api_router.include_router(health.router, prefix="", tags=["health"])
    api_router.include_router(proxy.router, prefix=settings.route, tags=["proxy"])

    return api_router
