"""
Routes API pour le health check.
"""
from fastapi import APIRouter, Request

from ...bridge.executable import describe_executable
from ...bridge.handler import Bridge

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check avec l'état de l'exécutable configuré."""
    bridge: Bridge = request.app.state.bridge
    executable = describe_executable(bridge.executable)

    return {
        "status": "ok" if executable["executable"] else "degraded",
        "label": bridge.label,
        "timeout_s": bridge.timeout_s,
        "executable": executable,
    }
