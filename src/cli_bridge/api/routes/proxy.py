"""
Route proxy principale: corps entier → exécutable → corps entier.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from ...bridge.handler import Bridge
from ...core.constants import PROXY_ERROR_LABEL, SUCCESS_MEDIA_TYPE
from ...core.models import BridgeResult, FailureResult, SuccessResult

router = APIRouter()


def to_http_response(result: BridgeResult, label: str) -> Response:
    """
    Convertit un résultat du bridge en réponse HTTP.

    - succès: 200, stdout transmis sans ré-encodage
    - échec du processus: 500 {error, code, stderr}
    - panne du bridge: 500 {error: "proxy error", message}
    """
    if isinstance(result, SuccessResult):
        return Response(content=result.body, status_code=200, media_type=SUCCESS_MEDIA_TYPE)

    if isinstance(result, FailureResult):
        return JSONResponse(
            status_code=500,
            content={
                "error": f"{label} failed",
                "code": result.exit_code,
                "stderr": result.stderr_text,
            },
        )

    return JSONResponse(
        status_code=500,
        content={"error": PROXY_ERROR_LABEL, "message": result.message},
    )


@router.post("")
async def proxy_to_executable(request: Request):
    """
    Transmet le corps de la requête sur stdin de l'exécutable configuré.

    Le content-type entrant n'est pas interprété.
    """
    bridge: Bridge = request.app.state.bridge
    result = await bridge.handle(request.stream())
    return to_http_response(result, bridge.label)
