"""
Bridge requête → processus enfant → réponse.

Un appel à `Bridge.handle` = un processus neuf. Aucun état n'est partagé
entre deux appels concurrents.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import AsyncIterable, Dict, Optional, Type, Union

from ..config.settings import BridgeSettings
from ..core.exceptions import CliBridgeError, SpawnError, TransportError
from ..core.models import (
    BridgeResult,
    BridgeState,
    FailureResult,
    InfraErrorResult,
    SuccessResult,
)
from .executable import check_executable, resolve_executable_path
from .runner import run_executable

logger = logging.getLogger(__name__)

BodySource = Union[bytes, bytearray, AsyncIterable[bytes]]

# Étape à laquelle chaque type de panne survient
_FAULT_STAGES: Dict[Type[CliBridgeError], BridgeState] = {
    TransportError: BridgeState.DRAINING,
    SpawnError: BridgeState.SPAWNING,
}


async def drain_body(body: BodySource) -> bytes:
    """
    Lit l'intégralité du corps entrant en mémoire.

    Raises:
        TransportError: la lecture a échoué (déconnexion, reset)
    """
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)

    chunks = []
    size = 0
    try:
        async for chunk in body:
            chunks.append(chunk)
            size += len(chunk)
    except Exception as e:
        raise TransportError(
            message=f"Lecture du corps de requête impossible: {e!r}",
            bytes_read=size,
        ) from e
    return b"".join(chunks)


class Bridge:
    """Traduit une requête en une exécution de l'exécutable configuré."""

    def __init__(
        self,
        executable: Path,
        *,
        label: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ):
        self.executable = Path(executable)
        self.label = label or self.executable.name
        self.timeout_s = timeout_s

    @classmethod
    def from_settings(cls, settings: BridgeSettings) -> "Bridge":
        """Crée un bridge depuis la configuration de déploiement."""
        return cls(
            resolve_executable_path(settings.executable),
            label=settings.label,
            timeout_s=settings.timeout_s,
        )

    async def handle(self, body: BodySource) -> BridgeResult:
        """
        Traite une requête: exactement un résultat, exactement une tentative.

        Returns:
            SuccessResult (code 0), FailureResult (code non nul)
            ou InfraErrorResult (panne du bridge)
        """
        state = BridgeState.DRAINING

        def advance(stage: BridgeState) -> None:
            nonlocal state
            logger.debug("Bridge %s: %s -> %s", self.label, state.value, stage.value)
            state = stage

        try:
            payload = await drain_body(body)

            advance(BridgeState.SPAWNING)
            check_executable(self.executable)
            outcome = await run_executable(
                self.executable,
                payload,
                timeout_s=self.timeout_s,
                on_stage=advance,
            )
        except CliBridgeError as e:
            stage = _FAULT_STAGES.get(type(e), state)
            logger.error("Bridge %s: panne à l'étape %s: %s", self.label, stage.value, e)
            result = InfraErrorResult(message=e.to_message(), stage=stage, code=e.code)
        except Exception as e:
            logger.exception("Bridge %s: erreur inattendue à l'étape %s", self.label, state.value)
            result = InfraErrorResult(message=str(e) or repr(e), stage=state, code="internal_error")
        else:
            logger.debug("Bridge %s: %s", self.label, outcome.to_dict())
            if outcome.succeeded:
                result = SuccessResult(body=outcome.stdout)
            else:
                result = FailureResult(exit_code=outcome.returncode, stderr=outcome.stderr)

        advance(BridgeState.RESPONDED)
        logger.info("Bridge %s: %s", self.label, result.to_dict())
        return result
