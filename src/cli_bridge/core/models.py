"""
Dataclasses métier pour CLI Bridge.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class BridgeState(str, Enum):
    """Étapes successives du traitement d'une requête."""
    DRAINING = "draining"
    SPAWNING = "spawning"
    WRITING = "writing"
    COLLECTING = "collecting"
    TERMINATED = "terminated"
    RESPONDED = "responded"


@dataclass(frozen=True)
class ExitOutcome:
    """Résultat brut d'une exécution: code de sortie + sorties capturées."""
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""
    # Erreur d'écriture sur stdin (enfant sorti tôt, pipe cassé)
    write_error: Optional[str] = None
    read_errors: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    def to_dict(self) -> Dict[str, Any]:
        """Résumé sans contenu (tailles uniquement), pour les logs."""
        return {
            "returncode": self.returncode,
            "stdout_bytes": len(self.stdout),
            "stderr_bytes": len(self.stderr),
            "write_error": self.write_error,
            "read_errors": list(self.read_errors),
        }


@dataclass(frozen=True)
class SuccessResult:
    """Le processus est sorti avec 0: stdout est transmis tel quel."""
    body: bytes
    status: str = "success"

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "body_bytes": len(self.body)}


@dataclass(frozen=True)
class FailureResult:
    """Le processus est sorti avec un code non nul: stderr est remonté."""
    exit_code: int
    stderr: bytes
    status: str = "failure"

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "exit_code": self.exit_code,
            "stderr_bytes": len(self.stderr),
        }


@dataclass(frozen=True)
class InfraErrorResult:
    """Panne dans la mécanique du bridge lui-même (lecture, lancement, délai)."""
    message: str
    stage: BridgeState
    code: str = "unknown_error"
    status: str = "infra-error"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "stage": self.stage.value,
            "code": self.code,
        }


BridgeResult = Union[SuccessResult, FailureResult, InfraErrorResult]
