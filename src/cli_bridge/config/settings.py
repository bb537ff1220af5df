"""
Dataclasses pour la configuration.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.constants import DEFAULT_ROUTE, DEFAULT_TIMEOUT_S


@dataclass(frozen=True)
class BridgeSettings:
    """Configuration du bridge, fixée au déploiement.

    `executable` n'est jamais dérivé du contenu d'une requête.
    """
    executable: Optional[str] = None
    label: Optional[str] = None
    timeout_s: Optional[float] = DEFAULT_TIMEOUT_S
    route: str = DEFAULT_ROUTE

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "BridgeSettings":
        """Crée une instance depuis la configuration chargée."""
        from .loader import get_bridge_settings

        return get_bridge_settings(config)

    @property
    def timeout_enabled(self) -> bool:
        return self.timeout_s is not None and self.timeout_s > 0
