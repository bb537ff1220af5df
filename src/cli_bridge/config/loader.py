"""src.cli_bridge.config.loader

Chargement de la configuration TOML.

Note d'architecture:
- Le package `config/` est consommé par les couches `bridge/` et `api/`.
- Il ne dépend que de `core/` afin d'éviter les imports circulaires.
"""
import os
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.constants import DEFAULT_ROUTE, DEFAULT_TIMEOUT_S, MAX_TIMEOUT_S
from ..core.exceptions import ConfigurationError
from .settings import BridgeSettings

CONFIG_PATH_ENV = "CLI_BRIDGE_CONFIG"

# Cache global de configuration
_config_cache: Optional[Dict[str, Any]] = None


def _expand_env_vars(obj: Any) -> Any:
    """
    Récursivement étend les variables d'environnement ${VAR} dans la config.

    Args:
        obj: Valeur à traiter (str, dict, list)

    Returns:
        Valeur avec variables d'environnement expansées
    """
    if isinstance(obj, str):
        def replace_env_var(match):
            var_name = match.group(1)
            return os.environ.get(var_name, match.group(0))
        return re.sub(r'\$\{([^}]+)\}', replace_env_var, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


def _clear_config_cache():
    """Vide le cache de configuration."""
    global _config_cache
    _config_cache = None


def _default_config_path() -> str:
    # Structure: project/src/cli_bridge/config/loader.py
    current_file = os.path.abspath(__file__)
    # Remonte de 4 niveaux: loader.py -> config -> cli_bridge -> src -> project
    project_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(current_file))))
    return os.path.join(project_dir, "config.toml")


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Charge la configuration depuis config.toml.

    Sans chemin explicite, un config.toml absent n'est pas une erreur:
    toutes les valeurs par défaut s'appliquent.

    Args:
        config_path: Chemin vers le fichier config (optionnel)

    Returns:
        Dictionnaire de configuration

    Raises:
        ConfigurationError: Si le fichier explicite n'existe pas ou est invalide
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    if config_path is None:
        # Positionné par `python -m cli_bridge --config ...`
        config_path = os.environ.get(CONFIG_PATH_ENV) or None
    explicit = config_path is not None
    if config_path is None:
        config_path = _default_config_path()

    path = Path(config_path)
    if not path.exists():
        if explicit:
            raise ConfigurationError(
                message=f"Fichier de configuration non trouvé: {config_path}",
                config_key="config_path"
            )
        _config_cache = {}
        return _config_cache

    try:
        with open(path, "rb") as f:
            raw_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            message=f"Fichier de configuration invalide ({config_path}): {e}",
            config_key="config_path"
        ) from e

    _config_cache = _expand_env_vars(raw_config)
    return _config_cache


def reload_config(config_path: str = None) -> Dict[str, Any]:
    """
    Recharge la configuration depuis le fichier.

    Returns:
        Nouvelle configuration chargée
    """
    _clear_config_cache()
    return load_config(config_path)


def _clamp_float(value: object, *, default: float, min_value: float, max_value: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        v = float(value)
    else:
        return default
    if v < min_value:
        return min_value
    if v > max_value:
        return max_value
    return v


def _non_empty_str(value: object) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_bridge_settings(config: Dict[str, Any]) -> BridgeSettings:
    """Charge la section `[bridge]` depuis le TOML.

    Propriétés:
    - Fallback robuste si section absente/incomplète
    - Validation/clamp des types pour éviter un crash runtime
    - `timeout_s = 0` désactive le délai
    """

    defaults = BridgeSettings()
    obj = config.get("bridge")
    if not isinstance(obj, dict):
        return defaults

    timeout_s = _clamp_float(
        obj.get("timeout_s", DEFAULT_TIMEOUT_S),
        default=DEFAULT_TIMEOUT_S,
        min_value=0.0,
        max_value=MAX_TIMEOUT_S,
    )

    route = _non_empty_str(obj.get("route")) or DEFAULT_ROUTE
    if not route.startswith("/"):
        route = "/" + route

    return BridgeSettings(
        executable=_non_empty_str(obj.get("executable")),
        label=_non_empty_str(obj.get("label")),
        timeout_s=timeout_s if timeout_s > 0 else None,
        route=route,
    )
