"""
Cœur métier de CLI Bridge.
Modules indépendants sans dépendances externes au package.
"""

from .exceptions import (
    CliBridgeError,
    ConfigurationError,
    TransportError,
    SpawnError,
    BridgeTimeoutError,
)
from .constants import (
    DEFAULT_EXECUTABLE_RELPATH,
    DEFAULT_ROUTE,
    DEFAULT_TIMEOUT_S,
    PROXY_ERROR_LABEL,
)
from .models import (
    BridgeState,
    ExitOutcome,
    SuccessResult,
    FailureResult,
    InfraErrorResult,
    BridgeResult,
)

__all__ = [
    # Exceptions
    "CliBridgeError",
    "ConfigurationError",
    "TransportError",
    "SpawnError",
    "BridgeTimeoutError",
    # Constants
    "DEFAULT_EXECUTABLE_RELPATH",
    "DEFAULT_ROUTE",
    "DEFAULT_TIMEOUT_S",
    "PROXY_ERROR_LABEL",
    # Models
    "BridgeState",
    "ExitOutcome",
    "SuccessResult",
    "FailureResult",
    "InfraErrorResult",
    "BridgeResult",
]
