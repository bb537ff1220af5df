"""
Exceptions personnalisées pour CLI Bridge.
"""


class CliBridgeError(Exception):
    """Exception de base pour toutes les erreurs du bridge."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or "unknown_error"
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} - Détails: {self.details}"
        return f"[{self.code}] {self.message}"

    def to_message(self) -> str:
        """Message lisible renvoyé au client dans une réponse `proxy error`."""
        return self.message


class ConfigurationError(CliBridgeError):
    """Erreur de configuration (fichier manquant, valeur invalide)."""

    def __init__(self, message: str, config_key: str = None):
        super().__init__(
            message=message,
            code="config_error",
            details={"key": config_key} if config_key else {}
        )


class TransportError(CliBridgeError):
    """Le corps de la requête entrante n'a pas pu être lu."""

    def __init__(self, message: str, bytes_read: int = None):
        super().__init__(
            message=message,
            code="transport_error",
            details={"bytes_read": bytes_read} if bytes_read is not None else {}
        )


class SpawnError(CliBridgeError):
    """L'exécutable est introuvable, non exécutable ou n'a pas pu être lancé."""

    def __init__(self, message: str, executable: str = None, errno: int = None):
        details = {}
        if executable:
            details["executable"] = executable
        if errno is not None:
            details["errno"] = errno
        super().__init__(
            message=message,
            code="spawn_error",
            details=details
        )


class BridgeTimeoutError(CliBridgeError):
    """Le processus enfant a dépassé le délai configuré."""

    def __init__(self, message: str, timeout_s: float = None, pid: int = None):
        super().__init__(
            message=message,
            code="timeout_error",
            details={
                "timeout_s": timeout_s,
                "pid": pid
            }
        )
