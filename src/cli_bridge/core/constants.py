"""
Constantes globales pour CLI Bridge.
"""

# ============================================================================
# EXÉCUTABLE
# ============================================================================
# Relatif au répertoire d'installation du package (cli_bridge/)
DEFAULT_EXECUTABLE_RELPATH = "bin/cli"

# ============================================================================
# BRIDGE
# ============================================================================
DEFAULT_ROUTE = "/api/proxy"
DEFAULT_TIMEOUT_S = 60.0
MAX_TIMEOUT_S = 3600.0

READ_CHUNK_SIZE = 64 * 1024  # 64 KiB par lecture stdout/stderr

# Délai laissé au processus pour être récolté après kill()
KILL_GRACE_S = 5.0

# ============================================================================
# RÉPONSES HTTP
# ============================================================================
PROXY_ERROR_LABEL = "proxy error"
SUCCESS_MEDIA_TYPE = "application/json"
