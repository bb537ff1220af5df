"""
Résolution de l'exécutable cible.

Le chemin est fixé au déploiement et résolu relativement au répertoire
d'installation du package, jamais à partir du contenu d'une requête.
"""
import os
from pathlib import Path
from typing import Optional

from ..core.constants import DEFAULT_EXECUTABLE_RELPATH
from ..core.exceptions import SpawnError

PACKAGE_DIR = Path(__file__).resolve().parent.parent


def resolve_executable_path(configured: Optional[str] = None, base_dir: Optional[Path] = None) -> Path:
    """
    Résout le chemin de l'exécutable.

    Args:
        configured: Chemin configuré (absolu, relatif ou None)
        base_dir: Répertoire de référence (défaut: répertoire du package)

    Returns:
        Chemin absolu de l'exécutable (non vérifié)
    """
    base = base_dir or PACKAGE_DIR
    raw = configured or DEFAULT_EXECUTABLE_RELPATH
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve(strict=False)


def check_executable(path: Path) -> None:
    """Vérifie que `path` désigne un fichier exécutable.

    Raises:
        SpawnError: fichier absent, pas un fichier ou sans droit d'exécution
    """
    if not path.exists():
        raise SpawnError(
            message=f"Exécutable introuvable: {path}",
            executable=str(path),
        )
    if not path.is_file():
        raise SpawnError(
            message=f"Le chemin de l'exécutable n'est pas un fichier: {path}",
            executable=str(path),
        )
    if not os.access(path, os.X_OK):
        raise SpawnError(
            message=f"Exécutable sans permission d'exécution: {path}",
            executable=str(path),
        )


def describe_executable(path: Path) -> dict:
    """État de l'exécutable pour le health check."""
    return {
        "path": str(path),
        "exists": path.is_file(),
        "executable": path.is_file() and os.access(path, os.X_OK),
    }
