"""
Routes API par domaine.
"""

from . import proxy
from . import health

__all__ = [
    "proxy",
    "health",
]
