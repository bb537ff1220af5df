"""
CLI Bridge: requête HTTP → stdin d'un exécutable → réponse HTTP.
"""

__version__ = "1.0.0"
