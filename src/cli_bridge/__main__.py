"""
Point d'entrée pour `python -m cli_bridge`.
"""
import argparse
import logging
import os

import uvicorn

from .config.loader import CONFIG_PATH_ENV

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def setup_logging(level: str = "info") -> None:
    """Configure le logger racine du package."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main():
    """Fonction principale."""
    parser = argparse.ArgumentParser(description="CLI Bridge")
    parser.add_argument("--host", default="0.0.0.0", help="Host (défaut: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port (défaut: 8000)")
    parser.add_argument("--reload", action="store_true", help="Activer le reload auto")
    parser.add_argument("--config", default=None, help="Chemin de config.toml (optionnel)")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Niveau de log (défaut: info)",
    )

    args = parser.parse_args()

    setup_logging(args.log_level)
    if args.config:
        # Relu par la factory, y compris dans le processus de reload
        os.environ[CONFIG_PATH_ENV] = os.path.abspath(args.config)

    print(f"🚀 Démarrage de CLI Bridge sur {args.host}:{args.port}")

    uvicorn.run(
        "cli_bridge.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
