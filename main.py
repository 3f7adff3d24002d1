"""Development entrypoint for Condottiere.

``python main.py demo`` plays the scripted scenario and logs every action;
``python main.py serve`` runs the HTTP harness.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from condottiere.config import get_settings
from condottiere.scenario import run_demo


def _configure_logging(level: str) -> None:
    settings = get_settings()
    logging.basicConfig(level=level.upper(), format=settings.log_format)


def _run_demo() -> None:
    outcome = run_demo()
    for army in outcome.armies:
        logging.getLogger("condottiere").info(
            "%s: %d units, strength %d, gold %d, battles %d",
            army.name,
            len(army.units),
            army.total_strength,
            army.gold,
            len(army.battle_history),
        )


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Condottiere army simulation")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("demo", help="Play the demonstration scenario")

    serve = subcommands.add_parser("serve", help="Run the HTTP harness")
    serve.add_argument("--host", default=settings.host, help="Host interface to bind")
    serve.add_argument("--port", type=int, default=settings.port, help="TCP port to listen on")
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Enable autoreload (dev mode)",
    )
    args = parser.parse_args()
    _configure_logging(args.log_level)

    if args.command == "demo":
        _run_demo()
    elif args.reload:
        uvicorn.run(
            "condottiere.api.app:app",
            host=args.host,
            port=args.port,
            reload=True,
            factory=False,
        )
    else:
        from condottiere.api.app import app

        uvicorn.run(app, host=args.host, port=args.port, reload=False, factory=False)


if __name__ == "__main__":
    main()
