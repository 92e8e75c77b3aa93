"""Executable entrypoint for Rodbounce."""

from __future__ import annotations

import argparse
import logging

from .game import RodbounceGame


def main(argv: list[str] | None = None) -> None:
    """Launch the game."""
    parser = argparse.ArgumentParser(description="Two-rod ball bounce game")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s:%(name)s:%(message)s",
    )
    RodbounceGame().run()


if __name__ == "__main__":
    main()
