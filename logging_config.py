"""Logging configuration for the application."""

import logging
import sys


def setup_logging(level: str = "INFO", *, sql_echo: bool = False) -> None:
    """
    Configure application logging.

    Args:
        level: Logging level name (default: INFO). Unknown names fall back to INFO.
        sql_echo: Log every SQL statement through the ``sqlalchemy.engine`` logger
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if sql_echo else logging.WARNING)
