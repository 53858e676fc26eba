"""Logging setup for matches and debugging."""

import logging

MATCH_LOGGER = logging.getLogger("Gomoku_AI.match")

LOG_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level="INFO"):
    """Configure the root logger once; engine modules log through module loggers."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)


def log_event(message):
    MATCH_LOGGER.info(message)
