"""
Logging setup shared by the engine and the presentation adapter.

A UI entry point calls setup_logging() once, before creating its
EngineAdapter. The library modules only call get_logger().
"""

import logging

from config import config


def setup_logging(level: str | None = None) -> None:
    """Call once at program start, before the first game is created."""
    level = (level or config.logging.level).upper()
    if config.debug:
        level = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
