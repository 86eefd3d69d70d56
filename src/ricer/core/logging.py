"""Loguru sink setup for the CLI."""

from __future__ import annotations

import os
import sys

from loguru import logger

VERBOSE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
SHORT_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"


def setup_logging(verbose: bool = False) -> None:
    """Replace loguru's default handler with a single stderr sink.

    ``RICER_LOG_LEVEL`` overrides the level picked from *verbose*.
    """
    logger.remove()
    level = os.getenv("RICER_LOG_LEVEL", "").upper() or ("DEBUG" if verbose else "INFO")
    logger.add(sys.stderr, level=level, format=VERBOSE_FORMAT if verbose else SHORT_FORMAT)
