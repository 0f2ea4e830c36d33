"""Logging configuration."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Tuple

LOG_LEVELS: Dict[str, int] = {
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
    "silent": logging.CRITICAL + 10,
}

MAX_DETAIL_LINES = 4


def configure_logging(level_name: str = "info") -> None:
    """Attach a console handler to the root logger.

    Does nothing if the root logger already has handlers (uvicorn or pytest
    may have configured it first), apart from applying the level.
    """
    level = LOG_LEVELS.get(level_name.lower(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if root_logger.handlers:
        return

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def render_event(title: str, fields: Iterable[Tuple[str, str]]) -> str:
    lines = [title]
    for index, (label, value) in enumerate(fields):
        if index >= MAX_DETAIL_LINES:
            break
        lines.append(f"  • {label.ljust(11)}{value}")
    return "\n".join(lines)
