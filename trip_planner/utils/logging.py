"""
Logging setup for the Trip Planner workspace.

All modules log through loguru. ``get_logger`` tags records with the module
name; ``GatewayLogger`` tags them with the Gemini operation and model so a
single request can be followed from prompt to reply or fallback.
"""

import json
import os
import sys
import time
from typing import Any

from loguru import logger

from trip_planner.config import LogLevel

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}"

# Largest text logged verbatim for a prompt or reply
MAX_LOGGED_CHARS = 2000


def get_logger(name: str):
    """Return the shared loguru logger bound to a module name."""
    return logger.bind(name=name)


def setup_logging(
    log_level: LogLevel | str = LogLevel.INFO,
    log_file: str | None = None,
    serialize: bool = False,
):
    """
    Configure loguru sinks for the process.

    Args:
        log_level: Minimum level to emit
        log_file: Optional path of a rotating log file
        serialize: Emit one JSON object per record on stderr (for Lambda/CloudWatch)
    """
    if isinstance(log_level, str):
        log_level = LogLevel(log_level.upper())

    logger.remove()
    if serialize:
        logger.add(sys.stderr, level=log_level.value, serialize=True)
    else:
        logger.add(
            sys.stderr, format=CONSOLE_FORMAT, level=log_level.value, colorize=True
        )

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level.value,
            rotation="10 MB",
            retention=5,
        )

    logger.debug(f"Logging configured at {log_level.value}")


class GatewayLogger:
    """Per-request logger for one Gemini gateway call."""

    def __init__(self, operation: str, model: str):
        self.operation = operation
        self.model = model
        self.logger = logger.bind(operation=operation, model=model)
        self._started = time.perf_counter()

    @property
    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self._started) * 1000)

    def request(self, contents: Any) -> None:
        self._started = time.perf_counter()
        self.logger.debug(
            f"Gemini {self.operation} -> {self.model}: {_clip(_to_json(contents))}"
        )

    def response(self, text: str | None) -> None:
        self.logger.debug(
            f"Gemini {self.operation} <- {self.model} in {self.elapsed_ms} ms: "
            f"{_clip(text or '<no text>')}"
        )

    def failure(self, error: Exception) -> None:
        self.logger.warning(
            f"Gemini {self.operation} failed after {self.elapsed_ms} ms: {error!s}"
        )


def _to_json(obj: Any) -> str:
    if isinstance(obj, str):
        return obj
    try:
        return json.dumps(obj, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(obj)


def _clip(text: str) -> str:
    if len(text) <= MAX_LOGGED_CHARS:
        return text
    return f"{text[:MAX_LOGGED_CHARS]}... ({len(text)} chars)"
