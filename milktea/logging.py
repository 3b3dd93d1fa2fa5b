"""Logging configuration for milktea.

Structured logging via loguru. The ``milktea`` namespace is disabled on import
(library behavior) and only enabled through :func:`setup_logging`. Console
output defaults to off because anything written to stderr lands on top of
the rendered screen; point ``file`` somewhere and tail it instead.

Example:
    from milktea.logging import LogConfig, setup_logging, teardown_logging

    handler_ids = setup_logging(LogConfig(level="DEBUG", file="milktea.log"))
    ...
    teardown_logging(handler_ids)
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from loguru import logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"]

_CONTEXT_KEYS = ("component", "model", "path")


def _format_context(record: Any) -> str:
    extra = record.get("extra", {})
    parts = [f"{k}={extra[k]}" for k in _CONTEXT_KEYS if k in extra]
    return f" [{' '.join(parts)}]" if parts else ""


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    "<dim>{extra[_ctx]}</dim> - "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line}{extra[_ctx]} - {message}"
)


@dataclass(frozen=True)
class LogConfig:
    """Logging configuration.

    Attributes:
        level: Minimum log level.
        file: Path to a log file, or None for no file output.
        console: Whether to log to stderr.
        rotation: File rotation policy (e.g. "10 MB", "1 day").
        retention: Number of rotated files to keep.
    """

    level: LogLevel = "INFO"
    file: str | None = None
    console: bool = False
    rotation: str = "10 MB"
    retention: int = 5

    @property
    def enabled(self) -> bool:
        return bool(self.file) or self.console


def setup_logging(config: LogConfig) -> list[int]:
    """Configure handlers for the milktea namespace and return their ids."""
    handler_ids: list[int] = []
    if not config.enabled:
        return handler_ids

    logger.configure(patcher=lambda r: r["extra"].update(_ctx=_format_context(r)))
    logger.enable("milktea")

    if config.console:
        hid = logger.add(
            sys.stderr,
            level=config.level,
            format=CONSOLE_FORMAT,
            colorize=True,
            filter="milktea",
        )
        handler_ids.append(hid)

    if config.file:
        Path(config.file).parent.mkdir(parents=True, exist_ok=True)
        hid = logger.add(
            config.file,
            level=config.level,
            format=FILE_FORMAT,
            filter="milktea",
            rotation=config.rotation,
            retention=config.retention,
            diagnose=False,
            enqueue=True,
        )
        handler_ids.append(hid)

    return handler_ids


def teardown_logging(handler_ids: list[int]) -> None:
    for hid in handler_ids:
        logger.remove(hid)
    logger.disable("milktea")
