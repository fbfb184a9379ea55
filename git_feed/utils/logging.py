from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from ..errors import ConfigError

if TYPE_CHECKING:
    from ..config import LoggingConfig


TIMESTAMP_ENV = "GIT_FEED_LOG_TIMESTAMP"


def setup_logging(cfg: LoggingConfig, debug: bool = False) -> logging.Logger:
    level = logging.DEBUG if debug else _level_from_string(cfg.level)
    logger = logging.getLogger("git_feed")
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    time_format = timestamp_formatter(cfg.timestamp)
    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=time_format is not None,
        show_level=True,
        show_path=False,
        log_time_format=time_format or "[%X]",
        omit_repeated_times=False,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if cfg.file:
        file_path = Path(cfg.file)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(file_path, encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot open log file {cfg.file}: {exc}") from exc
        file_handler.setLevel(level)
        file_handler.setFormatter(_build_file_formatter(cfg.format))
        logger.addHandler(file_handler)

    return logger


def timestamp_precision_from_env() -> str | None:
    return os.environ.get(TIMESTAMP_ENV)


def timestamp_formatter(precision: str | None) -> Callable[[datetime], Text] | None:
    """Build a RichHandler time formatter for the requested precision.

    ``None`` disables timestamps. ``sec``, ``milli``, ``micro`` and ``nano``
    select RFC 3339 UTC timestamps with that many fractional digits; any
    other value falls back to second precision.
    """
    if precision is None:
        return None
    digits = {"sec": 0, "milli": 3, "micro": 6, "nano": 9}.get(precision, 0)

    def _format(when: datetime) -> Text:
        return Text(format_timestamp(when, digits))

    return _format


def format_timestamp(when: datetime, digits: int) -> str:
    utc = when.astimezone(timezone.utc)
    stamp = utc.strftime("%Y-%m-%dT%H:%M:%S")
    if digits:
        # datetime carries microseconds only; nano precision is zero padded.
        fraction = f"{utc.microsecond:06d}".ljust(9, "0")
        stamp += "." + fraction[:digits]
    return stamp + "Z"


def log_event(
    logger: logging.Logger | None,
    message: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    if logger is None:
        return
    logger.log(level, message, extra=fields)


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extract_extras(record))
        return json.dumps(payload, ensure_ascii=True, default=str)


_RESERVED = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "taskName",
}


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    extras = {}
    for key, value in record.__dict__.items():
        if key in _RESERVED:
            continue
        extras[key] = value
    return extras


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(message)s")


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.WARNING)
