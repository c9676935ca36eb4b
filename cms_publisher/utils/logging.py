"""
Logging setup for publish runs.

Console output goes through rich; an optional file handler writes either
JSON lines (one object per record, structured extras included) or plain
text. Secrets registered with mask_secrets never reach any handler output.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from ..config import LoggingConfig


LOGGER_NAME = "cms_publisher"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(message)s"
MASK = "***"

# Attributes every LogRecord carries; anything else was passed via `extra`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


def setup_logging(cfg: LoggingConfig, log_dir: Path | None = None) -> logging.Logger:
    """Configure the package logger from LoggingConfig, replacing old handlers."""
    level = getattr(logging, cfg.level.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = []
    if cfg.console:
        console = RichHandler(rich_tracebacks=True, show_time=False, show_path=False)
        console.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console)
    if cfg.file:
        target = (log_dir or Path(cfg.dir or ".")) / cfg.filename
        target.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(target, encoding="utf-8")
        file_handler.setFormatter(
            JsonlFormatter() if cfg.format == "jsonl" else logging.Formatter(PLAIN_FORMAT)
        )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)
    return logger


def mask_secrets(logger: logging.Logger, *secrets: str) -> None:
    """Mask the given values in every record emitted by logger's handlers."""
    values = [s for s in secrets if s]
    if not values:
        return
    for handler in logger.handlers:
        handler.addFilter(SecretMaskFilter(values))


def log_event(
    logger: logging.Logger | None,
    message: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Log message with structured fields attached as record attributes."""
    if logger is None:
        return
    logger.log(level, message, extra=fields)


class SecretMaskFilter(logging.Filter):
    """Replace secret values in the message and string extras of a record."""

    def __init__(self, secrets: list[str]):
        super().__init__()
        self.secrets = secrets

    def _mask(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, MASK)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._mask(record.getMessage())
        record.args = None
        for key, value in record_extras(record).items():
            if isinstance(value, str):
                setattr(record, key, self._mask(value))
        return True


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(record_extras(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
