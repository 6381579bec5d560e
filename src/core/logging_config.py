"""Logging setup for contact processing, with optional JSON output."""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from core.config import Settings

TEXT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Record attributes copied to the top level of JSON lines when set
CONTEXT_FIELDS = ("bbl", "request_id")

# Chatty third-party loggers held at WARNING
QUIET_LOGGERS = ("httpx", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Pipeline runs attach `extra_data` (run statistics) and the parcel
    `bbl`, so lines can be filtered per parcel downstream.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value

        extra_data = getattr(record, "extra_data", None)
        if extra_data is not None:
            payload["extra"] = extra_data
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that stamps fixed context (bbl, request_id) on every record.

    Per-call `extra` values are kept; context wins on key clashes.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name.
        log_file: Also write to this file when given.
        json_format: Use JSONFormatter instead of the text format.
    """
    formatter: logging.Formatter = (
        JSONFormatter() if json_format else logging.Formatter(TEXT_LOG_FORMAT, DATE_FORMAT)
    )

    # stderr keeps CLI JSON output on stdout parseable
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(settings: "Settings", verbose: bool = False) -> None:
    """Apply LOG_LEVEL / LOG_FORMAT from settings; `verbose` forces DEBUG."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_format == "json",
    )


def get_logger(name: str) -> logging.Logger:
    """Module logger; call as `get_logger(__name__)`."""
    return logging.getLogger(name)


def get_context_logger(name: str, **context: Any) -> ContextLogger:
    """
    Logger whose records all carry `context`.

    Example:
        logger = get_context_logger(__name__, bbl="1-13-1")
        logger.info("Deduplicated contacts")
    """
    return ContextLogger(logging.getLogger(name), context)


__all__ = [
    "setup_logging",
    "configure_logging",
    "get_logger",
    "get_context_logger",
    "JSONFormatter",
    "ContextLogger",
]
