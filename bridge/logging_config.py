"""Structured logging for the webhook bridge.

Records are written as one JSON object per line to a rotating file and to
stdout. Conversation code can attach ``extra={"user_id": ..., "node": ...}``
and those fields land at the top level of the JSON object.
"""

import json
import logging
import logging.config
import logging.handlers
import os
import re
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Fields copied from ``extra=`` into the JSON payload
CONTEXT_FIELDS = ("user_id", "node", "payload", "status_code")

# Outbound clients log full request URLs, which carry the page token
QUIET_LOGGERS = ("httpx", "httpcore", "anthropic")

_TOKEN_PATTERN = re.compile(r"(access_token=)[^&\s\"']+")


def redact(text: str) -> str:
    """Mask access tokens embedded in URLs."""
    return _TOKEN_PATTERN.sub(r"\1***", text)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with tokens redacted."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact(record.getMessage()),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = redact(self.formatException(record.exc_info))

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure root logging for the service.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path of the rotating JSON log. Defaults to logs/app.log.
    """
    log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or str(DEFAULT_LOG_PATH)
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "bridge.logging_config.JSONFormatter"},
            },
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": log_file,
                    "maxBytes": 10 * 1024 * 1024,
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                name: {"level": "WARNING"} for name in QUIET_LOGGERS
            },
            "root": {
                "level": log_level,
                "handlers": ["file", "console"],
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass ``__name__``."""
    return logging.getLogger(name)
