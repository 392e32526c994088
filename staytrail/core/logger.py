from __future__ import annotations

import json
import logging
import sys
from typing import Any

from staytrail.core.config import settings

PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Passed through ``extra=`` by the report services
CONTEXT_FIELDS = ("booking_id", "notice_code", "file_path")

# WeasyPrint and its font stack log every CSS/font decision at INFO
NOISY_LOGGERS = ("weasyprint", "fontTools", "botocore", "boto3")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - formatting logic
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        context = {
            key: getattr(record, key)
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        }
        if context:
            payload["context"] = context
        return json.dumps(payload, default=str, ensure_ascii=False)


def init_logging(level: int | None = None) -> None:
    """Configure the root logger once; later calls are no-ops."""
    if logging.getLogger().handlers:
        return
    effective_level = level or getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_FORMAT.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    root = logging.getLogger()
    root.setLevel(effective_level)
    root.addHandler(handler)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective_level, logging.WARNING))
