"""Logging infrastructure for Recipe Generation Service.

Provides centralized logging with configurable format (text/JSON) and level.
Configured via environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text, json (default: text)

Text output goes through rich's RichHandler (it renders time, level and
tracebacks). JSON output is one object per line for log shippers.

Generation runs attach ``run_id`` and ``attempt`` to records through
``extra=``; both formats render them when present.
"""

import json
import logging
import os
import sys
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler


def _run_context(record: logging.LogRecord) -> Optional[str]:
    """Return "run_id #attempt" for records logged inside a generation run."""
    run_id = getattr(record, "run_id", None)
    if run_id is None:
        return None
    attempt = getattr(record, "attempt", None)
    return f"{run_id} #{attempt}" if attempt is not None else str(run_id)


class JSONFormatter(logging.Formatter):
    """Formatter that outputs structured JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "run_id"):
            log_data["run_id"] = record.run_id
        if hasattr(record, "attempt"):
            log_data["attempt"] = record.attempt

        return json.dumps(log_data)


class RunContextFormatter(logging.Formatter):
    """Message-only formatter for RichHandler that prefixes the run context.

    Output: ``[a1b2c3d4 #2] Calling generation provider...``
    """

    def format(self, record: logging.LogRecord) -> str:
        context = _run_context(record)
        message = record.getMessage()
        if context:
            message = f"[{context}] {message}"
        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"
        return message


def _build_handler(log_type: str) -> logging.Handler:
    if log_type == "json":
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        return handler

    handler = RichHandler(
        console=Console(file=sys.stdout),
        show_path=False,
        markup=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(RunContextFormatter())
    return handler


def get_logger(name: str) -> logging.Logger:
    """Create and configure logger instance.

    Args:
        name: Logger name, typically module name.

    Returns:
        Configured logger instance (existing handlers are reused).
    """
    logger_instance = logging.getLogger(name)

    if logger_instance.handlers:
        return logger_instance

    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    log_type = os.getenv("LOG_TYPE", "text").lower()

    logger_instance.setLevel(log_level)
    handler = _build_handler(log_type)
    handler.setLevel(log_level)
    logger_instance.addHandler(handler)

    return logger_instance


logger = get_logger("recipe_generator")

# Gemini SDK logs every request at INFO
logging.getLogger("google.genai").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
