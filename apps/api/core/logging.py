"""
Structured logging configuration.

Every record carries the service name and environment. Call sites attach
context with logger.info(..., extra={"extra_fields": {...}}); the keys this
service sends are:

    requests      method, path, client_ip, status_code, process_time_ms, error
    plans         user_id, plan_id, tier, previous_plan_id,
                  progress_records_carried
    progress      user_id, plan_id, day_number, state, calories_delta
    billing       user_id, plan, reference, amount, currency, expected_amount,
                  subscription_end, trial_ends_at

JSON output merges them into the top-level object; text output appends them
as key=value pairs.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict
from core.config import settings

SERVICE_NAME = "fitpath-api"

# Output keys that extra_fields may not overwrite
RESERVED_FIELDS = frozenset({"timestamp", "level", "logger", "message", "service", "environment"})


def _context_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields = getattr(record, "extra_fields", None) or {}
    return {k: v for k, v in fields.items() if k not in RESERVED_FIELDS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, context fields flattened in."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(_context_fields(record))
        return json.dumps(log_data, default=str)


class ContextTextFormatter(logging.Formatter):
    """Development format: the usual line plus key=value context."""

    def __init__(self):
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _context_fields(record)
        if not fields:
            return line
        context = " ".join(f"{k}={v}" for k, v in fields.items())
        # keep a traceback, if any, after the context
        head, sep, tail = line.partition("\n")
        return f"{head} [{context}]{sep}{tail}"


def setup_logging():
    """
    Configure application-wide logging.

    Uses JSON format in production, text format in development.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    if settings.LOG_FORMAT == "json" or settings.ENVIRONMENT == "production":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ContextTextFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Set levels for noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger
