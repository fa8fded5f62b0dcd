import json
import logging
import os
import re
from contextvars import ContextVar
from datetime import UTC, datetime
from logging.handlers import TimedRotatingFileHandler

from contactscout.core.config import settings

EMAIL_PATTERN = re.compile(r"([a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+)")
SENSITIVE_KEYS = ("password", "token", "secret", "key", "auth", "credential")

# Set per request by ClientIPMiddleware; "-" outside a request
client_ip_var: ContextVar[str] = ContextVar("client_ip", default="-")

# LogRecord attributes that are rendered explicitly or must never be emitted
RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "client_ip",
        "request",
        "response",
        "emails",
        "socials",
    }
)


class UTCFormatter(logging.Formatter):
    """Formatter that renders asctime in UTC"""

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=UTC)
        return dt.strftime(datefmt or "%Y-%m-%d %H:%M:%S")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with `extra` fields sanitized"""

    def _safe_value(self, value):
        if value is None or isinstance(value, str | int | float | bool):
            return value
        if isinstance(value, list | tuple | set):
            return [self._safe_value(item) for item in value]
        if isinstance(value, dict):
            return {k: self._safe_value(v) for k, v in sanitize_log_data(value).items()}

        text = str(value)
        if len(text) > 1000:
            return text[:1000] + "... [TRUNCATED]"
        return text

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if hasattr(record, "client_ip"):
            entry["client_ip"] = record.client_ip
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in RESERVED_ATTRS
            and not key.startswith("_")
            and not callable(value)
        }
        for key, value in sanitize_log_data(extras).items():
            entry[key] = self._safe_value(value)

        return json.dumps(entry, ensure_ascii=False, default=str)


class ClientIPFilter(logging.Filter):
    """Stamp each record with the client IP of the request being served"""

    def filter(self, record):
        if not hasattr(record, "client_ip"):
            record.client_ip = client_ip_var.get()
        return True


def setup_logging():
    """Configure root logging with daily file rotation and console output"""
    os.makedirs(settings.LOG_PATH, exist_ok=True)

    current_date = datetime.now(UTC).strftime("%Y-%m-%d")
    log_file = settings.LOG_PATH / f"app-{current_date}.log"
    log_level = getattr(logging, settings.LOG_LEVEL.upper())

    logger = logging.getLogger()
    logger.setLevel(log_level)

    text_formatter = UTCFormatter(
        "%(asctime)s UTC - [%(client_ip)s] - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if settings.ENVIRONMENT == "production":
        file_formatter = JSONFormatter()
    else:
        file_formatter = text_formatter

    file_handler = TimedRotatingFileHandler(
        log_file,
        when="midnight",
        interval=1,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
        utc=True,
    )
    file_handler.setFormatter(file_formatter)
    file_handler.setLevel(log_level)
    file_handler.addFilter(ClientIPFilter())
    logger.addHandler(file_handler)

    if settings.ENVIRONMENT == "development":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(text_formatter)
        console_handler.setLevel(log_level)
        console_handler.addFilter(ClientIPFilter())
        logger.addHandler(console_handler)

    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    logging.info("Logging configured successfully")


def sanitize_log_data(data):
    """
    Mask secrets and email addresses in a dict before it is logged.

    Nested dicts are sanitized recursively; anything that is not a dict is
    returned as is.
    """
    if not isinstance(data, dict):
        return data

    sanitized = data.copy()
    for key, value in sanitized.items():
        if isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)
        elif isinstance(value, str):
            if any(s in key.lower() for s in SENSITIVE_KEYS):
                sanitized[key] = "********"
            elif EMAIL_PATTERN.search(value):
                sanitized[key] = EMAIL_PATTERN.sub("***@***.***", value)

    return sanitized
