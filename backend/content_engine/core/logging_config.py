"""
Structured logging configuration
"""

import logging
import sys
import json
from datetime import datetime, timezone

CONTEXT_FIELDS = ("owner_id", "document_id", "document_type", "category", "version")


class StructuredFormatter(logging.Formatter):
    """JSON structured logging formatter"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""

        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Setup logging for processes embedding the engine (CLI, workers)"""
    global _configured

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    if _configured:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(console_handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get logger with consistent configuration"""
    return logging.getLogger(name)


class LoggerMixin:
    """Mixin to add logging capabilities to classes"""

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def log_info(self, message: str, **kwargs):
        self.logger.info(message, extra=kwargs)

    def log_error(self, message: str, **kwargs):
        self.logger.error(message, extra=kwargs)

    def log_warning(self, message: str, **kwargs):
        self.logger.warning(message, extra=kwargs)
