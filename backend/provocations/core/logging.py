"""Audit-friendly logging configuration.

Key principle: Never log document text, instructions or model output.
Log operational metadata only.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from ..config import get_settings

SENSITIVE_FIELDS = frozenset({
    "content",
    "text",
    "document",
    "raw_text",
    "evolved",
    "instruction",
    "selected_text",
    "objective",
    "excerpt",
    "source_excerpt",
    "prompt",
    "system_prompt",
    "user_prompt",
    "response",
})


class AuditLogger:
    """Logger that ensures user content is never logged."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger based on settings."""
        settings = get_settings()

        self.logger.setLevel(settings.log_level)

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(settings.log_level)

            if settings.log_format == "json":
                handler.setFormatter(JsonFormatter())
            else:
                handler.setFormatter(
                    logging.Formatter(
                        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
                    )
                )

            self.logger.addHandler(handler)

    def _sanitize(self, data: dict[str, Any]) -> dict[str, Any]:
        """Replace user-authored or generated text with its length."""
        sanitized = {}
        for key, value in data.items():
            if key.lower() in SENSITIVE_FIELDS:
                sanitized[key] = f"[REDACTED - {len(str(value))} chars]"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize(value)
            elif isinstance(value, list) and value and isinstance(value[0], dict):
                sanitized[key] = [self._sanitize(item) for item in value]
            else:
                sanitized[key] = value

        return sanitized

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info with sanitized data."""
        self.logger.info(message, extra={"data": self._sanitize(kwargs)})

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning with sanitized data."""
        self.logger.warning(message, extra={"data": self._sanitize(kwargs)})

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error with sanitized data."""
        self.logger.error(message, extra={"data": self._sanitize(kwargs)})

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug with sanitized data."""
        self.logger.debug(message, extra={"data": self._sanitize(kwargs)})

    def audit(
        self,
        action: str,
        resource_type: str,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Log an auditable action without user content."""
        audit_data = {
            "action": action,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "timestamp": datetime.now(UTC).isoformat(),
            **self._sanitize(kwargs),
        }
        self.logger.info(f"AUDIT: {action} on {resource_type}", extra={"audit": audit_data})


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "data"):
            log_data["data"] = record.data

        if hasattr(record, "audit"):
            log_data["audit"] = record.audit

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> AuditLogger:
    """Get an audit-safe logger instance."""
    return AuditLogger(name)
