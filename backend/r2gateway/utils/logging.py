"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- operation
- object_key
- duration_ms
- error

Usage:
    from r2gateway.utils.logging import configure_logging, log_storage_failure

    configure_logging('r2-gateway', 'INFO')
    log_storage_failure(logger, operation='delete', object_key='a/b.png', error=exc)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger.json import JsonFormatter


class ServiceFilter(logging.Filter):
    """Stamp the service name on every record."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record):
        record.service = self.service_name
        return True


def build_json_formatter() -> JsonFormatter:
    """JSON formatter emitting timestamp, level, name and message plus extras."""
    return JsonFormatter(
        '%(levelname)s %(name)s %(message)s',
        timestamp=True,
        rename_fields={"levelname": "level"},
        json_ensure_ascii=False
    )


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier (e.g. r2-gateway)
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        # Console handler (container logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_json_formatter())
        handler.addFilter(ServiceFilter(service_name))

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        cls._configured = True


def _build_log_extra(
    event: str,
    operation: Optional[str] = None,
    object_key: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        operation: Optional storage operation name
        object_key: Optional object key or listing prefix
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if operation:
        extra["operation"] = operation
    if object_key is not None:
        extra["object_key"] = object_key
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


def log_storage_operation(
    logger: logging.Logger,
    operation: str,
    object_key: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log a completed storage operation (debug level)."""
    extra = _build_log_extra(
        event="storage_operation",
        operation=operation,
        object_key=object_key,
        duration_ms=duration_ms,
        **kwargs
    )
    logger.debug(f"Storage {operation}: {object_key}", extra=extra)


def log_storage_failure(
    logger: logging.Logger,
    operation: str,
    object_key: str,
    error: Any,
    duration_ms: Optional[float] = None,
    include_traceback: bool = True,
    **kwargs
):
    """
    Log a storage backend failure.

    The error detail only ever goes to the log; callers answer the client
    with a generic message.

    Args:
        logger: Logger instance
        operation: Operation name (list, delete, presign_put)
        object_key: Object key or listing prefix involved
        error: Exception or error message
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace (default: True)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="storage_failure",
        operation=operation,
        object_key=object_key,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )

    message = f"Storage failure: {operation} {object_key} - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
            return
    logger.error(message, extra=extra)


def log_request_rejected(
    logger: logging.Logger,
    method: str,
    object_name: str,
    reason: str,
    **kwargs
):
    """Log a request answered with a client error."""
    extra = _build_log_extra(
        event="request_rejected",
        object_key=object_name,
        method=method,
        reason=reason,
        **kwargs
    )
    logger.info(f"Rejected {method} /{object_name}: {reason}", extra=extra)


# Convenience alias
def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
