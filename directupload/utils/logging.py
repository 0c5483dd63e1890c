"""
Structured JSON logging for the upload pipeline.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- upload_id
- filename
- duration_ms
- error

Usage:
    from directupload.utils.logging import configure_logging, log_upload_started

    configure_logging('directupload', 'INFO')
    log_upload_started(logger, upload_id='abc', filename='cover.png', size_bytes=2048)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier (directupload or directupload-presign)
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    upload_id: Optional[str] = None,
    filename: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        upload_id: Optional upload correlation ID
        filename: Optional target file name
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if upload_id:
        extra["upload_id"] = upload_id
    if filename:
        # "filename" is a reserved LogRecord attribute
        extra["upload_filename"] = filename
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Upload lifecycle event functions

def log_upload_started(
    logger: logging.Logger,
    upload_id: str,
    filename: str,
    size_bytes: Optional[int] = None,
    content_type: Optional[str] = None,
    **kwargs
):
    """
    Log upload start event.

    Args:
        logger: Logger instance
        upload_id: Upload correlation ID (required)
        filename: Target file name (required)
        size_bytes: Optional file size
        content_type: Optional MIME type
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_started",
        upload_id=upload_id,
        filename=filename,
        **kwargs
    )
    if size_bytes is not None:
        extra["size_bytes"] = size_bytes
    if content_type:
        extra["content_type"] = content_type

    logger.info(f"Upload started: {filename}", extra=extra)


def log_upload_succeeded(
    logger: logging.Logger,
    upload_id: str,
    filename: str,
    storage_reference: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log upload success event.

    Args:
        logger: Logger instance
        upload_id: Upload correlation ID (required)
        filename: Target file name (required)
        storage_reference: Stored object key or URL (required)
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_succeeded",
        upload_id=upload_id,
        filename=filename,
        duration_ms=duration_ms,
        storage_reference=storage_reference,
        **kwargs
    )

    logger.info(f"Upload succeeded: {filename} -> {storage_reference}", extra=extra)


def log_upload_failed(
    logger: logging.Logger,
    upload_id: str,
    filename: str,
    error: str,
    error_type: Optional[str] = None,
    duration_ms: Optional[float] = None,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log upload failure event.

    Args:
        logger: Logger instance
        upload_id: Upload correlation ID (required)
        filename: Target file name (required)
        error: Error message (required)
        error_type: Optional error class name
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_failed",
        upload_id=upload_id,
        filename=filename,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )
    if error_type:
        extra["error_type"] = error_type

    message = f"Upload failed: {filename} - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
            return
    logger.error(message, extra=extra)


# Remote call event functions

def log_presign_request(
    logger: logging.Logger,
    filename: str,
    content_type: str,
    duration_ms: Optional[float] = None,
    status_code: Optional[int] = None,
    **kwargs
):
    """
    Log presign (authorization) request event.

    Args:
        logger: Logger instance
        filename: File name sent to the backend (required)
        content_type: MIME type sent to the backend (required)
        duration_ms: Optional duration in milliseconds
        status_code: Optional HTTP status returned
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="presign_request",
        filename=filename,
        duration_ms=duration_ms,
        content_type=content_type,
        **kwargs
    )
    if status_code is not None:
        extra["status_code"] = status_code

    logger.info(f"Presign request: {filename}", extra=extra)


def log_presign_failure(
    logger: logging.Logger,
    filename: str,
    error: str,
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log presign (authorization) failure event."""
    extra = _build_log_extra(
        event="presign_failure",
        filename=filename,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )
    if status_code is not None:
        extra["status_code"] = status_code

    logger.error(f"Presign failure: {filename} - {error}", extra=extra)


def log_transfer_failure(
    logger: logging.Logger,
    filename: str,
    error: str,
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log storage transfer failure event."""
    extra = _build_log_extra(
        event="transfer_failure",
        filename=filename,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )
    if status_code is not None:
        extra["status_code"] = status_code

    logger.error(f"Transfer failure: {filename} - {error}", extra=extra)


# Convenience alias
def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
