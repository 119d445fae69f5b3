"""
Central logging configuration for PropertyHub.
Provides setup functions, logger management and the structured event sink.
"""

import logging
from typing import Any

from .file_logger import FileLogger, configure_external_loggers, setup_file_logging
from .middleware import TransactionIdFilter
from .structured_logger import setup_structured_logging


class LoggingConfig:
    """Central logging configuration manager."""

    def __init__(self):
        self.file_logger: FileLogger | None = None
        self.transaction_filter: TransactionIdFilter | None = None
        self._is_configured = False

    def setup(
        self,
        log_to_file: bool = False,
        log_level: str = "INFO",
        log_file_path: str = "logs/app.log",
        use_json_format: bool = True,
        max_bytes: int = 50 * 1024 * 1024,
        backup_count: int = 5,
    ) -> logging.Logger:
        """
        Set up logging once per process.

        Args:
            log_to_file: Whether to enable file logging
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_file_path: Path to the log file
            use_json_format: Whether to use JSON formatting
            max_bytes: Maximum file size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured main logger instance
        """
        if self._is_configured:
            return get_logger()

        self.transaction_filter = TransactionIdFilter()

        if log_to_file:
            self.file_logger = setup_file_logging(
                log_file_path=log_file_path,
                log_level=log_level,
                use_json_format=use_json_format,
                max_bytes=max_bytes,
                backup_count=backup_count,
            )

        if self.file_logger:
            queue_handler = self.file_logger.get_queue_handler()
            queue_handler.addFilter(self.transaction_filter)
            configure_external_loggers(queue_handler)
        else:
            logger = setup_structured_logging(log_level, use_json_format)
            for handler in logger.handlers:
                handler.addFilter(self.transaction_filter)

        self._is_configured = True
        return get_logger()

    def shutdown(self) -> None:
        """Shutdown logging gracefully."""
        if self.file_logger:
            self.file_logger.stop()
            self.file_logger = None
        self._is_configured = False


_logging_config = LoggingConfig()


def setup_logging(settings=None) -> logging.Logger:
    """
    Set up logging from application settings.

    Args:
        settings: Settings instance; the global one is used when omitted

    Returns:
        Configured main logger instance
    """
    if settings is None:
        from ...config import settings

    return _logging_config.setup(
        log_to_file=settings.log_to_file,
        log_level=settings.log_level.upper(),
        log_file_path=settings.log_file_path,
        use_json_format=settings.log_format.lower() == "json",
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Optional logger name (will be prefixed with app name)

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"propertyhub_backend.{name}")
    return logging.getLogger("propertyhub_backend")


def log_event(
    event: str,
    context: dict[str, Any] | None = None,
    level: int = logging.INFO,
    logger: logging.Logger | None = None,
) -> None:
    """Write a structured ``{event, context}`` record.

    Never raises: a failing handler must not change the outcome of the
    operation being logged.
    """
    target = logger or get_logger("events")
    try:
        target.log(level, event, extra={"event": event, "context": context or {}})
    except Exception:  # noqa: BLE001
        logging.getLogger(__name__).debug("Dropped log event %s", event)


def shutdown_logging() -> None:
    """Shutdown logging gracefully."""
    _logging_config.shutdown()
