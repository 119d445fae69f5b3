"""
File logging with queue-based writing and rotation.
"""

import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler

from .structured_logger import build_formatter


class FileLogger:
    """Queue-based file logger with rotation capabilities."""

    def __init__(
        self,
        log_file_path: str = "logs/app.log",
        max_bytes: int = 50 * 1024 * 1024,  # 50MB
        backup_count: int = 5,
        log_level: str = "INFO",
        use_json_format: bool = True,
    ):
        self.log_file_path = log_file_path
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.log_level = log_level
        self.use_json_format = use_json_format
        self._log_queue = queue.Queue()
        self._listener: QueueListener | None = None
        self._queue_handler: QueueHandler | None = None

        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    def setup_file_handler(self) -> RotatingFileHandler:
        """Set up rotating file handler."""
        file_handler = RotatingFileHandler(
            self.log_file_path, maxBytes=self.max_bytes, backupCount=self.backup_count
        )
        file_handler.setLevel(getattr(logging, self.log_level.upper()))
        file_handler.setFormatter(build_formatter(self.use_json_format))
        return file_handler

    def setup_console_handler(self) -> logging.StreamHandler:
        """Set up console handler."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, self.log_level.upper()))
        console_handler.setFormatter(build_formatter(self.use_json_format))
        return console_handler

    def start_queue_listener(self, handlers: list[logging.Handler]) -> None:
        """Start the queue listener with provided handlers."""
        self._listener = QueueListener(
            self._log_queue, *handlers, respect_handler_level=True
        )
        self._listener.start()

    def get_queue_handler(self) -> QueueHandler:
        """Get the queue handler for adding to loggers."""
        if self._queue_handler is None:
            self._queue_handler = QueueHandler(self._log_queue)
            self._queue_handler.setLevel(getattr(logging, self.log_level.upper()))
        return self._queue_handler

    def stop(self) -> None:
        """Stop the queue listener gracefully."""
        if self._listener:
            self._listener.stop()
            self._listener = None


def setup_file_logging(
    log_file_path: str = "logs/app.log",
    log_level: str = "INFO",
    use_json_format: bool = True,
    max_bytes: int = 50 * 1024 * 1024,
    backup_count: int = 5,
) -> FileLogger | None:
    """
    Set up file logging with queue-based writing.

    Returns:
        FileLogger instance, or None if the log file could not be opened
    """
    try:
        file_logger = FileLogger(
            log_file_path=log_file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            log_level=log_level,
            use_json_format=use_json_format,
        )
        file_logger.start_queue_listener(
            [file_logger.setup_console_handler(), file_logger.setup_file_handler()]
        )
        return file_logger

    except OSError as e:
        logging.error(f"Failed to setup file logging: {e}")
        return None


def configure_external_loggers(queue_handler: QueueHandler) -> None:
    """Route application and library loggers through the queue handler."""
    external_loggers = {
        "urllib3": logging.WARNING,
        "sqlalchemy": logging.WARNING,
        "uvicorn": logging.INFO,
        "fastapi": logging.INFO,
        "asyncmy": logging.INFO,
    }

    for logger_name, level in external_loggers.items():
        ext_logger = logging.getLogger(logger_name)
        ext_logger.handlers.clear()
        ext_logger.addHandler(queue_handler)
        ext_logger.propagate = False
        ext_logger.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(queue_handler)
    root_logger.setLevel(logging.INFO)

    logging.captureWarnings(True)
