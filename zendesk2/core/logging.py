"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""Logging infrastructure with request correlation.

This module provides structured logging for Zendesk2: correlation IDs that
tie a model operation to the API requests it issues, redaction of API tokens
and passwords, and Rich or JSON console output.
"""

import json
import logging
import os
import re
import sys
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from re import Pattern
from typing import Any

from rich.logging import RichHandler

# Thread-local storage for context data
_context_local = threading.local()


class CorrelationIdManager:
    """
    Manages correlation IDs across threads using thread-local storage.
    """

    def get_correlation_id(self) -> str:
        """
        Get the current correlation ID or generate a new one.
        """
        if not getattr(_context_local, "correlation_id", None):
            _context_local.correlation_id = f"zendesk2-{uuid.uuid4()}"
        return _context_local.correlation_id

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Set the current correlation ID.
        """
        _context_local.correlation_id = correlation_id

    def clear_correlation_id(self) -> None:
        """
        Clear the current correlation ID.
        """
        if hasattr(_context_local, "correlation_id"):
            delattr(_context_local, "correlation_id")


# Global correlation ID manager instance
correlation_manager = CorrelationIdManager()


class LogRedactor:
    """
    Redacts credentials from log messages.
    """

    def __init__(self) -> None:
        """
        Initialize the log redactor with patterns for credentials.

        Zendesk API tokens, passwords, JWT shared secrets and Authorization
        headers are masked. Email addresses are kept: they identify users and
        are needed when debugging requests.
        """
        self.patterns: dict[str, Pattern] = {
            "api_token": re.compile(
                r'(api[_-]?token|jwt[_-]?token|token)["\']?\s*[:=]\s*["\']?([^"\'&\s,}]{6,})',
                re.IGNORECASE,
            ),
            "password": re.compile(
                r'(password|passwd|secret)["\']?\s*[:=]\s*["\']?([^"\'&\s,}]+)', re.IGNORECASE
            ),
            "authorization": re.compile(
                r'(Authorization)["\']?\s*[:=]\s*["\']?(Basic|Bearer)?\s*([^"\'&\s,}]{8,})',
                re.IGNORECASE,
            ),
        }

    def redact(self, message: str) -> str:
        """
        Redact credentials from the message, keeping the key names.
        """
        if not isinstance(message, str):
            return message

        for pattern in self.patterns.values():
            message = pattern.sub(r"\1: [REDACTED]", message)
        return message


# Global redactor instance
redactor = LogRedactor()


class StructuredLogger(logging.Logger):
    """
    Logger that supports structured logging with context data.

    Any logging call accepts a ``context`` keyword whose key-value pairs are
    attached to the record and rendered by the formatters below.
    """

    def _log(
        self,
        level: int,
        msg: Any,
        args: tuple,
        exc_info: bool | tuple | None = None,
        extra: dict[str, Any] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", None)

        if extra is None:
            extra = {}
        if context:
            extra["context_data"] = context
        extra["correlation_id"] = correlation_manager.get_correlation_id()

        if isinstance(msg, str):
            msg = redactor.redact(msg)

        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel + 2)

    def debug(self, msg: Any, *args: Any, context: dict[str, Any] | None = None, **kwargs: Any) -> None:
        if self.isEnabledFor(logging.DEBUG):
            self._log(logging.DEBUG, msg, args, context=context, **kwargs)

    def info(self, msg: Any, *args: Any, context: dict[str, Any] | None = None, **kwargs: Any) -> None:
        if self.isEnabledFor(logging.INFO):
            self._log(logging.INFO, msg, args, context=context, **kwargs)

    def warning(self, msg: Any, *args: Any, context: dict[str, Any] | None = None, **kwargs: Any) -> None:
        if self.isEnabledFor(logging.WARNING):
            self._log(logging.WARNING, msg, args, context=context, **kwargs)

    def error(self, msg: Any, *args: Any, context: dict[str, Any] | None = None, **kwargs: Any) -> None:
        if self.isEnabledFor(logging.ERROR):
            self._log(logging.ERROR, msg, args, context=context, **kwargs)


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs log records as JSON.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "correlation_id"):
            log_data["correlation_id"] = record.correlation_id

        if getattr(record, "context_data", None):
            log_data["context"] = record.context_data

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


class RichContextFormatter(logging.Formatter):
    """
    Formatter for Rich console output with context data.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        context_data = getattr(record, "context_data", None)
        if context_data:
            context_str = " ".join(f"[{k}={v}]" for k, v in context_data.items())
            message = f"{message} {context_str}"

        if hasattr(record, "correlation_id"):
            message = f"{message} [correlation_id={record.correlation_id}]"

        return message


@contextmanager
def correlation_id(correlation_id: str | None = None) -> Iterator[str]:
    """
    Context manager that sets a correlation ID for the duration of a block.

    Args:
    ----
        correlation_id: Correlation ID to use; a new one is generated if None

    Yields:
    ------
        The active correlation ID

    """
    previous_id = getattr(_context_local, "correlation_id", None)
    current_id = correlation_id or f"zendesk2-{uuid.uuid4()}"
    correlation_manager.set_correlation_id(current_id)
    try:
        yield current_id
    finally:
        if previous_id:
            correlation_manager.set_correlation_id(previous_id)
        else:
            correlation_manager.clear_correlation_id()


def configure_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    json_format: bool = False,
    use_rich: bool = True,
    debug: bool = False,
) -> None:
    """
    Configure logging for the ``zendesk2`` logger hierarchy.

    Args:
    ----
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL or integer)
        log_file: Optional path to log file
        json_format: Whether to use JSON format for logs
        use_rich: Whether to use Rich for console output
        debug: Whether to force debug mode

    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    if debug:
        level = logging.DEBUG

    logging.setLoggerClass(StructuredLogger)

    handlers: list[logging.Handler] = []
    plain_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    if use_rich and not json_format:
        rich_handler = RichHandler(rich_tracebacks=True, markup=False, show_time=True)
        rich_handler.setFormatter(RichContextFormatter("%(message)s"))
        handlers.append(rich_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(plain_format))
        handlers.append(console_handler)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(plain_format))
        handlers.append(file_handler)

    logger = logging.getLogger("zendesk2")
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)

    logger.debug(f"Logging configured with level {logging.getLevelName(level)}")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger under the ``zendesk2`` hierarchy.

    Args:
    ----
        name: Logger name; prefixed with ``zendesk2.`` when needed

    Returns:
    -------
        A StructuredLogger instance

    """
    if not name.startswith("zendesk2"):
        name = f"zendesk2.{name}"

    logger_class = logging.getLoggerClass()
    logging.setLoggerClass(StructuredLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(logger_class)
    return logger
