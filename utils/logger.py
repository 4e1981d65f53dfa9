"""Logging configuration for the relay.

Every record that passes through the application logger, or a logger the
relay's handlers are attached to, has bearer tokens and Authorization
header values masked before it is formatted.
"""

import logging
import os
import re
import sys
from typing import Optional

import config

LOGGER_NAME = "ClassroomGradingRelay"
REDACTED = "[REDACTED]"

_SECRET_PATTERNS = (
    # Bearer <token>, wherever it appears
    re.compile(r'(\bBearer\s+)[^\s\'",;}]+', re.IGNORECASE),
    # Authorization: <value> / 'Authorization': '<value>' for non-bearer schemes
    re.compile(r'(\bAuthorization[\'"]?\s*[:=]\s*[\'"]?)(?!Bearer\b)[^\s\'",;}]+(?:\s+[^\s\'",;}]+)?', re.IGNORECASE),
    # OAuth tokens passed as query parameters
    re.compile(r'(\b(?:access_token|token)=)[^&\s\'"]+', re.IGNORECASE),
)

_logger: Optional[logging.Logger] = None


def redact(text: str) -> str:
    """Masks credentials in ``text``."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda match: match.group(1) + REDACTED, text)
    return text


class RedactingFilter(logging.Filter):
    """Rewrites a record's message with credentials masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = redact(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class RedactingFormatter(logging.Formatter):
    """Masks credentials in the fully formatted line, tracebacks included."""

    def format(self, record: logging.LogRecord) -> str:
        return redact(super().format(record))


def attach_handlers(target: logging.Logger) -> None:
    """Sends ``target``'s records through the relay's handlers and redaction."""
    app_logger = get_logger()
    if not any(isinstance(f, RedactingFilter) for f in target.filters):
        target.addFilter(RedactingFilter())
    for handler in app_logger.handlers:
        if handler not in target.handlers:
            target.addHandler(handler)
    target.setLevel(config.LOG_LEVEL)


def setup_logger() -> logging.Logger:
    """Sets up and returns the application logger.

    Configures a logger that outputs to both console and a file,
    with the level determined by the DEBUG flag in config.

    Returns:
        logging.Logger: The configured application logger.
    """
    global _logger
    if _logger:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.LOG_LEVEL)
    logger.addFilter(RedactingFilter())

    if not logger.handlers:
        formatter = RedactingFormatter(config.LOG_FORMAT)

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(config.LOG_LEVEL)
        console.setFormatter(formatter)
        logger.addHandler(console)

        try:
            os.makedirs(config.LOG_DIR, exist_ok=True)
            file_handler = logging.FileHandler(config.LOG_FILE, mode='a', encoding='utf-8')
            file_handler.setLevel(config.LOG_LEVEL)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.error(f"Log file {config.LOG_FILE} unavailable, logging to console only: {e}")

    _logger = logger
    logger.info(f"Logger initialized at level {logging.getLevelName(config.LOG_LEVEL)}.")
    return logger


def get_logger() -> logging.Logger:
    """Returns the singleton logger instance, setting it up if necessary."""
    if _logger is None:
        return setup_logger()
    return _logger
