"""Centralized logging configuration for productcover."""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = 'productcover'


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the structured fields passed via ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
        }

        operation = getattr(record, 'operation', None)
        if operation is not None:
            entry['operation'] = operation

        # catalog, candidate counts and run parameters
        entry.update(getattr(record, 'extra_fields', None) or {})

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """Format with colors for console output."""
        if not sys.stderr.isatty():
            return super().format(record)

        original = record.levelname
        if original in self.COLORS:
            record.levelname = f"{self.COLORS[original]}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    level: Union[str, int] = 'WARNING',
    log_dir: Optional[Path] = None,
    console: bool = True,
    json_format: bool = True,
    name: str = ROOT_LOGGER,
) -> logging.Logger:
    """
    Configure the package logger.

    Every module logger obtained with get_logger() is a child of this one,
    so a single call controls the whole pipeline's output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for a rotating log file (no file when None)
        console: Enable stderr output
        json_format: Use JSON-lines format for the log file
        name: Logger name

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if sys.stderr.isatty():
            console_formatter = ConsoleFormatter(
                '%(asctime)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        else:
            console_formatter = logging.Formatter(
                '%(asctime)s - %(levelname)s - [%(module)s] - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        date_str = datetime.now().strftime('%Y%m%d')
        suffix = 'jsonl' if json_format else 'log'
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / f'productcover_{date_str}.{suffix}',
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        if json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    '%(asctime)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s',
                    datefmt='%Y-%m-%d %H:%M:%S'
                )
            )
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the package logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + '.'):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def log_operation(logger: logging.Logger, operation: str, **context):
    """
    Log the start of an operation with context.

    Args:
        logger: Logger instance
        operation: Operation name
        **context: Additional context to log
    """
    logger.info(f"Starting operation: {operation}",
                extra={'operation': operation, 'extra_fields': context}, stacklevel=2)


def log_progress(logger: logging.Logger, verbose: bool, message: str, **context):
    """
    Log a progress message at INFO when verbose, DEBUG otherwise.

    Args:
        logger: Logger instance
        verbose: Whether the run asked for progress reporting
        message: Message to log
        **context: Additional structured fields
    """
    level = logging.INFO if verbose else logging.DEBUG
    logger.log(level, message, extra={'extra_fields': context}, stacklevel=2)
