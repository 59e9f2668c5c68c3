#!/usr/bin/env python3
"""
🔍 Centralized Logging System for SpotiHooks
Colored console output while developing, one-line JSON records when
``SPOTIHOOKS_JSON_LOGS=1``, and an opt-in rotating file under
``SPOTIHOOKS_LOG_DIR``.
"""

import json
import logging
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

LOG_FILE_NAME = "spotihooks.log"
MAX_LOG_SIZE = 5 * 1024 * 1024
BACKUP_COUNT = 3

ENABLE_JSON_LOGS = os.getenv('SPOTIHOOKS_JSON_LOGS', '0') == '1'

_env_level = os.getenv('SPOTIHOOKS_LOG_LEVEL')
LOG_LEVEL = getattr(logging, _env_level.upper(), logging.INFO) if _env_level else logging.INFO

_env_log_dir = os.getenv('SPOTIHOOKS_LOG_DIR')
LOG_DIR: Optional[Path] = Path(_env_log_dir) if _env_log_dir else None

CONSOLE_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'
FILE_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s'

# Attributes every LogRecord carries; anything else arrived through extra=
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'taskName'}


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        # The record is shared with other handlers; color a copy
        painted = logging.makeLogRecord(vars(record))
        painted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(painted)


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for key, value in vars(record).items():
        if key in _STANDARD_ATTRS:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = repr(value)
        fields[key] = value
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with extra= fields as top-level keys.

    Example output:
        {"level": "WARNING", "logger": "spotify.http", "message": "spotify.request.error",
         "method": "PUT", "timestamp": "2026-10-19T10:30:00.123456Z"}
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            **_extra_fields(record),
            'timestamp': created.isoformat(timespec='microseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.levelno >= logging.WARNING:
            entry['source'] = f"{record.filename}:{record.lineno}"
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=True, sort_keys=True)


def _build_handlers() -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(JSONFormatter() if ENABLE_JSON_LOGS else ColoredFormatter(CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [console]

    if LOG_DIR is not None:
        try:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
            rotating = logging.handlers.RotatingFileHandler(
                LOG_DIR / LOG_FILE_NAME,
                maxBytes=MAX_LOG_SIZE,
                backupCount=BACKUP_COUNT,
                encoding='utf-8',
            )
        except OSError as e:
            logging.getLogger(__name__).warning("File logging disabled: %s", e)
        else:
            rotating.setFormatter(JSONFormatter() if ENABLE_JSON_LOGS else logging.Formatter(FILE_FORMAT))
            handlers.append(rotating)

    for handler in handlers:
        handler.setLevel(LOG_LEVEL)
    return handlers


def setup_logger(name: str) -> logging.Logger:
    """
    Return a logger with console (and optional file) handlers attached.

    Calling it again for the same name returns the existing logger unchanged.

    Args:
        name: Logger name (usually module name)
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(LOG_LEVEL)
    for handler in _build_handlers():
        logger.addHandler(handler)
    return logger


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Apply configured level/format to loggers created afterwards.

    Environment variables still win when they are set.
    """
    global LOG_LEVEL, ENABLE_JSON_LOGS
    if level and not _env_level:
        LOG_LEVEL = getattr(logging, level.upper(), LOG_LEVEL)
    if json_logs is not None and 'SPOTIHOOKS_JSON_LOGS' not in os.environ:
        ENABLE_JSON_LOGS = bool(json_logs)


def log_structured(logger: logging.Logger, level: int, message: str, /, **context: Any) -> None:
    """Log a message with structured context fields.

    In JSON mode, context fields appear as separate JSON keys. In traditional
    mode, they're appended to the message as key=value pairs. The leading
    arguments are positional-only, so ``message=`` or ``level=`` can be passed
    as context.

    Example:
        >>> log_structured(logger, logging.INFO, "player.ready", device_id="abc")
    """
    if ENABLE_JSON_LOGS:
        # LogRecord refuses extra keys that shadow its own attributes
        extra = {(f"ctx_{k}" if k in _STANDARD_ATTRS else k): v for k, v in context.items()}
        logger.log(level, message, extra=extra)
    elif context:
        context_str = " ".join(f"{k}={v}" for k, v in context.items())
        logger.log(level, f"{message} | {context_str}")
    else:
        logger.log(level, message)
