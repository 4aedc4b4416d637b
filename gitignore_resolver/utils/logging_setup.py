"""
Logging setup for gitignore-resolver.

The library itself only creates loggers; handlers are installed by
configure_logging(), which the gitignore-check CLI calls once at startup.

- Diagnostics go to stderr, leaving stdout for command output
- GITIGNORE_RESOLVER_LOG_JSON switches to one JSON object per line
- An optional log file is rotated by size
- A TRACE level sits below DEBUG for per-query cache traffic
"""

import sys
import logging
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Any

# TRACE sits below DEBUG
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

DEFAULT_LEVEL = 'WARNING'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
TRUTHY = ('true', '1', 'yes')


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


logging.Logger.trace = trace


def add_trace_to_logger():
    """Install Logger.trace if something removed it"""
    if not hasattr(logging.Logger, 'trace'):
        logging.Logger.trace = trace


class JsonFormatter(logging.Formatter):
    """One JSON object per record; fields passed via log_with_context are merged in"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage(),
            'pid': os.getpid(),
        }
        entry.update(getattr(record, 'extra', {}))
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def resolve_level(log_level: Optional[str] = None) -> int:
    """
    Turn a level name into a numeric level.

    Precedence: explicit argument, GITIGNORE_RESOLVER_LOG_LEVEL, LOG_LEVEL,
    then WARNING. Unknown names fall back to WARNING.
    """
    name = (
        log_level
        or os.environ.get('GITIGNORE_RESOLVER_LOG_LEVEL')
        or os.environ.get('LOG_LEVEL', DEFAULT_LEVEL)
    ).upper()
    if name == 'TRACE':
        return TRACE_LEVEL
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def _file_handler(log_file: str, rotate: bool, max_bytes: int, backup_count: int) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    if rotate:
        return RotatingFileHandler(str(path), maxBytes=max_bytes, backupCount=backup_count)
    return logging.FileHandler(str(path))


def configure_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    json_output: Optional[bool] = None,
    enable_rotation: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Replace the root logger's handlers with a stderr handler and an optional file.

    Args:
        log_level: Level name; see resolve_level() for the fallbacks
        log_file: Extra file to log to, parent directories are created
        json_output: Emit JSON lines (defaults to GITIGNORE_RESOLVER_LOG_JSON)
        enable_rotation: Rotate the log file by size
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep
    """
    add_trace_to_logger()
    level = resolve_level(log_level)
    if json_output is None:
        json_output = os.environ.get('GITIGNORE_RESOLVER_LOG_JSON', '').lower() in TRUTHY

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(JsonFormatter() if json_output else logging.Formatter(CONSOLE_FORMAT))
    handlers = [console]

    if log_file:
        file_handler = _file_handler(log_file, enable_rotation, max_bytes, backup_count)
        file_handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(level)

    logging.getLogger('gitignore_resolver').debug(
        f"Logging configured - Level: {logging.getLevelName(level)}, JSON: {json_output}"
    )


def get_logger(name: str) -> logging.Logger:
    """Return logging.getLogger(name) with the trace method available"""
    add_trace_to_logger()
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with structured fields.

    The fields appear as top-level keys in JSON output and are invisible in the
    plain console format.
    """
    logger.log(level, message, extra={'extra': context} if context else {})
