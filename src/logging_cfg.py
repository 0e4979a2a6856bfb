#!/usr/bin/env python3
"""
Logging configuration module for the catlink driver.
Provides centralized logging functionality with JSON formatting,
rotating files, and optional syslog integration.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message',
])


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'process': record.process,
            'thread': record.threadName,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Key-value context passed by the caller
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with color support."""

    COLORS = {
        'DEBUG': '\033[1;36m',      # Cyan
        'INFO': '\033[1;32m',       # Green
        'WARNING': '\033[1;33m',    # Yellow
        'ERROR': '\033[1;31m',      # Red
        'CRITICAL': '\033[1;37;41m' # White on red
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname, '')
        reset = self.RESET if color else ''

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        context = ' '.join(
            f"{key}={value}" for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        )
        formatted_msg = f"{color}[{timestamp}] {record.levelname}: {record.getMessage()}"
        if context:
            formatted_msg += f" ({context})"
        formatted_msg += reset

        if record.exc_info:
            formatted_msg += '\n' + self.formatException(record.exc_info)

        return formatted_msg


class CatLogger:
    """Leveled logger accepting key-value context for the catlink driver."""

    def __init__(self, name: str = 'catlink'):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self._configured = False
        self._syslog_handler = None

    def configure(self, verbose: bool = False, log_file: Optional[str] = None,
                  enable_syslog: bool = False):
        """Configure the logging system.

        Args:
            verbose: Enable verbose (DEBUG) logging to console
            log_file: Optional custom log file path
            enable_syslog: Enable syslog handler for systemd integration
        """
        if self._configured:
            return

        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredConsoleFormatter())
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        self.logger.addHandler(console_handler)

        if log_file:
            file_path = Path(log_file)
        else:
            log_dir = Path.home() / '.cache' / 'catlink' / 'logs'
            log_dir.mkdir(parents=True, exist_ok=True)
            file_path = log_dir / 'catlink.log'

        # Rotating file handler (10MB max, keep 5 backups)
        file_handler = logging.handlers.RotatingFileHandler(
            file_path, maxBytes=10*1024*1024, backupCount=5
        )
        file_handler.setFormatter(JSONFormatter())
        file_handler.setLevel(logging.DEBUG)
        self.logger.addHandler(file_handler)

        if enable_syslog:
            try:
                syslog_handler = logging.handlers.SysLogHandler(address='/dev/log')
                syslog_handler.setFormatter(logging.Formatter(
                    'catlink[%(process)d]: %(levelname)s - %(message)s'
                ))
                syslog_handler.setLevel(logging.INFO)
                self.logger.addHandler(syslog_handler)
                self._syslog_handler = syslog_handler
            except OSError as e:
                self.logger.warning(f"Failed to initialize syslog handler: {e}")

        self._configured = True
        self.logger.info("Logging system initialized", extra={
            'verbose': verbose,
            'log_file': str(file_path),
            'syslog_enabled': enable_syslog
        })

    def debug(self, msg: str, **kwargs):
        self.logger.debug(msg, extra=kwargs)

    def info(self, msg: str, **kwargs):
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs):
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs):
        self.logger.error(msg, extra=kwargs)

    def critical(self, msg: str, **kwargs):
        self.logger.critical(msg, extra=kwargs)

    def exception(self, msg: str, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(msg, extra=kwargs)


# Global logger instance
_catlink_logger = CatLogger()


def configure_logging(verbose: bool = False, log_file: Optional[str] = None,
                      enable_syslog: bool = False):
    """Configure global logging settings.

    Args:
        verbose: Enable verbose (DEBUG) logging to console
        log_file: Optional custom log file path
        enable_syslog: Enable syslog handler for systemd integration
    """
    _catlink_logger.configure(verbose, log_file, enable_syslog)


def get_logger() -> CatLogger:
    """Return the process-wide logger handed to the CAT service."""
    return _catlink_logger
