"""
=============================================================================
Configuration for the Result Ledger Extractor
=============================================================================

Defaults for the CLIs, the batch processor and the upload server. Every
value can be overridden through an environment variable:

    LEDGER_MAX_UPLOAD_MB        upload size limit in MB (default 10)
    LEDGER_DB_PATH              SQLite database file (default ledger_records.db)
    LEDGER_LOG_DIR              directory for log files (default logs)
    LEDGER_LOG_LEVEL            console log level (default INFO)
    LEDGER_Y_TOLERANCE          row grouping tolerance in points (default 5)
    LEDGER_DEFAULT_RESULT_DATE  result date used when a ledger has none

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

import logging
import os


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


class Config:
    """Settings object; Flask loads it with app.config.from_object()"""

    MAX_UPLOAD_MB = _env_float('LEDGER_MAX_UPLOAD_MB', 10)
    MAX_CONTENT_LENGTH = int(MAX_UPLOAD_MB * 1024 * 1024)

    DATABASE_PATH = os.environ.get('LEDGER_DB_PATH', 'ledger_records.db')
    LOG_DIR = os.environ.get('LEDGER_LOG_DIR', 'logs')
    LOG_LEVEL = os.environ.get('LEDGER_LOG_LEVEL', 'INFO').upper()

    Y_TOLERANCE = _env_float('LEDGER_Y_TOLERANCE', 5.0)
    DEFAULT_RESULT_DATE = os.environ.get('LEDGER_DEFAULT_RESULT_DATE') or None


LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# Handlers installed by setup_logging, per logger name
_installed_handlers = {}


def setup_logging(log_file: str = None, level: str = Config.LOG_LEVEL,
                  logger_name: str = None) -> logging.Logger:
    """
    Configure logging to file and console.

    Calling it again replaces the handlers of the previous call; handlers
    attached by anything else are left alone.

    Args:
        log_file: Optional log file; it gets DEBUG and above
        level: Console level name ("INFO", "DEBUG", ...)
        logger_name: Logger to configure (root logger if None)

    Returns:
        The configured logger
    """
    formatter = logging.Formatter(LOG_FORMAT)
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers.pop(logger_name, []):
        logger.removeHandler(handler)
        handler.close()
    installed = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    installed.append(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        installed.append(file_handler)

    _installed_handlers[logger_name] = installed
    return logger
