"""
Logging Configuration
Sets up the 'scatterexplorer' logger and forwards Qt's own diagnostics into it.
"""
import logging
import os
import sys
from typing import Optional, Union

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

LOGGER_NAME = "scatterexplorer"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

ENV_LOG_LEVEL = "SCATTEREXPLORER_LOG_LEVEL"
ENV_LOG_FILE = "SCATTEREXPLORER_LOG_FILE"

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Translate a level name such as 'debug' into a logging constant."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def _qt_message_handler(mode, context, message: str) -> None:
    logging.getLogger(f"{LOGGER_NAME}.qt").log(_QT_LEVELS.get(mode, logging.WARNING), message)


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger: stdout always, plus a file when ``log_file`` is given.

    Calling it again replaces the handlers instead of stacking duplicates.

    Args:
        level: Logging level constant or its name ('DEBUG', 'info', ...).
        log_file: Optional path; the file is truncated on start.
    """
    if isinstance(level, str):
        level = level_from_name(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    qInstallMessageHandler(_qt_message_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger


def setup_logging_from_env() -> logging.Logger:
    """Level from SCATTEREXPLORER_LOG_LEVEL (default INFO), file from SCATTEREXPLORER_LOG_FILE."""
    return setup_logging(
        level=level_from_name(os.environ.get(ENV_LOG_LEVEL), logging.INFO),
        log_file=os.environ.get(ENV_LOG_FILE) or None,
    )
