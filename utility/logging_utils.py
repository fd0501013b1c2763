# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: logging_utils.py
# -----------------------------------------------------------------------------
"""
Named loggers for the invoice assistant.

Every logger lives under "invoice_assistant" and gets a coloured console
handler plus, unless INVOICE_LOG_TO_FILE is off, a rotating file handler.

    INVOICE_LOG_LEVEL         INFO
    INVOICE_LOG_TO_FILE       1
    INVOICE_LOG_FILE          ./logs/invoice_assistant.log
    INVOICE_LOG_MAX_BYTES     5MB
    INVOICE_LOG_BACKUP_COUNT  5
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog

BASE_LOGGER_NAME = "invoice_assistant"

_CONSOLE_FORMAT = (
    "%(log_color)s%(asctime)s %(levelname)-8s%(reset)s "
    "%(name)s: %(message_log_color)s%(message)s"
)
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=_CONSOLE_FORMAT,
            datefmt=_DATE_FORMAT,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
            secondary_log_colors={
                "message": {
                    "WARNING": "yellow",
                    "ERROR": "light_red",
                    "CRITICAL": "red",
                }
            },
        )
    )
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=int(os.getenv("INVOICE_LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        backupCount=int(os.getenv("INVOICE_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _configure(logger: logging.Logger) -> logging.Logger:
    # handlers are attached once per logger name
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    if _truthy(os.getenv("INVOICE_LOG_TO_FILE", "1")):
        logger.addHandler(_file_handler(os.getenv("INVOICE_LOG_FILE", "./logs/invoice_assistant.log")))

    level_name = os.getenv("INVOICE_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger named 'invoice_assistant.<name>' (or the base logger)."""
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _configure(logging.getLogger(full_name))


def get_class_logger(cls: type) -> logging.Logger:
    """
    Logger named after module and class, e.g.
    invoice_assistant.services.InvoiceChatService.InvoiceChatService
    """
    module = getattr(cls, "__module__", "unknown_module")
    return _configure(logging.getLogger(f"{BASE_LOGGER_NAME}.{module}.{cls.__name__}"))
