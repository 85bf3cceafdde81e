import logging
from logging import Formatter, StreamHandler, getLogger
from sys import stdout
from typing import TextIO

from pythonjsonlogger.json import JsonFormatter

from .model import LoggerConfig, LoggerFormatEnum

APP_LOGGER_NAME = __name__.split(".")[0]

PLAIN_FORMAT = (
    "%(asctime)s [%(threadName)s] %(levelname)-5s [%(name)s:%(lineno)d] "
    "%(message)s"
)
JSON_FIELDS = "%(asctime)%(threadName)%(levelname)%(name)%(lineno)%(message)"


def create_formatter(log_format: LoggerFormatEnum) -> Formatter:
    if log_format == LoggerFormatEnum.JSON:
        return JsonFormatter(JSON_FIELDS)
    return Formatter(PLAIN_FORMAT)


def apply_logger_config(config: LoggerConfig, stream: TextIO = stdout) -> None:
    """Sends log records of the root and the allele_beacon loggers to a single
    console handler, using the levels and the format from the configuration.

    Validation messages are logged under `allele_beacon.validation.*`, so
    `app_level: DEBUG` also reports every rejected message.
    """
    handler = StreamHandler(stream)
    handler.setFormatter(create_formatter(config.format))
    handler.set_name("console")

    logging.root.setLevel(config.root_level.value)
    logging.root.handlers.clear()
    logging.root.addHandler(handler)

    # The app logger has its own level, and does not propagate to avoid
    # duplicate lines through the root handler:
    app_logger = getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(config.app_level.value)
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.propagate = False
