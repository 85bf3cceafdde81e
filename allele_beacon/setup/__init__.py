from logging import getLogger
from os.path import abspath
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError
from yaml import safe_load, YAMLError

from .logger import apply_logger_config
from .model import (
    AppConfig,
    InfoKeyPolicy,
    LoggerConfig,
    LoggerFormatEnum,
    LoggerLevelEnum,
    ValidationPolicy,
)
from ..exceptions import ConfigurationError

"""Provides the config-loading mechanism for YAML files (e.g. app.yaml)."""

_log = getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def load_config_yaml(filepath: str, t: Type[M]) -> M:
    """Parses the YAML file into the given pydantic model.

    Raises ConfigurationError when the file is missing, is not valid YAML, or
    does not match the model.
    """
    full_path = abspath(filepath)
    try:
        with open(filepath) as stream:
            config = safe_load(stream)
    except FileNotFoundError as e:
        _log.error("The configuration file is missing: %s", full_path)
        raise ConfigurationError(
            f"Configuration file is missing: {full_path}") from e
    except YAMLError as e:
        _log.error("Failed to parse configuration (YAML): %s", e)
        raise ConfigurationError(
            f"Failed to parse {full_path} (YAML): {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Content must be a dict: {full_path}")

    try:
        return t(**config)
    except ValidationError as e:
        _log.error("Failed to process %s file: %s", full_path, e)
        raise ConfigurationError(
            f"Invalid configuration in {full_path}: {e}") from e


def load_app_config(
        filepath: str = "config/app.yaml", apply_logging: bool = True,
) -> AppConfig:
    """Loads app.yaml and (by default) applies its logger configuration."""
    app_config = load_config_yaml(filepath, AppConfig)
    if apply_logging:
        apply_logger_config(app_config.logger)
        _log.info("Logging is now configured.")
        _log.debug("DEBUG-level logging is enabled.")
    return app_config


__all__ = [
    "AppConfig",
    "InfoKeyPolicy",
    "LoggerConfig",
    "LoggerFormatEnum",
    "LoggerLevelEnum",
    "ValidationPolicy",
    "apply_logger_config",
    "load_app_config",
    "load_config_yaml",
]
