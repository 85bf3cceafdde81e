from enum import Enum, StrEnum

from pydantic import BaseModel, ConfigDict

"""Data model of the app.yaml configuration."""


class LoggerLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LoggerFormatEnum(str, Enum):
    PLAIN = "plain"
    JSON = "json"


class LoggerConfig(BaseModel):
    root_level: LoggerLevelEnum = LoggerLevelEnum.WARN
    app_level: LoggerLevelEnum = LoggerLevelEnum.INFO
    format: LoggerFormatEnum = LoggerFormatEnum.PLAIN


class InfoKeyPolicy(StrEnum):
    """What to do with unrecognised alternateBasesInfo keys."""
    REJECT = "reject"
    WARN = "warn"


class ValidationPolicy(BaseModel):
    """Strictness switches of the consistency validator."""
    model_config = ConfigDict(extra='forbid', frozen=True)
    info_key_policy: InfoKeyPolicy = InfoKeyPolicy.WARN
    beacon_timestamp_ordering: bool = True


class AppConfig(BaseModel):
    model_config = ConfigDict(extra='forbid')
    logger: LoggerConfig = LoggerConfig()
    validation: ValidationPolicy = ValidationPolicy()
