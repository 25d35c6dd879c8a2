"""Core types: results, errors, configuration."""

from .config import (
    DEFAULT_CHECK_INTERVAL_MS,
    ConfigError,
    FileConfig,
    NotifierConfig,
    load_config,
)
from .errors import ErrorCode, NotifierError
from .result import Err, Ok, Result

__all__ = [
    # config
    "DEFAULT_CHECK_INTERVAL_MS",
    "ConfigError",
    "FileConfig",
    "NotifierConfig",
    "load_config",
    # errors
    "ErrorCode",
    "NotifierError",
    # result
    "Err",
    "Ok",
    "Result",
]
