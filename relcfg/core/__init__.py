"""Core types shared by all relcfg layers."""

from .config import Settings, SettingsError, load_settings
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Settings",
    "SettingsError",
    "load_settings",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
