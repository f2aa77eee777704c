"""Core domain types and logic."""

from .config import Config, ConfigError, load_config, load_config_or_default
from .environment import ActionEnvironment, load_event_payload, require_token, write_outputs
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    # environment
    "ActionEnvironment",
    "load_event_payload",
    "require_token",
    "write_outputs",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
