"""Startup environment gate for the auth service."""

from .app import run_app
from .errors import (
    AppError,
    ConfigError,
    EnvironmentFileError,
    EnvironmentVariableUnsetError,
    EnvValidationError,
    ErrorKind,
    InvalidValueError,
    MissingVariableError,
    UnknownVariableError,
)

__version__ = "0.1.0"

__all__ = [
    "run_app",
    "AppError",
    "ConfigError",
    "EnvironmentFileError",
    "EnvironmentVariableUnsetError",
    "EnvValidationError",
    "ErrorKind",
    "InvalidValueError",
    "MissingVariableError",
    "UnknownVariableError",
]
