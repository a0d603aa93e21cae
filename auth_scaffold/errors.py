"""Error hierarchy for configuration loading and environment validation.

Every failure the startup gate can report derives from ``AppError`` and is
tagged with an ``ErrorKind`` so callers can branch on the category without
matching on exception classes.
"""

from enum import Enum, auto
from typing import Optional, Sequence

MASK = "***"


class ErrorKind(Enum):
    """Categories of startup failures."""

    CONFIG = auto()  # Application configuration missing or invalid
    ENV_FILE = auto()  # Dotenv file missing, unreadable or malformed
    MISSING_VARIABLE = auto()  # Required variables absent from the environment
    UNKNOWN_VARIABLE = auto()  # Undeclared variables under the prefix
    INVALID_VALUE = auto()  # Value fails its type's verification rule
    VARIABLE_UNSET = auto()  # Direct lookup of an absent variable


class AppError(Exception):
    """Base exception carrying a kind, a message and an optional cause."""

    kind: ErrorKind

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"[{self.kind.name}] {message}")
        self.message = message
        self.cause = cause


class ConfigError(AppError):
    """Raised when the application configuration cannot be loaded."""

    kind = ErrorKind.CONFIG


class EnvValidationError(AppError):
    """Base class for failures of the environment gate."""


class EnvironmentFileError(EnvValidationError):
    """Raised when the environment file cannot be loaded."""

    kind = ErrorKind.ENV_FILE

    def __init__(
        self, path: str, reason: str, cause: Optional[BaseException] = None
    ):
        message = f"Failed to load environment file at specified path: '{path}'"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, cause)
        self.path = path
        self.reason = reason


class MissingVariableError(EnvValidationError):
    """Raised with every required variable absent from the environment."""

    kind = ErrorKind.MISSING_VARIABLE

    def __init__(self, names: Sequence[str]):
        super().__init__(f"Missing environment variables: {', '.join(names)}")
        self.names = tuple(names)


class UnknownVariableError(EnvValidationError):
    """Raised in strict mode for prefixed variables the schema does not declare."""

    kind = ErrorKind.UNKNOWN_VARIABLE

    def __init__(self, names: Sequence[str]):
        super().__init__(f"Unknown environment variables: {', '.join(names)}")
        self.names = tuple(names)


class InvalidValueError(EnvValidationError):
    """Raised when a value does not satisfy its variable type."""

    kind = ErrorKind.INVALID_VALUE

    def __init__(
        self,
        type_label: str,
        value: str,
        cause: Optional[BaseException] = None,
        variable: Optional[str] = None,
        secret: bool = False,
    ):
        shown = MASK if secret else value
        if variable:
            message = f"Invalid value for {variable} of type {type_label}: \"{shown}\""
        else:
            message = f"Invalid value for type {type_label}: \"{shown}\""
        # Parse errors echo the raw value, so they are dropped for secrets
        if cause is not None and not secret:
            message = f"{message} ({cause})"
        super().__init__(message, cause)
        self.type_label = type_label
        self.value = value
        self.variable = variable
        self.secret = secret

    def for_variable(self, variable: str, secret: bool = False) -> "InvalidValueError":
        """Return a copy of this error attributed to a named variable."""
        return InvalidValueError(
            self.type_label, self.value, self.cause, variable=variable, secret=secret
        )


class EnvironmentVariableUnsetError(EnvValidationError):
    """Raised when a declared variable is read but absent from the store."""

    kind = ErrorKind.VARIABLE_UNSET

    def __init__(self, name: str):
        super().__init__(f"Environment variable is not set: {name}")
        self.name = name
