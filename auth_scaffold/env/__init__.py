"""Environment loading and validation."""

from .catalog import REQUIRED_VARIABLES, SSL_MODES
from .loader import read_env_file
from .reconciler import Reconciler, ValidatedEnvironment, load_and_validate
from .schema import SchemaRegistry, VariableSpec
from .store import EnvironmentStore, InMemoryEnvironment, ProcessEnvironment
from .types import Enumerated, FilePath, Text, UnsignedShort, VariableType

__all__ = [
    "REQUIRED_VARIABLES",
    "SSL_MODES",
    "read_env_file",
    "Reconciler",
    "ValidatedEnvironment",
    "load_and_validate",
    "SchemaRegistry",
    "VariableSpec",
    "EnvironmentStore",
    "InMemoryEnvironment",
    "ProcessEnvironment",
    "Enumerated",
    "FilePath",
    "Text",
    "UnsignedShort",
    "VariableType",
]
