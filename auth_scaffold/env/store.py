"""Environment variable stores.

The process environment is global mutable state. Access goes through an
``EnvironmentStore`` so the reconciler and schema registry can run against an
isolated in-memory table in tests.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from .loader import read_env_file

logger = logging.getLogger(__name__)


class EnvironmentStore(ABC):
    """Key/value table of environment variables."""

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """Return the value of ``name`` or ``None`` if it is not set."""

    @abstractmethod
    def items(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all variables currently set."""

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """Set a single variable."""

    def snapshot(self, prefix: str = "") -> Dict[str, str]:
        """Fresh copy of all variables whose name starts with ``prefix``."""
        return {k: v for k, v in self.items() if k.startswith(prefix)}

    def set_from_file(self, path: Union[str, Path], override: bool = False) -> int:
        """Merge the variables of a dotenv file into the store.

        Variables already present keep their value unless ``override`` is set.
        ``${VAR}`` references in the file resolve against this store.

        Returns:
            Number of variables written
        """
        values = read_env_file(path, environ=dict(self.items()), override=override)

        written = 0
        for name, value in values.items():
            if not override and self.get(name) is not None:
                logger.debug(f"Keeping existing value for {name}")
                continue
            self.set(name, value)
            written += 1

        logger.info(f"Loaded {written} variables from {path}")
        return written


class ProcessEnvironment(EnvironmentStore):
    """Store backed by ``os.environ``."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(os.environ.items()))

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value


class InMemoryEnvironment(EnvironmentStore):
    """Store backed by a private dict."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._vars: Dict[str, str] = dict(initial or {})

    def get(self, name: str) -> Optional[str]:
        return self._vars.get(name)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._vars.items()))

    def set(self, name: str, value: str) -> None:
        self._vars[name] = value

    def __repr__(self) -> str:
        return f"InMemoryEnvironment({len(self._vars)} variables)"
