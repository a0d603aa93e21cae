"""Schema registry for the environment variables the service requires."""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..errors import EnvironmentVariableUnsetError, InvalidValueError
from .store import EnvironmentStore, ProcessEnvironment
from .types import VariableType


@dataclass(frozen=True)
class VariableSpec:
    """A required variable: unprefixed name, type and display metadata."""

    suffix_name: str
    type: VariableType
    description: str = ""
    secret: bool = False


class SchemaRegistry:
    """Fixed, ordered catalog of required variables bound to an environment store.

    Specs are kept in declaration order so that ``verify_all`` and the
    missing-variable report are reproducible between runs.
    """

    def __init__(
        self,
        specs: Optional[Iterable[VariableSpec]] = None,
        store: Optional[EnvironmentStore] = None,
    ):
        if specs is None:
            from .catalog import REQUIRED_VARIABLES

            specs = REQUIRED_VARIABLES

        self._specs: tuple[VariableSpec, ...] = tuple(specs)
        self._by_suffix: dict[str, VariableSpec] = {}
        for spec in self._specs:
            if spec.suffix_name in self._by_suffix:
                raise ValueError(f"Duplicate variable in schema: {spec.suffix_name}")
            self._by_suffix[spec.suffix_name] = spec

        self.store = store if store is not None else ProcessEnvironment()

    def all(self) -> tuple[VariableSpec, ...]:
        return self._specs

    def get(self, suffix_name: str) -> VariableSpec:
        return self._by_suffix[suffix_name]

    def __contains__(self, suffix_name: object) -> bool:
        return suffix_name in self._by_suffix

    def __len__(self) -> int:
        return len(self._specs)

    @staticmethod
    def name(spec: VariableSpec, prefix: str) -> str:
        """Prefixed variable name; the prefix carries its own separator."""
        return f"{prefix}{spec.suffix_name}"

    def names(self, prefix: str) -> list[str]:
        return [self.name(spec, prefix) for spec in self._specs]

    def value(self, spec: VariableSpec, prefix: str) -> str:
        name = self.name(spec, prefix)
        value = self.store.get(name)
        if value is None:
            raise EnvironmentVariableUnsetError(name)
        return value

    def parse(self, spec: VariableSpec, prefix: str) -> Any:
        """Fetch and verify a variable, returning its typed value."""
        value = self.value(spec, prefix)
        try:
            return spec.type.parse(value)
        except InvalidValueError as e:
            raise e.for_variable(self.name(spec, prefix), secret=spec.secret) from e.cause

    def verify(self, spec: VariableSpec, prefix: str) -> None:
        self.parse(spec, prefix)

    def verify_all(self, prefix: str) -> None:
        for spec in self._specs:
            self.verify(spec, prefix)
