"""Reconciliation of the loaded environment against the variable schema.

Order of checks, each one fatal unless noted:

1. load the environment file into the store
2. unknown variables under the prefix (warning unless strict)
3. missing required variables, reported all at once
4. type verification, first invalid value wins
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..errors import MASK, MissingVariableError, UnknownVariableError
from .schema import SchemaRegistry
from .store import EnvironmentStore, ProcessEnvironment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedEnvironment:
    """Outcome of a successful reconciliation."""

    prefix: str
    values: Mapping[str, Any] = field(default_factory=dict)
    secrets: frozenset[str] = frozenset()
    unknown: tuple[str, ...] = ()

    def __getitem__(self, suffix_name: str) -> Any:
        return self.values[suffix_name]

    def get(self, suffix_name: str, default: Any = None) -> Any:
        return self.values.get(suffix_name, default)

    def masked(self) -> Dict[str, str]:
        """String form of every value with secrets replaced by a mask."""
        return {
            name: MASK if name in self.secrets else str(value)
            for name, value in self.values.items()
        }


class Reconciler:
    """Loads an environment file and validates the result against a schema."""

    def __init__(
        self,
        store: Optional[EnvironmentStore] = None,
        registry: Optional[SchemaRegistry] = None,
        *,
        strict: bool = False,
        override: bool = False,
    ):
        if registry is not None and store is not None and registry.store is not store:
            raise ValueError("Registry must be bound to the reconciler's store")

        if registry is not None:
            store = registry.store
        self.store = store if store is not None else ProcessEnvironment()
        self.registry = registry if registry is not None else SchemaRegistry(store=self.store)
        self.strict = strict
        self.override = override

    def load_and_validate(
        self, file_path: Union[str, Path], prefix: str
    ) -> ValidatedEnvironment:
        """Load ``file_path`` into the store and validate every required variable.

        Raises:
            EnvironmentFileError: The file could not be loaded
            UnknownVariableError: Undeclared prefixed variables, strict mode only
            MissingVariableError: Required variables are absent
            InvalidValueError: A value fails its type's rule
        """
        self.store.set_from_file(file_path, override=self.override)

        snapshot = self.store.snapshot(prefix)
        required = self.registry.names(prefix)

        unknown = self.check_unknown(snapshot, required, prefix)
        self.check_missing(snapshot, required)

        values: Dict[str, Any] = {}
        for spec in self.registry.all():
            values[spec.suffix_name] = self.registry.parse(spec, prefix)

        logger.info(f"Validated {len(values)} environment variables with prefix '{prefix}'")
        return ValidatedEnvironment(
            prefix=prefix,
            values=values,
            secrets=frozenset(s.suffix_name for s in self.registry.all() if s.secret),
            unknown=unknown,
        )

    def check_unknown(
        self, snapshot: Mapping[str, str], required: list[str], prefix: str
    ) -> tuple[str, ...]:
        if not prefix:
            logger.debug("Empty prefix, skipping unknown variable check")
            return ()

        required_set = set(required)
        unknown = tuple(sorted(name for name in snapshot if name not in required_set))
        if not unknown:
            return ()

        if self.strict:
            raise UnknownVariableError(unknown)

        logger.warning(
            f"Environment variables with prefix '{prefix}' not declared in the schema: "
            f"{', '.join(unknown)}"
        )
        return unknown

    def check_missing(self, snapshot: Mapping[str, str], required: list[str]) -> None:
        missing = [name for name in required if name not in snapshot]
        if missing:
            raise MissingVariableError(missing)


def load_and_validate(
    file_path: Union[str, Path],
    prefix: str,
    *,
    strict: bool = False,
    override: bool = False,
    store: Optional[EnvironmentStore] = None,
) -> ValidatedEnvironment:
    """Reconcile the default schema against ``file_path`` in one call."""
    reconciler = Reconciler(store, strict=strict, override=override)
    return reconciler.load_and_validate(file_path, prefix)
