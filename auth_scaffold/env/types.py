"""Semantic types for environment variable values.

Values coming from the environment are always strings; each variant here
decides whether a raw string is acceptable for the role it plays:

- ``Text``: any non-empty string (``"value"``, ``"123"``; not ``""``)
- ``UnsignedShort``: ASCII digits in [0, 65535] (``"0"``, ``"65535"``; not
  ``"65536"``, ``"-1"``, ``"12.3"``, ``"abc"``)
- ``Enumerated``: exact, case-sensitive member of an allowed set
- ``FilePath``: path to an existing, regular, readable file
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from ..errors import InvalidValueError

U16_MAX = 65535

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class VariableType:
    """Base class for the closed set of variable types."""

    def parse(self, value: str) -> Any:
        """Verify ``value`` and return it converted to its typed form."""
        raise NotImplementedError

    def verify(self, value: str) -> None:
        """Raise ``InvalidValueError`` if ``value`` is not valid for this type."""
        self.parse(value)

    def invalid(
        self, value: str, cause: Optional[BaseException] = None
    ) -> InvalidValueError:
        return InvalidValueError(str(self), value, cause)

    def __str__(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Text(VariableType):
    def parse(self, value: str) -> str:
        if not value:
            raise self.invalid(value)
        return value


@dataclass(frozen=True)
class UnsignedShort(VariableType):
    def parse(self, value: str) -> int:
        try:
            return parse_u16(value)
        except ValueError as e:
            raise self.invalid(value, e) from e


@dataclass(frozen=True)
class Enumerated(VariableType):
    allowed: tuple[str, ...] = ()

    def __init__(self, allowed: Iterable[str]):
        object.__setattr__(self, "allowed", tuple(allowed))

    def parse(self, value: str) -> str:
        if value not in self.allowed:
            raise self.invalid(value)
        return value

    def __str__(self) -> str:
        return f"Enumerated[{', '.join(self.allowed)}]"


@dataclass(frozen=True)
class FilePath(VariableType):
    """Relative paths resolve against the current working directory."""

    def parse(self, value: str) -> Path:
        if not value:
            raise self.invalid(value)

        path = Path(value)
        try:
            # exists() and is_file() still raise for e.g. ENAMETOOLONG
            if not path.exists() or not path.is_file():
                raise self.invalid(value)
            with open(path, "rb"):
                pass
        except OSError as e:
            raise self.invalid(value, e) from e

        return path


def parse_u16(value: str) -> int:
    """Parse a base-10 unsigned 16-bit integer with no sign or padding."""
    if not value:
        raise ValueError("cannot parse integer from empty string")
    if not _DIGITS.fullmatch(value):
        raise ValueError(f"invalid digit found in string: {value!r}")

    number = int(value)
    if number > U16_MAX:
        raise ValueError(f"number too large to fit in target type: {value}")
    return number
