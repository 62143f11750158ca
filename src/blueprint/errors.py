from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class BlueprintError(Exception):
    pass


@dataclass
class TypeMismatch(BlueprintError, TypeError):
    """Raised when a value cannot stand in for another one.

    Either the source of an instance merge is not exactly the target type, or a
    mapping value does not fit the declared type of its field.
    """

    expected: Any
    actual: type
    field: str | None = None

    def __str__(self) -> str:
        expected = getattr(self.expected, "__qualname__", repr(self.expected))
        if self.field is None:
            return f"Source and target must be of the same type: {expected} vs {self.actual.__qualname__}"
        return f"Cannot assign value of type {self.actual.__qualname__} to field {self.field!r} ({expected})"


@dataclass
class MissingArgument(BlueprintError, ValueError):
    argument: str

    def __str__(self) -> str:
        return f"{self.argument} is required"
