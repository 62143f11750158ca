from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeAlias, TypeVar

from .types import FieldMap

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class VariantMap:
    """One sparse set of field overrides.

    ```python
    VariantMap({"name": "Strawberry"})
    ```
    """

    data: FieldMap = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))


@dataclass(frozen=True, slots=True)
class VariantList(Generic[T]):
    """Ordered instances, each one overriding its own freshly created instance.

    ```python
    items = item_factory.create(VariantList([Item("Strawberry"), Item("Apple")]))
    ```
    """

    items: Iterable[T] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class VariantMapList:
    """Ordered field overrides, each one applied to its own freshly created instance.

    Members may be `VariantMap` or plain mappings.

    ```python
    items = item_factory.create(VariantMapList([{"name": "Strawberry"}, VariantMap({"name": "Apple"})]))
    ```
    """

    items: Iterable[VariantMap | Mapping[str, Any]] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(as_variant_map(item) for item in self.items))

    def __iter__(self) -> Iterator[VariantMap]:
        return iter(self.items)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self.items)  # type: ignore[arg-type]


Variants: TypeAlias = VariantList[T] | VariantMapList
"""
Sequence of overrides, one created instance per member.
"""


def as_variant_map(value: VariantMap | Mapping[str, Any]) -> VariantMap:
    match value:
        case VariantMap():
            return value
        case Mapping():
            return VariantMap(value)
        case _:
            raise TypeError(f"Expected a mapping of overrides, got {type(value).__qualname__}")
