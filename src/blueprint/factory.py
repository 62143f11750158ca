from __future__ import annotations

import copy
import enum
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from functools import partial
from typing import Annotated, Any, Callable, Generic, Self, TypeVar, overload

from typing_extensions import Doc  # type: ignore[attr-defined]

from .errors import MissingArgument
from .merge import merge_instance, merge_mapping
from .types import FieldMap, Produce, Setter
from .variants import VariantList, VariantMap, VariantMapList

T = TypeVar("T")
R = TypeVar("R")
V = TypeVar("V")

logger = logging.getLogger(__name__)


class AbsentSentinel(enum.Enum):
    """Sentinel used to mark absent of a variation, when None is an error."""

    DEFAULT = enum.auto()


def Absent() -> AbsentSentinel:
    return AbsentSentinel.DEFAULT


@dataclass(frozen=True, slots=True)
class Binding(Generic[T, R]):
    """Deferred relation, evaluated once per created instance."""

    producer: Callable[[], R]
    setter: Setter[T, R]

    def __call__(self, instance: T) -> None:
        value = self.producer()
        match self.setter:
            case str(attr):
                setattr(instance, attr, value)
            case _:
                self.setter(instance, value)


class BlueprintFactory(ABC, Generic[T]):
    """Produces instances of a model from a blueprint.

    Subclasses implement `blueprint`, which must return a fresh instance on
    every call:

    ```python
    class ItemFactory(BlueprintFactory[Item]):
        def blueprint(self) -> Item:
            return Item(name="Cookie", price=1.99)

    item_factory = ItemFactory()
    item = item_factory.create({"price": 2.5})
    ```

    A factory never changes once built. `with_` returns a new factory, so a base
    factory can be shared between tests.
    """

    _bindings: tuple[Binding[T, Any], ...] = ()

    @abstractmethod
    def blueprint(self) -> T:
        """Return a fresh copy of the blueprint object."""
        raise NotImplementedError

    @property
    def bindings(self) -> tuple[Binding[T, Any], ...]:
        """Relations applied to every created instance, in order."""
        return self._bindings

    @overload
    def create(self, /) -> T:
        ...

    @overload
    def create(self, variation: int, /) -> list[T]:
        ...

    @overload
    def create(self, variation: VariantList[T] | VariantMapList, /) -> list[T]:
        ...

    @overload
    def create(self, variation: VariantMap | FieldMap | T, /) -> T:
        ...

    def create(self, variation: Any = Absent(), /) -> T | list[T]:
        """Create one or many instances.

        ```python
        item = factory.create()
        item = factory.create(Item(name="Cookie"))
        item = factory.create({"name": "Cookie"})
        item1, item2 = factory.create(2)
        item1, item2 = factory.create(VariantList([Item(name="Cookie"), Item(name="Muffin")]))
        item1, item2 = factory.create(VariantMapList([{"name": "Cookie"}, {"name": "Muffin"}]))
        ```
        """
        match variation:
            case AbsentSentinel.DEFAULT:
                return self._create()
            case None:
                raise MissingArgument("variation")
            case int(count) if not isinstance(count, bool):
                if count < 0:
                    raise ValueError(f"count must be a non-negative integer, got {count}")
                return [self._create() for _ in range(count)]
            case VariantList(items=items):
                return [self._create_from_instance(item) for item in items]
            case VariantMapList(items=items):
                return [self._create_from_mapping(item.data) for item in items]
            case VariantMap(data=data):
                return self._create_from_mapping(data)
            case Mapping():
                return self._create_from_mapping(variation)
            case list() | tuple():
                raise TypeError("Wrap sequences of overrides in VariantList or VariantMapList")
            case _:
                return self._create_from_instance(variation)

    @overload
    def with_(self, producer: Callable[[], R], setter: Setter[T, R], /) -> Self:
        ...

    @overload
    def with_(self, producer: Callable[[int], list[R]], count: int, setter: Setter[T, list[R]], /) -> Self:
        ...

    @overload
    def with_(self, producer: Callable[[V], R], variant: V, setter: Setter[T, R], /) -> Self:
        ...

    def with_(self, producer: Callable[..., Any], /, *args: Any) -> Self:
        """Return a new factory that also sets a related value on each instance.

        The related value is computed again for every created instance.
        `producer` is called without arguments, or with the count or variant
        given here. `setter` receives the instance and the value, or is the
        attribute name to set.

        ```python
        store_factory.with_(item_factory.create, "best_seller")
        store_factory.with_(item_factory.create, 3, Store.set_items)
        store_factory.with_(item_factory.create, VariantMapList([{"name": "Apple"}]), "items")
        ```
        """
        match args:
            case (setter,):
                binding: Binding[T, Any] = Binding(producer, setter)
            case (argument, setter):
                binding = Binding(partial(producer, argument), setter)
            case _:
                raise TypeError(f"with_() takes a producer, an optional argument and a setter, got {len(args) + 1}")

        clone = copy.copy(self)
        # bypass __setattr__ of frozen subclasses
        object.__setattr__(clone, "_bindings", (*self._bindings, binding))
        logger.debug("Bind %r on %s", binding.setter, type(self).__qualname__)
        return clone

    def _create(self) -> T:
        instance = self.blueprint()
        for binding in self._bindings:
            binding(instance)
        return instance

    def _create_from_instance(self, variation: T) -> T:
        instance = self._create()
        merge_instance(instance, variation)
        return instance

    def _create_from_mapping(self, variation: FieldMap) -> T:
        instance = self._create()
        merge_mapping(instance, variation)
        return instance


class FunctionFactory(BlueprintFactory[T]):
    """Factory whose blueprint is produced by a plain callable."""

    def __init__(self, produce: Produce[T]) -> None:
        self.produce = produce

    def blueprint(self) -> T:
        return self.produce()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.produce!r}, bindings={len(self._bindings)})"


def define_factory(
    produce: Annotated[
        Produce[T],
        Doc(
            """
            Zero argument callable returning a new instance each time it is called
            """
        ),
    ],
) -> BlueprintFactory[T]:
    """
    Returns:
        A factory producing instances with `produce`

    Example:

    ```python
    @define_factory
    def item_factory() -> Item:
        return Item(name=faker.word(), price=1.99)

    item = item_factory.create()
    ```
    """
    return FunctionFactory(produce)


def from_template(
    template: Annotated[
        T,
        Doc(
            """
            Baseline instance, deep copied on every creation
            """
        ),
    ],
) -> BlueprintFactory[T]:
    """
    Returns:
        A factory producing copies of `template`

    Example:

    ```python
    item_factory = from_template(Item(name="Blueprint", price=5.0))
    assert item_factory.create() == item_factory.create()
    assert item_factory.create() is not item_factory.create()
    ```
    """
    return FunctionFactory(partial(copy.deepcopy, template))
