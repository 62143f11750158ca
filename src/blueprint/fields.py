from __future__ import annotations

import dataclasses
import dis
import inspect
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType, NoneType, UnionType
from typing import (
    Annotated,
    Any,
    ClassVar,
    Literal,
    TypeAlias,
    TypeGuard,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

FIELD_CACHE_SIZE = 512
"""Number of classes whose field tables are kept in memory"""


@dataclass(frozen=True, slots=True)
class Field:
    """Accessor for one attribute of a model class."""

    name: str
    hint: Any
    """Declared type, `Any` when it is missing or cannot be resolved"""
    owner: type
    """Class that declares the attribute"""


FieldTable: TypeAlias = Mapping[str, Field]
"""
Fields of a model class, keyed by name, in declaration order.

For example for this object:

```python
@dataclass
class Item:
    name: str
    price: float | None = None
```

The table looks like:

```python
{
    "name": Field("name", str, Item),
    "price": Field("price", float | None, Item),
}
```
"""


@lru_cache(maxsize=FIELD_CACHE_SIZE)
def declared_fields(cls: type) -> FieldTable:
    """Fields declared directly in the body of `cls`, ancestors are ignored."""
    annotations = inspect.get_annotations(cls)
    hints = {name: _resolve_hint(cls, annotation) for name, annotation in annotations.items()}
    names: list[str]
    if "__dataclass_fields__" in cls.__dict__:
        names = [field.name for field in dataclasses.fields(cls) if field.name in annotations]
    else:
        names = [name for name in annotations if not _is_pseudo_field(hints.get(name, annotations[name]))]
    names += [name for name in _slots(cls) if name not in names]
    table = {name: Field(name, _normalize_hint(hints.get(name, annotations.get(name, Any))), cls) for name in names}
    return MappingProxyType(table)


@lru_cache(maxsize=FIELD_CACHE_SIZE)
def all_fields(cls: type) -> FieldTable:
    """Fields of `cls` and all of its ancestors, `object` excluded.

    A field redeclared by a subclass shadows the ancestor declaration.
    """
    table: dict[str, Field] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        table.update(declared_fields(klass))
    return MappingProxyType(table)


def instance_fields(instance: Any, *, inherited: bool) -> FieldTable:
    """Fields of a model instance.

    Attributes held in the instance ``__dict__`` that no class annotates count as
    declared by the concrete type, with an `Any` hint, unless a method of an
    ancestor assigns them and the concrete type does not.
    """
    cls = type(instance)
    table = dict(all_fields(cls) if inherited else declared_fields(cls))
    known = all_fields(cls)
    foreign = frozenset() if inherited else inherited_attributes(cls)
    for name in getattr(instance, "__dict__", {}):
        if name not in known and name not in foreign:
            table[name] = Field(name, Any, cls)
    return table


def is_assignable(value: Any, hint: Any) -> bool:
    """Tell if `value` fits the declared type `hint`.

    Only the outer type is checked, members of containers are not inspected.
    """
    if hint is Any or hint is object:
        return True
    if hint is None or hint is NoneType:
        return value is None
    if isinstance(hint, str):
        # unresolved forward reference
        return True
    if is_annotated(hint):
        return is_assignable(value, get_args(hint)[0])
    if is_union(hint):
        return any(is_assignable(value, member) for member in get_args(hint))
    if is_literal(hint):
        return any(value == choice for choice in get_args(hint))
    if isinstance(hint, TypeVar):
        if hint.__constraints__:
            return any(is_assignable(value, constraint) for constraint in hint.__constraints__)
        if hint.__bound__ is not None:
            return is_assignable(value, hint.__bound__)
        return True
    if supertype := getattr(hint, "__supertype__", None):
        # NewType
        return is_assignable(value, supertype)
    origin = get_origin(hint)
    if isinstance(origin, type):
        return _isinstance(value, origin)
    if isinstance(hint, type):
        if hint is float:
            return isinstance(value, int | float)
        if hint is complex:
            return isinstance(value, int | float | complex)
        return _isinstance(value, hint)
    return True


def is_annotated(hint: Any) -> bool:
    return get_origin(hint) is Annotated


def is_literal(hint: Any) -> bool:
    return get_origin(hint) is Literal


def is_union(hint: Any) -> TypeGuard[UnionType]:
    return get_origin(hint) in [Union, UnionType]


def _isinstance(value: Any, cls: type) -> bool:
    try:
        return isinstance(value, cls)
    except TypeError:
        # protocols that are not runtime checkable
        return True


def _resolve_hint(cls: type, annotation: Any) -> Any:
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(cls.__module__)
    # module globals take precedence over the class namespace, as in get_type_hints
    try:
        return eval(annotation, dict(vars(cls)), dict(vars(module)) if module else {})
    except (NameError, AttributeError, TypeError, SyntaxError):
        return annotation


def _normalize_hint(hint: Any) -> Any:
    if isinstance(hint, str):
        return Any
    return hint


def _is_pseudo_field(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar", "InitVar", "dataclasses.InitVar", "KW_ONLY"))
    if hint is ClassVar or get_origin(hint) is ClassVar:
        return True
    return isinstance(hint, dataclasses.InitVar) or hint is dataclasses.KW_ONLY


def _slots(cls: type) -> list[str]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    names = []
    for name in slots:
        if name in ("__dict__", "__weakref__"):
            continue
        if name.startswith("__") and not name.endswith("__"):
            name = f"_{cls.__name__.lstrip('_')}{name}"
        names.append(name)
    return names


@lru_cache(maxsize=FIELD_CACHE_SIZE)
def inherited_attributes(cls: type) -> frozenset[str]:
    """Attribute names assigned by methods of the ancestors of `cls` but not by `cls` itself."""
    names: set[str] = set()
    for klass in cls.__mro__[1:]:
        if klass is not object:
            names |= _assigned_attributes(klass)
    return frozenset(names - _assigned_attributes(cls))


def _assigned_attributes(cls: type) -> set[str]:
    names = set()
    for member in vars(cls).values():
        if inspect.isfunction(member):
            names |= {
                instruction.argval
                for instruction in dis.get_instructions(member)
                if instruction.opname == "STORE_ATTR"
            }
    return names
