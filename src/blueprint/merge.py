"""Overlay sparse overrides onto a freshly produced instance.

Two sources are supported:

- another instance of exactly the same class, every field of the class
  hierarchy participates;
- a mapping of field names to values, only the fields declared by the concrete
  class are addressable.

In both cases `None` means "not supplied" and never erases a value.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from .errors import MissingArgument, TypeMismatch
from .fields import instance_fields, is_assignable
from .types import FieldMap

T = TypeVar("T")

logger = logging.getLogger(__name__)


def merge(target: T, source: T | FieldMap) -> None:
    """Overlay `source` onto `target`, in place.

    ```python
    item = Item(name="Cookie", price=1.99)
    merge(item, {"price": 2.5})
    assert item == Item(name="Cookie", price=2.5)
    ```
    """
    match source:
        case None:
            raise MissingArgument("source")
        case Mapping():
            merge_mapping(target, source)
        case _:
            merge_instance(target, source)


def merge_instance(target: T, source: T) -> None:
    """Copy every non-None field of `source` onto `target`.

    Fields that cannot be read from `source` or written on `target` are left
    untouched.

    Raises:
        MissingArgument: when target or source is None
        TypeMismatch: when source is not exactly of the target type
    """
    if target is None:
        raise MissingArgument("target")
    if source is None:
        raise MissingArgument("source")
    if type(source) is not type(target):
        raise TypeMismatch(expected=type(target), actual=type(source))

    for name in instance_fields(target, inherited=True):
        try:
            value = getattr(source, name)
        except AttributeError:
            logger.debug("Skip unreadable field %s.%s", type(source).__qualname__, name)
            continue
        if value is None:
            continue
        try:
            setattr(target, name, value)
        except AttributeError:
            logger.debug("Skip read-only field %s.%s", type(target).__qualname__, name)


def merge_mapping(target: Any, overrides: FieldMap) -> None:
    """Assign every non-None value of `overrides` to the field of the same name.

    Keys that do not name a field declared by the target class are ignored.
    All values are checked before the first assignment, so a mismatch leaves
    `target` unchanged.

    Raises:
        MissingArgument: when target or overrides is None
        TypeMismatch: when a value does not fit the declared type of its field
    """
    if target is None:
        raise MissingArgument("target")
    if overrides is None:
        raise MissingArgument("overrides")

    table = instance_fields(target, inherited=False)
    changes: list[tuple[str, Any]] = []
    for name, value in overrides.items():
        if value is None:
            continue
        field = table.get(name)
        if field is None:
            logger.debug("Ignore unknown field %s.%s", type(target).__qualname__, name)
            continue
        if not is_assignable(value, field.hint):
            raise TypeMismatch(expected=field.hint, actual=type(value), field=name)
        changes.append((name, value))

    for name, value in changes:
        setattr(target, name, value)
