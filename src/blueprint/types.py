from collections.abc import Mapping
from typing import Any, Callable, TypeAlias, TypeVar

T = TypeVar("T")
R = TypeVar("R")

FieldMap: TypeAlias = Mapping[str, Any]
"""
Sparse set of field overrides, keyed by field name.

```python
{"name": "Cookie", "price": 1.99}
```
"""

Produce: TypeAlias = Callable[[], T]
"""
Zero argument callable returning a fresh, independently owned instance.
"""

Setter: TypeAlias = Callable[[T, R], Any] | str
"""
Assigns a related value onto an instance.

Either any callable with 2 parameters, the instance and the value, or
an attribute name.
"""
