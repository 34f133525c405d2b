"""Type-level queries over Python classes."""

import array
import collections
import inspect
from typing import Tuple

import numpy as np

ARRAY_TYPES: Tuple[type, ...] = (
    list,
    bytearray,
    array.array,
    collections.deque,
    np.ndarray,
)
SEALED_CONTAINERS: Tuple[type, ...] = (tuple, frozenset)
PRIMITIVE_TYPES: Tuple[type, ...] = (int, float, complex, bool, type(None))

# Py_TPFLAGS_BASETYPE: set on every type that accepts subclasses
_TPFLAGS_BASETYPE = 1 << 10


def full_name(cls: type) -> str:
    module = getattr(cls, "__module__", None) or "builtins"
    qualname = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", repr(cls))
    return f"{module}.{qualname}"


def is_interface(cls: type) -> bool:
    """Protocols and abstract classes play the role of interfaces."""
    if getattr(cls, "_is_protocol", False):
        return True
    return inspect.isabstract(cls)


def is_final(cls: type) -> bool:
    """
    Is the class declared non-extensible?

    ``typing.final`` records ``__final__`` on the decorated class only; it is
    looked up in the class's own namespace so subclasses don't inherit it.
    Builtin types that refuse subclassing are final as well.
    """
    if vars(cls).get("__final__", False) is True:
        return True
    flags = getattr(cls, "__flags__", _TPFLAGS_BASETYPE)
    return not flags & _TPFLAGS_BASETYPE


def is_primitive(cls: type) -> bool:
    return cls in PRIMITIVE_TYPES or issubclass(cls, np.generic)


def is_array_type(cls: type, array_types: Tuple[type, ...] = ARRAY_TYPES) -> bool:
    return isinstance(cls, type) and issubclass(cls, array_types)
