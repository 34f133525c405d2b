"""Introspection of Python classes into type and field descriptors."""

from .types import (
    ARRAY_TYPES,
    SEALED_CONTAINERS,
    full_name,
    is_array_type,
    is_final,
    is_interface,
    is_primitive,
)
from .fields import (
    FieldInfo,
    array_items,
    declared_fields,
    is_unset,
    runtime_element_types,
    undeclared_attributes,
)

__all__ = [
    "ARRAY_TYPES",
    "SEALED_CONTAINERS",
    "full_name",
    "is_array_type",
    "is_final",
    "is_interface",
    "is_primitive",
    "FieldInfo",
    "array_items",
    "declared_fields",
    "is_unset",
    "runtime_element_types",
    "undeclared_attributes",
]
