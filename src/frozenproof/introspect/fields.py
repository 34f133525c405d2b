"""
Field descriptors for Python classes.

Fields are collected from annotations across the MRO (resolved with
``typing.get_type_hints``) plus unannotated ``__slots__`` entries. Each
annotation is reduced to the runtime classes it admits, so the validator
only ever deals with plain classes.
"""

import dataclasses
import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..markers import ImmutableArray
from .types import ARRAY_TYPES, SEALED_CONTAINERS, is_array_type

NoneType = type(None)


@dataclass(frozen=True)
class FieldInfo:
    """Descriptor of one instance field."""
    name: str
    owner: type
    annotation: Any
    declared_types: Tuple[type, ...]
    element_types: Tuple[type, ...] = ()
    is_static: bool = False
    is_final: bool = False
    is_array: bool = False
    immutable_contents: bool = False


def declared_fields(cls: type, array_types: Tuple[type, ...] = ARRAY_TYPES) -> List[FieldInfo]:
    """
    Describe every field an instance of ``cls`` may hold.

    Args:
        cls: Class to describe
        array_types: Classes treated as arrays

    Returns:
        Field descriptors, base classes first, slots last
    """
    frozen = _is_frozen(cls)
    result: List[FieldInfo] = []

    for name, annotation in _annotations(cls).items():
        if isinstance(annotation, dataclasses.InitVar):
            continue
        result.append(_describe(name, cls, annotation, frozen, array_types))

    known = {info.name for info in result}
    for name in _slot_names(cls):
        if name not in known:
            result.append(FieldInfo(name=name, owner=cls, annotation=Any, declared_types=(object,)))
            known.add(name)

    return result


def undeclared_attributes(obj: Any, fields: List[FieldInfo]) -> List[str]:
    """Names in the instance ``__dict__`` that no field declares."""
    namespace = getattr(obj, "__dict__", None)
    if not isinstance(namespace, dict):
        return []
    known = {info.name for info in fields if not info.is_static}
    return [name for name in namespace if name not in known]


def is_unset(obj: Any, name: str) -> bool:
    """True when ``name`` is an empty slot or is defined nowhere on ``obj``."""
    attribute = inspect.getattr_static(type(obj), name, None)
    if isinstance(attribute, types.MemberDescriptorType):
        return True
    namespace = getattr(obj, "__dict__", None)
    in_instance = isinstance(namespace, dict) and name in namespace
    return attribute is None and not in_instance


def array_items(value: Any) -> List[Any]:
    """Current contents of an array whose elements can be arbitrary objects."""
    if isinstance(value, np.ndarray):
        if value.dtype.kind != "O":
            return []
        return list(value.flat)
    if isinstance(value, bytearray):
        return []
    try:
        return list(value)
    except TypeError:
        return []


def runtime_element_types(value: Any) -> Tuple[type, ...]:
    """Element classes deducible from an array value alone."""
    if isinstance(value, np.ndarray):
        return (value.dtype.type,)
    if isinstance(value, bytearray):
        return (int,)
    return ()


def _describe(name: str, owner: type, annotation: Any, frozen: bool,
              array_types: Tuple[type, ...]) -> FieldInfo:
    if isinstance(annotation, str):
        return _describe_unresolved(name, owner, annotation, frozen)

    core, metadata, is_final, is_static = _unwrap(annotation)
    members = _members(core)
    metadata = metadata + tuple(m for member in members for m in _metadata(member))

    declared: List[type] = []
    elements: List[type] = []
    for member in members:
        cls = _runtime_class(_strip_annotated(member), owner)
        if cls not in declared:
            declared.append(cls)
        if isinstance(cls, type) and (is_array_type(cls, array_types) or cls in SEALED_CONTAINERS):
            for element in _element_annotations(_strip_annotated(member), cls):
                for element_member in _members(element):
                    element_cls = _runtime_class(_strip_annotated(element_member), owner)
                    if element_cls not in elements:
                        elements.append(element_cls)

    if len(declared) > 1 and NoneType in declared:
        declared.remove(NoneType)

    return FieldInfo(
        name=name,
        owner=owner,
        annotation=core,
        declared_types=tuple(declared),
        element_types=tuple(elements),
        is_static=is_static,
        is_final=is_final or frozen or _is_named_tuple(owner),
        is_array=any(is_array_type(cls, array_types) for cls in declared),
        immutable_contents=any(m is ImmutableArray for m in metadata),
    )


def _describe_unresolved(name: str, owner: type, annotation: str, frozen: bool) -> FieldInfo:
    # Forward reference that could not be evaluated: only the qualifiers are trusted
    text = annotation.replace(" ", "")
    while text.startswith(("Annotated[", "typing.Annotated[")):
        text = text.split("[", 1)[1]
    is_static = text.startswith(("ClassVar", "typing.ClassVar"))
    is_final = text.startswith(("Final", "typing.Final"))
    return FieldInfo(
        name=name,
        owner=owner,
        annotation=annotation,
        declared_types=(object,),
        is_static=is_static,
        is_final=is_final or frozen or _is_named_tuple(owner),
    )


def _unwrap(annotation: Any) -> Tuple[Any, Tuple[Any, ...], bool, bool]:
    """Peel Annotated, Final and ClassVar qualifiers off an annotation."""
    metadata: Tuple[Any, ...] = ()
    is_final = False
    is_static = False
    while True:
        origin = typing.get_origin(annotation)
        if origin is typing.Annotated:
            metadata += annotation.__metadata__
            annotation = annotation.__origin__
        elif annotation is typing.Final or origin is typing.Final:
            is_final = True
            args = typing.get_args(annotation)
            annotation = args[0] if args else Any
        elif annotation is typing.ClassVar or origin is typing.ClassVar:
            is_static = True
            args = typing.get_args(annotation)
            annotation = args[0] if args else Any
        else:
            return annotation, metadata, is_final, is_static


def _members(annotation: Any) -> List[Any]:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members: List[Any] = []
        for arg in typing.get_args(annotation):
            members.extend(_members(arg))
        return members
    if origin is typing.Annotated:
        inner = _members(annotation.__origin__)
        if len(inner) == 1:
            return [annotation]
        return inner
    return [annotation]


def _metadata(annotation: Any) -> Tuple[Any, ...]:
    if typing.get_origin(annotation) is typing.Annotated:
        return annotation.__metadata__
    return ()


def _strip_annotated(annotation: Any) -> Any:
    while typing.get_origin(annotation) is typing.Annotated:
        annotation = annotation.__origin__
    return annotation


def _runtime_class(annotation: Any, owner: type) -> type:
    if annotation is None or annotation is NoneType:
        return NoneType
    if annotation is Any:
        return object
    if annotation is typing.Self:
        return owner
    if isinstance(annotation, typing.TypeVar):
        bound = annotation.__bound__
        return _runtime_class(bound, owner) if bound is not None else object
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return _runtime_class(supertype, owner)
    origin = typing.get_origin(annotation)
    if origin is typing.Literal:
        kinds = {type(value) for value in typing.get_args(annotation)}
        return kinds.pop() if len(kinds) == 1 else object
    if isinstance(origin, type):
        return origin
    if isinstance(annotation, type):
        return annotation
    return object


def _element_annotations(annotation: Any, cls: type) -> List[Any]:
    args = typing.get_args(annotation)
    if issubclass(cls, bytearray):
        return [int]
    if issubclass(cls, np.ndarray):
        # NDArray[X] is ndarray[shape, dtype[X]]
        if len(args) == 2:
            return list(typing.get_args(args[1]))
        return []
    if cls is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return [args[0]]
        return [arg for arg in args if arg is not Ellipsis and arg != ()]
    return list(args[:1])


def _annotations(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references: fall back to raw annotations
        merged: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            merged.update(inspect.get_annotations(klass))
        return merged


def _slot_names(cls: type) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            names.append(slot)
    return names


def _is_frozen(cls: type) -> bool:
    params: Optional[Any] = getattr(cls, "__dataclass_params__", None)
    return dataclasses.is_dataclass(cls) and params is not None and params.frozen


def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")
