"""Type-level rules: which classes are skipped, and which are even eligible."""

from enum import Enum

from ..config import Settings
from ..introspect.types import full_name, is_final, is_interface, is_primitive
from ..markers import is_marked
from .violation import Violation


def is_trusted(cls: type, settings: Settings) -> bool:
    """
    Should the class be treated as immutable without any check?

    Covers value types trusted by convention, primitives and the validator's
    own machinery. Cache membership is the caller's concern.
    """
    name = full_name(cls)
    if name in settings.trusted_names or name.startswith(settings.trusted_prefixes):
        return True
    if settings.trust_enums and isinstance(cls, type) and issubclass(cls, Enum):
        return True
    if is_primitive(cls):
        return True
    return name.startswith(settings.ignored_prefixes)


def check_shape(cls: type) -> None:
    """Apply the interface rule, then the final rule."""
    if is_interface(cls):
        if not is_marked(cls):
            raise Violation(f"interface '{full_name(cls)}' is not marked immutable")
        return
    if not is_final(cls):
        raise Violation(f"class '{full_name(cls)}' is not final")
