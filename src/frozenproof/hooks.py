"""
Construction interception.

``@immutable`` marks a class as claiming immutability. On a concrete class it
also wraps ``__init__`` so every freshly built instance is verified before the
caller gets it back; a violation makes construction fail.
"""

import functools
import threading
from typing import Any, Callable, Optional, TypeVar

from .introspect.types import full_name, is_interface
from .logging import get_logger
from .markers import MARKER_ATTRIBUTE
from .validator import Validator, Violation

logger = get_logger(__name__)

T = TypeVar("T", bound=type)

_default_validator: Optional[Validator] = None
_default_lock = threading.Lock()


class ImmutabilityError(RuntimeError):
    """Raised when a freshly constructed object turns out to be mutable."""

    def __init__(self, message: str, violation: Violation):
        super().__init__(message)
        self.violation = violation


def get_validator() -> Validator:
    """Process-wide validator, created on first use."""
    global _default_validator
    with _default_lock:
        if _default_validator is None:
            _default_validator = Validator()
        return _default_validator


def set_validator(validator: Optional[Validator]) -> None:
    """Replace the process-wide validator; None resets it to a fresh one on next use."""
    global _default_validator
    with _default_lock:
        _default_validator = validator


def verify(instance: Any, cls: Optional[type] = None) -> None:
    """Verify ``instance`` against ``cls`` (its own class by default) with the default validator."""
    get_validator().verify(instance, type(instance) if cls is None else cls)


def immutable(cls: Optional[T] = None, *, validator: Optional[Validator] = None) -> Any:
    """
    Declare a class immutable.

    Usable bare (``@immutable``) or with a dedicated validator
    (``@immutable(validator=v)``). Interfaces are only marked; concrete classes
    are checked after each construction.
    """
    def decorate(klass: T) -> T:
        setattr(klass, MARKER_ATTRIBUTE, True)
        if not is_interface(klass):
            _intercept(klass, validator)
        return klass

    if cls is None:
        return decorate
    return decorate(cls)


def _intercept(cls: type, validator: Optional[Validator]) -> None:
    original: Callable[..., None] = cls.__init__

    @functools.wraps(original)
    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        if original is object.__init__:
            # Instances built by __new__ (NamedTuple); object.__init__ takes no arguments here
            original(self)
        else:
            original(self, *args, **kwargs)
        _after(self, validator or get_validator())

    cls.__init__ = __init__


def _after(obj: Any, validator: Validator) -> None:
    cls = type(obj)
    try:
        validator.verify(obj, cls)
    except Violation as exc:
        raise ImmutabilityError(f"{full_name(cls)} is not immutable, can't use it", exc) from exc
    logger.debug(f"Constructed {full_name(cls)} verified immutable")
