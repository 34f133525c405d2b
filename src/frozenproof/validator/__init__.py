"""The immutability validator: cache, rules, recursion and violations."""

from .cache import TypeCache
from .core import Validator
from .rules import check_shape, is_trusted
from .violation import Violation

__all__ = [
    "TypeCache",
    "Validator",
    "check_shape",
    "is_trusted",
    "Violation",
]
