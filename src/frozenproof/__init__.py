"""
frozenproof: runtime proof that objects claiming immutability really are.

A class opts in with ``@immutable``; after each construction its instance and
every class reachable through its fields are checked against structural rules
(final classes, final fields, marked interfaces, marked arrays).
"""

from .config import Settings
from .hooks import ImmutabilityError, get_validator, immutable, set_validator, verify
from .markers import ImmutableArray
from .validator import TypeCache, Validator, Violation

__all__ = [
    "Settings",
    "ImmutabilityError",
    "get_validator",
    "immutable",
    "set_validator",
    "verify",
    "ImmutableArray",
    "TypeCache",
    "Validator",
    "Violation",
]
