from dataclasses import dataclass
from typing import FrozenSet, Tuple

from .introspect.types import ARRAY_TYPES, SEALED_CONTAINERS


@dataclass
class Settings:
    # Value types trusted by convention, matched on fully-qualified name
    trusted_names: FrozenSet[str] = frozenset({
        "builtins.int",
        "builtins.float",
        "builtins.complex",
        "builtins.bool",
        "builtins.str",
        "builtins.bytes",
        "builtins.object",
        "builtins.NoneType",
        "builtins.type",
        "builtins.range",
        "builtins.ellipsis",
        "decimal.Decimal",
        "fractions.Fraction",
        "uuid.UUID",
    })
    trusted_prefixes: Tuple[str, ...] = ("datetime.", "pathlib.", "ipaddress.")
    # Our own machinery, never checked
    ignored_prefixes: Tuple[str, ...] = ("frozenproof.", "typing.")
    array_types: Tuple[type, ...] = ARRAY_TYPES
    sealed_containers: Tuple[type, ...] = SEALED_CONTAINERS
    trust_enums: bool = True
