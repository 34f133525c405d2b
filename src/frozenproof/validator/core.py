"""
Recursive immutability verification.

A class is immutable when it passes the type-level rules and every non-static
field is final and, recursively, of immutable declared and actual classes.
Arrays additionally need an explicit contents marker.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Set

from ..config import Settings
from ..introspect.fields import (
    FieldInfo,
    array_items,
    declared_fields,
    is_unset,
    runtime_element_types,
    undeclared_attributes,
)
from ..introspect.types import full_name, is_array_type, is_interface
from ..logging import get_logger
from .cache import TypeCache
from .rules import check_shape, is_trusted
from .violation import Violation

logger = get_logger(__name__)


@dataclass
class _Run:
    """State of one top-level verification."""
    proven: Set[type] = field(default_factory=set)
    visiting: Set[type] = field(default_factory=set)


class Validator:
    """
    Proves that classes, and everything reachable through their fields, are
    structurally immutable.

    All checks run under the cache lock, so concurrent callers are serialized.
    Classes proven during a call are committed to the cache only once the whole
    call succeeds.
    """

    def __init__(self, settings: Optional[Settings] = None, cache: Optional[TypeCache] = None):
        self.settings = settings or Settings()
        self.cache = cache if cache is not None else TypeCache()

    def verify(self, instance: Any, cls: type) -> None:
        """
        Verify that ``cls`` is immutable, reading field values from ``instance``.

        Args:
            instance: Object to read field values from, or None for a
                declared-structure check only
            cls: Class to verify

        Raises:
            Violation: If ``cls`` or anything reachable from it is mutable
        """
        with self.cache.lock:
            run = _Run()
            self._check(instance, cls, run)
            if run.proven:
                self.cache.update(run.proven)
                logger.debug(f"Cached {len(run.proven)} immutable classes after checking {full_name(cls)}")

    def check(self, instance: Any, cls: type) -> Optional[Violation]:
        """Same as ``verify``, returning the violation instead of raising it."""
        try:
            self.verify(instance, cls)
        except Violation as exc:
            return exc
        return None

    def _skipped(self, cls: type, run: _Run) -> bool:
        return (
            is_trusted(cls, self.settings)
            or cls in self.cache
            or cls in run.proven
            or cls in run.visiting
        )

    def _check(self, obj: Any, cls: type, run: _Run) -> None:
        if self._skipped(cls, run):
            return
        if cls in self.settings.sealed_containers:
            self._contents(obj, cls, run)
            return

        check_shape(cls)
        if is_interface(cls):
            run.proven.add(cls)
            return

        run.visiting.add(cls)
        try:
            self._fields(obj, cls, run)
        except Violation as exc:
            raise Violation(f"class '{full_name(cls)}' is mutable", exc) from exc
        finally:
            run.visiting.discard(cls)

        run.proven.add(cls)
        logger.debug(f"Immutability of {full_name(cls)} checked")

    def _contents(self, obj: Any, cls: type, run: _Run) -> None:
        """Tuples and frozensets are immutable as long as their elements are."""
        if obj is None:
            return
        for item in obj:
            try:
                self._check(item, type(item), run)
            except Violation as exc:
                raise Violation(f"element of '{full_name(cls)}' is mutable", exc) from exc

    def _fields(self, obj: Any, cls: type, run: _Run) -> None:
        fields = declared_fields(cls, self.settings.array_types)
        for info in fields:
            if info.is_static:
                continue
            if not info.is_final:
                raise Violation(f"field '{info.name}' is not final")
            try:
                value = self._read(obj, info)
                self._declared_and_actual(value, info, cls, run)
                holds_array = value is None or is_array_type(type(value), self.settings.array_types)
                if info.is_array and holds_array:
                    self._array(value, info, run)
                else:
                    for element in info.element_types:
                        self._check(None, element, run)
            except Violation as exc:
                raise Violation(f"field '{info.name}' is mutable", exc) from exc

        if obj is not None:
            for name in undeclared_attributes(obj, fields):
                raise Violation(f"field '{name}' is not final")

    def _declared_and_actual(self, value: Any, info: FieldInfo, cls: type, run: _Run) -> None:
        for declared in info.declared_types:
            if declared is not cls and not is_array_type(declared, self.settings.array_types):
                self._check(value if type(value) is declared else None, declared, run)
        if value is not None and type(value) not in info.declared_types:
            self._check(value, type(value), run)

    def _array(self, value: Any, info: FieldInfo, run: _Run) -> None:
        if not info.immutable_contents:
            raise Violation(
                f"field '{info.name}' is an array and is not marked for immutable array contents"
            )
        elements = info.element_types
        if not elements and value is not None:
            elements = runtime_element_types(value)
        items = array_items(value) if value is not None else []
        for element in elements:
            sample = next((item for item in items if type(item) is element), None)
            try:
                self._check(sample, element, run)
            except Violation as exc:
                raise Violation(f"array element type '{full_name(element)}' is mutable", exc) from exc
        for item in items:
            if item is None or type(item) in elements:
                continue
            try:
                self._check(item, type(item), run)
            except Violation as exc:
                raise Violation(f"array element type '{full_name(type(item))}' is mutable", exc) from exc

    @staticmethod
    def _read(obj: Any, info: FieldInfo) -> Any:
        if obj is None:
            return None
        try:
            return getattr(obj, info.name)
        except AttributeError as exc:
            if is_unset(obj, info.name):
                return None
            raise Violation(f"field '{info.name}' is not accessible") from exc
        except Exception as exc:
            raise Violation(f"field '{info.name}' is not accessible") from exc
