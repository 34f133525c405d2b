"""Tests for construction interception via @immutable."""

from dataclasses import dataclass
from typing import NamedTuple, Protocol, final

import pytest

from frozenproof import ImmutabilityError, Validator, Violation, get_validator, immutable, set_validator, verify
from frozenproof.markers import is_marked
from tests.helpers.samples import Figure, MutableThing, Point


@immutable
@final
@dataclass(frozen=True)
class Money:
    amount: int
    currency: str


@immutable
@final
@dataclass(frozen=True)
class Invoice:
    total: Money
    lines: tuple[Point, ...] = ()


@immutable
@dataclass(frozen=True)
class Subclassable:
    amount: int


@immutable
@final
@dataclass(frozen=True)
class Wrapper:
    inner: object


class TestImmutableDecorator:
    def test_marks_class(self):
        assert is_marked(Money)

    def test_marker_is_not_inherited(self):
        """A subclass claims nothing just by inheriting."""
        class Child(Subclassable):
            pass

        assert not is_marked(Child)

    def test_construction_verifies_instance(self):
        Money(10, "EUR")

        assert Money in get_validator().cache

    def test_nested_construction(self):
        Invoice(Money(5, "USD"), (Point(1, 2),))

        assert {Invoice, Money, Point}.issubset(get_validator().cache.snapshot())

    def test_non_final_class_cannot_be_constructed(self):
        """The final-class rule turns into a construction failure."""
        with pytest.raises(ImmutabilityError) as info:
            Subclassable(1)

        assert str(info.value).endswith("Subclassable is not immutable, can't use it")
        assert isinstance(info.value.__cause__, Violation)
        assert info.value.violation.root.message.endswith("Subclassable' is not final")

    def test_mutable_value_rejected_at_construction(self):
        with pytest.raises(ImmutabilityError) as info:
            Wrapper(MutableThing())

        assert info.value.violation.chain()[1] == "field 'inner' is mutable"

    def test_immutable_value_accepted_at_construction(self):
        Wrapper(Point(0, 0))

    def test_interface_is_only_marked(self):
        """Interfaces are never constructed, so nothing is wrapped."""
        assert is_marked(Figure)
        assert not hasattr(Figure.__init__, "__wrapped__")

    def test_protocol_marked_inline(self):
        @immutable
        class Sized(Protocol):
            def size(self) -> int: ...

        assert is_marked(Sized)

    def test_named_tuple_is_intercepted(self):
        @immutable
        @final
        class Span(NamedTuple):
            start: int
            end: int

        span = Span(1, 2)

        assert span == (1, 2)
        assert Span in get_validator().cache

    def test_dedicated_validator(self):
        """A class can be bound to its own validator and cache."""
        own = Validator()

        @immutable(validator=own)
        @final
        @dataclass(frozen=True)
        class Reading:
            value: float

        Reading(1.5)

        assert Reading in own.cache
        assert Reading not in get_validator().cache


class TestDefaultValidator:
    def test_default_validator_is_shared(self):
        assert get_validator() is get_validator()

    def test_set_validator_replaces_default(self):
        custom = Validator()
        set_validator(custom)

        assert get_validator() is custom

    def test_reset_creates_fresh_validator(self):
        first = get_validator()
        set_validator(None)

        assert get_validator() is not first

    def test_verify_uses_instance_class_by_default(self):
        verify(Point(1, 2))

        assert Point in get_validator().cache

    def test_verify_raises_violation(self):
        with pytest.raises(Violation):
            verify(MutableThing())
