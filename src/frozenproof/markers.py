"""Opt-in markers read by the validator."""

MARKER_ATTRIBUTE = "__immutable__"


class _ImmutableArrayMarker:
    """Field marker: the array's element type, not the array, is immutable."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ImmutableArray"


ImmutableArray = _ImmutableArrayMarker()


def is_marked(cls: type) -> bool:
    """Does the class itself (not a base) carry the immutability marker?"""
    return vars(cls).get(MARKER_ATTRIBUTE, False) is True
