"""Immutability violations and their causal chain."""

from typing import List, Optional


class Violation(Exception):
    """
    A structural immutability defect.

    Each recursive failure wraps the inner one, so walking ``cause`` from the
    outermost violation reads as a path from the checked class down to the
    offending field or class.
    """

    def __init__(self, message: str, cause: Optional["Violation"] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.__cause__ = cause

    @property
    def root(self) -> "Violation":
        """Innermost violation: the defect itself."""
        current = self
        while current.cause is not None:
            current = current.cause
        return current

    def chain(self) -> List[str]:
        """Messages from the outermost violation to the innermost."""
        messages = []
        current: Optional[Violation] = self
        while current is not None:
            messages.append(current.message)
            current = current.cause
        return messages

    def render(self) -> str:
        return "\n".join(
            f"{'  ' * depth}{message}" for depth, message in enumerate(self.chain())
        )
