"""
ParameterCursor: caller-supplied values consumed across one generation tree.
"""

from typing import Any, Iterable, List


class ParameterCursor:
    """
    Ordered, consume-once queue of parameters.

    The same cursor is passed down through nested generation, so a value
    taken by a nested entity is gone for the fields that follow.
    """

    def __init__(self, values: Iterable[Any] = ()):
        self._values: List[Any] = list(values)
        self._position = 0

    def __len__(self) -> int:
        return len(self._values) - self._position

    def __repr__(self) -> str:
        return f"ParameterCursor(consumed={self._position}, remaining={len(self)})"

    def is_empty(self) -> bool:
        return self._position >= len(self._values)

    def peek(self) -> Any:
        """Return the next value without consuming it."""
        if self.is_empty():
            raise IndexError("No parameters left")
        return self._values[self._position]

    def advance(self) -> Any:
        """Consume and return the next value."""
        value = self.peek()
        self._position += 1
        return value

    @property
    def consumed(self) -> int:
        return self._position

    @property
    def remaining(self) -> List[Any]:
        return self._values[self._position:]
