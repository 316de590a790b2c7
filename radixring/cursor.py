"""Cursors that wrap around the bounds of a backing region.

A radix cursor walks the half-open slot range ``[front, back)`` of a region.
Stepping forward past the last slot continues at ``front``; stepping
backward past ``front`` continues at the last slot. This makes a circular
region look like an ordinary bidirectional sequence to the ring buffer
that owns it.

Cursors never own memory. They stay valid only while the region they
reference is neither reallocated nor released.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import numpy as np

T = TypeVar("T")
C = TypeVar("C", bound="ConstRadixCursor")


class ConstRadixCursor(Generic[T]):
    """Read-only wrap-around cursor over a region.

    Two cursors compare equal when their current positions are equal; the
    bounds are not compared, so only cursors over the same region give a
    meaningful answer.
    """

    __slots__ = ("_region", "_front", "_back", "_current")

    def __init__(
        self,
        region: np.ndarray | None = None,
        front: int = 0,
        back: int = 0,
        current: int = 0,
    ) -> None:
        """Initialize the cursor.

        No validation is performed; use ``invariants`` to check a triple.

        Args:
            region: the backing region, or None for a cursor not associated
                with any container.
            front: first slot of the range.
            back: one past the last slot of the range.
            current: slot the cursor points at.
        """
        self._region = region
        self._front = front
        self._back = back
        self._current = current

    @property
    def front(self) -> int:
        """First slot of the range."""
        return self._front

    @property
    def back(self) -> int:
        """One past the last slot of the range."""
        return self._back

    @property
    def current(self) -> int:
        """Slot the cursor points at."""
        return self._current

    @property
    def region(self) -> np.ndarray | None:
        """The region traversed by this cursor."""
        return self._region

    @property
    def value(self) -> T:
        """Element at the current slot.

        The range must be non-empty and the slot must hold a live element.
        """
        return self._region[self._current]

    def get(self) -> int:
        """Return the address (slot offset) of the current element."""
        return self._current

    def range_empty(self) -> bool:
        """Whether the range contains no slots."""
        return self._front == self._back

    def invariants(self) -> bool:
        """Check that the bounds and the current slot are consistent."""
        if self._back < self._front:
            return False
        if self.range_empty():
            return self._front == self._current == self._back
        return self._front <= self._current < self._back

    def advance(self: C) -> C:
        """Step forward, wrapping from the last slot to ``front``."""
        if self.range_empty():
            return self

        self._current += 1
        if self._current == self._back:
            self._current = self._front
        return self

    def post_advance(self: C) -> C:
        """Step forward and return a copy taken before the step."""
        before = self.copy()
        self.advance()
        return before

    def retreat(self: C) -> C:
        """Step backward, wrapping from ``front`` to the last slot."""
        if self.range_empty():
            return self

        if self._current == self._front:
            self._current = self._back
        self._current -= 1
        return self

    def post_retreat(self: C) -> C:
        """Step backward and return a copy taken before the step."""
        before = self.copy()
        self.retreat()
        return before

    def next(self: C, n: int = 1) -> C:
        """Return a new cursor ``n`` steps ahead (negative ``n`` steps back)."""
        moved = self.copy()
        if not self.range_empty():
            span = self._back - self._front
            moved._current = self._front + (self._current - self._front + n) % span
        return moved

    def prev(self: C, n: int = 1) -> C:
        """Return a new cursor ``n`` steps behind."""
        return self.next(-n)

    def copy(self: C) -> C:
        """Return an independent cursor at the same position."""
        return self.__copy__()

    def __copy__(self: C) -> C:
        return type(self)(self._region, self._front, self._back, self._current)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstRadixCursor):
            return NotImplemented
        return self._current == other._current

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(front={self._front}, back={self._back}, "
            f"current={self._current})"
        )


class RadixCursor(ConstRadixCursor[T]):
    """Wrap-around cursor that can also write through to the region."""

    __slots__ = ()

    @property
    def value(self) -> T:
        """Element at the current slot."""
        return self._region[self._current]

    @value.setter
    def value(self, new_value: T) -> None:
        self._region[self._current] = new_value

    def as_const(self) -> ConstRadixCursor[T]:
        """Narrow to a read-only cursor with the same bounds and position."""
        return ConstRadixCursor(self._region, self._front, self._back, self._current)


class ReverseRadixCursor(Generic[T]):
    """Adaptor that traverses a radix cursor's range in the opposite direction.

    The adaptor points at the same slot as its base; advancing it retreats
    the base.
    """

    __slots__ = ("_base",)

    def __init__(self, base: ConstRadixCursor[T]) -> None:
        self._base = base

    def base(self) -> ConstRadixCursor[T]:
        """Return the underlying forward cursor."""
        return self._base

    @property
    def value(self) -> T:
        return self._base.value

    @value.setter
    def value(self, new_value: Any) -> None:
        if not isinstance(self._base, RadixCursor):
            raise AttributeError("cannot write through a read-only cursor")
        self._base.value = new_value

    def get(self) -> int:
        return self._base.get()

    def advance(self) -> ReverseRadixCursor[T]:
        self._base.retreat()
        return self

    def post_advance(self) -> ReverseRadixCursor[T]:
        before = self.copy()
        self.advance()
        return before

    def retreat(self) -> ReverseRadixCursor[T]:
        self._base.advance()
        return self

    def post_retreat(self) -> ReverseRadixCursor[T]:
        before = self.copy()
        self.retreat()
        return before

    def next(self, n: int = 1) -> ReverseRadixCursor[T]:
        return ReverseRadixCursor(self._base.next(-n))

    def prev(self, n: int = 1) -> ReverseRadixCursor[T]:
        return ReverseRadixCursor(self._base.next(n))

    def as_const(self) -> ReverseRadixCursor[T]:
        """Narrow to a reverse cursor over a read-only base."""
        if isinstance(self._base, RadixCursor):
            return ReverseRadixCursor(self._base.as_const())
        return self.copy()

    def invariants(self) -> bool:
        return self._base.invariants()

    def copy(self) -> ReverseRadixCursor[T]:
        return ReverseRadixCursor(self._base.copy())

    def __copy__(self) -> ReverseRadixCursor[T]:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReverseRadixCursor):
            return NotImplemented
        return self._base == other._base

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ReverseRadixCursor({self._base!r})"
