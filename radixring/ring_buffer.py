"""Growable double-ended ring buffer over a single backing region.

The buffer keeps its elements in one region of ``mb_size`` slots and tracks
the live range with two offsets, ``m_begin`` and ``m_end``, taken modulo
``mb_size``. One slot is always left unoccupied so that ``m_begin == m_end``
only ever means "empty"; the capacity is therefore ``mb_size - 1``.

Cursor invalidation:

- Any operation that reallocates the region (growth, ``reserve``,
  ``shrink_to_fit``, ``clear``, ``swap``, assignment) invalidates every
  cursor previously obtained from the buffer.
- An insertion that fits in the current capacity invalidates cursors on
  the shifted side only: before the insertion point when the front was
  extended, at and after it when the back was extended.
- ``push_*``/``pop_*`` without growth invalidate only cursors at the end
  that moved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sized
from itertools import islice
from typing import Any, Generic, TypeVar

import numpy as np

from radixring.config import RingBufferConfig, default_config
from radixring.const import SENTINEL_SLOTS
from radixring.cursor import ConstRadixCursor, RadixCursor, ReverseRadixCursor
from radixring.exceptions import OutOfRangeError
from radixring.memory import MemoryManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = object()


def pwrap(value: int, wrap: int) -> int:
    """Map ``value`` (possibly negative) into ``[0, wrap)`` with floor modulo.

    A ``wrap`` of zero (no region) maps everything to zero.
    """
    if wrap == 0:
        return 0
    return value % wrap


class RingBuffer(Generic[T]):
    """Double-ended ring buffer with amortised growth and positional insert.

    Example:
        >>> buf = RingBuffer()
        >>> buf.push_back(1)
        >>> buf.push_back(2)
        >>> buf.push_front(0)
        >>> list(buf)
        [0, 1, 2]
    """

    def __init__(
        self,
        capacity: int = 0,
        *,
        memory_manager: MemoryManager | None = None,
        factory: Callable[..., T] | None = None,
        config: RingBufferConfig | None = None,
    ) -> None:
        """Initialize an empty ring buffer.

        Args:
            capacity: initial capacity. Zero leaves the buffer without a
                backing region until the first insertion.
            memory_manager: manager that provides regions and element
                lifecycle. Defaults to an object-dtype ``MemoryManager``.
            factory: callable producing elements for ``emplace_*`` and for
                ``resize`` without an explicit fill value.
            config: tuning options; defaults to the process-wide config.

        Raises:
            ValueError: If ``capacity`` is negative.
            AllocationError: If the initial region cannot be allocated.
        """
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")

        self._mm: MemoryManager = memory_manager or MemoryManager()
        self._factory = factory
        self._config = config or default_config()

        self._region: np.ndarray | None = None
        self._mb_size = 0
        self._m_begin = 0
        self._m_end = 0
        self._mutations = 0

        if capacity > 0:
            self._region = self._mm.allocate(capacity + SENTINEL_SLOTS)
            self._mb_size = capacity + SENTINEL_SLOTS

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def filled(cls, count: int, value: T, **kwargs: Any) -> RingBuffer[T]:
        """Create a buffer holding ``count`` copies of ``value``."""
        buf: RingBuffer[T] = cls(**kwargs)
        buf.assign_n(count, value)
        return buf

    @classmethod
    def from_iterable(cls, iterable: Iterable[T], **kwargs: Any) -> RingBuffer[T]:
        """Create a buffer holding the elements of ``iterable`` in order."""
        buf: RingBuffer[T] = cls(**kwargs)
        buf.assign(iterable)
        return buf

    @classmethod
    def of(cls, *values: T, **kwargs: Any) -> RingBuffer[T]:
        """Create a buffer holding ``values`` in order."""
        return cls.from_iterable(values, **kwargs)

    @classmethod
    def copy_of(
        cls, other: RingBuffer[T], memory_manager: MemoryManager | None = None
    ) -> RingBuffer[T]:
        """Create an independent copy of ``other``.

        The copy gets a fresh region sized to ``len(other)`` plus the
        sentinel slot.

        Args:
            other: buffer to copy.
            memory_manager: manager for the copy; defaults to
                ``other``'s manager's ``select_on_copy()``.
        """
        mm = memory_manager or other._mm.select_on_copy()
        buf: RingBuffer[T] = cls(
            memory_manager=mm, factory=other._factory, config=other._config
        )
        size = other.size()
        region = mm.allocate(size + SENTINEL_SLOTS)
        buf._fill_region(region, iter(other), size)
        buf._adopt(region, size)
        return buf

    @classmethod
    def moved_from(
        cls, other: RingBuffer[T], memory_manager: MemoryManager | None = None
    ) -> RingBuffer[T]:
        """Create a buffer that takes over the contents of ``other``.

        The region is transferred outright unless ``memory_manager`` is
        given and differs from ``other``'s, in which case the elements are
        moved one by one into a region from ``memory_manager``. ``other``
        is left empty either way.
        """
        if memory_manager is None or memory_manager == other._mm:
            buf: RingBuffer[T] = cls(
                memory_manager=memory_manager or other._mm,
                factory=other._factory,
                config=other._config,
            )
            buf._take_state(other)
            return buf

        logger.debug("Memory managers differ; moving %d elements", other.size())
        buf = cls(
            memory_manager=memory_manager, factory=other._factory, config=other._config
        )
        buf.assign(list(other))
        other.clear()
        return buf

    def copy(self) -> RingBuffer[T]:
        """Return an independent copy of this buffer."""
        return type(self).copy_of(self)

    def __copy__(self) -> RingBuffer[T]:
        return self.copy()

    # ------------------------------------------------------------------
    # Internal arithmetic
    # ------------------------------------------------------------------

    def _abs_offset_of(self, offset: int) -> int:
        return pwrap(offset, self._mb_size)

    def _offset_of(self, index: int) -> int:
        """Region offset of logical ``index``."""
        return pwrap(self._m_begin + index, self._mb_size)

    def _idx_of(self, offset: int) -> int:
        """Logical index of region ``offset``."""
        return pwrap(offset - self._m_begin, self._mb_size)

    def _it_of(self, offset: int) -> RadixCursor[T]:
        return RadixCursor(self._region, 0, self._mb_size, offset)

    def _cit_of(self, offset: int) -> ConstRadixCursor[T]:
        return ConstRadixCursor(self._region, 0, self._mb_size, offset)

    def _range_check(self, index: int) -> None:
        if not 0 <= index < self.size():
            raise OutOfRangeError(index, self.size())

    def _position_index(self, pos: ConstRadixCursor[T] | int) -> int:
        """Translate an insert position into a logical index in ``[0, size]``."""
        if isinstance(pos, ConstRadixCursor):
            if pos.region is not self._region:
                raise ValueError("cursor does not belong to this ring buffer")
            return self._idx_of(pos.current)
        if not 0 <= pos <= self.size():
            raise OutOfRangeError(pos, self.size())
        return pos

    def _default_value(self, *args: Any, **kwargs: Any) -> T:
        if self._factory is not None:
            return self._factory(*args, **kwargs)
        if not self._mm.holds_objects:
            return self._mm.dtype.type(*args, **kwargs)
        if args or kwargs:
            raise TypeError("emplace with arguments requires an element factory")
        return None

    # ------------------------------------------------------------------
    # Region lifecycle
    # ------------------------------------------------------------------

    def _construct(self, offset: int, value: T) -> None:
        self._mm.construct(self._region, offset, value)
        self._mutations += 1

    def _destroy(self, offset: int) -> None:
        self._mm.destroy(self._region, offset)
        self._mutations += 1

    def _destroy_range(self, begin: int, end: int) -> None:
        """Destroy the elements in region offsets ``[begin, end)`` (wrapped)."""
        offset = begin
        while offset != end:
            self._destroy(offset)
            offset = pwrap(offset + 1, self._mb_size)

    def _destroy_all(self) -> None:
        self._destroy_range(self._m_begin, self._m_end)
        self._m_begin = self._m_end = 0

    def _release_region(self) -> None:
        """Destroy every element and give the region back to the manager."""
        if self._region is None:
            return
        self._destroy_all()
        self._mm.deallocate(self._region)
        logger.debug("Released ring buffer region of %d slots", self._mb_size)
        self._region = None
        self._mb_size = 0

    def _fill_region(
        self, region: np.ndarray, values: Iterator[Any], count: int
    ) -> None:
        """Construct ``count`` values into offsets ``[0, count)`` of ``region``.

        On failure the slots constructed so far are destroyed and the region
        is deallocated before the exception propagates.
        """
        constructed = 0
        try:
            for value in islice(values, count):
                self._mm.construct(region, constructed, value)
                constructed += 1
            if constructed != count:
                raise ValueError(
                    f"expected {count} values, input produced {constructed}"
                )
        except BaseException:
            for offset in range(constructed):
                self._mm.destroy(region, offset)
            self._mm.deallocate(region)
            raise

    def _adopt(self, region: np.ndarray, size: int) -> None:
        """Release the current region and take ``region`` holding ``size`` elements."""
        self._release_region()
        self._region = region
        self._mb_size = len(region)
        self._m_begin = 0
        self._m_end = size
        self._mutations += 1

    def _reallocate(self, new_capacity: int) -> None:
        """Move the elements into a fresh region with ``new_capacity``.

        The old region stays valid and owned until the new one is fully
        populated.
        """
        old_capacity = self.capacity()
        size = self.size()
        region = self._mm.allocate(new_capacity + SENTINEL_SLOTS)
        self._fill_region(region, iter(self), size)
        self._adopt(region, size)
        logger.debug(
            "Reallocated ring buffer: capacity %d -> %d (size %d)",
            old_capacity,
            new_capacity,
            size,
        )

    def _ensure_alloc_copy(self, count: int) -> None:
        if count > self.capacity():
            self._reallocate(count)

    def _ensure_alloc_copy_extra(self, count: int) -> None:
        """Grow, with headroom, so that ``count`` elements fit."""
        if count > self.capacity():
            grown = int(self._mb_size * self._config.growth_factor)
            self._ensure_alloc_copy(max(count, grown))

    def _relocate(self, src: int, dst: int) -> None:
        """Move the element in slot ``src`` into the empty slot ``dst``."""
        self._construct(dst, self._region[src])
        self._destroy(src)

    def _take_state(self, other: RingBuffer[T]) -> None:
        """Steal ``other``'s region and bookkeeping, leaving ``other`` empty."""
        self._region = other._region
        self._mb_size = other._mb_size
        self._m_begin = other._m_begin
        self._m_end = other._m_end
        other._region = None
        other._mb_size = other._m_begin = other._m_end = 0
        self._mutations += 1
        other._mutations += 1

    def _swap_state(self, other: RingBuffer[T]) -> None:
        self._region, other._region = other._region, self._region
        self._mb_size, other._mb_size = other._mb_size, self._mb_size
        self._m_begin, other._m_begin = other._m_begin, self._m_begin
        self._m_end, other._m_end = other._m_end, self._m_end
        self._mutations += 1
        other._mutations += 1

    # ------------------------------------------------------------------
    # Assignment
    # ------------------------------------------------------------------

    def assign(self, iterable: Iterable[T]) -> None:
        """Replace the contents with the elements of ``iterable``.

        The input is read in full before the current elements are touched,
        so it may be a view of this buffer. If a larger region is needed and
        cannot be allocated or filled, the buffer keeps its old contents.
        Invalidates all cursors.
        """
        values = list(iterable)
        count = len(values)
        if count > self.capacity():
            region = self._mm.allocate(count + SENTINEL_SLOTS)
            self._fill_region(region, iter(values), count)
            self._adopt(region, count)
            return

        self._destroy_all()
        self._insert_batch(0, values, count)

    def assign_n(self, count: int, value: T) -> None:
        """Replace the contents with ``count`` copies of ``value``.

        Invalidates all cursors.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if count > self.capacity():
            region = self._mm.allocate(count + SENTINEL_SLOTS)
            self._fill_region(region, iter([value] * count), count)
            self._adopt(region, count)
            return

        self._destroy_all()
        if self._region is None:
            return
        for offset in range(count):
            try:
                self._construct(offset, value)
            except BaseException:
                self._m_end = offset
                raise
        self._m_end = count

    def assign_values(self, *values: T) -> None:
        """Replace the contents with ``values``."""
        self.assign(values)

    def copy_assign(self, other: RingBuffer[T]) -> None:
        """Replace the contents with copies of ``other``'s elements.

        When the manager propagates on copy, the copy is built with
        ``other``'s manager before the current region is released.
        """
        if other is self:
            return
        propagate = self._mm.traits.propagate_on_copy_assignment
        if propagate and self._mm != other._mm:
            duplicate = type(self).copy_of(other, memory_manager=other._mm)
            self.clear()
            self._mm = duplicate._mm
            self._take_state(duplicate)
            return

        self.assign(other)
        if propagate:
            self._mm = other._mm

    def move_assign(self, other: RingBuffer[T]) -> None:
        """Take over ``other``'s contents, leaving ``other`` empty.

        The region changes hands when the manager may propagate on move or
        both managers are equal; otherwise the elements are moved one by one.
        """
        if other is self:
            return
        if self._mm.traits.propagate_on_move_assignment or self._mm == other._mm:
            self.clear()
            if self._mm.traits.propagate_on_move_assignment:
                self._mm = other._mm
            self._take_state(other)
            return

        logger.debug("Memory managers differ; moving %d elements", other.size())
        self.assign(list(other))
        other.clear()

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def at(self, index: int) -> T:
        """Return the element at logical ``index``.

        Raises:
            OutOfRangeError: If ``index`` is not in ``[0, size())``.
        """
        self._range_check(index)
        return self.unchecked_at(index)

    def unchecked_at(self, index: int) -> T:
        """Return the element at logical ``index`` without a range check."""
        return self._region[self._offset_of(index)]

    def __getitem__(self, index: int) -> T:
        return self.at(index)

    def __setitem__(self, index: int, value: T) -> None:
        self._range_check(index)
        offset = self._offset_of(index)
        old_value = self._region[offset]
        self._mm.destroy(self._region, offset)
        try:
            self._mm.construct(self._region, offset, value)
        except BaseException:
            self._mm.construct(self._region, offset, old_value)
            raise

    def front(self) -> T:
        """Return the first element."""
        if self.empty():
            raise IndexError("front of an empty ring buffer")
        return self.begin().value

    def back(self) -> T:
        """Return the last element."""
        if self.empty():
            raise IndexError("back of an empty ring buffer")
        return self.rbegin().value

    def get_memory_manager(self) -> MemoryManager:
        return self._mm

    # ------------------------------------------------------------------
    # Cursors
    # ------------------------------------------------------------------

    def begin(self) -> RadixCursor[T]:
        return self._it_of(self._m_begin)

    def end(self) -> RadixCursor[T]:
        return self._it_of(self._m_end)

    def cbegin(self) -> ConstRadixCursor[T]:
        return self._cit_of(self._m_begin)

    def cend(self) -> ConstRadixCursor[T]:
        return self._cit_of(self._m_end)

    def rbegin(self) -> ReverseRadixCursor[T]:
        return ReverseRadixCursor(self._it_of(self._abs_offset_of(self._m_end - 1)))

    def rend(self) -> ReverseRadixCursor[T]:
        return ReverseRadixCursor(self._it_of(self._abs_offset_of(self._m_begin - 1)))

    def crbegin(self) -> ReverseRadixCursor[T]:
        return ReverseRadixCursor(self._cit_of(self._abs_offset_of(self._m_end - 1)))

    def crend(self) -> ReverseRadixCursor[T]:
        return ReverseRadixCursor(self._cit_of(self._abs_offset_of(self._m_begin - 1)))

    def index_of(self, cursor: ConstRadixCursor[T] | ReverseRadixCursor[T]) -> int:
        """Return the logical index of the slot ``cursor`` points at."""
        if isinstance(cursor, ReverseRadixCursor):
            cursor = cursor.base()
        return self._idx_of(cursor.current)

    def __iter__(self) -> Iterator[T]:
        mutations = self._mutations
        it, end = self.cbegin(), self.cend()
        while it != end:
            yield it.value
            self._check_unchanged(mutations)
            it.advance()

    def __reversed__(self) -> Iterator[T]:
        mutations = self._mutations
        it, end = self.crbegin(), self.crend()
        while it != end:
            yield it.value
            self._check_unchanged(mutations)
            it.advance()

    def _check_unchanged(self, mutations: int) -> None:
        if self._mutations != mutations:
            raise RuntimeError("ring buffer mutated during iteration")

    # ------------------------------------------------------------------
    # Capacity
    # ------------------------------------------------------------------

    def empty(self) -> bool:
        return self.size() == 0

    def size(self) -> int:
        return pwrap(self._m_end - self._m_begin, self._mb_size)

    def __len__(self) -> int:
        return self.size()

    def max_size(self) -> int:
        """Largest capacity the memory manager can support."""
        return max(self._mm.max_size() - SENTINEL_SLOTS, 0)

    def capacity(self) -> int:
        return max(self._mb_size - SENTINEL_SLOTS, 0)

    def reserve(self, new_capacity: int) -> None:
        """Ensure room for ``new_capacity`` elements without further growth.

        No extra headroom is added. Invalidates all cursors if the capacity
        changes.
        """
        if new_capacity > self.capacity():
            self._ensure_alloc_copy(new_capacity)

    def shrink_to_fit(self) -> None:
        """Reduce the capacity to the current size.

        An empty buffer releases its region entirely. Invalidates all
        cursors if the capacity changes.
        """
        size = self.size()
        if size == 0:
            self._release_region()
        elif size < self.capacity():
            self._reallocate(size)

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Destroy all elements and release the region. Invalidates all cursors."""
        self._release_region()
        self._m_begin = self._m_end = 0

    def insert(self, pos: ConstRadixCursor[T] | int, value: T) -> RadixCursor[T]:
        """Insert ``value`` before ``pos``.

        Args:
            pos: cursor from this buffer or logical index in ``[0, size()]``.
            value: element to insert.

        Returns:
            Cursor to the inserted element.
        """
        return self._insert_batch(self._position_index(pos), (value,), 1)

    def insert_n(
        self, pos: ConstRadixCursor[T] | int, count: int, value: T
    ) -> RadixCursor[T]:
        """Insert ``count`` copies of ``value`` before ``pos``.

        Returns:
            Cursor to the first inserted element, or to ``pos`` if ``count``
            is zero.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return self._insert_batch(self._position_index(pos), [value] * count, count)

    def insert_range(
        self, pos: ConstRadixCursor[T] | int, iterable: Iterable[T]
    ) -> RadixCursor[T]:
        """Insert the elements of ``iterable`` before ``pos``, in order.

        Sized inputs are inserted in one shift-and-construct pass. Other
        iterables are consumed one element at a time, each inserted after
        the previous one. A lazy view of this buffer, such as a generator
        over it, fails with ``RuntimeError`` on that path once the first
        insertion has changed the buffer; pass a list instead.

        Returns:
            Cursor to the first inserted element, or to ``pos`` if nothing
            was inserted.
        """
        index = self._position_index(pos)
        if iterable is self:
            iterable = list(iterable)

        if isinstance(iterable, Sized):
            return self._insert_batch(index, iterable, len(iterable))

        first = index
        for value in iterable:
            self._insert_batch(index, (value,), 1)
            index += 1
        return self._it_of(self._offset_of(first))

    def insert_values(
        self, pos: ConstRadixCursor[T] | int, *values: T
    ) -> RadixCursor[T]:
        """Insert ``values`` before ``pos``, in order."""
        return self._insert_batch(self._position_index(pos), values, len(values))

    def _insert_batch(
        self, index: int, values: Iterable[T], count: int
    ) -> RadixCursor[T]:
        """Open a gap of ``count`` slots at logical ``index`` and fill it.

        Whichever side of ``index`` holds fewer elements is shifted. If
        constructing a value fails, the constructed values are destroyed and
        the shift is undone before the exception propagates.
        """
        if count == 0:
            return self._it_of(self._offset_of(index))

        size = self.size()
        expand_forward = index < size - index
        self._ensure_alloc_copy_extra(size + count)

        if expand_forward:
            old_begin = self._m_begin
            new_begin = self._abs_offset_of(old_begin - count)
            for i in range(index):
                self._relocate(
                    self._abs_offset_of(old_begin + i),
                    self._abs_offset_of(new_begin + i),
                )
            self._m_begin = new_begin
        else:
            for i in range(size - 1, index - 1, -1):
                self._relocate(self._offset_of(i), self._offset_of(i + count))
            self._m_end = self._abs_offset_of(self._m_end + count)

        constructed = 0
        try:
            for value in islice(values, count):
                self._construct(self._offset_of(index + constructed), value)
                constructed += 1
            if constructed != count:
                raise ValueError(
                    f"expected {count} values, input produced {constructed}"
                )
        except BaseException:
            self._undo_insert(index, count, constructed, size, expand_forward)
            raise

        return self._it_of(self._offset_of(index))

    def _undo_insert(
        self,
        index: int,
        count: int,
        constructed: int,
        old_size: int,
        expand_forward: bool,
    ) -> None:
        """Close a partially filled gap opened by ``_insert_batch``."""
        for j in range(constructed):
            self._destroy(self._offset_of(index + j))

        if expand_forward:
            new_begin = self._m_begin
            old_begin = self._abs_offset_of(new_begin + count)
            for i in range(index - 1, -1, -1):
                self._relocate(
                    self._abs_offset_of(new_begin + i),
                    self._abs_offset_of(old_begin + i),
                )
            self._m_begin = old_begin
        else:
            for i in range(index, old_size):
                self._relocate(self._offset_of(i + count), self._offset_of(i))
            self._m_end = self._abs_offset_of(self._m_end - count)

    def push_front(self, value: T) -> None:
        """Insert ``value`` before the first element."""
        self._ensure_alloc_copy_extra(self.size() + 1)
        new_begin = self._abs_offset_of(self._m_begin - 1)
        self._construct(new_begin, value)
        self._m_begin = new_begin

    def emplace_front(self, *args: Any, **kwargs: Any) -> T:
        """Build an element from ``args`` and insert it before the first element.

        Returns:
            The new first element.
        """
        self.push_front(self._default_value(*args, **kwargs))
        return self.front()

    def pop_front(self) -> T:
        """Remove and return the first element.

        Raises:
            IndexError: If the buffer is empty.
        """
        if self.empty():
            raise IndexError("pop from an empty ring buffer")
        value = self.front()
        self._destroy(self._m_begin)
        self._m_begin = self._abs_offset_of(self._m_begin + 1)
        return value

    def push_back(self, value: T) -> None:
        """Insert ``value`` after the last element."""
        self._ensure_alloc_copy_extra(self.size() + 1)
        self._construct(self._m_end, value)
        self._m_end = self._abs_offset_of(self._m_end + 1)

    def emplace_back(self, *args: Any, **kwargs: Any) -> T:
        """Build an element from ``args`` and insert it after the last element.

        Returns:
            The new last element.
        """
        self.push_back(self._default_value(*args, **kwargs))
        return self.back()

    def pop_back(self) -> T:
        """Remove and return the last element.

        Raises:
            IndexError: If the buffer is empty.
        """
        if self.empty():
            raise IndexError("pop from an empty ring buffer")
        new_end = self._abs_offset_of(self._m_end - 1)
        value = self._region[new_end]
        self._destroy(new_end)
        self._m_end = new_end
        return value

    def resize(self, count: int, value: T = _MISSING) -> None:
        """Grow or shrink the buffer to hold exactly ``count`` elements.

        New elements are copies of ``value`` or, without one, default values
        from the element factory. Invalidates all cursors if the capacity
        changes.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        size = self.size()
        if count > size:
            self._ensure_alloc_copy_extra(count)
            old_end = self._m_end
            try:
                for _ in range(count - size):
                    fill = self._default_value() if value is _MISSING else value
                    self._construct(self._m_end, fill)
                    self._m_end = self._abs_offset_of(self._m_end + 1)
            except BaseException:
                self._destroy_range(old_end, self._m_end)
                self._m_end = old_end
                raise
        elif count < size:
            new_end = self._offset_of(count)
            self._destroy_range(new_end, self._m_end)
            self._m_end = new_end

    def swap(self, other: RingBuffer[T]) -> None:
        """Exchange contents with ``other``. Invalidates all cursors of both.

        Regions change hands when the managers may propagate on swap or are
        equal; otherwise each buffer rebuilds the other's elements in a
        region from its own manager.
        """
        if other is self:
            return
        if self._mm.traits.propagate_on_swap:
            self._mm, other._mm = other._mm, self._mm
            self._swap_state(other)
            return
        if self._mm == other._mm:
            self._swap_state(other)
            return

        logger.debug(
            "Memory managers differ; swapping %d and %d elements element-wise",
            self.size(),
            other.size(),
        )
        mine = type(self).copy_of(other, memory_manager=self._mm)
        try:
            theirs = type(self).copy_of(self, memory_manager=other._mm)
        except BaseException:
            mine.clear()
            raise
        self._swap_state(mine)
        other._swap_state(theirs)
        mine.clear()
        theirs.clear()

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RingBuffer):
            return NotImplemented
        if self.size() != other.size():
            return False
        return all(bool(a == b) for a, b in zip(self, other))

    __hash__ = None

    def __enter__(self) -> RingBuffer[T]:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r}, capacity={self.capacity()})"
