"""Unit tests for the wrap-around cursors.

Covers construction, stepping with wrap in both directions, dereference,
comparison, read-only narrowing, and the invariant self-check.
"""

from __future__ import annotations

import numpy as np
import pytest

from radixring.cursor import ConstRadixCursor, RadixCursor, ReverseRadixCursor


@pytest.fixture
def region() -> np.ndarray:
    values = np.empty(4, dtype=object)
    values[:] = [1, 2, 3, 4]
    return values


# =============================================================================
# Construction and bounds
# =============================================================================


def test_default_cursor_is_unassociated_and_valid() -> None:
    """A default cursor has an empty range and satisfies its invariants."""
    cursor: RadixCursor[int] = RadixCursor()

    assert cursor.region is None
    assert cursor.range_empty()
    assert cursor.invariants()
    assert (cursor.front, cursor.back, cursor.current) == (0, 0, 0)


def test_constructor_keeps_triple(region) -> None:
    """Bounds and position are exposed exactly as supplied."""
    cursor = RadixCursor(region, 0, 4, 1)

    assert cursor.front == 0
    assert cursor.back == 4
    assert cursor.current == 1
    assert cursor.get() == 1
    assert not cursor.range_empty()
    assert cursor.invariants()


def test_empty_range_requires_all_positions_equal(region) -> None:
    """An empty range is only valid when front, back and current coincide."""
    assert RadixCursor(region, 2, 2, 2).invariants()
    assert not RadixCursor(region, 2, 2, 1).invariants()


def test_invariants_reject_inverted_bounds(region) -> None:
    """back < front is never a valid range."""
    assert not RadixCursor(region, 3, 1, 2).invariants()


def test_invariants_reject_position_outside_range(region) -> None:
    """current must lie in [front, back)."""
    assert not RadixCursor(region, 0, 4, 4).invariants()
    assert not RadixCursor(region, 1, 4, 0).invariants()


# =============================================================================
# Stepping
# =============================================================================


def test_advance_wraps_from_last_slot_to_front(region) -> None:
    """Advancing past the last slot continues at front."""
    cursor = RadixCursor(region, 0, 4, 3)

    cursor.advance()

    assert cursor.current == 0
    assert cursor.value == 1


def test_retreat_wraps_from_front_to_last_slot(region) -> None:
    """Retreating past front continues at the last slot."""
    cursor = RadixCursor(region, 0, 4, 0)

    cursor.retreat()

    assert cursor.current == 3
    assert cursor.value == 4


def test_prefix_forms_return_the_cursor_itself(region) -> None:
    """Verify advance and retreat return the same cursor so they can chain."""
    cursor = RadixCursor(region, 0, 4, 0)

    assert cursor.advance() is cursor
    assert cursor.retreat() is cursor


def test_postfix_forms_return_previous_position(region) -> None:
    """post_advance/post_retreat hand back a copy from before the step."""
    cursor = RadixCursor(region, 0, 4, 1)

    before = cursor.post_advance()
    assert before.current == 1
    assert cursor.current == 2

    before = cursor.post_retreat()
    assert before.current == 2
    assert cursor.current == 1


def test_advance_then_retreat_cancel_out(region) -> None:
    """Verify one step forward and one back is the identity."""
    cursor = RadixCursor(region, 0, 4, 0)
    start = cursor.copy()

    cursor.advance().retreat()

    assert cursor == start


@pytest.mark.parametrize("start", [0, 1, 2, 3])
def test_full_cycle_returns_to_start(region, start) -> None:
    """Advancing by the range length from any slot lands on that slot."""
    cursor = RadixCursor(region, 0, 4, start)

    for _ in range(4):
        cursor.advance()
    assert cursor.current == start

    for _ in range(4):
        cursor.retreat()
    assert cursor.current == start


def test_many_retreats_undo_many_advances(region) -> None:
    """Verify stepping is reversible across several wraps."""
    cursor = RadixCursor(region, 0, 4, 2)

    for _ in range(11):
        cursor.advance()
    for _ in range(11):
        cursor.retreat()

    assert cursor.current == 2


def test_stepping_an_empty_range_is_a_noop(region) -> None:
    """Verify an empty range never moves and stays valid."""
    cursor = RadixCursor(region, 1, 1, 1)

    cursor.advance()
    cursor.retreat()

    assert cursor.current == 1
    assert cursor.invariants()


def test_stepping_respects_non_zero_front(region) -> None:
    """Wrap goes to the range's front, not to slot zero."""
    cursor = RadixCursor(region, 1, 3, 2)

    cursor.advance()
    assert cursor.current == 1

    cursor.retreat()
    assert cursor.current == 2


def test_next_and_prev_move_with_wrap_without_mutating(region) -> None:
    """Verify next and prev return moved copies and leave the cursor alone."""
    cursor = RadixCursor(region, 0, 4, 1)

    assert cursor.next(5).current == 2
    assert cursor.prev(3).current == 2
    assert cursor.next(-1).current == 0
    assert cursor.current == 1


# =============================================================================
# Access and comparison
# =============================================================================


def test_value_reads_current_slot(region) -> None:
    """Verify value reads the slot under the cursor."""
    cursor = RadixCursor(region, 0, 4, 2)

    assert cursor.value == 3


def test_mutable_cursor_writes_through(region) -> None:
    """Verify assigning value writes into the region."""
    cursor = RadixCursor(region, 0, 4, 2)

    cursor.value = 30

    assert region[2] == 30


def test_const_cursor_cannot_write(region) -> None:
    """Verify a read-only cursor refuses writes and leaves the slot intact."""
    cursor = ConstRadixCursor(region, 0, 4, 2)

    with pytest.raises(AttributeError):
        cursor.value = 30  # type: ignore[misc]
    assert region[2] == 3


def test_equality_compares_positions_only(region) -> None:
    """Bounds are not part of equality."""
    a = RadixCursor(region, 0, 4, 2)
    b = RadixCursor(region, 1, 3, 2)
    c = RadixCursor(region, 0, 4, 1)

    assert a == b
    assert a != c


def test_mutable_and_const_cursors_compare(region) -> None:
    """Verify mutable and read-only cursors compare in both directions."""
    mutable = RadixCursor(region, 0, 4, 1)
    const = ConstRadixCursor(region, 0, 4, 1)

    assert mutable == const
    assert const == mutable


def test_copy_is_independent(region) -> None:
    """Verify a copy steps on its own and keeps the cursor type."""
    cursor = RadixCursor(region, 0, 4, 0)
    duplicate = cursor.copy()

    duplicate.advance()

    assert cursor.current == 0
    assert type(duplicate) is RadixCursor


# =============================================================================
# Narrowing
# =============================================================================


def test_as_const_preserves_bounds_and_position(region) -> None:
    """Verify narrowing keeps region, bounds and position."""
    cursor = RadixCursor(region, 0, 4, 3)

    narrowed = cursor.as_const()

    assert type(narrowed) is ConstRadixCursor
    assert (narrowed.front, narrowed.back, narrowed.get()) == (0, 4, 3)
    assert narrowed.region is region
    assert narrowed.invariants()


def test_as_const_on_empty_range_stays_valid() -> None:
    """Verify narrowing an empty cursor gives a valid empty cursor."""
    cursor: RadixCursor[int] = RadixCursor(None, 0, 0, 0)

    narrowed = cursor.as_const()

    assert narrowed.range_empty()
    assert narrowed.invariants()


def test_only_mutable_cursor_narrows() -> None:
    """Verify there is no conversion from read-only back to mutable."""
    assert not hasattr(ConstRadixCursor(), "as_const")


# =============================================================================
# Reverse adaptor
# =============================================================================


def test_reverse_cursor_walks_backwards_with_wrap(region) -> None:
    """Verify the reverse adaptor visits slots backwards and wraps."""
    cursor = ReverseRadixCursor(RadixCursor(region, 0, 4, 1))

    seen = []
    for _ in range(4):
        seen.append(cursor.value)
        cursor.advance()

    assert seen == [2, 1, 4, 3]
    assert cursor.get() == 1


def test_reverse_cursor_postfix_and_retreat(region) -> None:
    """Verify postfix and retreat on the reverse adaptor mirror the base."""
    cursor = ReverseRadixCursor(RadixCursor(region, 0, 4, 0))

    before = cursor.post_advance()

    assert before.get() == 0
    assert cursor.get() == 3
    assert cursor.retreat().get() == 0


def test_reverse_cursor_next_moves_backwards(region) -> None:
    """Verify next on the reverse adaptor moves the base backwards."""
    cursor = ReverseRadixCursor(RadixCursor(region, 0, 4, 1))

    assert cursor.next(2).get() == 3
    assert cursor.prev(1).get() == 2


def test_reverse_cursor_writes_only_through_mutable_base(region) -> None:
    """Verify writes pass through a mutable base and are refused on a narrowed one."""
    mutable = ReverseRadixCursor(RadixCursor(region, 0, 4, 0))
    mutable.value = 10
    assert region[0] == 10

    const = mutable.as_const()
    assert isinstance(const.base(), ConstRadixCursor)
    assert not isinstance(const.base(), RadixCursor)
    with pytest.raises(AttributeError):
        const.value = 11
    assert region[0] == 10


def test_reverse_cursor_equality_follows_base(region) -> None:
    """Verify reverse adaptors compare by their base position."""
    a = ReverseRadixCursor(RadixCursor(region, 0, 4, 2))
    b = ReverseRadixCursor(ConstRadixCursor(region, 0, 4, 2))

    assert a == b
    assert a != a.next()
