"""Memory managers that hand out backing regions for ring buffers.

A memory manager owns the policy for acquiring and releasing regions and
for bringing individual slots to life. Ring buffers never write into a
region directly; every element enters a slot through ``construct`` and
leaves it through ``destroy``.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

import numpy as np
from numpy.typing import DTypeLike
from pydantic import BaseModel, ConfigDict

from radixring.exceptions import AllocationError

logger = logging.getLogger(__name__)


class AllocatorTraits(BaseModel):
    """Per-manager-class rules for copy, move and swap of owning containers.

    Attributes:
        propagate_on_copy_assignment: copy-assigning a container also copies
            the source's memory manager.
        propagate_on_move_assignment: move-assigning a container takes over
            the source's memory manager together with its region.
        propagate_on_swap: swapping two containers also swaps their managers.
        is_always_equal: any two managers of the class can release each
            other's regions.
    """

    model_config = ConfigDict(frozen=True)

    propagate_on_copy_assignment: bool = False
    propagate_on_move_assignment: bool = True
    propagate_on_swap: bool = False
    is_always_equal: bool = True


class MemoryManager:
    """Stateless heap memory manager backed by numpy arrays.

    Regions are one-dimensional arrays of ``dtype``. With the default
    ``object`` dtype any Python value can be stored.
    """

    traits: ClassVar[AllocatorTraits] = AllocatorTraits()

    def __init__(self, dtype: DTypeLike = object) -> None:
        """Initialize the memory manager.

        Args:
            dtype: numpy dtype of the slots in every region handed out.
        """
        self.dtype = np.dtype(dtype)

    @property
    def holds_objects(self) -> bool:
        """Whether slots store Python object references."""
        return self.dtype == np.dtype(object)

    def max_size(self) -> int:
        """Return the largest region, in slots, this manager can describe."""
        return int(np.iinfo(np.intp).max) // max(self.dtype.itemsize, 1)

    def allocate(self, size: int) -> np.ndarray:
        """Acquire an uninitialised region of ``size`` slots.

        Args:
            size: number of slots to allocate.

        Returns:
            The new region.

        Raises:
            AllocationError: If the region is larger than ``max_size`` or
                the underlying allocation fails.
        """
        if size < 0 or size > self.max_size():
            raise AllocationError(size, "size exceeds max_size")
        try:
            region = np.empty(size, dtype=self.dtype)
        except MemoryError as exc:
            logger.debug("numpy could not allocate %d slots", size)
            raise AllocationError(size, str(exc)) from exc
        return region

    def deallocate(self, region: np.ndarray) -> None:
        """Release a region previously returned by ``allocate``.

        Every live slot must have been destroyed beforehand. The array itself
        is reclaimed by the garbage collector once unreferenced.
        """

    def construct(self, region: np.ndarray, offset: int, value: Any) -> None:
        """Bring slot ``offset`` of ``region`` to life holding ``value``."""
        region[offset] = value

    def destroy(self, region: np.ndarray, offset: int) -> None:
        """End the lifetime of the element in slot ``offset`` of ``region``."""
        if self.holds_objects:
            region[offset] = None

    def select_on_copy(self) -> MemoryManager:
        """Return the manager a copy of a container should use."""
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemoryManager):
            return NotImplemented
        if self is other:
            return True
        return (
            self.traits.is_always_equal
            and type(self) is type(other)
            and self.dtype == other.dtype
        )

    def __hash__(self) -> int:
        if self.traits.is_always_equal:
            return hash((type(self), self.dtype))
        return id(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dtype={self.dtype})"


class BoundedMemoryManager(MemoryManager):
    """Memory manager with a fixed slot budget shared by all its regions.

    Regions from one bounded manager may only be released back to that same
    manager, so containers using it never hand regions to a different
    manager; move and swap fall back to element-wise transfer instead.
    """

    traits: ClassVar[AllocatorTraits] = AllocatorTraits(
        propagate_on_copy_assignment=False,
        propagate_on_move_assignment=False,
        propagate_on_swap=False,
        is_always_equal=False,
    )

    def __init__(self, limit: int, dtype: DTypeLike = object) -> None:
        """Initialize the bounded memory manager.

        Args:
            limit: total number of slots that may be outstanding at once.
            dtype: numpy dtype of the slots in every region handed out.

        Raises:
            ValueError: If ``limit`` is negative.
        """
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        super().__init__(dtype)
        self.limit = limit
        self.in_use = 0

    def max_size(self) -> int:
        """Return the budget; no single region can exceed it."""
        return self.limit

    def allocate(self, size: int) -> np.ndarray:
        """Acquire a region, charging it against the budget.

        Raises:
            AllocationError: If the budget cannot cover ``size`` more slots.
        """
        if self.in_use + size > self.limit:
            logger.debug(
                "Bounded allocation of %d slots refused (%d/%d in use)",
                size,
                self.in_use,
                self.limit,
            )
            raise AllocationError(
                size, f"budget exhausted ({self.in_use}/{self.limit} in use)"
            )
        region = super().allocate(size)
        self.in_use += size
        return region

    def deallocate(self, region: np.ndarray) -> None:
        """Release a region and return its slots to the budget."""
        self.in_use -= len(region)
        super().deallocate(region)

    def select_on_copy(self) -> MemoryManager:
        """Copies share the budget of the source."""
        return self

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(limit={self.limit}, in_use={self.in_use}, "
            f"dtype={self.dtype})"
        )
