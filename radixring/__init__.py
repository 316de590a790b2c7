"""Growable ring buffer with wrap-around cursors."""

from radixring.config import RingBufferConfig, default_config, resolve_config
from radixring.cursor import ConstRadixCursor, RadixCursor, ReverseRadixCursor
from radixring.exceptions import AllocationError, OutOfRangeError, RingBufferError
from radixring.memory import AllocatorTraits, BoundedMemoryManager, MemoryManager
from radixring.ring_buffer import RingBuffer

__version__ = "0.1.0"

__all__ = [
    "AllocationError",
    "AllocatorTraits",
    "BoundedMemoryManager",
    "ConstRadixCursor",
    "MemoryManager",
    "OutOfRangeError",
    "RadixCursor",
    "ReverseRadixCursor",
    "RingBuffer",
    "RingBufferConfig",
    "RingBufferError",
    "default_config",
    "resolve_config",
]
