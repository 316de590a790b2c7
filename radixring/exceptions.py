"""Exception classes for ring buffer operations."""


class RingBufferError(Exception):
    """Base error for ring buffer operations."""


class OutOfRangeError(RingBufferError, IndexError):
    """Raised when a checked access uses an index outside the logical range."""

    def __init__(self, index: int, size: int):
        """Initialize OutOfRangeError.

        Args:
            index: The offending logical index.
            size: Number of elements in the buffer at the time of access.
        """
        super().__init__(f"index {index} out of range for ring buffer of size {size}")
        self.index = index
        self.size = size


class AllocationError(RingBufferError, MemoryError):
    """Raised when a memory manager cannot provide a backing region."""

    def __init__(self, requested: int, reason: str = ""):
        """Initialize AllocationError.

        Args:
            requested: Number of slots that were requested.
            reason: Optional detail from the memory manager.
        """
        message = f"failed to allocate {requested} slots"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.requested = requested
