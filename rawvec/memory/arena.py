"""
Arena: exclusive owner of one raw block of slots.

The arena knows its capacity and nothing about which slots hold live
values. Releasing it never runs element hooks; the owner destroys live
elements before the arena (or the block it holds) is discarded.
"""
from __future__ import annotations
from typing import Any, List, Optional

from rawvec.internals.errors import raise_error
from rawvec.memory import heap


class Arena:
    """Uninitialized storage for a fixed number of element slots.

    Ownership moves with transfer() or swap(); copying is refused because
    duplicating a partially-live block would duplicate ownership of the
    values inside it.
    """

    __slots__ = ("_buffer", "_capacity")

    def __init__(self, capacity: int = 0) -> None:
        """Allocate raw storage for ``capacity`` slots.

        Args:
            capacity: Number of slots. 0 allocates nothing.

        Raises:
            AllocationError: If the block cannot be obtained.
        """
        self._buffer: Optional[List[Any]] = heap.allocate(capacity)
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def address(self) -> Optional[List[Any]]:
        """The owned block, or None when the arena is empty."""
        return self._buffer

    def __getitem__(self, index: int) -> Any:
        if __debug__:
            self._check_slot(index)
        return self._buffer[index]

    def __setitem__(self, index: int, value: Any) -> None:
        if __debug__:
            self._check_slot(index)
        self._buffer[index] = value

    def _check_slot(self, index: int) -> None:
        if not 0 <= index < self._capacity:
            raise_error("RV2002", index=index, capacity=self._capacity)

    def swap(self, other: Arena) -> None:
        """Exchange blocks and capacities with another arena. O(1)."""
        self._buffer, other._buffer = other._buffer, self._buffer
        self._capacity, other._capacity = other._capacity, self._capacity

    def transfer(self) -> Arena:
        """Move ownership of the block into a new arena and leave this one empty."""
        moved = Arena()
        moved.swap(self)
        return moved

    def release(self) -> None:
        """Return the block to the heap. No-op on an empty arena."""
        if self._buffer is not None:
            heap.deallocate(self._buffer)
        self._buffer = None
        self._capacity = 0

    def __copy__(self) -> Arena:
        raise_error("RV3001")

    def __deepcopy__(self, memo: dict) -> Arena:
        raise_error("RV3001")

    def __reduce_ex__(self, protocol: int) -> Any:
        raise_error("RV3001")

    def __repr__(self) -> str:
        return f"Arena(capacity={self._capacity})"
