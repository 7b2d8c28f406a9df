"""
DynamicArray: ordered, index-addressable, growable sequence over one Arena.

Slots [0, size) of the arena hold live elements in order; slots
[size, capacity) are uninitialized reserve. Every element is created,
copied, moved and destroyed through the array's ElementType, so the point
at which a value's lifetime ends is explicit and observable.

Growth:
- Capacity doubles on exhaustion, starting from 1 (amortized O(1) append)
- Reallocating operations build the replacement storage completely before
  adopting it; if an element hook raises, the array is left unchanged

Precondition checks on indices and positions run only when __debug__ is
set (they are stripped by ``python -O``).
"""
from __future__ import annotations
import copy
import logging
from collections.abc import Sequence
from functools import partial
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from rawvec.constants import GROWTH_FACTOR, INITIAL_CAPACITY
from rawvec.internals.errors import raise_error
from rawvec.memory.arena import Arena
from rawvec.memory.lifetimes import (
    DEFAULT_ELEMENT_TYPE,
    ElementType,
    MOVED_FROM,
    construct_n,
    copy_assign_at,
    copy_construct_n,
    destroy_at,
    destroy_n,
    is_live,
    move_assign_at,
)
from rawvec.memory.relocation import StorageTransaction

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DynamicArray(Sequence, Generic[T]):
    """Growable contiguous array with explicit element lifetimes."""

    def __init__(self, size: int = 0, element_type: Optional[ElementType] = None) -> None:
        """Create an array of ``size`` default-constructed elements.

        Args:
            size: Number of elements. 0 creates an empty array with no storage.
            element_type: Lifecycle hooks for the elements. Arrays created
                without one share DEFAULT_ELEMENT_TYPE.

        Raises:
            AllocationError: If storage for ``size`` slots cannot be obtained.
        """
        self._element_type = element_type if element_type is not None else DEFAULT_ELEMENT_TYPE
        self._storage = Arena(size)
        self._size = 0
        try:
            construct_n(self._element_type, self._storage, 0, size)
        except BaseException:
            self._storage.release()
            raise
        self._size = size

    @classmethod
    def with_capacity(cls, capacity: int, element_type: Optional[ElementType] = None) -> DynamicArray[T]:
        """Create an empty array with room for ``capacity`` elements."""
        array = cls(element_type=element_type)
        array.reserve(capacity)
        return array

    @classmethod
    def copy_of(cls, other: DynamicArray[T]) -> DynamicArray[T]:
        """Copy-construct: capacity exactly ``len(other)``, elements copied in order.

        The result shares no storage with ``other``.
        """
        array = cls(element_type=other._element_type)
        storage = Arena(other._size)
        try:
            copy_construct_n(other._element_type, other._storage, 0, other._size, storage, 0)
        except BaseException:
            storage.release()
            raise
        array._storage = storage
        array._size = other._size
        return array

    @classmethod
    def take(cls, other: DynamicArray[T]) -> DynamicArray[T]:
        """Move-construct: adopt ``other``'s storage and leave it empty."""
        array = cls(element_type=other._element_type)
        array._storage = other._storage.transfer()
        array._size = other._size
        other._size = 0
        return array

    def __copy__(self) -> DynamicArray[T]:
        return type(self).copy_of(self)

    def __deepcopy__(self, memo: dict) -> DynamicArray[T]:
        """Deep-copy the elements into a new array of capacity ``len(self)``.

        The element type is shared, not copied.
        """
        array = type(self)(element_type=self._element_type)
        memo[id(self)] = array
        storage = Arena(self._size)
        built = 0
        try:
            for index in range(self._size):
                value = self._storage[index]
                storage[index] = copy.deepcopy(value, memo) if is_live(value) else value
                built += 1
        except BaseException:
            destroy_n(self._element_type, storage, 0, built)
            storage.release()
            raise
        array._storage = storage
        array._size = self._size
        return array

    # ------------------------------------------------------------------
    # Assignment
    # ------------------------------------------------------------------

    def assign(self, other: DynamicArray[T]) -> None:
        """Copy-assign: replace the contents with copies of ``other``'s elements.

        When ``other`` does not fit the current capacity, a complete copy is
        built first and swapped in, so a failing copy leaves this array
        untouched. Otherwise the storage is reused: the common prefix is
        copy-assigned, then surplus elements are destroyed or missing ones
        copy-constructed.
        """
        if other is self:
            return
        self._require_same_type(other)

        if other._size > self.capacity:
            replacement = type(self).copy_of(other)
            self.swap(replacement)
            replacement.destroy()
            return

        element_type = self._element_type
        common = min(self._size, other._size)
        for index in range(common):
            copy_assign_at(element_type, self._storage, index, other._storage[index])

        if other._size < self._size:
            destroy_n(element_type, self._storage, other._size, self._size - other._size)
        else:
            copy_construct_n(element_type, other._storage, self._size,
                             other._size - self._size, self._storage, self._size)
        self._size = other._size

    def move_assign(self, other: DynamicArray[T]) -> None:
        """Move-assign: exchange storage and size with ``other``. O(1)."""
        if other is self:
            return
        self.swap(other)

    def swap(self, other: DynamicArray[T]) -> None:
        """Exchange storage and size with ``other`` without touching elements."""
        self._require_same_type(other)
        self._storage.swap(other._storage)
        self._size, other._size = other._size, self._size

    def _require_same_type(self, other: DynamicArray[T]) -> None:
        if other._element_type is not self._element_type:
            raise_error("RV3002", left=self._element_type, right=other._element_type)

    # ------------------------------------------------------------------
    # Capacity
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._storage.capacity

    def __len__(self) -> int:
        return self._size

    def reserve(self, new_capacity: int) -> None:
        """Ensure room for ``new_capacity`` elements.

        No-op when the capacity already suffices: the storage is not replaced.
        """
        if new_capacity <= self.capacity:
            return
        self._reallocate(new_capacity)

    def resize(self, new_size: int) -> None:
        """Destroy trailing elements or append default-constructed ones."""
        if new_size == self._size:
            return
        if new_size < 0:
            raise_error("RV2005", count=new_size)
        if new_size < self._size:
            destroy_n(self._element_type, self._storage, new_size, self._size - new_size)
        else:
            self.reserve(new_size)
            construct_n(self._element_type, self._storage, self._size, new_size - self._size)
        self._size = new_size

    def shrink_to_fit(self) -> None:
        """Reduce capacity to the current size. Releases storage when empty."""
        if self.capacity == self._size:
            return
        if self._size == 0:
            self._storage.release()
            return
        self._reallocate(self._size)

    def clear(self) -> None:
        """Destroy all elements, keeping the capacity."""
        destroy_n(self._element_type, self._storage, 0, self._size)
        self._size = 0

    def destroy(self) -> None:
        """Destroy all elements and release the storage.

        The array remains usable as an empty array.
        """
        self.clear()
        self._storage.release()

    def __enter__(self) -> DynamicArray[T]:
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Any) -> None:
        self.destroy()

    def _reallocate(self, new_capacity: int) -> None:
        logger.debug("reallocating from capacity %d to %d (size %d)",
                     self.capacity, new_capacity, self._size)
        with StorageTransaction(self._element_type, self._storage, new_capacity) as txn:
            txn.relocate(0, self._size, 0)
            self._adopt(txn.commit(self._size))

    def _adopt(self, storage: Arena) -> None:
        self._storage.swap(storage)
        storage.release()

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def push_back(self, value: T, move: bool = False) -> None:
        """Append a copy of ``value`` (or ``value`` itself moved in, with move=True)."""
        self._emplace(self._size, self._builder(value, move))

    def emplace_back(self, *args: Any, **kwargs: Any) -> T:
        """Construct a new last element from arguments and return it."""
        pos = self._emplace(self._size, partial(self._element_type.construct, *args, **kwargs))
        return self._storage[pos]

    def extend(self, values: Iterable[T]) -> None:
        for value in values:
            self.push_back(value)

    def pop_back(self) -> None:
        """Destroy the last element. No-op on an empty array."""
        if self._size == 0:
            return
        self._size -= 1
        destroy_at(self._element_type, self._storage, self._size)

    def insert(self, pos: int, value: T, move: bool = False) -> int:
        """Insert a copy of ``value`` before position ``pos``.

        Returns:
            The position of the inserted element.
        """
        return self._emplace(pos, self._builder(value, move))

    def emplace(self, pos: int, *args: Any, **kwargs: Any) -> int:
        """Construct a new element from arguments at position ``pos``.

        Returns:
            The position of the inserted element.
        """
        return self._emplace(pos, partial(self._element_type.construct, *args, **kwargs))

    def erase(self, pos: int) -> int:
        """Remove the element at ``pos``, closing the gap.

        Returns:
            ``pos``, now the position of the element that followed the erased one.
        """
        if __debug__:
            if not 0 <= pos < self._size:
                raise_error("RV2004", pos=pos, size=self._size)
        for index in range(pos, self._size - 1):
            move_assign_at(self._element_type, self._storage, index, index + 1)
        self.pop_back()
        return pos

    def _builder(self, value: T, move: bool) -> Callable[[], T]:
        element_type = self._element_type
        return partial(element_type.move if move else element_type.copy, value)

    def _emplace(self, pos: int, build: Callable[[], T]) -> int:
        if __debug__:
            if not 0 <= pos <= self._size:
                raise_error("RV2003", pos=pos, size=self._size)

        if self._size == self.capacity:
            self._emplace_with_growth(pos, build)
        elif pos == self._size:
            self._storage[pos] = build()
        else:
            self._emplace_shifting(pos, build)
        self._size += 1
        return pos

    def _emplace_with_growth(self, pos: int, build: Callable[[], T]) -> None:
        size = self._size
        new_capacity = INITIAL_CAPACITY if size == 0 else self.capacity * GROWTH_FACTOR
        logger.debug("growing from capacity %d to %d", self.capacity, new_capacity)

        with StorageTransaction(self._element_type, self._storage, new_capacity) as txn:
            txn.emplace(pos, build)
            txn.relocate(0, pos, 0)
            txn.relocate(pos, size - pos, pos + 1)
            self._adopt(txn.commit(size))

    def _emplace_shifting(self, pos: int, build: Callable[[], T]) -> None:
        element_type = self._element_type
        storage = self._storage
        last = self._size - 1

        value = build()
        storage[last + 1] = element_type.move(storage[last])
        storage[last] = MOVED_FROM
        for index in range(last, pos, -1):
            move_assign_at(element_type, storage, index, index - 1)

        # Slot pos is MOVED_FROM now; the temporary moves straight in.
        storage[pos] = element_type.move(value)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def __getitem__(self, index):
        """Return the element at ``index``, or a list of the elements in a slice."""
        if isinstance(index, slice):
            return [self._storage[i] for i in range(*index.indices(self._size))]
        if __debug__:
            self._check_index(index)
        return self._storage[index]

    def __setitem__(self, index: int, value: T) -> None:
        """Copy-assign ``value`` over the element at ``index``."""
        if __debug__:
            self._check_index(index)
        copy_assign_at(self._element_type, self._storage, index, value)

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int):
            raise TypeError(f"array indices must be integers, not {type(index).__name__}")
        if not 0 <= index < self._size:
            raise_error("RV2001", index=index, size=self._size)

    def get(self, index: int, default: Optional[T] = None) -> Optional[T]:
        """Return the element at ``index``, or ``default`` outside [0, size)."""
        if 0 <= index < self._size:
            return self._storage[index]
        return default

    def __iter__(self) -> Iterator[T]:
        for index in range(self._size):
            yield self._storage[index]

    def __reversed__(self) -> Iterator[T]:
        for index in range(self._size - 1, -1, -1):
            yield self._storage[index]

    def begin(self) -> int:
        return 0

    def end(self) -> int:
        return self._size

    @property
    def element_type(self) -> ElementType:
        return self._element_type

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynamicArray):
            return NotImplemented
        return self._size == other._size and all(a == b for a, b in zip(self, other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r}, capacity={self.capacity})"
