"""
Relocation of live elements into replacement storage.

This module handles:
- Choosing move or copy once per relocation batch, from the element type's
  capability flags
- Building replacement storage as a two-phase commit: nothing in the source
  arena is touched until commit(), and a failure tears down only what was
  built in the replacement
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, List, Optional

from rawvec.memory.arena import Arena
from rawvec.memory.lifetimes import ElementType, UNINITIALIZED, destroy_at, destroy_n, is_live

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    MOVE = "move"
    COPY = "copy"


def select_strategy(element_type: ElementType) -> Strategy:
    """Pick how live elements travel to new storage.

    Move when moving cannot fail, or when there is no copy to fall back on;
    otherwise copy, so a failing move can never destroy the only copy of a
    value.
    """
    if element_type.nothrow_move or not element_type.copyable:
        return Strategy.MOVE
    return Strategy.COPY


class StorageTransaction:
    """Replacement storage under construction.

    Usage:
        with StorageTransaction(element_type, storage, new_capacity) as txn:
            txn.emplace(pos, build)
            txn.relocate(0, pos, 0)
            txn.relocate(pos, size - pos, pos + 1)
            new_storage = txn.commit(size)

    An exception raised inside the block rolls the transaction back and
    propagates; the source arena is then exactly as it was.
    """

    def __init__(self, element_type: ElementType, source: Arena, capacity: int) -> None:
        self.element_type = element_type
        self.source = source
        self.strategy = select_strategy(element_type)
        self.target = Arena(capacity)
        # Slots of target holding values constructed by this transaction
        self._owned: List[int] = []
        self._committed = False

    def __enter__(self) -> StorageTransaction:
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Any) -> None:
        if exc_type is not None and not self._committed:
            self.rollback()

    def emplace(self, index: int, build: Callable[[], Any]) -> Any:
        """Construct the value returned by ``build`` into slot ``index`` of the target."""
        value = build()
        self.target[index] = value
        self._owned.append(index)
        return value

    def relocate(self, start: int, count: int, dest: int) -> None:
        """Carry ``count`` source slots from ``start`` into target slots from ``dest``."""
        element_type = self.element_type
        source, target = self.source, self.target
        move = self.strategy is Strategy.MOVE

        for offset in range(count):
            value = source[start + offset]
            if not is_live(value):
                target[dest + offset] = value
            elif move:
                target[dest + offset] = element_type.move(value)
            else:
                target[dest + offset] = element_type.copy(value)
                self._owned.append(dest + offset)

    def commit(self, count: int) -> Arena:
        """Vacate the ``count`` live source slots and hand over the target.

        Under COPY the originals are destroyed; under MOVE their values now
        live in the target, so the slots are only marked uninitialized.
        """
        if self.strategy is Strategy.COPY:
            destroy_n(self.element_type, self.source, 0, count)
        else:
            for index in range(count):
                self.source[index] = UNINITIALIZED
        self._committed = True
        logger.debug("relocated %d elements by %s into capacity %d",
                     count, self.strategy.value, self.target.capacity)
        return self.target

    def rollback(self) -> None:
        """Destroy every value this transaction constructed and release the target.

        Moved values are only dropped from the target; the source still holds them.
        """
        capacity = self.target.capacity
        for index in reversed(self._owned):
            destroy_at(self.element_type, self.target, index)
        self._owned.clear()
        self.target.release()
        logger.debug("rolled back relocation into capacity %d", capacity)
