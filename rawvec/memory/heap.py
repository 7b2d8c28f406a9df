"""
Raw slot-block allocation with error handling.

Provides allocate/deallocate wrappers with error checking for allocation
failures. A block is a fixed-length list of slots, every slot UNINITIALIZED.
"""
from __future__ import annotations
import logging
from typing import List, Optional, Any

from rawvec.constants import MAX_SLOTS
from rawvec.internals.errors import raise_error
from rawvec.memory.lifetimes import UNINITIALIZED

logger = logging.getLogger(__name__)


def allocate(count: int) -> Optional[List[Any]]:
    """Allocate a raw block of ``count`` uninitialized slots.

    Args:
        count: Number of slots to reserve.

    Returns:
        The new block, or None when ``count`` is 0 (no allocation is made).

    Raises:
        PreconditionError: RV2005 if count is not a non-negative integer.
        AllocationError: RV1001 if count exceeds MAX_SLOTS, RV1002 if the
            interpreter cannot provide the memory.
    """
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise_error("RV2005", count=count)
    if count == 0:
        return None
    if count > MAX_SLOTS:
        raise_error("RV1001", count=count, limit=MAX_SLOTS)

    try:
        block = [UNINITIALIZED] * count
    except (MemoryError, OverflowError) as e:
        logger.debug("allocation of %d slots failed: %s", count, e)
        raise_error("RV1002", count=count)

    logger.debug("allocated block of %d slots", count)
    return block


def deallocate(block: List[Any]) -> None:
    """Return a block obtained from allocate().

    Contained values are dropped without running any element hook; callers
    destroy live elements first. Stale references to the block see it empty.

    Args:
        block: The block to release.
    """
    block.clear()
