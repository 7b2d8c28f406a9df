"""Storage and growth constants.

This module provides constants for:
- Growth policy of DynamicArray
- Allocation ceiling of the slot heap
"""
import struct
import sys

# ============================================================================
# Growth Policy
# ============================================================================
# Capacity doubles on every exhaustion event, starting from 1 on the
# first allocation (amortized O(1) append, like Rust Vec / C++ vector).

INITIAL_CAPACITY = 1  # capacity after the first growth of an empty array
GROWTH_FACTOR = 2     # multiplier applied when size == capacity


# ============================================================================
# Allocation Ceiling
# ============================================================================
# A slot is one object reference. Requests above this limit fail with
# RV1001 before the interpreter is asked for memory.

SLOT_SIZE_BYTES = struct.calcsize("P")
MAX_SLOTS = sys.maxsize // SLOT_SIZE_BYTES
