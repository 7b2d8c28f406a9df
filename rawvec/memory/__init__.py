"""
Memory management layer for rawvec.

This package provides modular memory management including:
- Raw slot-block allocation with error handling (heap.py)
- Arena, the exclusive owner of one raw block (arena.py)
- Element lifetime hooks and slot construction/destruction (lifetimes.py)
- Transactional relocation into replacement storage (relocation.py)
"""
from rawvec.memory.arena import Arena
from rawvec.memory.lifetimes import (
    DEFAULT_ELEMENT_TYPE,
    ElementType,
    MOVED_FROM,
    UNINITIALIZED,
)
from rawvec.memory.relocation import StorageTransaction, Strategy, select_strategy

__all__ = [
    'Arena',
    'DEFAULT_ELEMENT_TYPE',
    'ElementType',
    'MOVED_FROM',
    'UNINITIALIZED',
    'StorageTransaction',
    'Strategy',
    'select_strategy',
]
