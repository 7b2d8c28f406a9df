"""Shared fixtures: an element type that records every lifetime event."""
from typing import List, Optional

import pytest

from rawvec import DynamicArray, ElementType


class HookFailure(Exception):
    """Raised by TrackingType when a copy or move is scheduled to fail."""


class Tracked:
    """Element value with identity, compared by payload."""

    def __init__(self, value: int = 0) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Tracked) and other.value == self.value

    __hash__ = None

    def __repr__(self) -> str:
        return f"Tracked({self.value})"


class TrackingType(ElementType):
    """ElementType counting constructions, copies and moves.

    ``fail_copy_at`` / ``fail_move_at`` name the absolute invocation number
    (1-based, counted over the type's lifetime) that raises HookFailure.
    """

    def __init__(self, nothrow_move: bool = True, copyable: bool = True) -> None:
        super().__init__(Tracked)
        self.nothrow_move = nothrow_move
        self.copyable = copyable
        self.constructed = 0
        self.copies = 0
        self.moves = 0
        self.destroyed: List[int] = []
        self.fail_copy_at: Optional[int] = None
        self.fail_move_at: Optional[int] = None

    def construct(self, *args, **kwargs):
        self.constructed += 1
        return super().construct(*args, **kwargs)

    def copy(self, value):
        if not self.copyable:
            raise TypeError("copy of a move-only element")
        self.copies += 1
        if self.copies == self.fail_copy_at:
            raise HookFailure(f"copy #{self.copies}")
        return Tracked(value.value)

    def move(self, value):
        self.moves += 1
        if self.moves == self.fail_move_at:
            raise HookFailure(f"move #{self.moves}")
        return value

    def destroy(self, value):
        self.destroyed.append(value.value)


def values(array):
    return [item.value for item in array]


def tracked_array(element_type, count):
    array = DynamicArray(element_type=element_type)
    for i in range(count):
        array.push_back(Tracked(i))
    return array


@pytest.fixture
def tracking():
    return TrackingType()


@pytest.fixture
def copy_only():
    """Element type whose move may raise, so relocation must copy."""
    return TrackingType(nothrow_move=False)
