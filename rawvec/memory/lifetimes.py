"""
Element lifetime hooks and slot-level construction/destruction.

This module is the single place where element values are created, copied,
moved, assigned over and destroyed:
- ElementType: the per-array lifecycle hooks and capability flags
- Slot sentinels: UNINITIALIZED (never constructed) and MOVED_FROM
  (live slot whose value was moved out)
- Bulk helpers used by DynamicArray (construct_n, copy_construct_n, destroy_n)

Hooks are never invoked on a sentinel.
"""
from __future__ import annotations

import copy
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rawvec.memory.arena import Arena


class _SlotState:
    """Marker stored in a slot that does not hold an element value."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"

    def __copy__(self) -> _SlotState:
        return self

    def __deepcopy__(self, memo: dict) -> _SlotState:
        return self


UNINITIALIZED = _SlotState("UNINITIALIZED")
MOVED_FROM = _SlotState("MOVED_FROM")


def is_live(value: Any) -> bool:
    """Check if a slot value is a real element rather than a sentinel."""
    return value is not UNINITIALIZED and value is not MOVED_FROM


class ElementType:
    """Lifecycle hooks for the values stored in a DynamicArray.

    Subclass and override to observe or constrain element lifetimes. The
    defaults model plain Python values: construction calls the factory,
    copying is ``copy.copy``, moving hands over the reference and
    destruction does nothing.

    Capability flags are read once per relocation batch:
    - nothrow_move: move() never raises
    - copyable: copy() is available at all
    """

    nothrow_move: bool = True
    copyable: bool = True

    def __init__(self, factory: Optional[Callable[..., Any]] = None) -> None:
        self.factory = factory

    def __repr__(self) -> str:
        name = getattr(self.factory, "__qualname__", None)
        return f"{type(self).__name__}({name or ''})"

    def default(self) -> Any:
        """Default-construct a value (Sized(n), resize growth)."""
        return self.construct()

    def construct(self, *args: Any, **kwargs: Any) -> Any:
        """Construct a value in place from arguments (emplace)."""
        if self.factory is not None:
            return self.factory(*args, **kwargs)
        if kwargs or len(args) > 1:
            raise TypeError(f"{self!r} needs a factory to construct from {len(args)} "
                            f"positional and {len(kwargs)} keyword arguments")
        return args[0] if args else None

    def copy(self, value: Any) -> Any:
        return copy.copy(value)

    def move(self, value: Any) -> Any:
        return value

    def copy_assign(self, target: Any, value: Any) -> Any:
        """Return the value that replaces ``target`` when copying ``value`` over it.

        The replacement is built before the overwritten value is destroyed,
        so a failing copy leaves ``target`` intact.
        """
        replacement = self.copy(value)
        self.destroy(target)
        return replacement

    def move_assign(self, target: Any, value: Any) -> Any:
        replacement = self.move(value)
        self.destroy(target)
        return replacement

    def destroy(self, value: Any) -> None:
        """End the lifetime of a value. Must not raise."""


DEFAULT_ELEMENT_TYPE = ElementType()


def destroy_at(element_type: ElementType, arena: Arena, index: int) -> None:
    value = arena[index]
    arena[index] = UNINITIALIZED
    if is_live(value):
        element_type.destroy(value)


def destroy_n(element_type: ElementType, arena: Arena, start: int, count: int) -> None:
    """Destroy ``count`` slots from ``start`` in ascending order."""
    for index in range(start, start + count):
        destroy_at(element_type, arena, index)


def construct_n(
    element_type: ElementType,
    arena: Arena,
    start: int,
    count: int
) -> None:
    """Default-construct ``count`` values into uninitialized slots.

    If a construction raises, the values already built by this call are
    destroyed before the exception propagates.
    """
    index = start
    try:
        while index < start + count:
            arena[index] = element_type.default()
            index += 1
    except BaseException:
        destroy_n(element_type, arena, start, index - start)
        raise


def copy_construct_n(
    element_type: ElementType,
    source: Arena,
    source_start: int,
    count: int,
    target: Arena,
    target_start: int
) -> None:
    """Copy-construct ``count`` values from ``source`` into uninitialized slots
    of ``target``, with the same rollback as construct_n."""
    done = 0
    try:
        while done < count:
            value = source[source_start + done]
            target[target_start + done] = element_type.copy(value) if is_live(value) else value
            done += 1
    except BaseException:
        destroy_n(element_type, target, target_start, done)
        raise


def copy_assign_at(element_type: ElementType, arena: Arena, index: int, value: Any) -> None:
    target = arena[index]
    if not is_live(value):
        if is_live(target):
            element_type.destroy(target)
        arena[index] = value
    elif is_live(target):
        arena[index] = element_type.copy_assign(target, value)
    else:
        arena[index] = element_type.copy(value)


def move_assign_at(element_type: ElementType, arena: Arena, index: int, source: int) -> None:
    """Move-assign slot ``source`` over slot ``index`` of the same arena.

    The source slot is left MOVED_FROM.
    """
    target = arena[index]
    value = arena[source]
    if not is_live(value):
        replacement = value
        if is_live(target):
            element_type.destroy(target)
    elif is_live(target):
        replacement = element_type.move_assign(target, value)
    else:
        replacement = element_type.move(value)
    arena[index] = replacement
    arena[source] = MOVED_FROM
