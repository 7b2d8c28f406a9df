# rawvec/internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, NoReturn, Type


class Category(str, Enum):
    ALLOCATION   = "allocation"
    PRECONDITION = "precondition"
    BOUNDS       = "bounds"
    OWNERSHIP    = "ownership"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    text: str
    category: Category
    doc: str = ""


class RawVecError(RuntimeError):
    """Base class for every error raised by rawvec itself.

    Element hooks raise whatever they raise; those exceptions are never
    wrapped in a RawVecError.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class AllocationError(RawVecError, MemoryError):
    """Raw storage for the requested number of slots could not be obtained."""


class PreconditionError(RawVecError, ValueError):
    """An argument violates an operation's precondition."""


class BoundsError(PreconditionError, IndexError):
    """An index or position lies outside the live range or the capacity."""


class OwnershipError(RawVecError, TypeError):
    """Storage ownership would be duplicated or shared."""


_EXCEPTIONS: Dict[Category, Type[RawVecError]] = {
    Category.ALLOCATION:   AllocationError,
    Category.PRECONDITION: PreconditionError,
    Category.BOUNDS:       BoundsError,
    Category.OWNERSHIP:    OwnershipError,
}


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def raise_error(code: str, **kwargs) -> NoReturn:
    """Raise the exception registered for an error code.

    Args:
        code: Error code (e.g., "RV2001")
        **kwargs: Format parameters for the error message

    Raises:
        RawVecError: Always; the concrete subclass follows the code's category.
    """
    msg = _get(code)
    raise _EXCEPTIONS[msg.category](code, _fmt(code, **kwargs))


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Allocation (RV1xxx)
_add(ErrorMessage("RV1001",
    "cannot allocate {count} slots (limit is {limit})",
    Category.ALLOCATION, "Request exceeds MAX_SLOTS; nothing was allocated."))

_add(ErrorMessage("RV1002",
    "memory allocation of {count} slots failed",
    Category.ALLOCATION, "The interpreter could not provide the raw block."))

# Preconditions (RV2xxx)
_add(ErrorMessage("RV2001",
    "index {index} out of range for size {size}",
    Category.BOUNDS, "Element access is only valid for live slots [0, size)."))

_add(ErrorMessage("RV2002",
    "slot {index} out of range for capacity {capacity}",
    Category.BOUNDS, "Arena slots are addressable in [0, capacity)."))

_add(ErrorMessage("RV2003",
    "position {pos} outside [0, {size}]",
    Category.BOUNDS, "Insertion positions run from begin() to end() inclusive."))

_add(ErrorMessage("RV2004",
    "position {pos} is not dereferenceable (size {size})",
    Category.BOUNDS, "Erase needs a live element; end() is not one."))

_add(ErrorMessage("RV2005",
    "slot count must be a non-negative integer, got {count!r}",
    Category.PRECONDITION, "Capacities and sizes are counts of slots."))

# Ownership (RV3xxx)
_add(ErrorMessage("RV3001",
    "Arena cannot be copied",
    Category.OWNERSHIP, "An arena does not know which slots are live; use transfer() instead."))

_add(ErrorMessage("RV3002",
    "element type mismatch: {left!r} vs {right!r}",
    Category.OWNERSHIP, "Storage can only change hands between arrays sharing one ElementType."))
