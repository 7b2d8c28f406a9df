"""rawvec - a growable contiguous array with explicit element lifetimes."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("rawvec")
    __dev__ = False
except PackageNotFoundError:
    # Development mode - read from pyproject.toml
    import tomllib
    from pathlib import Path
    try:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            __version__ = tomllib.load(f).get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        __version__ = "unknown"
    __dev__ = True

from rawvec.containers.dynamic_array import DynamicArray
from rawvec.internals.errors import (
    AllocationError,
    BoundsError,
    OwnershipError,
    PreconditionError,
    RawVecError,
)
from rawvec.memory.arena import Arena
from rawvec.memory.lifetimes import DEFAULT_ELEMENT_TYPE, ElementType

__all__ = [
    'AllocationError',
    'Arena',
    'BoundsError',
    'DEFAULT_ELEMENT_TYPE',
    'DynamicArray',
    'ElementType',
    'OwnershipError',
    'PreconditionError',
    'RawVecError',
    '__version__',
]
