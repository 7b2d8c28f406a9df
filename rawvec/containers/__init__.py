"""Containers built on rawvec's memory layer."""
from rawvec.containers.dynamic_array import DynamicArray

__all__ = ['DynamicArray']
