"""Byte-oriented KV backends for the commit graph store."""

from .base import KVStore
from .disk import Disk
from .memory import Memory

__all__ = ["Disk", "KVStore", "Memory"]
