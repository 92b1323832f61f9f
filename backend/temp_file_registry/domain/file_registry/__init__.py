"""
File Registry Domain

Handles in-memory file storage keyed by caller supplied keys, with expiry.
"""

from .entities import RegistryEntry
from .registry import FileRegistry
from .value_objects import ExpiryMinutes

__all__ = [
    "ExpiryMinutes",
    "FileRegistry",
    "RegistryEntry",
]
