"""
Application Layer

Services orchestrating registry operations.
"""

from .event_publisher import EventPublisher
from .registry_service import RegistryService

__all__ = ["EventPublisher", "RegistryService"]
