"""
Infrastructure Layer

Adapters around the domain: event handlers.
"""

from .event_handlers import LoggingEventHandler

__all__ = ["LoggingEventHandler"]
