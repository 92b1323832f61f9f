"""
Tasks Module

Background tasks for the registry.
"""

from .reaper import Reaper

__all__ = ["Reaper"]
