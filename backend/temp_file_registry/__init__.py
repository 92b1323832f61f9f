"""
Temp File Registry

In-memory, time-bounded file registry served over HTTP.
"""

__version__ = "1.0.0"
