"""Runtime components for the almanac service."""

from .clock import HouseClock
from .config import ConfigSource
from .state import AlmanacStore, AlmanacSnapshot
from .loop import EventLoop, ScheduledTask

__all__ = [
    "HouseClock",
    "ConfigSource",
    "AlmanacStore",
    "AlmanacSnapshot",
    "EventLoop",
    "ScheduledTask",
]
