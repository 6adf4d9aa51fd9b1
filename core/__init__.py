"""Core package exposing the page runtime kernel and shared utilities."""

from .core import Core, CommandResult
from .events import EventBus, event_bus
from .frames import FrameLoop, FrameScheduler

__all__ = ["Core", "CommandResult", "EventBus", "event_bus", "FrameLoop", "FrameScheduler"]
