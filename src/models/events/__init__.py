"""
Event system for the dial controller bridge

Device gestures and animation lifecycle events routed through the EventBus.
"""

# Event type, base class, and sources
from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

# Device events
from models.events.device import (
    SelectEvent,
    TouchEvent,
    RotateEvent,
    DisconnectEvent,
)

# Animation events
from models.events.animation import (
    AnimationStartedEvent,
    AnimationStoppedEvent,
)

__all__ = [
    # Type, base, and sources
    "EventType",
    "Event",
    "EventSource",

    # Device
    "SelectEvent",
    "TouchEvent",
    "RotateEvent",
    "DisconnectEvent",

    # Animation
    "AnimationStartedEvent",
    "AnimationStoppedEvent",
]
