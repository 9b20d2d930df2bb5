"""Control device events (select, touch, rotate, disconnect)"""

from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class SelectEvent(Event):
    """Display button pressed"""
    device_id: str

    def __init__(self, device_id: str):
        super().__init__(
            type=EventType.DEVICE_SELECT,
            source=EventSource.DEVICE,
        )
        self.device_id = device_id


@dataclass(init=False)
class TouchEvent(Event):
    """Display surface touched"""
    device_id: str

    def __init__(self, device_id: str):
        super().__init__(
            type=EventType.DEVICE_TOUCH,
            source=EventSource.DEVICE,
        )
        self.device_id = device_id


@dataclass(init=False)
class RotateEvent(Event):
    """Ring rotated"""
    device_id: str
    delta: float
    rotation: float

    def __init__(self, device_id: str, delta: float, rotation: float):
        """
        Args:
            device_id: Device that produced the rotation
            delta: Change applied by this step (after clamping)
            rotation: Absolute position inside the configured rotation range
        """
        super().__init__(
            type=EventType.DEVICE_ROTATE,
            source=EventSource.DEVICE,
        )
        self.device_id = device_id
        self.delta = delta
        self.rotation = rotation


@dataclass(init=False)
class DisconnectEvent(Event):
    """Device link lost or closed"""
    device_id: str

    def __init__(self, device_id: str):
        super().__init__(
            type=EventType.DEVICE_DISCONNECT,
            source=EventSource.DEVICE,
        )
        self.device_id = device_id
