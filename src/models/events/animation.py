from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class AnimationStartedEvent(Event):
    name: str
    frame_count: int

    def __init__(self, name: str, frame_count: int):
        super().__init__(
            type=EventType.ANIMATION_STARTED,
            source=EventSource.ANIMATION_PLAYER,
        )
        self.name = name
        self.frame_count = frame_count


@dataclass(init=False)
class AnimationStoppedEvent(Event):
    name: str
    frames_displayed: int
    reason: str

    def __init__(self, name: str, frames_displayed: int, reason: str):
        super().__init__(
            type=EventType.ANIMATION_STOPPED,
            source=EventSource.ANIMATION_PLAYER,
        )
        self.name = name
        self.frames_displayed = frames_displayed
        self.reason = reason
