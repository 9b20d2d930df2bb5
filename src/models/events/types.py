from enum import Enum, auto


class EventType(Enum):
    # Device gestures
    DEVICE_SELECT = auto()
    DEVICE_TOUCH = auto()
    DEVICE_ROTATE = auto()
    DEVICE_DISCONNECT = auto()

    # Animation
    ANIMATION_STARTED = auto()
    ANIMATION_STOPPED = auto()
