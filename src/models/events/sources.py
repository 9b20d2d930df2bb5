from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers for application events"""
    DEVICE = auto()            # Control device gestures / connection state
    ANIMATION_PLAYER = auto()  # AnimationPlayer lifecycle
