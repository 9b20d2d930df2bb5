"""
Enums for the dial controller bridge
"""

from enum import Enum, auto


class GlyphAlignment(Enum):
    """How a glyph is positioned on the 9x9 display grid"""
    LEFT = auto()
    CENTER = auto()
    RIGHT = auto()


class DisplayTransition(Enum):
    """Visual effect used when the device swaps the shown glyph"""
    IMMEDIATE = auto()   # Hard swap (animation frames)
    CROSS_FADE = auto()  # Fade between glyphs (status, first frame)


class PlaybackState(Enum):
    """Speaker transport state as seen by the controller"""
    PLAYING = auto()
    PAUSED = auto()
    OTHER = auto()       # Stopped, transitioning, unknown


class PlayerState(Enum):
    """AnimationPlayer lifecycle"""
    IDLE = auto()
    PLAYING = auto()
    STOPPED = auto()


class DeviceBackend(Enum):
    """Control device implementations"""
    VIRTUAL = auto()


class SpeakerBackend(Enum):
    """Speaker implementations"""
    SOCO = auto()
    VIRTUAL = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    DEVICE = auto()      # Discovery, connection, display calls
    SPEAKER = auto()     # Volume / playback commands
    GLYPH = auto()       # Glyph composition, banners
    ANIMATION = auto()   # Animation start/stop/frames
    CONTROLLER = auto()  # Gesture handling
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors

    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()     # Default general category
