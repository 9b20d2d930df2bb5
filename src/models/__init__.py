"""
Models package - glyphs, events, configuration and errors
"""

from .enums import (
    GlyphAlignment,
    DisplayTransition,
    PlaybackState,
    PlayerState,
    DeviceBackend,
    SpeakerBackend,
    LogLevel,
    LogCategory,
)
from .glyph import Glyph, AnimationSequence, DisplayOptions

__all__ = [
    'GlyphAlignment',
    'DisplayTransition',
    'PlaybackState',
    'PlayerState',
    'DeviceBackend',
    'SpeakerBackend',
    'LogLevel',
    'LogCategory',
    'Glyph',
    'AnimationSequence',
    'DisplayOptions',
]
