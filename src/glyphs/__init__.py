"""
Glyph layer: stored bitmaps, composition and banner animation
"""

from .store import (
    DISPLAY_WIDTH,
    DISPLAY_HEIGHT,
    DIGIT_GLYPHS_SMALL,
    DIGIT_GLYPH_100,
    PLAY_GLYPH,
    PAUSE_GLYPH,
    EMPTY_GLYPH,
    SONOS_BANNER,
    digit_glyph,
)
from .compositor import concat_glyph, number_glyph
from .banner import banner_add_buffer, banner_to_animation

__all__ = [
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "DIGIT_GLYPHS_SMALL",
    "DIGIT_GLYPH_100",
    "PLAY_GLYPH",
    "PAUSE_GLYPH",
    "EMPTY_GLYPH",
    "SONOS_BANNER",
    "digit_glyph",
    "concat_glyph",
    "number_glyph",
    "banner_add_buffer",
    "banner_to_animation",
]
