"""
Glyph Store

Pre-rendered glyphs for the 9x9 controller display. Created once at import
time and never mutated.

Small digits are 4 columns wide so that two of them plus a one-column
separator fill the display exactly (4 + 1 + 4 = 9).
"""

from typing import Tuple

from models.errors import OutOfRangeError
from models.glyph import Glyph

DISPLAY_WIDTH = 9
DISPLAY_HEIGHT = 9

_BLANK_DIGIT_ROW = "    "


def _small_digit(*art: str) -> Glyph:
    """Center 5 rows of digit art vertically inside the 9-row display."""
    rows = [_BLANK_DIGIT_ROW] * 2 + list(art) + [_BLANK_DIGIT_ROW] * 2
    return Glyph(tuple(rows))


DIGIT_GLYPHS_SMALL: Tuple[Glyph, ...] = (
    _small_digit(
        " ** ",
        "*  *",
        "*  *",
        "*  *",
        " ** ",
    ),
    _small_digit(
        "  * ",
        " ** ",
        "  * ",
        "  * ",
        " ***",
    ),
    _small_digit(
        " ** ",
        "*  *",
        "  * ",
        " *  ",
        "****",
    ),
    _small_digit(
        "*** ",
        "   *",
        " ** ",
        "   *",
        "*** ",
    ),
    _small_digit(
        "*  *",
        "*  *",
        "****",
        "   *",
        "   *",
    ),
    _small_digit(
        "****",
        "*   ",
        "*** ",
        "   *",
        "*** ",
    ),
    _small_digit(
        " ** ",
        "*   ",
        "*** ",
        "*  *",
        " ** ",
    ),
    _small_digit(
        "****",
        "   *",
        "  * ",
        " *  ",
        " *  ",
    ),
    _small_digit(
        " ** ",
        "*  *",
        " ** ",
        "*  *",
        " ** ",
    ),
    _small_digit(
        " ** ",
        "*  *",
        " ***",
        "   *",
        " ** ",
    ),
)

# Three characters do not fit as two small digits, so 100 has its own art
DIGIT_GLYPH_100 = Glyph((
    "         ",
    "         ",
    "* *** ***",
    "* * * * *",
    "* * * * *",
    "* * * * *",
    "* *** ***",
    "         ",
    "         ",
))

PLAY_GLYPH = Glyph((
    "         ",
    "  *      ",
    "  **     ",
    "  ***    ",
    "  ****   ",
    "  ***    ",
    "  **     ",
    "  *      ",
    "         ",
))

PAUSE_GLYPH = Glyph((
    "         ",
    "  ** **  ",
    "  ** **  ",
    "  ** **  ",
    "  ** **  ",
    "  ** **  ",
    "  ** **  ",
    "  ** **  ",
    "         ",
))

EMPTY_GLYPH = Glyph(tuple(" " * DISPLAY_WIDTH for _ in range(DISPLAY_HEIGHT)))

# Startup splash, scrolled across the display by banner_to_animation()
SONOS_BANNER: Tuple[str, ...] = (
    '                         ',
    ' **   **  *   *  **   ** ',
    '*  * *  * *   * *  * *  *',
    '*    *  * **  * *  * *   ',
    '**** *  * * * * *  * ****',
    '   * *  * *  ** *  *    *',
    '*  * *  * *   * *  * *  *',
    ' **   **  *   *  **   ** ',
    '                         ',
)


def digit_glyph(digit: int) -> Glyph:
    """Small glyph for a single decimal digit."""
    if isinstance(digit, bool) or not isinstance(digit, int) or not 0 <= digit <= 9:
        raise OutOfRangeError(digit, 0, 9)
    return DIGIT_GLYPHS_SMALL[digit]
