"""
Glyph Compositor

Pure functions that build new glyphs out of stored ones.
"""

from glyphs.store import DIGIT_GLYPH_100, digit_glyph
from models.errors import DimensionMismatchError, OutOfRangeError
from models.glyph import Glyph, PIXEL_OFF
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.GLYPH)

NUMBER_MIN = 0
NUMBER_MAX = 100


def concat_glyph(a: Glyph, b: Glyph) -> Glyph:
    """
    Join two glyphs side by side with one blank column between them.

    Raises:
        DimensionMismatchError: glyph heights differ
    """
    if a.height != b.height:
        raise DimensionMismatchError(
            "Glyph heights do not match",
            left_height=a.height,
            right_height=b.height
        )
    return Glyph(tuple(
        row_a + PIXEL_OFF + row_b
        for row_a, row_b in zip(a.rows, b.rows)
    ))


def number_glyph(n: int) -> Glyph:
    """
    Render 0-100 as a two-digit glyph.

    100 returns the dedicated DIGIT_GLYPH_100; 0-99 are zero padded
    (7 -> "07").

    Raises:
        OutOfRangeError: n is not an int or outside 0-100
    """
    if isinstance(n, bool) or not isinstance(n, int) or not NUMBER_MIN <= n <= NUMBER_MAX:
        raise OutOfRangeError(n, NUMBER_MIN, NUMBER_MAX)

    if n == NUMBER_MAX:
        return DIGIT_GLYPH_100

    tens = (n // 10) % 10
    ones = n % 10
    log.debug("Composing number glyph", value=n, tens=tens, ones=ones)
    return concat_glyph(digit_glyph(tens), digit_glyph(ones))
