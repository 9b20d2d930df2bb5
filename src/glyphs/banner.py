"""
Banner Animator

Turns multi-row text art into a left-to-right scrolling animation by sliding
a display-wide window across the banner one column per frame.

Example:
    frames = banner_to_animation(SONOS_BANNER, add_buffer=True)
    # 25 columns + 2 x 9 padding = 43 columns -> 35 frames
"""

from typing import List, Sequence

from glyphs.store import DISPLAY_HEIGHT, DISPLAY_WIDTH
from models.errors import InvalidBannerError
from models.glyph import AnimationSequence, Glyph, PIXEL_OFF
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.GLYPH)


def _validate(banner: Sequence[str]) -> None:
    if not banner:
        raise InvalidBannerError("Banner is empty")

    widths = {len(row) for row in banner}
    if len(widths) > 1:
        raise InvalidBannerError(
            "Banner rows have inconsistent lengths",
            widths=sorted(widths)
        )


def banner_add_buffer(banner: Sequence[str], width: int = DISPLAY_WIDTH) -> List[str]:
    """
    Pad every row with `width` blank columns on both sides.

    Only display-height banners are padded. Anything else is returned
    unchanged (no-op buffering on row-count mismatch).
    """
    if len(banner) != DISPLAY_HEIGHT:
        return list(banner)

    pad = PIXEL_OFF * width
    return [pad + row + pad for row in banner]


def banner_to_animation(banner: Sequence[str], add_buffer: bool = False) -> AnimationSequence:
    """
    Build the scroll frames for a banner.

    A banner of width W yields W - 9 + 1 frames; frame i holds columns
    [i, i + 9) of every row.

    A well-formed banner whose row count is not the display height is not
    animated: it comes back unchanged as a single frame.

    Raises:
        InvalidBannerError: empty banner, ragged rows, or narrower than the display
    """
    _validate(banner)

    if len(banner) != DISPLAY_HEIGHT:
        log.warn(
            "Banner height does not match display, using it as a static glyph",
            rows=len(banner),
            expected=DISPLAY_HEIGHT
        )
        return AnimationSequence((Glyph(tuple(banner)),))

    if add_buffer:
        banner = banner_add_buffer(banner)

    strip_width = len(banner[0])
    frame_count = strip_width - DISPLAY_WIDTH + 1
    if frame_count < 1:
        raise InvalidBannerError(
            "Banner is narrower than the display",
            width=strip_width,
            display_width=DISPLAY_WIDTH
        )

    frames = [
        Glyph(tuple(row[i:i + DISPLAY_WIDTH] for row in banner))
        for i in range(frame_count)
    ]

    log.debug("Banner converted to animation", width=strip_width, frames=frame_count, buffered=add_buffer)
    return AnimationSequence(tuple(frames))
