"""
Glyph models

A Glyph is the display payload for the controller's LED matrix: a fixed
height stack of equal-length character rows, '*' for a lit pixel and ' '
for an unlit one.

✔ Glyph              - one immutable bitmap
✔ AnimationSequence  - ordered, replayable list of Glyph frames
✔ DisplayOptions     - alignment + transition for one display call
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union

from models.enums import DisplayTransition, GlyphAlignment
from models.errors import DimensionMismatchError

PIXEL_ON = "*"
PIXEL_OFF = " "


@dataclass(frozen=True)
class Glyph:
    """
    Immutable bitmap.

    All rows must have the same length; construction fails otherwise.
    """

    rows: Tuple[str, ...]

    def __post_init__(self):
        # Accept lists from callers but always store a tuple
        object.__setattr__(self, "rows", tuple(self.rows))
        widths = {len(row) for row in self.rows}
        if len(widths) > 1:
            raise DimensionMismatchError(
                "Glyph rows have different lengths",
                widths=sorted(widths)
            )

    @classmethod
    def from_string(cls, rows: Union[str, Sequence[str]]) -> "Glyph":
        """Build a glyph from a list of rows or one newline-separated string."""
        if isinstance(rows, str):
            rows = rows.split("\n")
        return cls(tuple(rows))

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def render(self, on: str = "█", off: str = "·") -> str:
        """Printable preview for terminals and logs."""
        return "\n".join(
            "".join(on if px == PIXEL_ON else off for px in row)
            for row in self.rows
        )

    def __str__(self) -> str:
        return "\n".join(self.rows)


@dataclass(frozen=True)
class AnimationSequence:
    """
    Finite ordered frames derived once from a banner.

    Replaying means iterating again from index 0; nothing is recomputed.
    """

    frames: Tuple[Glyph, ...]

    def __post_init__(self):
        object.__setattr__(self, "frames", tuple(self.frames))

    def __len__(self) -> int:
        return len(self.frames)

    def __getitem__(self, index: int) -> Glyph:
        return self.frames[index]

    def __iter__(self) -> Iterator[Glyph]:
        return iter(self.frames)


@dataclass(frozen=True)
class DisplayOptions:
    """How the device should place and swap in a glyph"""

    alignment: GlyphAlignment = GlyphAlignment.CENTER
    transition: DisplayTransition = DisplayTransition.CROSS_FADE

    @classmethod
    def cross_fade(cls, alignment: GlyphAlignment = GlyphAlignment.CENTER) -> "DisplayOptions":
        return cls(alignment=alignment, transition=DisplayTransition.CROSS_FADE)

    @classmethod
    def immediate(cls, alignment: GlyphAlignment = GlyphAlignment.CENTER) -> "DisplayOptions":
        return cls(alignment=alignment, transition=DisplayTransition.IMMEDIATE)
