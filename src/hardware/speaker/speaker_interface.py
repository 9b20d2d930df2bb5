# hardware/speaker/speaker_interface.py
"""
ISpeaker Protocol
=================
Minimal contract the dial controller needs from a networked speaker.
"""

from typing import Protocol

from models.enums import PlaybackState


class ISpeaker(Protocol):
    """
    All implementations must provide:
    - get_current_state: PLAYING / PAUSED / OTHER
    - get_volume / set_volume: integer 0-100
    - toggle_playback: pause when playing, play otherwise
    """

    async def get_current_state(self) -> PlaybackState:
        ...

    async def get_volume(self) -> int:
        ...

    async def set_volume(self, volume: int) -> None:
        """Raises OutOfRangeError outside 0-100."""
        ...

    async def toggle_playback(self) -> None:
        ...
