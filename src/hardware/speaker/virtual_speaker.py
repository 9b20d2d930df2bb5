from __future__ import annotations

from hardware.speaker.speaker_interface import ISpeaker
from models.enums import PlaybackState
from models.errors import OutOfRangeError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SPEAKER)


class VirtualSpeaker(ISpeaker):
    """In-memory speaker for development without a Sonos on the network."""

    def __init__(self, volume: int = 20, state: PlaybackState = PlaybackState.PAUSED):
        if not 0 <= volume <= 100:
            raise OutOfRangeError(volume, 0, 100)
        self.volume = volume
        self.state = state

    async def get_current_state(self) -> PlaybackState:
        return self.state

    async def get_volume(self) -> int:
        return self.volume

    async def set_volume(self, volume: int) -> None:
        if isinstance(volume, bool) or not isinstance(volume, int) or not 0 <= volume <= 100:
            raise OutOfRangeError(volume, 0, 100)
        self.volume = volume
        log.debug("Volume set", volume=volume)

    async def toggle_playback(self) -> None:
        self.state = PlaybackState.PAUSED if self.state is PlaybackState.PLAYING else PlaybackState.PLAYING
        log.info(f"Playback {self.state.name.lower()}")

    def __repr__(self) -> str:
        return f"<VirtualSpeaker volume={self.volume} state={self.state.name}>"
