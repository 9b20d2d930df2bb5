"""
Sonos speaker adapter (SoCo)

SoCo is a blocking HTTP/UPnP client, so every call runs in the default
executor to keep the event loop responsive.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

import soco
from soco.exceptions import SoCoException

from hardware.speaker.speaker_interface import ISpeaker
from models.enums import PlaybackState
from models.errors import OutOfRangeError, SpeakerError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SPEAKER)

TRANSPORT_STATES = {
    "PLAYING": PlaybackState.PLAYING,
    "PAUSED_PLAYBACK": PlaybackState.PAUSED,
}


class SoCoSpeaker(ISpeaker):
    """
    Args:
        host: IP address of the Sonos speaker
        client: Pre-built soco.SoCo instance (defaults to soco.SoCo(host))
    """

    def __init__(self, host: str, client: Optional[Any] = None):
        self.host = host
        self.client = client if client is not None else soco.SoCo(host)

    async def _call(self, description: str, fn: Callable[[], Any]) -> Any:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, fn)
        except (SoCoException, OSError) as e:
            raise SpeakerError(
                f"Sonos {description} failed",
                host=self.host,
                error=f"{type(e).__name__}: {e}"
            ) from e

    async def get_current_state(self) -> PlaybackState:
        info = await self._call("transport info", self.client.get_current_transport_info)
        raw_state = info.get("current_transport_state", "")
        state = TRANSPORT_STATES.get(raw_state, PlaybackState.OTHER)
        log.debug("Playback state", raw=raw_state, state=state.name)
        return state

    async def get_volume(self) -> int:
        return int(await self._call("volume read", lambda: self.client.volume))

    async def set_volume(self, volume: int) -> None:
        if isinstance(volume, bool) or not isinstance(volume, int) or not 0 <= volume <= 100:
            raise OutOfRangeError(volume, 0, 100)

        def _apply():
            self.client.volume = volume

        await self._call("volume change", _apply)
        log.debug("Volume set", volume=volume)

    async def toggle_playback(self) -> None:
        state = await self.get_current_state()
        if state is PlaybackState.PLAYING:
            await self._call("pause", self.client.pause)
            log.info("Playback paused", host=self.host)
        else:
            await self._call("play", self.client.play)
            log.info("Playback started", host=self.host)

    def __repr__(self) -> str:
        return f"<SoCoSpeaker host={self.host}>"
