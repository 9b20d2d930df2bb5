"""
Dial Controller
Maps dial gestures to speaker actions and status glyphs.
"""

import asyncio
import math
from typing import List, TYPE_CHECKING

from glyphs import EMPTY_GLYPH, PAUSE_GLYPH, PLAY_GLYPH, number_glyph
from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.config import DisplayConfig, RotationConfig
from models.enums import PlaybackState
from models.errors import DeviceError
from models.events import EventType, RotateEvent, SelectEvent, TouchEvent
from models.glyph import DisplayOptions, Glyph
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from hardware.device import IControlDevice
    from hardware.speaker import ISpeaker
    from services.event_bus import EventBus

log = get_logger().for_category(LogCategory.CONTROLLER)

VOLUME_MIN = 0
VOLUME_MAX = 100


def rotation_to_volume(rotation: float, rotation_config: RotationConfig) -> int:
    """Linear map of the rotation range onto 0..100, floored and clamped."""
    span = rotation_config.maximum - rotation_config.minimum
    volume = math.floor((rotation - rotation_config.minimum) * VOLUME_MAX / span)
    return max(VOLUME_MIN, min(VOLUME_MAX, volume))


class DialController:
    """
    Event wiring between the dial and the speaker.

    Responsibilities:
    - select: toggle playback, flash the play/pause glyph
    - touch: flash the current volume
    - rotate: set the volume from the ring position and show it

    Status glyphs shown by select and touch are blanked again after
    `status_clear_delay_ms`. Clears are not cancelled when a newer status
    is shown, so an older clear may blank it early.
    """

    def __init__(
        self,
        device: "IControlDevice",
        speaker: "ISpeaker",
        event_bus: "EventBus",
        display_config: DisplayConfig,
        rotation_config: RotationConfig,
    ):
        self.device = device
        self.speaker = speaker
        self.event_bus = event_bus
        self.display_config = display_config
        self.rotation_config = rotation_config

        self.clear_tasks: List[asyncio.Task] = []

        self._register_events()

    # ------------------------------------------------------------------
    # EVENT BUS SUBSCRIPTIONS
    # ------------------------------------------------------------------

    def _register_events(self):
        self.event_bus.subscribe(EventType.DEVICE_SELECT, self._handle_select)
        self.event_bus.subscribe(EventType.DEVICE_TOUCH, self._handle_touch)
        self.event_bus.subscribe(EventType.DEVICE_ROTATE, self._handle_rotate)
        log.info("DialController subscribed to EventBus")

    def unregister(self):
        self.event_bus.unsubscribe(EventType.DEVICE_SELECT, self._handle_select)
        self.event_bus.unsubscribe(EventType.DEVICE_TOUCH, self._handle_touch)
        self.event_bus.unsubscribe(EventType.DEVICE_ROTATE, self._handle_rotate)

    # ------------------------------------------------------------------
    # EVENT HANDLING
    # ------------------------------------------------------------------

    async def _handle_select(self, e: SelectEvent):
        state = await self.speaker.get_current_state()

        if state is PlaybackState.PLAYING:
            glyph = PAUSE_GLYPH
        elif state is PlaybackState.PAUSED:
            glyph = PLAY_GLYPH
        else:
            glyph = EMPTY_GLYPH

        await self.speaker.toggle_playback()
        log.info("Playback toggled", previous_state=state.name, device=e.device_id)

        await self._show(glyph)
        self._schedule_clear()

    async def _handle_touch(self, e: TouchEvent):
        volume = await self.speaker.get_volume()
        log.debug("Volume requested", volume=volume, device=e.device_id)

        await self._show(number_glyph(volume))
        self._schedule_clear()

    async def _handle_rotate(self, e: RotateEvent):
        volume = rotation_to_volume(e.rotation, self.rotation_config)
        await self.speaker.set_volume(volume)
        log.debug("Volume changed", volume=volume, rotation=round(e.rotation, 4))

        await self._show(number_glyph(volume))

    # ------------------------------------------------------------------
    # DISPLAY
    # ------------------------------------------------------------------

    async def _show(self, glyph: Glyph):
        await self.device.display_glyph(glyph, DisplayOptions.cross_fade(self.display_config.alignment))

    def _schedule_clear(self):
        self.clear_tasks = [t for t in self.clear_tasks if not t.done()]
        task = create_tracked_task(
            self._clear_after(self.display_config.status_clear_delay_ms / 1000),
            category=TaskCategory.STATUS,
            description="Delayed status clear"
        )
        self.clear_tasks.append(task)

    async def _clear_after(self, delay: float):
        await asyncio.sleep(delay)
        if not self.device.is_connected:
            log.debug("Status clear skipped, device not connected")
            return
        try:
            await self._show(EMPTY_GLYPH)
        except DeviceError as e:
            log.warn("Status clear failed", error=f"{type(e).__name__}: {e}")
