"""
Animation Player

Pushes the frames of one AnimationSequence to a display sink at a fixed
interval.

State machine:
    IDLE --start()--> PLAYING --stop() / device disconnect--> STOPPED

The first frame is shown with a cross-fade when the animation starts; every
later frame is a fast IMMEDIATE swap. Ticks are skipped while the sink is
disconnected, and after the last frame unless looping is enabled.
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING

from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.enums import GlyphAlignment, PlayerState
from models.events import (
    AnimationStartedEvent,
    AnimationStoppedEvent,
    Event,
    EventType,
)
from models.glyph import AnimationSequence, DisplayOptions
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from hardware.device.device_interface import IGlyphSink
    from services.event_bus import EventBus

log = get_logger().for_category(LogCategory.ANIMATION)

DEFAULT_INTERVAL_MS = 250

ErrorCallback = Callable[[int, Exception], None]


class AnimationPlayer:
    """
    Time-driven frame scheduler for a single animation.

    One player drives one sequence once. The player owns its tick task and
    frame index; nothing else touches them.

    Example:
        player = AnimationPlayer(device, interval_ms=250, event_bus=bus)
        await player.start(banner_to_animation(SONOS_BANNER, add_buffer=True))
        await player.wait_finished()
    """

    def __init__(
        self,
        sink: "IGlyphSink",
        interval_ms: int = DEFAULT_INTERVAL_MS,
        loop: bool = False,
        alignment: GlyphAlignment = GlyphAlignment.CENTER,
        event_bus: Optional["EventBus"] = None,
        on_error: Optional[ErrorCallback] = None,
        name: str = "animation",
    ):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")

        self.sink = sink
        self.interval = interval_ms / 1000.0
        self.loop = loop
        self.alignment = alignment
        self.event_bus = event_bus
        self.on_error = on_error
        self.name = name

        self.state = PlayerState.IDLE
        self.sequence: Optional[AnimationSequence] = None
        self.frame_index = 0
        self.frames_displayed = 0

        # Error channel: (frame index, exception) for every failed display
        self.errors: List[Tuple[int, Exception]] = []

        self._task: Optional[asyncio.Task] = None
        self._finished = asyncio.Event()

    # ------------------------------------------------------------
    # Control
    # ------------------------------------------------------------

    async def start(self, sequence: AnimationSequence) -> None:
        """Show frame 0 with a cross-fade and begin ticking."""
        if self.state is not PlayerState.IDLE:
            raise RuntimeError(f"AnimationPlayer '{self.name}' already {self.state.name}")
        if len(sequence) == 0:
            raise ValueError("Cannot play an empty animation")

        self.sequence = sequence
        self.state = PlayerState.PLAYING

        if self.event_bus:
            self.event_bus.subscribe(EventType.DEVICE_DISCONNECT, self._on_disconnect, priority=100)
            await self.event_bus.publish(AnimationStartedEvent(self.name, len(sequence)))

        log.info(
            f"Animation '{self.name}' started",
            frames=len(sequence),
            interval_ms=int(self.interval * 1000),
            loop=self.loop
        )

        await self._display(0, DisplayOptions.cross_fade(self.alignment))
        self.frame_index = 1
        self._check_finished()

        self._task = create_tracked_task(
            self._run(),
            category=TaskCategory.ANIMATION,
            description=f"AnimationPlayer '{self.name}' ticks"
        )

    def stop(self, reason: str = "stopped") -> None:
        """Stop permanently. No further frames are displayed."""
        if self.state is not PlayerState.PLAYING:
            return

        self.state = PlayerState.STOPPED
        if self._task and not self._task.done():
            self._task.cancel()
        if self.event_bus:
            self.event_bus.unsubscribe(EventType.DEVICE_DISCONNECT, self._on_disconnect)
            create_tracked_task(
                self.event_bus.publish(AnimationStoppedEvent(self.name, self.frames_displayed, reason)),
                category=TaskCategory.ANIMATION,
                description=f"AnimationPlayer '{self.name}' stop notice"
            )

        log.info(f"Animation '{self.name}' stopped", reason=reason, frames_displayed=self.frames_displayed)

    async def tick(self) -> bool:
        """
        Advance one frame.

        Returns:
            True if a frame was sent to the sink
        """
        if self.state is not PlayerState.PLAYING or self.sequence is None:
            return False

        # Frozen while disconnected; the disconnect event does the real stop
        if not self.sink.is_connected:
            return False

        if self.frame_index >= len(self.sequence):
            if not self.loop:
                return False
            self.frame_index = 0

        index = self.frame_index
        await self._display(index, DisplayOptions.immediate(self.alignment))
        # Missed frames are not retried
        self.frame_index = index + 1
        self._check_finished()
        return True

    # ------------------------------------------------------------
    # Status
    # ------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self.state is PlayerState.PLAYING

    @property
    def finished(self) -> bool:
        """True once every frame has been sent (never for looping players)."""
        return self._finished.is_set()

    async def wait_finished(self) -> None:
        await self._finished.wait()

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    async def _run(self) -> None:
        try:
            while self.state is PlayerState.PLAYING:
                await asyncio.sleep(self.interval)
                await self.tick()
        except asyncio.CancelledError:
            log.debug(f"Tick task for '{self.name}' cancelled")
            raise

    async def _display(self, index: int, options: DisplayOptions) -> None:
        frame = self.sequence[index]
        try:
            await self.sink.display_glyph(frame, options)
            self.frames_displayed += 1
        except Exception as e:
            self.errors.append((index, e))
            log.error(
                f"Display failed for frame {index} of '{self.name}'",
                error=f"{type(e).__name__}: {e}"
            )
            if self.on_error:
                try:
                    self.on_error(index, e)
                except Exception as callback_error:
                    log.error(
                        f"Error callback failed for '{self.name}'",
                        error=f"{type(callback_error).__name__}: {callback_error}"
                    )

    def _check_finished(self) -> None:
        if not self.loop and self.frame_index >= len(self.sequence):
            if not self._finished.is_set():
                log.debug(f"Animation '{self.name}' reached its last frame")
            self._finished.set()

    def _on_disconnect(self, event: Event) -> None:
        self.stop(reason="device disconnected")
