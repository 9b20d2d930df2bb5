"""
Virtual control device

In-process stand-in for the dial controller. Gestures are triggered by
calling select() / touch() / rotate() (from the keyboard driver or tests)
and are published on the EventBus exactly like a physical device would.
Displayed glyphs are kept in a history and previewed in the log.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple

from models.errors import (
    ConnectionTimeoutError,
    DeviceNotConnectedError,
    DiscoveryTimeoutError,
)
from models.events import DisconnectEvent, RotateEvent, SelectEvent, TouchEvent
from models.glyph import DisplayOptions, Glyph
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory
from hardware.device.device_interface import IControlDevice, IDeviceDiscovery

log = get_logger().for_category(LogCategory.DEVICE)

DEFAULT_DEVICE_ID = "virtual-dial"
DEFAULT_NOTCHES_PER_CYCLE = 50


class VirtualControlDevice(IControlDevice):

    def __init__(
        self,
        device_id: str,
        event_bus: EventBus,
        notches_per_cycle: int = DEFAULT_NOTCHES_PER_CYCLE,
        preview: bool = True
    ):
        self._device_id = device_id
        self.event_bus = event_bus
        self.notches_per_cycle = notches_per_cycle
        self.preview = preview

        self._connected = False
        self._rotation = 0.0
        self._rotation_min = -1.0
        self._rotation_max = 1.0
        self._cycles = 1.0

        self.current_glyph: Optional[Glyph] = None
        self.display_history: List[Tuple[Glyph, DisplayOptions]] = []

    # ---------------------------------------------------------------
    # Connection
    # ---------------------------------------------------------------

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def open(self) -> bool:
        """Bring the link up. Called by discovery."""
        self._connected = True
        return True

    async def disconnect(self) -> None:
        """Close the link and announce it."""
        if not self._connected:
            return
        self._connected = False
        log.info(f"Device '{self._device_id}' disconnected")
        await self.event_bus.publish(DisconnectEvent(self._device_id))

    def _require_connected(self) -> None:
        if not self._connected:
            raise DeviceNotConnectedError(self._device_id)

    # ---------------------------------------------------------------
    # Display
    # ---------------------------------------------------------------

    async def display_glyph(self, glyph: Glyph, options: DisplayOptions) -> None:
        self._require_connected()
        self.current_glyph = glyph
        self.display_history.append((glyph, options))

        if self.preview:
            log.debug(
                "Glyph displayed",
                details=glyph.render().split("\n"),
                transition=options.transition.name,
                alignment=options.alignment.name
            )

    # ---------------------------------------------------------------
    # Rotation
    # ---------------------------------------------------------------

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def rotation_step(self) -> float:
        """Rotation covered by one notch of the ring."""
        span = self._rotation_max - self._rotation_min
        return span / (self._cycles * self.notches_per_cycle)

    def set_rotation_range(self, minimum: float, maximum: float, initial: float, cycles: float) -> None:
        if minimum >= maximum:
            raise ValueError(f"Rotation range minimum {minimum} must be below maximum {maximum}")
        if cycles <= 0:
            raise ValueError(f"Rotation cycles must be positive, got {cycles}")

        self._rotation_min = minimum
        self._rotation_max = maximum
        self._cycles = cycles
        self._rotation = self._clamp(initial)
        log.debug("Rotation range set", minimum=minimum, maximum=maximum, initial=self._rotation, cycles=cycles)

    def _clamp(self, value: float) -> float:
        return max(self._rotation_min, min(self._rotation_max, value))

    # ---------------------------------------------------------------
    # Gestures
    # ---------------------------------------------------------------

    async def select(self) -> None:
        self._require_connected()
        await self.event_bus.publish(SelectEvent(self._device_id))

    async def touch(self) -> None:
        self._require_connected()
        await self.event_bus.publish(TouchEvent(self._device_id))

    async def rotate(self, delta: float) -> bool:
        """
        Turn the ring by `delta`, clamped to the rotation range.

        Returns:
            False when already at the end of the range (no event published)
        """
        self._require_connected()
        new_rotation = self._clamp(self._rotation + delta)
        applied = new_rotation - self._rotation
        if applied == 0:
            return False

        self._rotation = new_rotation
        await self.event_bus.publish(RotateEvent(self._device_id, applied, new_rotation))
        return True

    async def rotate_notches(self, notches: int) -> bool:
        return await self.rotate(notches * self.rotation_step)

    def __repr__(self) -> str:
        return f"<VirtualControlDevice id={self._device_id} connected={self._connected}>"


class VirtualDeviceDiscovery(IDeviceDiscovery):
    """
    Discovery that "finds" one virtual device.

    Args:
        event_bus: Bus the discovered device publishes on
        advertised_id: Device id the virtual device announces
        discovery_delay_ms: Simulated scan time
        connect_succeeds: False simulates a device that never connects
    """

    def __init__(
        self,
        event_bus: EventBus,
        advertised_id: str = DEFAULT_DEVICE_ID,
        discovery_delay_ms: int = 0,
        connect_succeeds: bool = True,
        notches_per_cycle: int = DEFAULT_NOTCHES_PER_CYCLE,
        preview: bool = True
    ):
        self.event_bus = event_bus
        self.advertised_id = advertised_id
        self.discovery_delay_ms = discovery_delay_ms
        self.connect_succeeds = connect_succeeds
        self.notches_per_cycle = notches_per_cycle
        self.preview = preview

    async def _scan(self, device_id: Optional[str]) -> str:
        if device_id is not None and device_id != self.advertised_id:
            # Filtered out: keep scanning until the timeout fires
            await asyncio.Event().wait()
        await asyncio.sleep(self.discovery_delay_ms / 1000)
        return self.advertised_id

    async def connect(self, device_id: Optional[str] = None, timeout_ms: int = 60_000) -> VirtualControlDevice:
        log.info("Starting device discovery", device_filter=device_id or "any", timeout_ms=timeout_ms)

        try:
            found_id = await asyncio.wait_for(self._scan(device_id), timeout=timeout_ms / 1000)
        except asyncio.TimeoutError:
            raise DiscoveryTimeoutError(timeout_ms, device_id) from None

        log.info(f"Found device '{found_id}'")

        device = VirtualControlDevice(
            found_id,
            self.event_bus,
            notches_per_cycle=self.notches_per_cycle,
            preview=self.preview
        )

        log.info("Connecting...")
        if self.connect_succeeds and await device.open():
            log.info(f"Connected to '{found_id}'")
            return device

        raise ConnectionTimeoutError(found_id)
