# hardware/device/device_interface.py
"""
Control device protocols
========================
Minimal contract for the rotary dial controller and its discovery.
Gestures are not callbacks on the device: implementations publish
SelectEvent / TouchEvent / RotateEvent / DisconnectEvent on the EventBus.
"""

from __future__ import annotations
from typing import Optional, Protocol

from models.glyph import DisplayOptions, Glyph


class IGlyphSink(Protocol):
    """
    Anything that can show a glyph.

    The sink is a single shared resource: concurrent display calls are
    allowed and the last write wins.
    """

    @property
    def is_connected(self) -> bool:
        ...

    async def display_glyph(self, glyph: Glyph, options: DisplayOptions) -> None:
        """Best-effort display. May raise DeviceError."""
        ...


class IControlDevice(IGlyphSink, Protocol):
    """
    Protocol for a connected dial controller.

    All implementations must provide:
    - device_id: stable identifier used for discovery filters
    - display_glyph / is_connected (IGlyphSink)
    - rotation range configuration (clamped mode)
    - disconnect(): closes the link and publishes DisconnectEvent
    """

    @property
    def device_id(self) -> str:
        ...

    @property
    def rotation(self) -> float:
        """Current absolute rotation inside the configured range."""
        ...

    def set_rotation_range(self, minimum: float, maximum: float, initial: float, cycles: float) -> None:
        """
        Clamp rotation to [minimum, maximum], starting at `initial`.
        `cycles` full turns of the ring sweep the whole range.
        """
        ...

    async def disconnect(self) -> None:
        ...


class IDeviceDiscovery(Protocol):
    """Finds and connects a control device."""

    async def connect(self, device_id: Optional[str] = None, timeout_ms: int = 60_000) -> IControlDevice:
        """
        Raises:
            DiscoveryTimeoutError: nothing matching found within timeout_ms
            ConnectionTimeoutError: a device was found but did not connect
        """
        ...
