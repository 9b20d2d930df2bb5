from __future__ import annotations

from typing import TYPE_CHECKING

from glyphs import EMPTY_GLYPH
from lifecycle.shutdown_protocol import IShutdownHandler
from models.errors import DeviceError
from models.glyph import DisplayOptions
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from hardware.device import IControlDevice

log = get_logger().for_category(LogCategory.SHUTDOWN)


class DeviceShutdownHandler(IShutdownHandler):
    """
    Blanks the display and closes the device link.

    Runs after animations stop so the blank frame is the last one shown.

    Priority: 100
    """

    def __init__(self, device: "IControlDevice"):
        self.device = device

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        if not self.device.is_connected:
            log.debug("Device already disconnected")
            return

        try:
            await self.device.display_glyph(EMPTY_GLYPH, DisplayOptions.immediate())
            log.debug("Display cleared")
        except DeviceError as e:
            log.warn("Could not clear display", error=f"{type(e).__name__}: {e}")

        await self.device.disconnect()
        log.info(f"Device '{self.device.device_id}' released")
