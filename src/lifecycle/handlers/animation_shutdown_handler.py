from __future__ import annotations

from typing import List, TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from engine.animation_player import AnimationPlayer

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AnimationShutdownHandler(IShutdownHandler):
    """
    Stops every running AnimationPlayer before the device is blanked, so no
    tick lands on the display after the final clear.

    Priority: 130 (first)
    """

    def __init__(self, players: List["AnimationPlayer"]):
        # Shared list: players started after registration are included
        self.players = players

    @property
    def shutdown_priority(self) -> int:
        return 130

    async def shutdown(self) -> None:
        running = [p for p in self.players if p.is_running]
        if not running:
            log.debug("No running animations")
            return

        log.info(f"Stopping {len(running)} animation(s)...")
        for player in running:
            player.stop(reason="shutdown")
