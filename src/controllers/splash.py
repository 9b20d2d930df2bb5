"""Startup splash: scrolls the SONOS banner across the display."""

from typing import Optional, TYPE_CHECKING

from engine.animation_player import AnimationPlayer
from glyphs import SONOS_BANNER, banner_to_animation
from models.config import DisplayConfig
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from hardware.device import IGlyphSink
    from services.event_bus import EventBus

log = get_logger().for_category(LogCategory.ANIMATION)


async def run_startup_splash(
    device: "IGlyphSink",
    config: DisplayConfig,
    event_bus: Optional["EventBus"] = None
) -> AnimationPlayer:
    """
    Start the banner animation and return its (already playing) player.

    The caller decides whether to await `player.wait_finished()`.
    """
    sequence = banner_to_animation(SONOS_BANNER, add_buffer=config.splash_buffer)
    log.debug("Splash animation built", frames=len(sequence), buffered=config.splash_buffer)

    player = AnimationPlayer(
        device,
        interval_ms=config.animation_interval_ms,
        loop=config.loop_animation,
        alignment=config.alignment,
        event_bus=event_bus,
        name="splash"
    )
    await player.start(sequence)
    return player
