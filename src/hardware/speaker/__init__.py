"""
Speaker layer

Exports the speaker protocol, the SoCo (Sonos) and virtual
implementations and the config-driven factory.
"""

from models.config import SpeakerConfig
from models.enums import SpeakerBackend
from utils.logger import get_logger, LogCategory

from .speaker_interface import ISpeaker
from .virtual_speaker import VirtualSpeaker

log = get_logger().for_category(LogCategory.SPEAKER)


def create_speaker(config: SpeakerConfig) -> ISpeaker:
    """Build the speaker for the configured backend."""
    if config.backend is SpeakerBackend.SOCO:
        from .soco_speaker import SoCoSpeaker
        log.info("Using Sonos speaker", host=config.host)
        return SoCoSpeaker(config.host)

    if config.backend is SpeakerBackend.VIRTUAL:
        log.info("Using virtual speaker", volume=config.initial_volume)
        return VirtualSpeaker(volume=config.initial_volume)

    raise ValueError(f"Unsupported speaker backend: {config.backend}")


__all__ = [
    "ISpeaker",
    "VirtualSpeaker",
    "create_speaker",
]
