"""
Configuration Models

These are PURE DATA MODELS that mirror the YAML configuration files.
They contain:
- no file access
- light range validation in __post_init__

ConfigManager parses the merged YAML dict into these dataclasses.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional
from models.enums import DeviceBackend, SpeakerBackend, GlyphAlignment, LogLevel

# ============================================================
#  Device
# ============================================================

@dataclass(frozen=True)
class RotationConfig:
    """Clamped rotation range of the dial ring."""
    minimum: float = -1.0
    maximum: float = 1.0
    initial: float = 0.0
    cycles: float = 2.0   # Full ring turns needed to sweep the range

    def __post_init__(self):
        if self.minimum >= self.maximum:
            raise ValueError(f"rotation.minimum ({self.minimum}) must be below rotation.maximum ({self.maximum})")
        if self.cycles <= 0:
            raise ValueError(f"rotation.cycles must be positive, got {self.cycles}")


@dataclass(frozen=True)
class DeviceConfig:
    backend: DeviceBackend = DeviceBackend.VIRTUAL
    device_id: Optional[str] = None          # Only connect to this device
    discovery_timeout_ms: int = 60_000
    virtual_device_id: str = "virtual-dial"
    notches_per_cycle: int = 50
    keyboard_input: bool = True
    rotation: RotationConfig = field(default_factory=RotationConfig)

    def __post_init__(self):
        if self.discovery_timeout_ms <= 0:
            raise ValueError(f"device.discovery_timeout_ms must be positive, got {self.discovery_timeout_ms}")
        if self.notches_per_cycle <= 0:
            raise ValueError(f"device.notches_per_cycle must be positive, got {self.notches_per_cycle}")


# ============================================================
#  Speaker
# ============================================================

@dataclass(frozen=True)
class SpeakerConfig:
    backend: SpeakerBackend = SpeakerBackend.SOCO
    host: str = "0.0.0.0"
    initial_volume: int = 20     # Virtual speaker only

    def __post_init__(self):
        if not 0 <= self.initial_volume <= 100:
            raise ValueError(f"speaker.initial_volume must be 0-100, got {self.initial_volume}")


# ============================================================
#  Display
# ============================================================

@dataclass(frozen=True)
class DisplayConfig:
    alignment: GlyphAlignment = GlyphAlignment.CENTER
    animation_interval_ms: int = 250
    loop_animation: bool = False
    splash_enabled: bool = True
    splash_buffer: bool = True
    status_clear_delay_ms: int = 5000

    def __post_init__(self):
        if self.animation_interval_ms <= 0:
            raise ValueError(f"display.animation_interval_ms must be positive, got {self.animation_interval_ms}")
        if self.status_clear_delay_ms < 0:
            raise ValueError(f"display.status_clear_delay_ms must not be negative, got {self.status_clear_delay_ms}")


# ============================================================
#  Logging
# ============================================================

@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    use_colors: bool = True


# ============================================================
#  Root
# ============================================================

@dataclass(frozen=True)
class AppConfig:
    device: DeviceConfig = field(default_factory=DeviceConfig)
    speaker: SpeakerConfig = field(default_factory=SpeakerConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
