"""
Config Manager

Loads modular YAML files (include system) and parses them into the typed
AppConfig dataclasses from models.config.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.config import (
    AppConfig,
    DeviceConfig,
    DisplayConfig,
    LoggingConfig,
    RotationConfig,
    SpeakerConfig,
)
from models.enums import DeviceBackend, GlyphAlignment, LogLevel, SpeakerBackend
from utils.enum_helper import EnumHelper
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).resolve().parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes the include: directive to merge modular
    YAML files. Falls back to factory_defaults.yaml when the main config
    cannot be read or parsed.

    Example:
        config_manager = ConfigManager()
        config = config_manager.load()

        config.display.animation_interval_ms   # 250
        config.device.rotation.cycles          # 2.0
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Args:
            config_path: Path to main config.yaml (relative to src/ or absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = SRC_DIR / Path(config_path)
        self.factory_defaults_path = SRC_DIR / Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[AppConfig] = None
        self.used_defaults = False

    def load(self) -> AppConfig:
        """
        Load YAML configuration

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory_defaults.yaml on failure
        5. Parse into AppConfig (invalid values raise ValueError)
        """
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration", path=str(self.config_path))
                self.data = self._load_with_includes(main_config['include'], self.config_path.parent)
            else:
                log.info("Using monolithic configuration", path=str(self.config_path))
                self.data = main_config

        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults", path=str(self.factory_defaults_path))

            with open(self.factory_defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}
            self.used_defaults = True

        self.config = self.parse(self.data)
        return self.config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """Load and merge multiple YAML files from an include list."""
        merged = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())))
        return merged

    # ------------------------------------------------------
    # PARSER
    # ------------------------------------------------------

    @classmethod
    def parse(cls, data: Dict[str, Any]) -> AppConfig:
        """Convert a merged config dict into AppConfig. Missing keys use defaults."""
        return AppConfig(
            device=cls._parse_device(data.get("device") or {}),
            speaker=cls._parse_speaker(data.get("speaker") or {}),
            display=cls._parse_display(data.get("display") or {}),
            logging=cls._parse_logging(data.get("logging") or {}),
        )

    @staticmethod
    def _parse_device(raw: Dict[str, Any]) -> DeviceConfig:
        defaults = DeviceConfig()
        rot = raw.get("rotation") or {}
        rot_defaults = RotationConfig()

        return DeviceConfig(
            backend=EnumHelper.from_string(DeviceBackend, raw.get("backend", defaults.backend)),
            device_id=raw.get("device_id") or None,
            discovery_timeout_ms=int(raw.get("discovery_timeout_ms", defaults.discovery_timeout_ms)),
            virtual_device_id=str(raw.get("virtual_device_id", defaults.virtual_device_id)),
            notches_per_cycle=int(raw.get("notches_per_cycle", defaults.notches_per_cycle)),
            keyboard_input=bool(raw.get("keyboard_input", defaults.keyboard_input)),
            rotation=RotationConfig(
                minimum=float(rot.get("min", rot_defaults.minimum)),
                maximum=float(rot.get("max", rot_defaults.maximum)),
                initial=float(rot.get("initial", rot_defaults.initial)),
                cycles=float(rot.get("cycles", rot_defaults.cycles)),
            ),
        )

    @staticmethod
    def _parse_speaker(raw: Dict[str, Any]) -> SpeakerConfig:
        defaults = SpeakerConfig()
        return SpeakerConfig(
            backend=EnumHelper.from_string(SpeakerBackend, raw.get("backend", defaults.backend)),
            host=str(raw.get("host", defaults.host)),
            initial_volume=int(raw.get("initial_volume", defaults.initial_volume)),
        )

    @staticmethod
    def _parse_display(raw: Dict[str, Any]) -> DisplayConfig:
        defaults = DisplayConfig()
        return DisplayConfig(
            alignment=EnumHelper.from_string(GlyphAlignment, raw.get("alignment", defaults.alignment)),
            animation_interval_ms=int(raw.get("animation_interval_ms", defaults.animation_interval_ms)),
            loop_animation=bool(raw.get("loop_animation", defaults.loop_animation)),
            splash_enabled=bool(raw.get("splash_enabled", defaults.splash_enabled)),
            splash_buffer=bool(raw.get("splash_buffer", defaults.splash_buffer)),
            status_clear_delay_ms=int(raw.get("status_clear_delay_ms", defaults.status_clear_delay_ms)),
        )

    @staticmethod
    def _parse_logging(raw: Dict[str, Any]) -> LoggingConfig:
        defaults = LoggingConfig()
        return LoggingConfig(
            level=EnumHelper.from_string(LogLevel, raw.get("level", defaults.level)),
            use_colors=bool(raw.get("use_colors", defaults.use_colors)),
        )
