"""
main.py: application entry point
----------------------------------

Responsible for:
- loading configuration and configuring the logger
- connecting the dial controller and the speaker
- playing the startup splash and wiring gesture handling
- graceful shutdown on device disconnect, Ctrl+C or fatal errors

Exit status: 0 after a device disconnect or a signal, 1 when startup
fails or a critical background task crashes.
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX (glyph previews use block characters)
# ---------------------------------------------------------------------------

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
from typing import List, Optional

from controllers import DialController, run_startup_splash
from engine.animation_player import AnimationPlayer
from hardware.device import KeyboardDeviceInput, VirtualControlDevice, create_discovery
from hardware.speaker import create_speaker
from lifecycle import ShutdownCoordinator, TaskCategory, create_tracked_task
from lifecycle.handlers import (
    AnimationShutdownHandler,
    DeviceShutdownHandler,
    TaskCancellationHandler,
)
from managers import ConfigManager
from models.config import AppConfig
from models.errors import DomainError
from models.events import Event, EventType
from services import EventBus, log_middleware
from utils.logger import get_logger, configure_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


def _keyboard_available(config: AppConfig, device) -> bool:
    return (
        config.device.keyboard_input
        and isinstance(device, VirtualControlDevice)
        and sys.stdin.isatty()
    )


async def main(config_manager: Optional[ConfigManager] = None) -> int:
    """Main async entry point. Returns the process exit status."""

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = config_manager or ConfigManager()
    try:
        config = config_manager.load()
    except (OSError, ValueError) as e:
        log.error("Invalid configuration", error=f"{type(e).__name__}: {e}")
        return 1

    configure_logger(config.logging.level, config.logging.use_colors)
    log.info("Starting dial controller bridge...")

    log.info("Initializing event bus...")
    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    coordinator = ShutdownCoordinator()

    # ========================================================================
    # 2. DEVICE + SPEAKER
    # ========================================================================

    discovery = create_discovery(config.device, event_bus)
    try:
        device = await discovery.connect(
            config.device.device_id,
            timeout_ms=config.device.discovery_timeout_ms
        )
    except DomainError as e:
        log.error(f"❌ {e.message}", code=e.code)
        return 1

    rotation = config.device.rotation
    device.set_rotation_range(rotation.minimum, rotation.maximum, rotation.initial, rotation.cycles)

    try:
        speaker = create_speaker(config.speaker)
    except DomainError as e:
        log.error(f"❌ {e.message}", code=e.code)
        await device.disconnect()
        return 1

    def on_disconnect(e: Event) -> None:
        coordinator.request_shutdown("device disconnected")

    event_bus.subscribe(EventType.DEVICE_DISCONNECT, on_disconnect)

    # ========================================================================
    # 3. SPLASH + CONTROLLER
    # ========================================================================

    players: List[AnimationPlayer] = []
    if config.display.splash_enabled:
        players.append(await run_startup_splash(device, config.display, event_bus))

    DialController(
        device=device,
        speaker=speaker,
        event_bus=event_bus,
        display_config=config.display,
        rotation_config=rotation,
    )

    # ========================================================================
    # 4. ADAPTERS (Keyboard)
    # ========================================================================

    if _keyboard_available(config, device):
        log.info("Initializing keyboard input...")
        create_tracked_task(
            KeyboardDeviceInput(device).run(),
            category=TaskCategory.INPUT,
            description="KeyboardDeviceInput"
        )

    # ========================================================================
    # 5. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator.register(AnimationShutdownHandler(players))
    coordinator.register(DeviceShutdownHandler(device))
    coordinator.register(TaskCancellationHandler())

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    log.info("🏁 Application initialized. Waiting for gestures...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    if coordinator.failed:
        log.error("Shut down after a failure", reason=coordinator.reason)
        return 1

    log.info("👋 Shut down cleanly.", reason=coordinator.reason)
    return 0


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------

def run() -> None:
    try:
        status = asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    run()
