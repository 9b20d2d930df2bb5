"""Process lifecycle: startup, disconnect-driven exit and startup failures."""

import asyncio
import textwrap
from unittest.mock import patch

import pytest

import main as app
from hardware.device import VirtualDeviceDiscovery
from managers import ConfigManager


class CapturingDiscovery(VirtualDeviceDiscovery):
    """Keeps a handle on the connected device so tests can drive it."""

    def __init__(self, event_bus, **kwargs):
        super().__init__(event_bus, preview=False, **kwargs)
        self.device = None
        self.connected = asyncio.Event()

    async def connect(self, device_id=None, timeout_ms=60_000):
        self.device = await super().connect(device_id, timeout_ms)
        self.connected.set()
        return self.device


def make_config(tmp_path, device_extra=""):
    main_file = tmp_path / "config.yaml"
    main_file.write_text(textwrap.dedent("""
        device:
          backend: virtual
          keyboard_input: false
          discovery_timeout_ms: 50
        %s
        speaker:
          backend: virtual
          initial_volume: 10
        display:
          animation_interval_ms: 1
          status_clear_delay_ms: 10
        logging:
          level: warn
          use_colors: false
    """) % device_extra, encoding="utf-8")
    return ConfigManager(str(main_file), str(tmp_path / "defaults.yaml"))


class TestMain:

    @pytest.mark.asyncio
    async def test_disconnect_exits_cleanly(self, tmp_path):
        holder = {}

        def fake_create_discovery(config, event_bus):
            holder["discovery"] = CapturingDiscovery(event_bus, advertised_id=config.virtual_device_id)
            return holder["discovery"]

        with patch("main.create_discovery", side_effect=fake_create_discovery):
            task = asyncio.create_task(app.main(make_config(tmp_path)))

            while "discovery" not in holder:
                await asyncio.sleep(0.01)
            discovery = holder["discovery"]
            await asyncio.wait_for(discovery.connected.wait(), timeout=2.0)

            device = discovery.device
            await asyncio.sleep(0.1)
            await device.rotate(0.5)
            await device.disconnect()

            status = await asyncio.wait_for(task, timeout=5.0)

        assert status == 0
        # Splash frames plus the volume glyph from the rotation
        assert len(device.display_history) > 1

    @pytest.mark.asyncio
    async def test_discovery_timeout_exits_with_error(self, tmp_path):
        config_manager = make_config(tmp_path, device_extra="  device_id: not-there")
        status = await asyncio.wait_for(app.main(config_manager), timeout=5.0)
        assert status == 1

    @pytest.mark.asyncio
    async def test_invalid_config_exits_with_error(self, tmp_path):
        main_file = tmp_path / "config.yaml"
        main_file.write_text("display:\n  animation_interval_ms: 0\n", encoding="utf-8")
        config_manager = ConfigManager(str(main_file), str(tmp_path / "defaults.yaml"))

        assert await app.main(config_manager) == 1
