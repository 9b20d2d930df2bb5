"""DialController gesture handling."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from controllers import DialController, rotation_to_volume
from glyphs import EMPTY_GLYPH, PAUSE_GLYPH, PLAY_GLYPH, number_glyph
from hardware.speaker import VirtualSpeaker
from lifecycle.task_registry import HISTORY_LIMIT, TaskRegistry
from models.config import DisplayConfig, RotationConfig
from models.enums import DisplayTransition, PlaybackState
from models.errors import SpeakerError

CLEAR_MS = 10


def make_controller(device, speaker, event_bus, clear_ms=CLEAR_MS):
    return DialController(
        device=device,
        speaker=speaker,
        event_bus=event_bus,
        display_config=DisplayConfig(status_clear_delay_ms=clear_ms),
        rotation_config=RotationConfig(),
    )


class TestRotationToVolume:

    @pytest.mark.parametrize("rotation, volume", [
        (-1.0, 0),
        (0.0, 50),
        (0.5, 75),
        (1.0, 100),
        (-0.999, 0),
    ])
    def test_default_range(self, rotation, volume):
        assert rotation_to_volume(rotation, RotationConfig()) == volume

    def test_floors_instead_of_rounding(self):
        assert rotation_to_volume(0.019, RotationConfig()) == 50
        assert rotation_to_volume(-0.001, RotationConfig()) == 49

    def test_custom_range(self):
        assert rotation_to_volume(2.5, RotationConfig(minimum=0.0, maximum=10.0, initial=0.0)) == 25

    @pytest.mark.parametrize("rotation, volume", [(-3.0, 0), (3.0, 100)])
    def test_clamped(self, rotation, volume):
        assert rotation_to_volume(rotation, RotationConfig()) == volume


class TestSelect:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("state, glyph, new_state", [
        (PlaybackState.PLAYING, PAUSE_GLYPH, PlaybackState.PAUSED),
        (PlaybackState.PAUSED, PLAY_GLYPH, PlaybackState.PLAYING),
        (PlaybackState.OTHER, EMPTY_GLYPH, PlaybackState.PLAYING),
    ])
    async def test_select_toggles_and_shows_status(self, device, event_bus, state, glyph, new_state):
        speaker = VirtualSpeaker(state=state)
        make_controller(device, speaker, event_bus)

        await device.select()

        assert speaker.state is new_state
        shown, options = device.display_history[-1]
        assert shown == glyph
        assert options.transition is DisplayTransition.CROSS_FADE

    @pytest.mark.asyncio
    async def test_status_is_cleared_after_delay(self, device, event_bus):
        speaker = VirtualSpeaker(state=PlaybackState.PLAYING)
        controller = make_controller(device, speaker, event_bus)

        await device.select()
        assert device.current_glyph == PAUSE_GLYPH

        await asyncio.gather(*controller.clear_tasks)
        shown, options = device.display_history[-1]
        assert shown == EMPTY_GLYPH
        assert options.transition is DisplayTransition.CROSS_FADE

    @pytest.mark.asyncio
    async def test_speaker_failure_is_contained(self, device, event_bus):
        speaker = AsyncMock()
        speaker.get_current_state.side_effect = SpeakerError("unreachable", host="10.0.0.2")
        make_controller(device, speaker, event_bus)

        await device.select()

        speaker.toggle_playback.assert_not_called()
        assert device.display_history == []


class TestTouch:

    @pytest.mark.asyncio
    async def test_touch_shows_volume_then_clears(self, device, event_bus):
        speaker = VirtualSpeaker(volume=42)
        controller = make_controller(device, speaker, event_bus)

        await device.touch()
        assert device.current_glyph == number_glyph(42)

        await asyncio.gather(*controller.clear_tasks)
        assert device.current_glyph == EMPTY_GLYPH

    @pytest.mark.asyncio
    async def test_touch_at_full_volume(self, device, event_bus):
        make_controller(device, VirtualSpeaker(volume=100), event_bus)
        await device.touch()
        assert device.current_glyph == number_glyph(100)

    @pytest.mark.asyncio
    async def test_older_clear_is_not_cancelled_by_newer_status(self, device, event_bus):
        speaker = VirtualSpeaker(volume=10)
        controller = make_controller(device, speaker, event_bus)

        await device.touch()
        await device.touch()
        assert len(controller.clear_tasks) == 2

        await asyncio.gather(*controller.clear_tasks)
        cleared = [g for g, _ in device.display_history if g == EMPTY_GLYPH]
        assert len(cleared) == 2

    @pytest.mark.asyncio
    async def test_clear_skipped_after_disconnect(self, device, event_bus):
        controller = make_controller(device, VirtualSpeaker(volume=5), event_bus)

        await device.touch()
        await device.disconnect()
        await asyncio.gather(*controller.clear_tasks)

        assert device.current_glyph == number_glyph(5)

    @pytest.mark.asyncio
    async def test_repeated_touches_keep_task_bookkeeping_bounded(self, device, event_bus):
        controller = make_controller(device, VirtualSpeaker(volume=30), event_bus, clear_ms=0)

        for _ in range(200):
            await device.touch()
            await asyncio.gather(*controller.clear_tasks)
        await asyncio.sleep(0)

        registry = TaskRegistry.instance()
        assert len(registry.list_all()) <= HISTORY_LIMIT
        assert registry.active() == []
        assert len(controller.clear_tasks) <= 1


class TestRotate:

    @pytest.mark.asyncio
    async def test_rotation_sets_volume_and_shows_it(self, device, event_bus):
        speaker = VirtualSpeaker(volume=0)
        controller = make_controller(device, speaker, event_bus)

        await device.rotate(0.5)

        assert speaker.volume == 75
        shown, options = device.display_history[-1]
        assert shown == number_glyph(75)
        assert options.transition is DisplayTransition.CROSS_FADE
        # Volume display stays until the next gesture
        assert controller.clear_tasks == []

    @pytest.mark.asyncio
    async def test_rotation_to_upper_limit(self, device, event_bus):
        speaker = VirtualSpeaker(volume=0)
        make_controller(device, speaker, event_bus)

        await device.rotate(5.0)

        assert speaker.volume == 100
        assert device.current_glyph == number_glyph(100)

    @pytest.mark.asyncio
    async def test_unregister_stops_handling(self, device, event_bus):
        speaker = VirtualSpeaker(volume=0)
        controller = make_controller(device, speaker, event_bus)
        controller.unregister()

        await device.rotate(0.5)
        assert speaker.volume == 0
