"""Startup splash animation."""

import asyncio

import pytest

from conftest import FakeSink
from controllers import run_startup_splash
from models.config import DisplayConfig
from models.enums import DisplayTransition, GlyphAlignment


class TestStartupSplash:

    @pytest.mark.asyncio
    async def test_buffered_splash_plays_every_frame(self):
        sink = FakeSink()
        config = DisplayConfig(animation_interval_ms=1, splash_buffer=True)

        player = await run_startup_splash(sink, config)
        await asyncio.wait_for(player.wait_finished(), timeout=5.0)
        player.stop()

        assert len(sink.calls) == 35
        assert sink.transitions[0] is DisplayTransition.CROSS_FADE
        assert set(sink.transitions[1:]) == {DisplayTransition.IMMEDIATE}

    @pytest.mark.asyncio
    async def test_unbuffered_splash(self):
        sink = FakeSink()
        config = DisplayConfig(animation_interval_ms=1, splash_buffer=False, alignment=GlyphAlignment.LEFT)

        player = await run_startup_splash(sink, config)
        await asyncio.wait_for(player.wait_finished(), timeout=5.0)
        player.stop()

        assert len(sink.calls) == 25 - 9 + 1
        assert all(options.alignment is GlyphAlignment.LEFT for _, options in sink.calls)
        assert player.name == "splash"
