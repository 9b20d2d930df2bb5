"""Shared fixtures: event bus, fake display sink, virtual device."""

import sys
from typing import List, Set, Tuple

import pytest
import pytest_asyncio

# Set UTF-8 encoding for output (glyph previews use block characters)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

from hardware.device import VirtualControlDevice
from lifecycle.task_registry import TaskRegistry
from models.enums import DisplayTransition
from models.errors import DeviceNotConnectedError
from models.glyph import DisplayOptions, Glyph
from services.event_bus import EventBus


class FakeSink:
    """
    Records every display call.

    Args:
        fail_on: call numbers (0-based) that raise DeviceNotConnectedError
    """

    def __init__(self, connected: bool = True, fail_on: Set[int] = frozenset()):
        self.is_connected = connected
        self.fail_on = set(fail_on)
        self.calls: List[Tuple[Glyph, DisplayOptions]] = []
        self.attempts = 0

    async def display_glyph(self, glyph: Glyph, options: DisplayOptions) -> None:
        attempt = self.attempts
        self.attempts += 1
        if attempt in self.fail_on:
            raise DeviceNotConnectedError("fake-sink")
        self.calls.append((glyph, options))

    @property
    def transitions(self) -> List[DisplayTransition]:
        return [options.transition for _, options in self.calls]

    @property
    def glyphs(self) -> List[Glyph]:
        return [glyph for glyph, _ in self.calls]


@pytest.fixture(autouse=True)
def fresh_task_registry():
    TaskRegistry.reset()
    yield
    TaskRegistry.reset()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def sink():
    return FakeSink()


@pytest_asyncio.fixture
async def device(event_bus):
    dial = VirtualControlDevice("test-dial", event_bus, notches_per_cycle=50, preview=False)
    await dial.open()
    dial.set_rotation_range(-1.0, 1.0, 0.0, 2.0)
    return dial
