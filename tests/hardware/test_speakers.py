"""SoCo adapter (with a mocked soco.SoCo client) and the virtual speaker."""

from unittest.mock import MagicMock, PropertyMock, patch

import pytest
from soco.exceptions import SoCoException

from hardware.speaker import VirtualSpeaker, create_speaker
from hardware.speaker.soco_speaker import SoCoSpeaker
from models.config import SpeakerConfig
from models.enums import PlaybackState, SpeakerBackend
from models.errors import OutOfRangeError, SpeakerError


def make_client(transport_state="PLAYING", volume=30):
    client = MagicMock()
    client.get_current_transport_info.return_value = {
        "current_transport_state": transport_state,
        "current_transport_status": "OK",
        "current_transport_speed": "1",
    }
    client.volume = volume
    return client


class TestSoCoSpeaker:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw, state", [
        ("PLAYING", PlaybackState.PLAYING),
        ("PAUSED_PLAYBACK", PlaybackState.PAUSED),
        ("STOPPED", PlaybackState.OTHER),
        ("TRANSITIONING", PlaybackState.OTHER),
    ])
    async def test_transport_state_mapping(self, raw, state):
        speaker = SoCoSpeaker("10.0.0.2", client=make_client(raw))
        assert await speaker.get_current_state() is state

    @pytest.mark.asyncio
    async def test_toggle_pauses_when_playing(self):
        client = make_client("PLAYING")
        await SoCoSpeaker("10.0.0.2", client=client).toggle_playback()

        client.pause.assert_called_once_with()
        client.play.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["PAUSED_PLAYBACK", "STOPPED"])
    async def test_toggle_plays_otherwise(self, raw):
        client = make_client(raw)
        await SoCoSpeaker("10.0.0.2", client=client).toggle_playback()

        client.play.assert_called_once_with()
        client.pause.assert_not_called()

    @pytest.mark.asyncio
    async def test_volume_roundtrip(self):
        client = make_client(volume=12)
        speaker = SoCoSpeaker("10.0.0.2", client=client)

        assert await speaker.get_volume() == 12
        await speaker.set_volume(64)
        assert client.volume == 64

    @pytest.mark.asyncio
    @pytest.mark.parametrize("volume", [-1, 101, 50.5, True])
    async def test_invalid_volume_rejected(self, volume):
        client = make_client(volume=12)
        with pytest.raises(OutOfRangeError):
            await SoCoSpeaker("10.0.0.2", client=client).set_volume(volume)
        assert client.volume == 12

    @pytest.mark.asyncio
    async def test_network_errors_become_speaker_errors(self):
        client = make_client()
        client.get_current_transport_info.side_effect = OSError("No route to host")

        with pytest.raises(SpeakerError) as exc_info:
            await SoCoSpeaker("10.0.0.2", client=client).get_current_state()
        assert exc_info.value.details["host"] == "10.0.0.2"
        assert "OSError" in exc_info.value.details["error"]

    @pytest.mark.asyncio
    async def test_soco_errors_become_speaker_errors(self):
        client = make_client()
        type(client).volume = PropertyMock(side_effect=SoCoException("UPnP error 501"))

        with pytest.raises(SpeakerError):
            await SoCoSpeaker("10.0.0.2", client=client).get_volume()

    def test_builds_soco_client_from_host(self):
        with patch("hardware.speaker.soco_speaker.soco.SoCo") as soco_cls:
            speaker = SoCoSpeaker("192.168.1.50")
        soco_cls.assert_called_once_with("192.168.1.50")
        assert speaker.client is soco_cls.return_value


class TestVirtualSpeaker:

    @pytest.mark.asyncio
    async def test_toggle(self):
        speaker = VirtualSpeaker(state=PlaybackState.PAUSED)
        await speaker.toggle_playback()
        assert await speaker.get_current_state() is PlaybackState.PLAYING
        await speaker.toggle_playback()
        assert await speaker.get_current_state() is PlaybackState.PAUSED

    @pytest.mark.asyncio
    async def test_volume(self):
        speaker = VirtualSpeaker(volume=3)
        await speaker.set_volume(99)
        assert await speaker.get_volume() == 99
        with pytest.raises(OutOfRangeError):
            await speaker.set_volume(101)


class TestCreateSpeaker:

    def test_virtual_backend(self):
        speaker = create_speaker(SpeakerConfig(backend=SpeakerBackend.VIRTUAL, initial_volume=33))
        assert isinstance(speaker, VirtualSpeaker)
        assert speaker.volume == 33

    def test_soco_backend(self):
        with patch("hardware.speaker.soco_speaker.soco.SoCo"):
            speaker = create_speaker(SpeakerConfig(backend=SpeakerBackend.SOCO, host="10.0.0.9"))
        assert isinstance(speaker, SoCoSpeaker)
        assert speaker.host == "10.0.0.9"
