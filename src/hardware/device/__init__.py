"""
Control device layer

Exports the device protocols, the virtual implementation and the
config-driven discovery factory.
"""

from models.config import DeviceConfig
from models.enums import DeviceBackend
from services.event_bus import EventBus

from .device_interface import IGlyphSink, IControlDevice, IDeviceDiscovery
from .virtual_device import VirtualControlDevice, VirtualDeviceDiscovery
from .keyboard_input import KeyboardDeviceInput


def create_discovery(config: DeviceConfig, event_bus: EventBus) -> IDeviceDiscovery:
    """Build the discovery for the configured device backend."""
    if config.backend is DeviceBackend.VIRTUAL:
        return VirtualDeviceDiscovery(
            event_bus,
            advertised_id=config.virtual_device_id,
            notches_per_cycle=config.notches_per_cycle,
        )
    raise ValueError(f"Unsupported device backend: {config.backend}")


__all__ = [
    "IGlyphSink",
    "IControlDevice",
    "IDeviceDiscovery",
    "VirtualControlDevice",
    "VirtualDeviceDiscovery",
    "KeyboardDeviceInput",
    "create_discovery",
]
