"""
Domain errors

Every error raised by glyph composition, animation input validation,
the device layer and the speaker layer derives from DomainError so callers
can tell expected failures apart from bugs.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


# ============================================================
#  Glyphs
# ============================================================

class DimensionMismatchError(DomainError):
    """Glyph rows do not line up (ragged rows or unequal heights)"""
    def __init__(self, message: str, **details):
        super().__init__(
            code="DIMENSION_MISMATCH",
            message=message,
            details=details
        )


class OutOfRangeError(DomainError):
    """Value outside the range a glyph or speaker accepts"""
    def __init__(self, value, low: int, high: int):
        super().__init__(
            code="OUT_OF_RANGE",
            message=f"{value!r} is outside of allowed range {low}-{high}",
            details={"value": value, "low": low, "high": high}
        )


class InvalidBannerError(DomainError):
    """Banner cannot be turned into an animation"""
    def __init__(self, message: str, **details):
        super().__init__(
            code="INVALID_BANNER",
            message=message,
            details=details
        )


# ============================================================
#  Device
# ============================================================

class DeviceError(DomainError):
    """Control device unavailable or failing"""


class DiscoveryTimeoutError(DeviceError):
    """No matching device showed up before the discovery timeout"""
    def __init__(self, timeout_ms: int, device_id: Optional[str] = None):
        super().__init__(
            code="DISCOVERY_TIMEOUT",
            message=f"No device discovered within {timeout_ms} ms",
            details={"timeout_ms": timeout_ms, "device_id": device_id}
        )


class ConnectionTimeoutError(DeviceError):
    """Device was discovered but did not connect"""
    def __init__(self, device_id: str):
        super().__init__(
            code="CONNECTION_TIMEOUT",
            message=f"Device '{device_id}' did not connect",
            details={"device_id": device_id}
        )


class DeviceNotConnectedError(DeviceError):
    """Display or control call on a device that is not connected"""
    def __init__(self, device_id: str):
        super().__init__(
            code="DEVICE_NOT_CONNECTED",
            message=f"Device '{device_id}' is not connected",
            details={"device_id": device_id}
        )


# ============================================================
#  Speaker
# ============================================================

class SpeakerError(DomainError):
    """Speaker unreachable or rejected a command"""
    def __init__(self, message: str, **details):
        super().__init__(
            code="SPEAKER_ERROR",
            message=message,
            details=details
        )
