from .animation_shutdown_handler import AnimationShutdownHandler
from .device_shutdown_handler import DeviceShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "AnimationShutdownHandler",
    "DeviceShutdownHandler",
    "TaskCancellationHandler",
]
