from .dial_controller import DialController, rotation_to_volume
from .splash import run_startup_splash

__all__ = [
    'DialController',
    'rotation_to_volume',
    'run_startup_splash',
]
