"""Engine: frame scheduling for glyph animations"""

from .animation_player import AnimationPlayer

__all__ = ["AnimationPlayer"]
