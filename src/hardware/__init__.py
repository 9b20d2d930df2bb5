"""
Hardware Layer

Adapters for the two external collaborators:

- device:  rotary dial controller (discovery, gestures, glyph display)
- speaker: networked speaker (volume, playback)
"""
