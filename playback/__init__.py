"""
playback/
---------
Replays an engine Result against the visualization state.

    from playback import Player
    player = Player(delay=0.4)
    player.start(result)
    player.snapshot()      # → VisualState copy
"""

from playback.state import PlaybackStatus, VisualState
from playback.player import Player, DEFAULT_DELAY

__all__ = ["Player", "DEFAULT_DELAY", "VisualState", "PlaybackStatus"]
