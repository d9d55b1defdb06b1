"""
engine/
-------
Playback layer.

    from engine import Player, Session, ManualScheduler
"""

from engine.scheduler import ThreadingScheduler, ManualScheduler
from engine.player    import Player, PlayerStatus, PlayerSnapshot, validate_interval
from engine.session   import Session

__all__ = [
    "ThreadingScheduler",
    "ManualScheduler",
    "Player",
    "PlayerStatus",
    "PlayerSnapshot",
    "validate_interval",
    "Session",
]
