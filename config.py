"""
config.py — Settings
=====================
Replay-speed bounds and server settings.

Speeds are milliseconds per replay tick.  The editor's speed slider
runs 100 → 1000 in steps of 100, starting at 500.

Server settings can be overridden with environment variables:

    VISUALIZER_HOST, VISUALIZER_PORT, VISUALIZER_DEBUG, VISUALIZER_LOG_LEVEL
"""

import os
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Replay speed (ms per tick)
# ---------------------------------------------------------------------------
MIN_SPEED_MS     = 100
MAX_SPEED_MS     = 1000
SPEED_STEP_MS    = 100
DEFAULT_SPEED_MS = 500

SPEED_PRESETS = {
    "slow":   1000,   # teaching mode
    "medium": 500,
    "fast":   200,
    "turbo":  100,
}

DEFAULT_ALGORITHM = "bfs"


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    host:      str  = "127.0.0.1"
    port:      int  = 5000
    debug:     bool = False
    log_level: str  = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.environ.get("VISUALIZER_HOST", cls.host),
            port=int(os.environ.get("VISUALIZER_PORT", cls.port)),
            debug=_env_bool("VISUALIZER_DEBUG", cls.debug),
            log_level=os.environ.get("VISUALIZER_LOG_LEVEL", cls.log_level).upper(),
        )
