# src/leverlog/config.py
# ---------------------------------------------------------------
# Global configuration for LeverLog: the geometry of the four-
# segment pose chain, timer cadence, history window and UI
# settings. Constants live here so behavior can be tuned without
# touching the modules that use them.
# ---------------------------------------------------------------

import os
from dataclasses import dataclass, field    # Lightweight configuration classes
from typing import Optional, Tuple

from .utils.resources import writable_dir

# ------------------ Pose Chain Geometry ------------------
# Slot order is root-first: blue (torso/arm), green, purple, yellow.
# Lengths are in canvas points and never change at runtime.

SEGMENT_COLORS = ("blue", "green", "purple", "yellow")
SEGMENT_LENGTHS = (80.0, 100.0, 60.0, 60.0)

# Clamp ranges in screen-up / clockwise degrees, inclusive.
# Root (blue) is absolute; the three children are relative to their parent.
SEGMENT_CLAMPS: Tuple[Tuple[float, float], ...] = (
    (190.0, 240.0),     # blue   (absolute)
    (-180.0, -90.0),    # green  (relative)
    (-165.0, 25.0),     # purple (relative)
    (0.0, 155.0),       # yellow (relative)
)

DEFAULT_POSE = (235.0, -145.0, -35.0, 70.0)   # Used when no valid saved pose exists
CHAIN_SIZE = 4

# ------------------ Editor / Drawing ------------------

DOT_SIZE = 12                        # Joint marker diameter in points
LINE_WIDTH = 5                       # Segment stroke width
HIT_RADIUS = 18.0                    # Max cursor distance for grabbing a joint marker
THUMBNAIL_SCALE = 0.6                # Segment length multiplier on history cards
THUMBNAIL_SIZE = (120, 120)          # (width, height) of history pose thumbnails

# BGR colors for OpenCV thumbnails (matches the Qt colors by name)
SEGMENT_BGR = {
    "blue": (255, 0, 0),
    "green": (0, 180, 0),
    "purple": (128, 0, 128),
    "yellow": (0, 215, 255),
}

# ------------------ Timer ------------------

COUNTDOWN_START = 3                  # Seconds shown before the clock starts
COUNTDOWN_INTERVAL_MS = 1000         # Countdown tick period
RUN_INTERVAL_S = 0.1                 # Clock resolution while running
RUN_INTERVAL_MS = int(RUN_INTERVAL_S * 1000)
ADJUST_STEP_S = 0.1                  # -/+ adjustment applied per press / repeat

# ------------------ History ------------------

HEATMAP_DAYS = 30                    # Heatmap covers today and the 29 days before it

# ------------------ UI Configuration ------------------

WINDOW_TITLE = "Front Lever Timer"
STORE_FILENAME = "entries.json"

# ------------------ AppConfig Dataclass ------------------
# Runtime settings resolved once at startup and handed to MainWindow.
# LEVERLOG_HOME overrides the data folder; LEVERLOG_LOG_LEVEL the log level.

@dataclass
class AppConfig:
    store_path: str = field(default_factory=lambda: os.path.join(writable_dir(), STORE_FILENAME))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, store_path: Optional[str] = None) -> "AppConfig":
        """An explicit store_path wins over LEVERLOG_HOME; the default folder is only created when used."""
        home = os.environ.get("LEVERLOG_HOME")
        level = os.environ.get("LEVERLOG_LOG_LEVEL", "INFO").upper()
        if store_path:
            return cls(store_path=store_path, log_level=level)
        if home:
            return cls(store_path=os.path.join(home, STORE_FILENAME), log_level=level)
        return cls(log_level=level)
