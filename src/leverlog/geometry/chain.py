# src/leverlog/geometry/chain.py
# Four-segment open kinematic chain used by the pose editor and history thumbnails.
from typing import Iterator, List, Optional, Sequence, Tuple
import logging
import math
from dataclasses import dataclass

import numpy as np

from ..config import (
    CHAIN_SIZE, DEFAULT_POSE, HIT_RADIUS,
    SEGMENT_CLAMPS, SEGMENT_COLORS, SEGMENT_LENGTHS,
)

logger = logging.getLogger(__name__)

# --- TYPE ALIASES ---
Point = Tuple[float, float]

# --- SEGMENT DEFINITION ---

@dataclass
class Segment:
    """One rigid link: angle relative to its parent (absolute for the root)."""
    relative_angle: float
    length: float
    clamp_range: Tuple[float, float]   # inclusive (min, max) in degrees
    color: str = ""

    def clamp(self, deg: float) -> float:
        lo, hi = self.clamp_range
        return max(lo, min(deg, hi))

# --- UTILITY FUNCTIONS ---

def raw_drag_angle(cursor: Point, anchor: Point) -> float:
    """
    Angle (degrees) of the anchor->cursor vector, 0 = screen up, clockwise positive.
    Result is the unwrapped atan2 value shifted by 90°, i.e. in (-90, 270].
    """
    return math.degrees(math.atan2(cursor[1] - anchor[1], cursor[0] - anchor[0]) + math.pi / 2)

def normalize_deg(deg: float) -> float:
    """Wrap into [0, 360)."""
    a = deg % 360.0
    return 0.0 if a >= 360.0 else a   # -1e-20 % 360.0 rounds to 360.0

# --- CHAIN ---

class Chain:
    """
    Root-first chain of CHAIN_SIZE segments.

    Joint i is the end of segment i; it is also the grab handle that rotates
    segment i. Positions are recomputed on every read so that an edit to any
    ancestor is reflected immediately.
    """

    def __init__(self, angles: Sequence[float] = DEFAULT_POSE, read_only: bool = False,
                 lengths: Sequence[float] = SEGMENT_LENGTHS,
                 clamps: Sequence[Tuple[float, float]] = SEGMENT_CLAMPS):
        if not (len(angles) == len(lengths) == len(clamps) == CHAIN_SIZE):
            raise ValueError(f"chain needs exactly {CHAIN_SIZE} angles, lengths and clamps")
        self._segments: List[Segment] = [
            Segment(float(a), float(ln), (float(c[0]), float(c[1])), color)
            for a, ln, c, color in zip(angles, lengths, clamps, SEGMENT_COLORS)
        ]
        self.read_only = read_only
        self._dragging: Optional[int] = None

    def __len__(self) -> int:
        return len(self._segments)

    def __repr__(self) -> str:
        return f"Chain(angles={self.angles()}, read_only={self.read_only})"

    def angles(self) -> List[float]:
        return [s.relative_angle for s in self._segments]

    # ---------- geometry ----------

    def absolute_orientation(self, i: int) -> float:
        """Root angle plus relative angles of segments 1..i."""
        return float(sum(s.relative_angle for s in self._segments[: self._index(i) + 1]))

    def joint_position(self, i: int, center: Point, scale: float = 1.0) -> Point:
        """End point of segment i: center + Σ_{k<=i} length_k·(sin θ_k, -cos θ_k)."""
        i = self._index(i)
        theta = np.radians(np.cumsum([s.relative_angle for s in self._segments[: i + 1]]))
        lengths = np.array([s.length for s in self._segments[: i + 1]], dtype=float) * scale
        x = float(center[0]) + float(np.sum(lengths * np.sin(theta)))
        y = float(center[1]) - float(np.sum(lengths * np.cos(theta)))
        return (x, y)

    def joint_positions(self, center: Point, scale: float = 1.0) -> List[Point]:
        return [self.joint_position(i, center, scale) for i in range(len(self._segments))]

    def segments(self, center: Point, scale: float = 1.0) -> Iterator[Tuple[Point, Point, str]]:
        """Yield (start, end, color) for every segment, root first."""
        start = (float(center[0]), float(center[1]))
        for seg, end in zip(self._segments, self.joint_positions(center, scale)):
            yield start, end, seg.color
            start = end

    def hit_test(self, cursor: Point, center: Point, radius: float = HIT_RADIUS) -> Optional[int]:
        """Index of the joint marker closest to cursor within radius; deeper joints win ties."""
        pts = np.array(self.joint_positions(center), dtype=float)
        d = np.hypot(pts[:, 0] - cursor[0], pts[:, 1] - cursor[1])
        best: Optional[int] = None
        for i in reversed(range(len(d))):   # deeper markers are drawn on top
            if d[i] <= radius and (best is None or d[i] < d[best]):
                best = i
        return best

    # ---------- manual editing ----------

    def update_joint_from_drag(self, i: int, cursor: Point, center: Point) -> float:
        """
        Rotate segment i so that it points at cursor, then clamp. Returns the stored angle.

        The clamp is applied to the raw atan2-derived value, not to the shortest
        angular distance, so ranges straddling the ±180° seam snap to whichever
        bound is numerically closer when the cursor crosses it.
        """
        i = self._index(i)
        seg = self._segments[i]
        if self.read_only:
            return seg.relative_angle
        if i == 0:
            new = seg.clamp(normalize_deg(raw_drag_angle(cursor, center)))
        else:
            anchor = self.joint_position(i - 1, center)
            new = seg.clamp(raw_drag_angle(cursor, anchor) - self.absolute_orientation(i - 1))
        seg.relative_angle = new
        return new

    # ---------- drag state ----------

    @property
    def dragging(self) -> Optional[int]:
        return self._dragging

    def begin_drag(self, i: int) -> None:
        i = self._index(i)
        if not self.read_only:
            logger.debug("[Chain] Dragging joint %d", i)
            self._dragging = i

    def drag_to(self, cursor: Point, center: Point) -> Optional[float]:
        if self._dragging is None:
            return None
        return self.update_joint_from_drag(self._dragging, cursor, center)

    def end_drag(self) -> None:
        self._dragging = None

    # ---------- display ----------

    def angle_labels(self) -> List[str]:
        blue, green, purple, yellow = self.angles()
        return [
            "Blue (Absolute): %.2f°" % math.fmod(blue, 360.0),
            "Green (Relative): %.2f°" % math.fmod(green, 360.0),
            "Purple (Relative): %.2f°" % purple,
            "Yellow (Relative): %.2f°" % yellow,
        ]

    def _index(self, i: int) -> int:
        if not 0 <= i < len(self._segments):
            raise IndexError(f"joint index {i} out of range 0..{len(self._segments) - 1}")
        return i
