# src/leverlog/ui/overlays.py
# --------------------------------------------------------------------
# OpenCV drawing utilities for LeverLog.
# Renders the read-only pose chain of a saved entry into a small BGR
# image (history cards, edit dialog preview) and converts such images
# into Qt images for display.
# --------------------------------------------------------------------

from typing import Optional, Sequence, Tuple
import numpy as np, cv2                     # OpenCV for drawing; NumPy image buffers
from ..config import (
    DOT_SIZE, LINE_WIDTH, SEGMENT_BGR, THUMBNAIL_SCALE, THUMBNAIL_SIZE,
)
from ..geometry.chain import Chain
from ..geometry.pose import is_valid_pose, restore

_BG = (255, 255, 255)                       # White card background
_DOT = (0, 0, 0)                            # Black joint markers

# ---------------------- Chain Drawing ----------------------
def draw_chain(frame: np.ndarray, chain: Chain, scale: float = 1.0,
               center: Optional[Tuple[float, float]] = None) -> None:
    """
    Draws every segment of `chain` onto `frame` in place, then a marker
    at each joint. The chain root sits at `center` (frame middle by default).
    """
    h, w = frame.shape[:2]
    if center is None:
        center = (w / 2.0, h / 2.0)
    thick = max(1, int(round(LINE_WIDTH * scale)))
    radius = max(1, int(round(DOT_SIZE * scale / 2)))

    # Segment lines, root first so children overlap parents
    for (x0, y0), (x1, y1), color in chain.segments(center, scale):
        cv2.line(frame, (int(round(x0)), int(round(y0))), (int(round(x1)), int(round(y1))),
                 SEGMENT_BGR.get(color, (80, 80, 80)), thick, cv2.LINE_AA)

    # Joint markers on top
    for (x, y) in chain.joint_positions(center, scale):
        cv2.circle(frame, (int(round(x)), int(round(y))), radius, _DOT, -1, cv2.LINE_AA)

# ---------------------- Thumbnail ----------------------
def render_pose_thumbnail(angles: Optional[Sequence[float]],
                          size: Tuple[int, int] = THUMBNAIL_SIZE,
                          scale: float = THUMBNAIL_SCALE) -> np.ndarray:
    """
    Returns a (h, w, 3) uint8 BGR image of the saved pose.
    Entries without a usable 4-angle pose get a blank card (no default figure),
    matching how the history list hides the drawing for such records.
    """
    w, h = size
    img = np.full((h, w, 3), _BG, dtype=np.uint8)
    if not is_valid_pose(angles):
        return img
    draw_chain(img, restore(angles, read_only=True), scale=scale)
    return img

# ---------------------- Qt Conversion ----------------------
def cvimg_to_qt(QtGui, img_bgr: np.ndarray):  # convert OpenCV BGR image to Qt QImage
    rgb = np.ascontiguousarray(cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB))  # BGR→RGB for Qt
    h, w, ch = rgb.shape
    # copy() so the QImage owns its pixels once `rgb` goes out of scope
    return QtGui.QImage(rgb.data, w, h, ch * w, QtGui.QImage.Format_RGB888).copy()
