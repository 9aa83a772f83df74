# src/leverlog/geometry/pose.py
# Conversion between a live Chain and the persisted 4-angle pose list.
from typing import Any, Iterable, Optional, Tuple
import logging
import math

from ..config import CHAIN_SIZE, DEFAULT_POSE
from .chain import Chain

logger = logging.getLogger(__name__)

# (blue absolute, green relative, purple relative, yellow relative) in degrees
Pose = Tuple[float, float, float, float]


def is_valid_pose(values: Any) -> bool:
    """True iff values holds exactly CHAIN_SIZE finite numbers."""
    if values is None:
        return False
    try:
        nums = [float(v) for v in values]
    except (TypeError, ValueError):
        return False
    return len(nums) == CHAIN_SIZE and all(math.isfinite(v) for v in nums)


def capture(chain: Chain) -> Pose:
    """Snapshot the chain's angles verbatim (no wrapping or clamping)."""
    return tuple(chain.angles())


def restore(pose: Optional[Iterable[float]], read_only: bool = False) -> Chain:
    """
    Build a chain from a saved pose.

    Anything other than exactly four finite values is treated as "no saved pose"
    and yields the default pose instead of an error.
    """
    try:
        values = list(pose) if pose is not None else []
    except TypeError:
        values = []
    if not is_valid_pose(values):
        logger.debug("[Pose] No usable saved pose (%r), using default", pose)
        return Chain(DEFAULT_POSE, read_only=read_only)
    return Chain([float(v) for v in values], read_only=read_only)
