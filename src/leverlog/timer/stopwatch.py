# src/leverlog/timer/stopwatch.py
# Countdown + stopwatch driven by host ticks (QTimer in the UI, direct calls in tests).

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import ADJUST_STEP_S, COUNTDOWN_START, RUN_INTERVAL_S

logger = logging.getLogger(__name__)

READY, COUNTDOWN, RUNNING, STOPPED = "READY", "COUNTDOWN", "RUNNING", "STOPPED"

@dataclass
class StopwatchParams:
    countdown_start: int = COUNTDOWN_START
    tick_s: float = RUN_INTERVAL_S
    adjust_step_s: float = ADJUST_STEP_S

class Stopwatch:
    def __init__(self, params: Optional[StopwatchParams] = None) -> None:
        self.p = params or StopwatchParams()
        self.reset()

    def reset(self) -> None:
        self.state = READY
        self.countdown = self.p.countdown_start
        self._ticks = 0     # counted, not summed, so 10 ticks of 0.1 s is exactly 1.0
        self.display_time = 0.0
        self._adjust_amount: Optional[float] = None

    @property
    def elapsed(self) -> float:
        return self._ticks * self.p.tick_s

    @property
    def shown_time(self) -> float:
        return self.display_time if self.state == STOPPED else self.elapsed

    @property
    def adjusting(self) -> bool:
        return self._adjust_amount is not None

    # ---------- transitions ----------

    def start_countdown(self) -> str:
        if self.state != READY:
            logger.debug("[Stopwatch] start_countdown ignored in %s", self.state)
            return self.state
        self.state = COUNTDOWN
        self.countdown = self.p.countdown_start
        return self.state

    def tick_countdown(self) -> str:
        """One countdown second elapsed; the last one starts the clock."""
        if self.state != COUNTDOWN:
            return self.state
        if self.countdown > 1:
            self.countdown -= 1
        else:
            self.state = RUNNING
            self._ticks = 0
            logger.info("[Stopwatch] Running")
        return self.state

    def tick(self) -> float:
        if self.state == RUNNING:
            self._ticks += 1
        return self.elapsed

    def stop(self) -> float:
        if self.state != RUNNING:
            logger.debug("[Stopwatch] stop ignored in %s", self.state)
            return self.display_time
        self.state = STOPPED
        self.display_time = self.elapsed
        logger.info("[Stopwatch] Stopped at %.1fs", self.elapsed)
        return self.display_time

    # ---------- manual correction (STOPPED only) ----------

    def adjust(self, amount: float) -> float:
        if self.state == STOPPED:
            self.display_time = max(0.0, self.display_time + amount)
        return self.display_time

    def begin_adjust(self, amount: float) -> float:
        """Press: apply once immediately, then keep applying on repeat_adjust()."""
        self._adjust_amount = amount
        return self.adjust(amount)

    def repeat_adjust(self) -> float:
        if self._adjust_amount is None:
            return self.display_time
        return self.adjust(self._adjust_amount)

    def end_adjust(self) -> None:
        self._adjust_amount = None


def time_string(seconds: float) -> str:
    """MM:SS.d with tenths truncated, e.g. 61.25 -> '01:01.2'."""
    total = int(max(0.0, seconds) * 10 + 1e-6)   # tolerate 0.1-step float error
    return "%02d:%02d.%01d" % (total // 600, (total // 10) % 60, total % 10)
