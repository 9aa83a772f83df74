# src/leverlog/data_models.py

from __future__ import annotations
import uuid
from datetime import date as Date, datetime
from typing import List, Literal
from pydantic import BaseModel, Field, confloat, conint

# --- Stored Records ---

class WorkoutEntry(BaseModel):
    """One saved hold: when, how long, and the pose it was held in."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Stable record id.")
    date: datetime = Field(default_factory=datetime.now, description="Local time of saving.")
    time_under_tension: confloat(ge=0.0) = Field(description="Hold duration in seconds.")
    # [blue, green, purple, yellow] in degrees; any other length means "no saved pose"
    joint_angles: List[float] = Field(default_factory=list)

    def day(self) -> Date:
        return self.date.date()

class StoreDocument(BaseModel):
    """On-disk layout of the entry store file."""
    version: Literal[1] = 1
    entries: List[WorkoutEntry] = []

# --- History Analytics ---

class DailyTensionData(BaseModel):
    date: Date
    weekday: conint(ge=0, le=6)     # 0 = Sunday, 6 = Saturday
    week: conint(ge=0)              # 0-based, relative to the window start
    total_time: confloat(ge=0.0) = 0.0

class HistorySummary(BaseModel):
    today_total: float = 0.0
    daily_average: float = 0.0
    max_daily_total: float = 1.0
    heatmap: List[DailyTensionData] = []
