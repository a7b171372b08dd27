"""Parent dashboard aggregate models."""

import datetime as dt

from pydantic import Field

from little_learners.models.achievement import Achievement
from little_learners.models.base import ApiModel
from little_learners.models.user import User


class DayActivity(ApiModel):
    """Estimated engaged minutes for one calendar day."""

    day: str  # "Mon" .. "Sun"
    date: dt.date
    minutes: float = 0.0


class LevelProgress(ApiModel):
    """Completion summary for one level of one activity type."""

    activity_type: str
    level: int
    label: str
    completed: int = 0
    total_items: int
    stars: int = 0
    completion_ratio: float = 0.0
    started: bool = False


class Dashboard(ApiModel):
    user: User
    reading: list[LevelProgress] = Field(default_factory=list)
    math: list[LevelProgress] = Field(default_factory=list)
    weekly_activity: list[DayActivity] = Field(default_factory=list)
    total_session_minutes: float = 0.0
    total_stars: int = 0
    achievements: list[Achievement] = Field(default_factory=list)
