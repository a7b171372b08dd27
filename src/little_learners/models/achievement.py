"""Achievement (badge) models."""

from datetime import datetime

from little_learners.models.base import ApiModel


class AchievementCreate(ApiModel):
    title: str
    description: str
    icon: str
    earned_at: datetime | None = None


class Achievement(ApiModel):
    id: int
    user_id: int
    title: str
    description: str
    icon: str
    earned_at: datetime
