"""Progress ledger models."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from little_learners.models.base import ApiModel


class ActivityType(StrEnum):
    """Activity types the client ships content for."""

    READING = "reading"
    MATH = "math"


class ProgressUpdate(ApiModel):
    """Upsert payload for one (user, activity type, level) record.

    ``activity_type`` is a plain string: the ledger is a trusted write and
    does not reject types outside :class:`ActivityType`.
    """

    user_id: int
    activity_type: str
    level: int
    completed_items: list[int] = Field(default_factory=list)
    stars: int = 0


class SessionProgressUpdate(ApiModel):
    """Upsert payload for the learner behind the current session."""

    activity_type: str
    level: int
    completed_items: list[int] = Field(default_factory=list)
    stars: int = 0


class ProgressRecord(ApiModel):
    id: int
    user_id: int
    activity_type: str
    level: int
    completed_items: list[int] = Field(default_factory=list)
    total_items: int
    stars: int = 0
    updated_at: datetime | None = None

