"""Learner profile models."""

from datetime import datetime

from pydantic import Field

from little_learners.models.base import ApiModel


class UserCreate(ApiModel):
    name: str | None = None
    age: int | None = None


class UserUpdate(ApiModel):
    name: str | None = None
    age: int | None = None


class User(ApiModel):
    """A learner profile as returned to clients.

    ``total_stars`` is not stored on the profile; it is summed from the
    learner's progress records each time the profile is read.
    """

    id: int
    name: str
    age: int
    total_stars: int = 0
    last_active: datetime | None = None


class Activation(ApiModel):
    """Result of switching the active learner."""

    user: User
    session_token: str = Field(description="Opaque token for the X-Session-Token header")
