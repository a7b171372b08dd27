"""Reading word and math activity catalog models."""

from pydantic import Field

from little_learners.models.base import ApiModel


class ReadingWordIn(ApiModel):
    word: str | None = None
    image_url: str | None = None
    level: int | None = None


class ReadingWord(ApiModel):
    id: int
    word: str
    level: int
    image_url: str | None = None


class MathActivity(ApiModel):
    id: int
    type: str  # "counting" or "addition"
    level: int
    question: str
    answer: int
    objects: list[str] = Field(default_factory=list)
    options: list[int] = Field(default_factory=list)
