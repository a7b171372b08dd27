"""Reading word and math activity catalogs."""

import structlog
from sqlalchemy.orm import Session

from little_learners.content.answer_options import answer_options
from little_learners.errors import NotFoundError, ValidationError
from little_learners.models.content import MathActivity, ReadingWord
from little_learners.storage.tables import MathActivityRow, ReadingWordRow

logger = structlog.get_logger()


def _validate_word(word: str | None, image_url: str | None, level: int | None) -> tuple[str, str, int]:
    if not word or not word.strip() or not image_url or not level:
        raise ValidationError("Missing required fields")
    return word.strip().upper(), image_url, level


def list_reading_words(db: Session, level: int | None = None) -> list[ReadingWord]:
    query = db.query(ReadingWordRow)
    if level:
        query = query.filter(ReadingWordRow.level == level)
    return [ReadingWord.model_validate(r) for r in query.order_by(ReadingWordRow.id).all()]


def add_reading_word(db: Session, word: str | None, image_url: str | None, level: int | None) -> ReadingWord:
    word, image_url, level = _validate_word(word, image_url, level)
    row = ReadingWordRow(word=word, image_url=image_url, level=level)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("reading_word_added", word_id=row.id, level=level)
    return ReadingWord.model_validate(row)


def update_reading_word(
    db: Session, word_id: int, word: str | None, image_url: str | None, level: int | None
) -> ReadingWord:
    word, image_url, level = _validate_word(word, image_url, level)
    row = db.get(ReadingWordRow, word_id)
    if row is None:
        raise NotFoundError("Word not found")
    row.word = word
    row.image_url = image_url
    row.level = level
    db.commit()
    db.refresh(row)
    return ReadingWord.model_validate(row)


def delete_reading_word(db: Session, word_id: int) -> None:
    row = db.get(ReadingWordRow, word_id)
    if row is None:
        raise NotFoundError("Word not found")
    db.delete(row)
    db.commit()
    logger.info("reading_word_deleted", word_id=word_id)


def _to_activity(row: MathActivityRow) -> MathActivity:
    activity = MathActivity.model_validate(row)
    activity.options = answer_options(row.id, row.answer)
    return activity


def list_math_activities(
    db: Session, activity_type: str | None = None, level: int | None = None
) -> list[MathActivity]:
    """Activities of one type and level, or the whole catalog.

    Filtering only applies when both ``activity_type`` and ``level`` are given.
    """
    query = db.query(MathActivityRow)
    if activity_type and level:
        query = query.filter(MathActivityRow.type == activity_type, MathActivityRow.level == level)
    return [_to_activity(r) for r in query.order_by(MathActivityRow.id).all()]


def get_math_activity(db: Session, activity_id: int) -> MathActivity:
    row = db.get(MathActivityRow, activity_id)
    if row is None:
        raise NotFoundError("Math activity not found")
    return _to_activity(row)
