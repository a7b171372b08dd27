"""REST API routes for the reading word and math activity catalogs."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from little_learners.db import get_db
from little_learners.models.content import MathActivity, ReadingWord, ReadingWordIn
from little_learners.storage import content

router = APIRouter(prefix="/api")


@router.get("/reading/words", response_model=list[ReadingWord])
def list_reading_words(
    level: int | None = Query(default=None), db: Session = Depends(get_db)
) -> list[ReadingWord]:
    return content.list_reading_words(db, level)


@router.get("/reading/words/all", response_model=list[ReadingWord])
def list_all_reading_words(db: Session = Depends(get_db)) -> list[ReadingWord]:
    return content.list_reading_words(db)


@router.post("/reading/words", response_model=ReadingWord)
def add_reading_word(payload: ReadingWordIn, db: Session = Depends(get_db)) -> ReadingWord:
    return content.add_reading_word(db, payload.word, payload.image_url, payload.level)


@router.put("/reading/words/{word_id}", response_model=ReadingWord)
def update_reading_word(
    word_id: int, payload: ReadingWordIn, db: Session = Depends(get_db)
) -> ReadingWord:
    return content.update_reading_word(db, word_id, payload.word, payload.image_url, payload.level)


@router.delete("/reading/words/{word_id}")
def delete_reading_word(word_id: int, db: Session = Depends(get_db)) -> dict:
    content.delete_reading_word(db, word_id)
    return {"success": True}


@router.get("/math/activities", response_model=list[MathActivity])
def list_math_activities(
    type: str | None = Query(default=None),
    level: int | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[MathActivity]:
    return content.list_math_activities(db, type, level)


@router.get("/math/activities/{activity_id}", response_model=MathActivity)
def get_math_activity(activity_id: int, db: Session = Depends(get_db)) -> MathActivity:
    return content.get_math_activity(db, activity_id)
