"""Seed the content catalogs from the YAML files under config/content."""

from pathlib import Path

import structlog
from sqlalchemy.orm import Session

from little_learners.config import load_math_activities, load_reading_words
from little_learners.storage.tables import MathActivityRow, ReadingWordRow

logger = structlog.get_logger()


def seed_catalogs(db: Session, content_dir: Path | None = None) -> dict[str, int]:
    """Insert seed words and activities into empty catalog tables.

    Tables that already hold rows are left untouched.

    Returns:
        Number of rows inserted per catalog.
    """
    inserted = {"reading_words": 0, "math_activities": 0}

    if db.query(ReadingWordRow).first() is None:
        for word in load_reading_words(content_dir):
            db.add(ReadingWordRow(word=word["word"].upper(), image_url=word["image_url"], level=word["level"]))
            inserted["reading_words"] += 1

    if db.query(MathActivityRow).first() is None:
        for activity in load_math_activities(content_dir):
            db.add(MathActivityRow(
                type=activity["type"],
                level=int(activity["level"]),
                question=activity["question"],
                answer=int(activity["answer"]),
                objects=list(activity.get("objects") or []),
            ))
            inserted["math_activities"] += 1

    db.commit()
    logger.info("catalogs_seeded", **inserted)
    return inserted
