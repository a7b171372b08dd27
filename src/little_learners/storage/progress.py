"""Progress ledger: one record per (user, activity type, level)."""

from collections.abc import Iterable
from datetime import datetime

import structlog
from sqlalchemy import delete
from sqlalchemy.orm import Session

from little_learners.config import get_settings
from little_learners.models.progress import ProgressRecord
from little_learners.storage.tables import ProgressRow

logger = structlog.get_logger()


def dedupe_items(items: Iterable[int]) -> list[int]:
    """Drop repeated item ids, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))


def find_progress(db: Session, user_id: int, activity_type: str, level: int) -> ProgressRow | None:
    return (
        db.query(ProgressRow)
        .filter(
            ProgressRow.user_id == user_id,
            ProgressRow.activity_type == activity_type,
            ProgressRow.level == level,
        )
        .one_or_none()
    )


def record_progress(
    db: Session,
    user_id: int,
    activity_type: str,
    level: int,
    completed_items: Iterable[int],
    stars: int,
) -> ProgressRecord:
    """Upsert the record for (user_id, activity_type, level).

    An existing record has its completed items and stars replaced with the
    supplied values, not merged. A new record gets the fixed item count
    configured for its activity type. Item ids, level and star count are
    stored as given; they are not checked against the content catalog.
    """
    items = dedupe_items(completed_items)
    now = datetime.now()
    row = find_progress(db, user_id, activity_type, level)
    if row is not None:
        row.completed_items = items
        row.stars = stars
        row.updated_at = now
        created = False
    else:
        row = ProgressRow(
            user_id=user_id,
            activity_type=activity_type,
            level=level,
            completed_items=items,
            total_items=get_settings().total_items_for(activity_type),
            stars=stars,
            updated_at=now,
        )
        db.add(row)
        created = True
    db.commit()
    db.refresh(row)
    logger.info(
        "progress_upserted",
        user_id=user_id,
        activity_type=activity_type,
        level=level,
        completed=len(items),
        stars=stars,
        created=created,
    )
    return ProgressRecord.model_validate(row)


def list_progress(db: Session, user_id: int, activity_type: str | None = None) -> list[ProgressRecord]:
    query = db.query(ProgressRow).filter(ProgressRow.user_id == user_id)
    if activity_type is not None:
        query = query.filter(ProgressRow.activity_type == activity_type)
    rows = query.order_by(ProgressRow.activity_type, ProgressRow.level).all()
    return [ProgressRecord.model_validate(r) for r in rows]


def clear_progress(db: Session, user_id: int, activity_type: str | None = None) -> int:
    """Delete a learner's records, optionally for one activity type only."""
    stmt = delete(ProgressRow).where(ProgressRow.user_id == user_id)
    if activity_type is not None:
        stmt = stmt.where(ProgressRow.activity_type == activity_type)
    res = db.execute(stmt)
    db.commit()
    removed = res.rowcount or 0
    logger.info("progress_cleared", user_id=user_id, activity_type=activity_type, removed=removed)
    return removed
