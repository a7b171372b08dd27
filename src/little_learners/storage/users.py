"""Learner profile persistence."""

from datetime import datetime

import structlog
from sqlalchemy import delete, func
from sqlalchemy.orm import Session

from little_learners.errors import NotFoundError, ValidationError
from little_learners.models.user import User
from little_learners.storage.tables import AchievementRow, LearnerSessionRow, ProgressRow, UserRow

logger = structlog.get_logger()


def _stars_by_user(db: Session, user_ids: list[int]) -> dict[int, int]:
    """Sum progress stars per learner; the ledger is the only star source."""
    if not user_ids:
        return {}
    rows = (
        db.query(ProgressRow.user_id, func.coalesce(func.sum(ProgressRow.stars), 0))
        .filter(ProgressRow.user_id.in_(user_ids))
        .group_by(ProgressRow.user_id)
        .all()
    )
    return {user_id: int(total) for user_id, total in rows}


def _to_user(row: UserRow, total_stars: int) -> User:
    return User(
        id=row.id,
        name=row.name,
        age=row.age,
        total_stars=total_stars,
        last_active=row.last_active,
    )


def _validate_profile(name: str | None, age: int | None) -> tuple[str, int]:
    if not name or not name.strip() or age is None:
        raise ValidationError("Name and age are required")
    if age <= 0:
        raise ValidationError("Age must be a positive number")
    return name.strip(), age


def get_user_row(db: Session, user_id: int) -> UserRow:
    row = db.get(UserRow, user_id)
    if row is None:
        raise NotFoundError("User not found")
    return row


def get_user(db: Session, user_id: int) -> User:
    row = get_user_row(db, user_id)
    return _to_user(row, _stars_by_user(db, [row.id]).get(row.id, 0))


def list_users(db: Session) -> list[User]:
    """All profiles, most recently active first; never-active profiles last."""
    rows = (
        db.query(UserRow)
        .order_by(UserRow.last_active.is_(None), UserRow.last_active.desc(), UserRow.id)
        .all()
    )
    stars = _stars_by_user(db, [r.id for r in rows])
    return [_to_user(r, stars.get(r.id, 0)) for r in rows]


def create_user(db: Session, name: str | None, age: int | None) -> User:
    name, age = _validate_profile(name, age)
    row = UserRow(name=name, age=age, last_active=None)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("user_created", user_id=row.id)
    return _to_user(row, 0)


def update_user(db: Session, user_id: int, name: str | None = None, age: int | None = None) -> User:
    row = get_user_row(db, user_id)
    name, age = _validate_profile(
        name if name is not None else row.name,
        age if age is not None else row.age,
    )
    row.name = name
    row.age = age
    db.commit()
    db.refresh(row)
    return get_user(db, user_id)


def touch_last_active(db: Session, user_id: int) -> User:
    row = get_user_row(db, user_id)
    row.last_active = datetime.now()
    db.commit()
    db.refresh(row)
    return get_user(db, user_id)


def delete_user(db: Session, user_id: int) -> None:
    """Delete a learner together with their progress, badges and sessions."""
    get_user_row(db, user_id)
    for table in (ProgressRow, AchievementRow, LearnerSessionRow):
        db.execute(delete(table).where(table.user_id == user_id))
    db.execute(delete(UserRow).where(UserRow.id == user_id))
    db.commit()
    logger.info("user_deleted", user_id=user_id)
