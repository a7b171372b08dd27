"""Append-only achievement log."""

from datetime import datetime

import structlog
from sqlalchemy.orm import Session

from little_learners.models.achievement import Achievement
from little_learners.storage.tables import AchievementRow
from little_learners.storage.users import get_user_row

logger = structlog.get_logger()


def list_achievements(db: Session, user_id: int) -> list[Achievement]:
    rows = (
        db.query(AchievementRow)
        .filter(AchievementRow.user_id == user_id)
        .order_by(AchievementRow.earned_at.desc(), AchievementRow.id.desc())
        .all()
    )
    return [Achievement.model_validate(r) for r in rows]


def add_achievement(
    db: Session,
    user_id: int,
    title: str,
    description: str,
    icon: str,
    earned_at: datetime | None = None,
) -> Achievement:
    get_user_row(db, user_id)
    row = AchievementRow(
        user_id=user_id,
        title=title,
        description=description,
        icon=icon,
        earned_at=earned_at or datetime.now(),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("achievement_earned", user_id=user_id, title=title)
    return Achievement.model_validate(row)

