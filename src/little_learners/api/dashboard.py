"""REST API routes for achievements and the parent dashboard."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from little_learners.analysis.aggregation import build_dashboard
from little_learners.config import get_settings
from little_learners.db import get_db
from little_learners.models.achievement import Achievement, AchievementCreate
from little_learners.models.dashboard import Dashboard
from little_learners.storage import achievements, progress, users

router = APIRouter(prefix="/api")


@router.get("/user/{user_id}/achievements", response_model=list[Achievement])
def list_achievements(user_id: int, db: Session = Depends(get_db)) -> list[Achievement]:
    return achievements.list_achievements(db, user_id)


@router.post("/user/{user_id}/achievements", response_model=Achievement)
def add_achievement(
    user_id: int, payload: AchievementCreate, db: Session = Depends(get_db)
) -> Achievement:
    return achievements.add_achievement(
        db,
        user_id,
        payload.title,
        payload.description,
        payload.icon,
        earned_at=payload.earned_at,
    )


@router.get("/user/{user_id}/dashboard", response_model=Dashboard)
def get_dashboard(user_id: int, db: Session = Depends(get_db)) -> Dashboard:
    """Parent dashboard: per-level completion, weekly minutes and totals."""
    user = users.get_user(db, user_id)
    return build_dashboard(
        user,
        progress.list_progress(db, user_id),
        achievements.list_achievements(db, user_id),
        get_settings(),
    )
