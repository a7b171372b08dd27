"""REST API routes for the progress ledger."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from little_learners.db import get_db
from little_learners.models.progress import ProgressRecord, ProgressUpdate
from little_learners.storage import progress

router = APIRouter(prefix="/api")


@router.get("/user/{user_id}/progress", response_model=list[ProgressRecord])
def list_progress(user_id: int, db: Session = Depends(get_db)) -> list[ProgressRecord]:
    return progress.list_progress(db, user_id)


@router.get("/user/{user_id}/progress/{activity_type}", response_model=list[ProgressRecord])
def list_progress_by_type(
    user_id: int, activity_type: str, db: Session = Depends(get_db)
) -> list[ProgressRecord]:
    return progress.list_progress(db, user_id, activity_type)


@router.post("/progress", response_model=ProgressRecord)
def record_progress(payload: ProgressUpdate, db: Session = Depends(get_db)) -> ProgressRecord:
    """Upsert the record for (userId, activityType, level)."""
    return progress.record_progress(
        db,
        payload.user_id,
        payload.activity_type,
        payload.level,
        payload.completed_items,
        payload.stars,
    )


@router.delete("/user/{user_id}/progress")
def clear_progress(user_id: int, db: Session = Depends(get_db)) -> dict:
    removed = progress.clear_progress(db, user_id)
    return {"success": True, "removed": removed}


@router.delete("/user/{user_id}/progress/{activity_type}")
def clear_progress_by_type(user_id: int, activity_type: str, db: Session = Depends(get_db)) -> dict:
    removed = progress.clear_progress(db, user_id, activity_type)
    return {"success": True, "removed": removed}
