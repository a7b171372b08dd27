"""REST API routes for learner profiles and sessions."""

import structlog
from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from little_learners.db import get_db
from little_learners.models.progress import ProgressRecord, SessionProgressUpdate
from little_learners.models.user import Activation, User, UserCreate, UserUpdate
from little_learners.storage import learner_sessions, users
from little_learners.storage.progress import record_progress

logger = structlog.get_logger()
router = APIRouter(prefix="/api")

SESSION_HEADER = "X-Session-Token"


def current_learner(
    token: str | None = Header(default=None, alias=SESSION_HEADER),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the learner behind the session token header."""
    return learner_sessions.resolve_session(db, token)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/user/{user_id}", response_model=User)
def get_user(user_id: int, db: Session = Depends(get_db)) -> User:
    """Fetch a profile and mark the learner as active now."""
    return users.touch_last_active(db, user_id)


@router.get("/users", response_model=list[User])
def list_users(db: Session = Depends(get_db)) -> list[User]:
    return users.list_users(db)


@router.post("/users", response_model=User)
def create_user(payload: UserCreate, db: Session = Depends(get_db)) -> User:
    return users.create_user(db, payload.name, payload.age)


@router.put("/users/{user_id}", response_model=User)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)) -> User:
    return users.update_user(db, user_id, name=payload.name, age=payload.age)


@router.delete("/users/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db)) -> dict:
    """Delete a learner with all of their progress and achievements."""
    users.delete_user(db, user_id)
    return {"success": True}


@router.post("/user/{user_id}/activate", response_model=Activation)
def activate_user(
    user_id: int,
    token: str | None = Header(default=None, alias=SESSION_HEADER),
    db: Session = Depends(get_db),
) -> Activation:
    """Switch the active learner and hand back a session token.

    A token sent in the session header is revoked and replaced.
    """
    return learner_sessions.activate_user(db, user_id, previous_token=token)


@router.get("/session", response_model=User)
def get_session_user(learner: User = Depends(current_learner)) -> User:
    return learner


@router.delete("/session")
def end_session(
    token: str | None = Header(default=None, alias=SESSION_HEADER),
    db: Session = Depends(get_db),
) -> dict:
    learner_sessions.end_session(db, token or "")
    return {"success": True}


@router.post("/session/progress", response_model=ProgressRecord)
def record_session_progress(
    payload: SessionProgressUpdate,
    learner: User = Depends(current_learner),
    db: Session = Depends(get_db),
) -> ProgressRecord:
    """Record progress for the learner behind the session token."""
    return record_progress(
        db,
        learner.id,
        payload.activity_type,
        payload.level,
        payload.completed_items,
        payload.stars,
    )
