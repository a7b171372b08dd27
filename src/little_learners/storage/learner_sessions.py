"""Server-side record of which learner a client is acting as."""

import secrets
from datetime import datetime, timedelta

import structlog
from sqlalchemy import delete
from sqlalchemy.orm import Session

from little_learners.config import get_settings
from little_learners.errors import NotFoundError
from little_learners.models.user import Activation, User
from little_learners.storage.tables import LearnerSessionRow
from little_learners.storage.users import get_user, touch_last_active

logger = structlog.get_logger()


def _expiry_cutoff() -> datetime:
    return datetime.now() - timedelta(hours=get_settings().session_ttl_hours)


def prune_expired_sessions(db: Session) -> int:
    res = db.execute(delete(LearnerSessionRow).where(LearnerSessionRow.created_at < _expiry_cutoff()))
    return res.rowcount or 0


def activate_user(db: Session, user_id: int, previous_token: str | None = None) -> Activation:
    """Switch the active learner: touch last-active and open a session.

    A client switching learners hands back its previous token, which is
    revoked, so each client holds one live session at a time. Expired
    sessions are pruned on every activation.
    """
    user = touch_last_active(db, user_id)
    if previous_token:
        db.execute(delete(LearnerSessionRow).where(LearnerSessionRow.token == previous_token))
    pruned = prune_expired_sessions(db)
    token = secrets.token_urlsafe(32)
    db.add(LearnerSessionRow(token=token, user_id=user_id))
    db.commit()
    logger.info("user_activated", user_id=user_id, replaced=bool(previous_token), pruned=pruned)
    return Activation(user=user, session_token=token)


def resolve_session(db: Session, token: str | None) -> User:
    if not token:
        raise NotFoundError("Session not found")
    row = db.get(LearnerSessionRow, token)
    if row is None or row.created_at < _expiry_cutoff():
        raise NotFoundError("Session not found")
    return get_user(db, row.user_id)


def end_session(db: Session, token: str) -> None:
    row = db.get(LearnerSessionRow, token)
    if row is None:
        raise NotFoundError("Session not found")
    db.delete(row)
    db.commit()
