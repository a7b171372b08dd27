"""ORM table definitions."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, UniqueConstraint

from little_learners.db import Base


class UserRow(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), nullable=False)
    age = Column(Integer, nullable=False)
    last_active = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)


class ProgressRow(Base):
    __tablename__ = "user_progress"
    # Natural key: one record per learner, activity type and level
    __table_args__ = (
        UniqueConstraint("user_id", "activity_type", "level", name="uq_progress_user_activity_level"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    activity_type = Column(String(32), nullable=False)
    level = Column(Integer, nullable=False)
    completed_items = Column(JSON, nullable=False, default=list)
    total_items = Column(Integer, nullable=False)
    stars = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, nullable=True)


class ReadingWordRow(Base):
    __tablename__ = "reading_words"

    id = Column(Integer, primary_key=True, autoincrement=True)
    word = Column(String(64), nullable=False)
    level = Column(Integer, nullable=False, index=True)
    image_url = Column(Text, nullable=True)


class MathActivityRow(Base):
    __tablename__ = "math_activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(32), nullable=False)  # "counting" or "addition"
    level = Column(Integer, nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Integer, nullable=False)
    objects = Column(JSON, nullable=False, default=list)


class AchievementRow(Base):
    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    title = Column(String(128), nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String(32), nullable=False)
    earned_at = Column(DateTime, default=datetime.now, nullable=False)


class LearnerSessionRow(Base):
    __tablename__ = "learner_sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
