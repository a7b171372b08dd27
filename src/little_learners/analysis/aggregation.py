"""Parent dashboard figures derived from the progress ledger.

Nothing here is persisted: every figure is recomputed from the learner's
progress records when the dashboard is requested. Engaged time is an
estimate, a fixed number of minutes per completed item, since no session
timing is recorded.
"""

from collections.abc import Sequence
from datetime import date, timedelta

from little_learners.config import Settings
from little_learners.models.achievement import Achievement
from little_learners.models.dashboard import Dashboard, DayActivity, LevelProgress
from little_learners.models.progress import ActivityType, ProgressRecord
from little_learners.models.user import User

DEFAULT_MINUTES_PER_ITEM = 2.5
DEFAULT_DAILY_CAP = 60.0

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def week_start(today: date) -> date:
    """Monday of the calendar week containing ``today``."""
    return today - timedelta(days=today.weekday())


def _completed(record: ProgressRecord) -> int:
    return len(record.completed_items)


def weekly_activity(
    records: Sequence[ProgressRecord],
    today: date | None = None,
    minutes_per_item: float = DEFAULT_MINUTES_PER_ITEM,
    daily_cap: float = DEFAULT_DAILY_CAP,
) -> list[DayActivity]:
    """Estimate engaged minutes for each day of the current week.

    A record counts only toward the calendar date it was last updated on,
    whatever day it was first created. Each day is capped at ``daily_cap``.

    Args:
        records: All progress records of one learner.
        today: Reference date; defaults to the local current date.
        minutes_per_item: Minutes credited per completed item.
        daily_cap: Upper bound on minutes for a single day.

    Returns:
        Seven buckets, Monday through Sunday.
    """
    today = today or date.today()
    monday = week_start(today)

    items_by_day: dict[date, int] = {}
    for record in records:
        if record.updated_at is None:
            continue
        day = record.updated_at.date()
        items_by_day[day] = items_by_day.get(day, 0) + _completed(record)

    buckets = []
    for offset, name in enumerate(WEEKDAY_NAMES):
        day = monday + timedelta(days=offset)
        minutes = min(daily_cap, items_by_day.get(day, 0) * minutes_per_item)
        buckets.append(DayActivity(day=name, date=day, minutes=minutes))
    return buckets


def total_session_minutes(
    records: Sequence[ProgressRecord],
    minutes_per_item: float = DEFAULT_MINUTES_PER_ITEM,
) -> float:
    """Estimated minutes across every record ever touched, uncapped."""
    return sum(_completed(r) for r in records) * minutes_per_item


def total_stars(records: Sequence[ProgressRecord]) -> int:
    return sum(r.stars for r in records)


def level_label(activity_type: str, level: int, max_level: int = 6) -> str:
    if activity_type == ActivityType.MATH:
        return "Counting" if level <= 2 else "Addition"
    if activity_type == ActivityType.READING and level == max_level:
        return "Sentences"
    return "Words"


def level_breakdown(
    records: Sequence[ProgressRecord],
    activity_type: str,
    levels: int,
    total_items: int,
) -> list[LevelProgress]:
    """Per-level completion for one activity type, levels 1..``levels``.

    Levels the learner has not started yet are filled in with zero progress
    and ``total_items`` as their size.
    """
    by_level = {r.level: r for r in records if r.activity_type == activity_type}
    breakdown = []
    for level in range(1, levels + 1):
        label = level_label(activity_type, level, levels)
        record = by_level.get(level)
        if record is None:
            breakdown.append(LevelProgress(
                activity_type=activity_type,
                level=level,
                label=label,
                total_items=total_items,
            ))
            continue
        completed = _completed(record)
        ratio = completed / record.total_items if record.total_items else 0.0
        breakdown.append(LevelProgress(
            activity_type=activity_type,
            level=level,
            label=label,
            completed=completed,
            total_items=record.total_items,
            stars=record.stars,
            completion_ratio=ratio,
            started=True,
        ))
    return breakdown


def build_dashboard(
    user: User,
    records: Sequence[ProgressRecord],
    achievements: Sequence[Achievement],
    settings: Settings,
    today: date | None = None,
) -> Dashboard:
    """Assemble the parent dashboard for one learner."""
    stars = total_stars(records)
    return Dashboard(
        user=user.model_copy(update={"total_stars": stars}),
        reading=level_breakdown(
            records,
            ActivityType.READING,
            settings.dashboard_levels,
            settings.total_items_for(ActivityType.READING),
        ),
        math=level_breakdown(
            records,
            ActivityType.MATH,
            settings.dashboard_levels,
            settings.total_items_for(ActivityType.MATH),
        ),
        weekly_activity=weekly_activity(
            records,
            today=today,
            minutes_per_item=settings.minutes_per_item,
            daily_cap=settings.daily_minutes_cap,
        ),
        total_session_minutes=total_session_minutes(records, settings.minutes_per_item),
        total_stars=stars,
        achievements=list(achievements),
    )
