"""Study streak and calendar helpers."""
from datetime import date


def days_between(start: date, end: date) -> int:
    return (end - start).days


def next_streak(streak_days: int, last_study_date: date | None, today: date) -> int:
    """Streak after recording activity on ``today``.

    Same day keeps the streak, the following day extends it, anything else
    starts a new one. With no recorded date the existing streak is kept.
    """
    if last_study_date is None:
        return max(streak_days, 1)
    gap = days_between(last_study_date, today)
    if gap <= 0:
        return max(streak_days, 1)
    if gap == 1:
        return streak_days + 1
    return 1


def get_calendar_days_elapsed(start: date | None, today: date | None = None) -> int:
    if start is None:
        return 0
    today = today or date.today()
    return days_between(start, today) + 1
