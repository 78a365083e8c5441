# tests/test_study.py
from datetime import date

from studygenie.study import get_calendar_days_elapsed, next_streak


def test_first_activity_starts_streak():
    assert next_streak(0, None, date(2024, 5, 1)) == 1


def test_undated_streak_is_kept():
    assert next_streak(7, None, date(2024, 5, 1)) == 7


def test_same_day_keeps_streak():
    assert next_streak(4, date(2024, 5, 1), date(2024, 5, 1)) == 4


def test_next_day_extends_streak():
    assert next_streak(4, date(2024, 5, 1), date(2024, 5, 2)) == 5


def test_gap_resets_streak():
    assert next_streak(9, date(2024, 5, 1), date(2024, 5, 4)) == 1


def test_calendar_days_elapsed():
    assert get_calendar_days_elapsed(None) == 0
    assert get_calendar_days_elapsed(date(2024, 1, 1), today=date(2024, 1, 1)) == 1
    assert get_calendar_days_elapsed(date(2024, 1, 1), today=date(2024, 1, 15)) == 15
