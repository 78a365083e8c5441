# tests/test_dashboard.py
from studygenie.dashboard import (
    format_study_time, get_progress_color, get_progress_label, get_recommendation,
    get_study_stats, get_subject_breakdown,
)


def test_progress_label():
    assert get_progress_label(85) == "MASTERED"
    assert get_progress_label(70) == "ON TRACK"
    assert get_progress_label(55) == "NEEDS WORK"
    assert get_progress_label(40) == "BEHIND"


def test_progress_color():
    assert get_progress_color(80) == "green"
    assert get_progress_color(10) == "red"


def test_format_study_time():
    assert format_study_time(3600) == "1h 0m"
    assert format_study_time(5400) == "1h 30m"
    assert format_study_time(59) == "0m"


def test_subject_breakdown(store):
    rows = get_subject_breakdown(store)
    assert [r["name"] for r in rows] == ["Computer Science", "Mathematics"]
    cs, maths = rows
    assert (cs["completed_topics"], cs["total_topics"], cs["progress"]) == (4, 7, 57)
    assert cs["weak_topics"] == 3
    assert (maths["progress"], maths["weak_topics"]) == (40, 2)
    assert maths["label"] == "BEHIND"


def test_study_stats(store):
    stats = get_study_stats(store)
    assert stats["total_study_time"] == 3600
    assert stats["streak_days"] == 7
    assert stats["quizzes_taken"] == 15
    assert stats["average_score"] == 78
    assert stats["overall_progress"] == 49
    assert stats["weak_topic_count"] == 5
    assert stats["days_tracked"] > 0


def test_study_stats_empty(empty_store):
    stats = get_study_stats(empty_store)
    assert stats["overall_progress"] == 0
    assert stats["days_tracked"] == 0


def test_recommendation(store, empty_store):
    assert get_recommendation(store) == "Mathematics"
    assert get_recommendation(empty_store) is None
