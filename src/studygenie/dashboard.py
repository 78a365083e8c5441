"""Dashboard statistics and per-subject progress breakdown."""
from studygenie.study import get_calendar_days_elapsed


def get_progress_label(score: float) -> str:
    if score >= 80:
        return "MASTERED"
    elif score >= 65:
        return "ON TRACK"
    elif score >= 50:
        return "NEEDS WORK"
    return "BEHIND"


def get_progress_color(score: float) -> str:
    if score >= 80:
        return "green"
    elif score >= 65:
        return "yellow"
    elif score >= 50:
        return "dark_orange"
    return "red"


def format_study_time(seconds: int) -> str:
    hours, rem = divmod(max(0, int(seconds)), 3600)
    minutes = rem // 60
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def get_subject_breakdown(store) -> list[dict]:
    results = []
    for subject in store.subjects:
        weak = sum(1 for t in subject.iter_topics() if t.weak_area)
        results.append({
            "subject_id": subject.id,
            "name": subject.name,
            "progress": subject.progress,
            "completed_topics": subject.completed_topics,
            "total_topics": subject.total_topics,
            "weak_topics": weak,
            "label": get_progress_label(subject.progress),
        })
    return results


def get_study_stats(store) -> dict:
    progress = store.user_progress
    first_upload = min((s.uploaded_at.date() for s in store.subjects), default=None)
    return {
        "total_study_time": progress.total_study_time,
        "streak_days": progress.streak_days,
        "completed_topics": progress.completed_topics,
        "quizzes_taken": progress.quizzes_taken,
        "average_score": progress.average_score,
        "overall_progress": store.overall_progress(),
        "weak_topic_count": len(store.weak_topics()),
        "days_tracked": get_calendar_days_elapsed(first_upload),
    }


def get_recommendation(store) -> str | None:
    """Name the least-progressed subject when it is below 70%."""
    breakdown = get_subject_breakdown(store)
    if not breakdown:
        return None
    weakest = min(breakdown, key=lambda s: s["progress"])
    if weakest["progress"] < 70:
        return weakest["name"]
    return None
