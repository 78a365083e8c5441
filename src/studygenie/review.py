"""Weak area listings used to drive focused review."""
from studygenie.adaptive import FOCUS_TOPIC_LIMIT


def get_focus_topics(store, limit: int = FOCUS_TOPIC_LIMIT) -> list[str]:
    """Weak topic names from quiz history, oldest first, capped at ``limit``."""
    return store.user_progress.weak_topics[:limit]


def get_weak_topics_by_subject(store) -> list[dict]:
    """Weak topics grouped by subject, skipping subjects with none."""
    results = []
    for subject in store.subjects:
        topics = [
            {"topic_id": t.id, "topic_name": t.name, "unit_name": unit.name, "completed": t.completed}
            for unit in subject.units
            for t in unit.topics
            if t.weak_area
        ]
        if topics:
            results.append({
                "subject_id": subject.id,
                "subject_name": subject.name,
                "topics": topics,
            })
    return results
