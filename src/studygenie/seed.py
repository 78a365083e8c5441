"""Load the packaged question bank and demo curriculum."""
import json
from datetime import datetime
from pathlib import Path

from studygenie.models import QuizQuestion, Subject, Topic, Unit, UserProgress

CONTENT_DIR = Path(__file__).parent / "content"


def _read(name: str) -> dict:
    return json.loads((CONTENT_DIR / name).read_text(encoding="utf-8"))


def load_baseline_questions() -> list[QuizQuestion]:
    """The fixed baseline bank every quiz starts from."""
    data = _read("questions.json")
    return [
        QuizQuestion(
            id=q["id"],
            question=q["question"],
            options=tuple(q["options"]),
            correct_answer_index=q["correct_answer_index"],
            topic=q["topic"],
            explanation=q.get("explanation", ""),
            difficulty=q.get("difficulty", "medium"),
        )
        for q in data["questions"]
    ]


def subject_from_dict(data: dict) -> Subject:
    units = [
        Unit(
            id=u["id"],
            name=u["name"],
            topics=[
                Topic(
                    id=t["id"],
                    name=t["name"],
                    completed=t.get("completed", False),
                    has_notes=t.get("has_notes", False),
                    weak_area=t.get("weak_area", False),
                )
                for t in u["topics"]
            ],
        )
        for u in data["units"]
    ]
    subject = Subject(
        id=data["id"],
        name=data["name"],
        units=units,
        uploaded_at=datetime.fromisoformat(data["uploaded_at"]),
    )
    subject.recompute()
    return subject


def load_demo_curriculum() -> list[Subject]:
    return [subject_from_dict(s) for s in _read("curriculum.json")["subjects"]]


def load_demo_progress() -> UserProgress:
    data = _read("curriculum.json")["user_progress"]
    progress = UserProgress(
        total_study_time=data["total_study_time"],
        streak_days=data["streak_days"],
        completed_topics=data["completed_topics"],
        quizzes_taken=data["quizzes_taken"],
        average_score=data["average_score"],
    )
    progress.add_weak_topics(data["weak_topics"])
    return progress


def is_seeded(store) -> bool:
    return len(store.subjects) > 0


def seed_demo(store) -> None:
    """Populate an empty store with the demo subjects and progress."""
    if is_seeded(store):
        return
    store.user_progress = load_demo_progress()
    for subject in load_demo_curriculum():
        store.add_subject(subject)
