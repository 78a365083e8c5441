"""Data classes for the curriculum and progress domain model."""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from studygenie.utils import percent

DIFFICULTIES = ("easy", "medium", "hard")


@dataclass
class NotesContent:
    overview: str
    key_points: list[str] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    practice_questions: list[str] = field(default_factory=list)


@dataclass
class Topic:
    id: str
    name: str
    completed: bool = False
    has_notes: bool = False
    weak_area: bool = False
    notes: Optional[NotesContent] = None


@dataclass
class Unit:
    id: str
    name: str
    topics: list[Topic] = field(default_factory=list)


@dataclass
class Subject:
    id: str
    name: str
    units: list[Unit] = field(default_factory=list)
    progress: int = 0
    total_topics: int = 0
    completed_topics: int = 0
    uploaded_at: datetime = field(default_factory=datetime.now)

    def iter_topics(self):
        for unit in self.units:
            yield from unit.topics

    def recompute(self) -> None:
        """Refresh the cached counts and progress from the topics beneath."""
        topics = list(self.iter_topics())
        self.total_topics = len(topics)
        self.completed_topics = sum(1 for t in topics if t.completed)
        self.progress = percent(self.completed_topics, self.total_topics)


@dataclass
class UserProgress:
    total_study_time: int = 0  # seconds
    streak_days: int = 0
    completed_topics: int = 0
    quizzes_taken: int = 0
    average_score: int = 0
    weak_topics: list[str] = field(default_factory=list)  # unique, insertion order
    last_study_date: Optional[date] = None

    def add_weak_topics(self, names) -> None:
        for name in names:
            if name not in self.weak_topics:
                self.weak_topics.append(name)


@dataclass(frozen=True)
class QuizQuestion:
    id: str
    question: str
    options: tuple[str, ...]
    correct_answer_index: int
    topic: str
    explanation: str = ""
    difficulty: str = "medium"
    is_adaptive: bool = False


@dataclass
class QuizResult:
    score: int
    total_questions: int
    correct_answers: int
    weak_topics: list[str] = field(default_factory=list)
    time_spent: int = 0  # seconds


@dataclass(frozen=True)
class UserIdentity:
    id: str
    email: str
    display_name: str
    avatar_url: str
