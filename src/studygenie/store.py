"""In-memory curriculum and progress store.

The store is the single owner of subject, topic and user progress state for
a session. Views receive it explicitly and observe changes through
:meth:`ProgressStore.subscribe`.
"""
import logging
import random
from datetime import date

from studygenie.adaptive import generate_adaptive_questions
from studygenie.models import NotesContent, QuizResult, Subject, Topic, UserProgress
from studygenie.study import next_streak
from studygenie.utils import round_half_up

logger = logging.getLogger(__name__)


class DuplicateSubjectError(Exception):
    """Raised when a subject id is already present in the store."""


class ProgressStore:
    def __init__(self, subjects=None, user_progress: UserProgress | None = None,
                 rng: random.Random | None = None):
        self.subjects: list[Subject] = []
        self.user_progress = user_progress or UserProgress()
        self.rng = rng or random.Random()
        self._listeners = []
        for subject in subjects or []:
            self._append_subject(subject)

    # --- observers ---

    def subscribe(self, callback):
        """Register ``callback(event, store)``; returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, event: str) -> None:
        for callback in list(self._listeners):
            callback(event, self)

    # --- lookups ---

    def get_subject(self, subject_id: str) -> Subject | None:
        for subject in self.subjects:
            if subject.id == subject_id:
                return subject
        return None

    def all_topics(self) -> list[Topic]:
        return [topic for subject in self.subjects for topic in subject.iter_topics()]

    def _locate(self, topic_id: str) -> tuple[Subject, Topic] | tuple[None, None]:
        # No index is kept; every lookup walks the whole tree.
        for subject in self.subjects:
            for topic in subject.iter_topics():
                if topic.id == topic_id:
                    return subject, topic
        return None, None

    def find_topic(self, topic_id: str) -> Topic | None:
        return self._locate(topic_id)[1]

    # --- mutations ---

    def _append_subject(self, subject: Subject) -> None:
        if self.get_subject(subject.id) is not None:
            raise DuplicateSubjectError(f"Subject {subject.id!r} already exists")
        subject.recompute()
        self.subjects.append(subject)

    def add_subject(self, subject: Subject) -> None:
        self._append_subject(subject)
        logger.debug("Added subject %s (%d topics)", subject.id, subject.total_topics)
        self._notify("subject_added")

    def update_topic_completion(self, topic_id: str, completed: bool) -> None:
        subject, topic = self._locate(topic_id)
        if topic is None:
            logger.debug("update_topic_completion: unknown topic %s", topic_id)
            return
        topic.completed = completed
        subject.recompute()
        progress = self.user_progress
        if completed:
            progress.completed_topics += 1
        else:
            progress.completed_topics = max(0, progress.completed_topics - 1)
        logger.debug("Topic %s completed=%s; subject %s at %d%%",
                     topic_id, completed, subject.id, subject.progress)
        self._notify("topic_completion")

    def mark_topic_as_weak(self, topic_id: str) -> None:
        topic = self.find_topic(topic_id)
        if topic is None:
            logger.debug("mark_topic_as_weak: unknown topic %s", topic_id)
            return
        topic.weak_area = True
        self._notify("topic_weak")

    def update_user_progress(self, result: QuizResult) -> None:
        """Fold a finished quiz into the running aggregates.

        Weak topic names are matched against curriculum topics by
        case-insensitive substring, so "Algorithms" flags every topic whose
        name contains it.
        """
        progress = self.user_progress
        progress.quizzes_taken += 1
        n = progress.quizzes_taken
        progress.average_score = round_half_up(
            (progress.average_score * (n - 1) + result.score) / n
        )
        progress.add_weak_topics(result.weak_topics)

        topics = self.all_topics()
        for name in result.weak_topics:
            needle = name.lower()
            for topic in topics:
                if needle in topic.name.lower():
                    topic.weak_area = True
        logger.debug("Quiz %d recorded: score=%d avg=%d weak=%s",
                     n, result.score, progress.average_score, result.weak_topics)
        self._notify("user_progress")

    def attach_notes(self, topic_id: str, notes: NotesContent) -> None:
        topic = self.find_topic(topic_id)
        if topic is None:
            logger.debug("attach_notes: unknown topic %s", topic_id)
            return
        topic.notes = notes
        topic.has_notes = True
        self._notify("notes_attached")

    def record_study_activity(self, seconds: int, on: date | None = None) -> None:
        progress = self.user_progress
        today = on or date.today()
        progress.total_study_time += max(0, int(seconds))
        progress.streak_days = next_streak(progress.streak_days, progress.last_study_date, today)
        if progress.last_study_date is None or today > progress.last_study_date:
            progress.last_study_date = today
        self._notify("study_activity")

    def generate_adaptive_questions(self, weak_topics):
        return generate_adaptive_questions(weak_topics, rng=self.rng)

    # --- derived views ---

    def weak_topics(self) -> list[Topic]:
        return [topic for topic in self.all_topics() if topic.weak_area]

    def overall_progress(self) -> int:
        if not self.subjects:
            return 0
        return round_half_up(sum(s.progress for s in self.subjects) / len(self.subjects))
