"""Quiz session state machine: answering, navigation, countdown and scoring."""
import logging
import time

from studygenie.models import QuizResult
from studygenie.utils import percent, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT = 600  # seconds

IN_PROGRESS = "in_progress"
FINISHED = "finished"


class QuizStateError(Exception):
    """Raised when an answer is recorded on a finished quiz."""


def score_answers(questions, answers: dict, time_spent: int = 0) -> QuizResult:
    """Score recorded answers against the questions.

    Unanswered questions count neither as correct nor as wrong, so they
    never contribute a weak topic.
    """
    correct = sum(1 for q in questions if answers.get(q.id) == q.correct_answer_index)
    weak_topics = []
    for q in questions:
        if q.id in answers and answers[q.id] != q.correct_answer_index and q.topic not in weak_topics:
            weak_topics.append(q.topic)
    return QuizResult(
        score=percent(correct, len(questions)),
        total_questions=len(questions),
        correct_answers=correct,
        weak_topics=weak_topics,
        time_spent=time_spent,
    )


class QuizSession:
    def __init__(self, questions, time_limit: int = DEFAULT_TIME_LIMIT,
                 on_finish=None, clock=time.monotonic):
        self.questions = list(questions)
        self.time_limit = time_limit
        self.on_finish = on_finish
        self.clock = clock
        self.restart()

    def restart(self) -> None:
        self.state = IN_PROGRESS
        self.question_index = 0
        self.answers: dict[str, int] = {}
        self.time_left = self.time_limit
        self.result: QuizResult | None = None
        self.started_at = self.clock()

    @property
    def finished(self) -> bool:
        return self.state == FINISHED

    @property
    def current_question(self):
        if not self.questions:
            return None
        return self.questions[self.question_index]

    @property
    def progress(self) -> int:
        return percent(self.question_index + 1, len(self.questions))

    @property
    def last_index(self) -> int:
        return max(0, len(self.questions) - 1)

    def select_answer(self, answer_index: int) -> None:
        if self.finished:
            raise QuizStateError("Quiz is already finished")
        question = self.current_question
        if question is None:
            return
        self.answers[question.id] = answer_index

    def next_question(self) -> int:
        self.question_index = min(self.question_index + 1, self.last_index)
        return self.question_index

    def previous_question(self) -> int:
        self.question_index = max(self.question_index - 1, 0)
        return self.question_index

    def tick(self, seconds: int = 1) -> int:
        """Advance the countdown; finishes the quiz when time runs out."""
        if self.finished:
            return self.time_left
        self.time_left = max(0, self.time_left - seconds)
        if self.time_left == 0:
            logger.info("Quiz time expired")
            self.finish()
        return self.time_left

    def finish(self) -> QuizResult:
        if self.finished:
            return self.result
        time_spent = round_half_up(self.clock() - self.started_at)
        self.result = score_answers(self.questions, self.answers, time_spent=time_spent)
        self.state = FINISHED
        if self.on_finish is not None:
            self.on_finish(self.result)
        return self.result
