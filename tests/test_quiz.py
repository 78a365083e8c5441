# tests/test_quiz.py
import pytest

from studygenie.models import QuizQuestion
from studygenie.quiz import FINISHED, IN_PROGRESS, QuizSession, QuizStateError, score_answers


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def _questions():
    return [
        QuizQuestion(id="1", question="Q1", options=("a", "b", "c", "d"), correct_answer_index=1, topic="Stacks"),
        QuizQuestion(id="2", question="Q2", options=("a", "b", "c", "d"), correct_answer_index=2, topic="Trees"),
        QuizQuestion(id="3", question="Q3", options=("a", "b", "c", "d"), correct_answer_index=0, topic="Trees"),
        QuizQuestion(id="4", question="Q4", options=("a", "b", "c", "d"), correct_answer_index=3, topic="Graphs"),
    ]


def test_new_session_state():
    session = QuizSession(_questions(), clock=FakeClock())
    assert session.state == IN_PROGRESS
    assert session.question_index == 0
    assert session.answers == {}
    assert session.time_left == 600
    assert session.current_question.id == "1"
    assert session.progress == 25


def test_select_answer_overwrites():
    session = QuizSession(_questions(), clock=FakeClock())
    session.select_answer(0)
    session.select_answer(1)
    assert session.answers == {"1": 1}


def test_navigation_is_bounded():
    session = QuizSession(_questions(), clock=FakeClock())
    assert session.previous_question() == 0
    for _ in range(10):
        session.next_question()
    assert session.question_index == 3
    assert session.state == IN_PROGRESS
    assert session.previous_question() == 2


def test_finish_scores_and_derives_weak_topics():
    clock = FakeClock(100.0)
    session = QuizSession(_questions(), clock=clock)
    session.select_answer(1)   # Q1 correct
    session.next_question()
    session.select_answer(0)   # Q2 wrong (Trees)
    session.next_question()
    session.select_answer(3)   # Q3 wrong (Trees)
    # Q4 unanswered
    clock.now = 142.4
    result = session.finish()
    assert session.state == FINISHED
    assert result.correct_answers == 1
    assert result.total_questions == 4
    assert result.score == 25
    assert result.weak_topics == ["Trees"]
    assert result.time_spent == 42


def test_unanswered_questions_are_not_weak():
    result = score_answers(_questions(), {})
    assert result.score == 0
    assert result.weak_topics == []


def test_empty_quiz_scores_zero():
    result = score_answers([], {})
    assert result.score == 0
    assert result.total_questions == 0


def test_finish_is_irreversible_and_calls_back_once():
    calls = []
    session = QuizSession(_questions(), on_finish=calls.append, clock=FakeClock())
    first = session.finish()
    second = session.finish()
    assert first is second
    assert calls == [first]
    with pytest.raises(QuizStateError):
        session.select_answer(1)


def test_countdown_expiry_finishes():
    calls = []
    session = QuizSession(_questions(), time_limit=3, on_finish=calls.append, clock=FakeClock())
    assert session.tick() == 2
    assert session.tick() == 1
    assert session.state == IN_PROGRESS
    assert session.tick() == 0
    assert session.state == FINISHED
    assert len(calls) == 1
    assert session.tick() == 0


def test_tick_never_negative():
    session = QuizSession(_questions(), time_limit=5, clock=FakeClock())
    session.tick(30)
    assert session.time_left == 0
    assert session.finished


def test_restart_resets_everything():
    clock = FakeClock()
    session = QuizSession(_questions(), time_limit=600, clock=clock)
    session.select_answer(2)
    session.next_question()
    session.next_question()
    session.tick(100)
    session.finish()
    clock.now = 50.0
    session.restart()
    assert session.state == IN_PROGRESS
    assert session.question_index == 0
    assert session.answers == {}
    assert session.time_left == 600
    assert session.result is None
    assert session.started_at == 50.0
