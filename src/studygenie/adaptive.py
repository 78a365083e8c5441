"""Adaptive question generation targeted at weak topics."""
import random

from studygenie.models import QuizQuestion

QUESTIONS_PER_TOPIC = 2
MAX_QUIZ_LENGTH = 10
FOCUS_TOPIC_LIMIT = 3

ADAPTIVE_OPTIONS = (
    "Option A - focusing on core concepts",
    "Option B - addressing common misconceptions",
    "Option C - practical application",
    "Option D - theoretical foundation",
)


def generate_adaptive_questions(weak_topics, rng: random.Random | None = None) -> list[QuizQuestion]:
    """Produce two placeholder questions for every weak topic, in input order.

    The correct answer index is drawn from ``rng`` so callers can seed it.
    """
    rng = rng or random.Random()
    questions = []
    for topic in weak_topics:
        for i in range(QUESTIONS_PER_TOPIC):
            questions.append(QuizQuestion(
                id=f"adaptive-{topic}-{i}",
                question=f"[Adaptive] Advanced question about {topic} to strengthen your understanding",
                options=ADAPTIVE_OPTIONS,
                correct_answer_index=rng.randrange(len(ADAPTIVE_OPTIONS)),
                topic=topic,
                explanation=(
                    f"This adaptive question was generated to help you master {topic}. "
                    "Focus on understanding the underlying principles."
                ),
                difficulty="medium",
                is_adaptive=True,
            ))
    return questions


def assemble_quiz(baseline, adaptive, limit: int = MAX_QUIZ_LENGTH) -> list[QuizQuestion]:
    """Baseline questions first, then adaptive ones, cut to ``limit`` items."""
    return (list(baseline) + list(adaptive))[:limit]


def build_quiz(store, baseline, focus_limit: int = FOCUS_TOPIC_LIMIT,
               limit: int = MAX_QUIZ_LENGTH) -> list[QuizQuestion]:
    focus = store.user_progress.weak_topics[:focus_limit]
    adaptive = store.generate_adaptive_questions(focus)
    return assemble_quiz(baseline, adaptive, limit=limit)
