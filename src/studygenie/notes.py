"""Templated study-note generation for a single topic."""
import time

from studygenie.models import NotesContent
from studygenie.processing import Stage, run_stages

NOTES_STAGES = (
    Stage("Analyzing topic content...", 1.0),
    Stage("Generating conceptual overview...", 1.0),
    Stage("Creating key points...", 1.0),
    Stage("Adding practical examples...", 1.0),
    Stage("Preparing practice questions...", 1.0),
)


def render_notes(topic_name: str) -> NotesContent:
    return NotesContent(
        overview=(
            f"{topic_name} is a fundamental concept that deals with organizing and "
            "applying knowledge efficiently. Understanding this topic is crucial for "
            "solving complex problems. The key is to grasp not just the details, but "
            "the underlying principles that govern when and why to use different approaches."
        ),
        key_points=[
            f"Definition: what {topic_name} refers to and the problem it addresses",
            "Complexity: performance characteristics in different scenarios",
            "Trade-offs: resource usage considerations",
            "Real-world Applications: where and how this concept is applied in practice",
            "Common Pitfalls: mistakes to avoid when using this concept",
        ],
        examples=[
            f"Basic Implementation: a simple example showing how {topic_name} works in practice",
            "Optimization Techniques: methods to improve performance and efficiency",
            "Edge Cases: special scenarios that require careful consideration",
            "Integration: how this concept works with related topics",
        ],
        practice_questions=[
            f"Explain the core principles behind {topic_name} and why it's important",
            "Compare and contrast different approaches to this concept",
            "Analyze the cost of the main operations involved",
            "Design a solution using this concept for a real-world problem",
        ],
    )


def generate_notes(topic_name: str, on_progress=None, sleep=time.sleep,
                   stages=NOTES_STAGES) -> NotesContent:
    run_stages(stages, on_progress=on_progress, sleep=sleep)
    return render_notes(topic_name)


def ensure_notes(store, topic_id: str, on_progress=None, sleep=time.sleep) -> NotesContent | None:
    """Return a topic's notes, generating and attaching them if missing."""
    topic = store.find_topic(topic_id)
    if topic is None:
        return None
    if topic.notes is None:
        store.attach_notes(topic_id, generate_notes(topic.name, on_progress=on_progress, sleep=sleep))
    return topic.notes
