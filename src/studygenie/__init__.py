"""StudyGenie: syllabus-driven study tracker with adaptive quizzes."""

__version__ = "0.1.0"
