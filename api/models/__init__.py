"""
API data models. Single import surface for DB entities.

DB entities (api.models.models):
- User, Course, Topic, Question, Enrollment, QuizAttempt
"""

from api.models.models import (
    User,
    Course,
    Topic,
    Question,
    Enrollment,
    QuizAttempt,
)

__all__ = [
    "User",
    "Course",
    "Topic",
    "Question",
    "Enrollment",
    "QuizAttempt",
]
