"""
Common utility functions used across multiple routes and services.
Mostly conversions between DB rows and the grading library's plain records.
"""

from datetime import date, datetime
from typing import Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException

from api.models.models import Course, Enrollment, QuizAttempt, Topic as DbTopic, User
from learning.grading.types import (
    Difficulty,
    EnrollmentRecord,
    GamificationState,
    Question,
    QuizHistoryEntry,
    Topic,
)


def iso_format(dt: datetime) -> str:
    """Format datetime as ISO string with Z suffix."""
    return dt.isoformat() + "Z"


def iso_date(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d is not None else None


def display_name(user: User) -> str:
    """Get display name from the profile, preferences, or email."""
    if isinstance(user.name, str) and user.name.strip():
        return user.name.strip()
    prefs = user.preferences or {}
    name = prefs.get("name") if isinstance(prefs, dict) else None
    if isinstance(name, str) and name.strip():
        return name.strip()
    # fallback: email prefix
    return user.email.split("@", 1)[0]


def get_course_or_404(course_id: str, db: Session) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if course is None:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


def get_topic_or_404(course: Course, topic_id: str) -> DbTopic:
    for t in course.topics:
        if t.id == topic_id:
            return t
    raise HTTPException(status_code=404, detail="Topic not found")


def find_enrollment(user_id: int, course_id: str, db: Session) -> Optional[Enrollment]:
    return (
        db.query(Enrollment)
        .filter(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
        .first()
    )


def _difficulty(value: Optional[str]) -> Difficulty:
    try:
        return Difficulty(value)
    except ValueError:
        return Difficulty.MEDIUM


def topic_to_domain(topic: DbTopic) -> Topic:
    """Topic row (with its questions) as a grading-library Topic."""
    return Topic(
        id=topic.id,
        title=topic.title,
        content=topic.content or "",
        passing_score_percent=int(topic.passing_score),
        time_limit_minutes=int(topic.time_limit_minutes),
        questions=[
            Question(
                id=q.id,
                prompt=q.prompt,
                options=list(q.options or []),
                correct_option_index=int(q.correct_option_index),
                explanation=q.explanation or "",
                difficulty=_difficulty(q.difficulty),
                point_value=int(q.points),
            )
            for q in topic.questions
        ],
    )


def enrollment_to_record(enrollment: Optional[Enrollment]) -> Optional[EnrollmentRecord]:
    if enrollment is None:
        return None
    return EnrollmentRecord(
        course_id=enrollment.course_id,
        enrolled_at=enrollment.enrolled_at,
        progress_percent=int(enrollment.progress or 0),
        completed_topic_ids=list(enrollment.completed_topic_ids or []),
    )


def apply_enrollment_record(enrollment: Enrollment, record: EnrollmentRecord) -> None:
    enrollment.progress = record.progress_percent
    # Reassign (not mutate) so SQLAlchemy sees the JSON column change.
    enrollment.completed_topic_ids = list(record.completed_topic_ids)


def gamification_state(user: User) -> GamificationState:
    return GamificationState(
        points=int(user.points or 0),
        streak_count=int(user.streak_count or 0),
        last_activity_date=user.last_activity_date,
    )


def apply_gamification_state(user: User, state: GamificationState) -> None:
    user.points = state.points
    user.streak_count = state.streak_count
    user.last_activity_date = state.last_activity_date


def attempt_to_history(attempt: QuizAttempt) -> QuizHistoryEntry:
    return QuizHistoryEntry(
        topic_id=attempt.topic_id,
        topic_title=attempt.topic_title,
        score_percent=int(attempt.score),
        total_questions=int(attempt.total_questions),
        correct_count=int(attempt.correct_answers),
        time_spent_seconds=int(attempt.time_spent_seconds or 0),
        difficulty=_difficulty(attempt.difficulty),
        weak_areas=list(attempt.weak_areas or []),
        completed_at=attempt.completed_at,
    )
