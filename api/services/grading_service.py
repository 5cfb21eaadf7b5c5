"""
Grade-and-update: one quiz submission, end to end.

score -> progress -> streak/points -> recommendation -> history entry, committed once.
Two concurrent submissions for the same learner can both read the same prior
enrollment/points and the later commit wins; this is a known limitation.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence
from uuid import uuid4

from sqlalchemy.orm import Session as DBSession

from api.models.models import Course, QuizAttempt, User
from api.prompt_builders.quiz_advisor import build_quiz_advisor_prompt
from api.utils.common import (
    apply_enrollment_record,
    apply_gamification_state,
    enrollment_to_record,
    find_enrollment,
    gamification_state,
    topic_to_domain,
)
from api.utils.logger import configure_logging, log_request
from learning.core.llm import LLM
from learning.grading.errors import NotEnrolledError, UnknownEntityError
from learning.grading.gamification import award_quiz_points, touch_streak
from learning.grading.progress import record_topic_completion
from learning.grading.recommendation import Recommendation, build_recommendation
from learning.grading.scorer import difficulty_for_score, grade_submission
from learning.grading.types import GradingResult, SubmittedAnswer

logger = configure_logging()


@dataclass
class GradeAndUpdateOutcome:
    result: GradingResult
    points_earned: int
    new_total_points: int
    streak_count: int
    course_progress_percent: int
    topic_completed: bool
    recommendation: Recommendation


async def grade_and_update(
    db: DBSession,
    course_id: str,
    topic_id: str,
    learner_id: int,
    answers: Sequence[SubmittedAnswer],
    time_spent_seconds: int,
    *,
    generator: Optional[LLM],
    timeout: float,
    require_pass: bool = False,
    today: Optional[date] = None,
) -> GradeAndUpdateOutcome:
    """
    Grade a submission and record its effects on the learner.

    Raises UnknownEntityError / InvalidInputError before anything is mutated, and
    NotEnrolledError (carrying the grading) when the learner has no enrollment.
    With require_pass=True a failed quiz still earns points but does not complete the topic.
    """
    with log_request(logger, f"grade_and_update course={course_id} topic={topic_id} learner={learner_id}"):
        course = db.query(Course).filter(Course.id == course_id).first()
        if course is None:
            raise UnknownEntityError(f"Course not found: {course_id}")
        db_topic = next((t for t in course.topics if t.id == topic_id), None)
        if db_topic is None:
            raise UnknownEntityError(f"Topic not found: {topic_id}")
        user = db.query(User).filter(User.id == learner_id).first()
        if user is None:
            raise UnknownEntityError(f"Learner not found: {learner_id}")

        result = grade_submission(topic_to_domain(db_topic), answers)
        logger.info(
            "graded topic=%s score=%s correct=%s/%s passed=%s",
            topic_id, result.score_percent, result.correct_count, result.total_count, result.passed,
        )

        enrollment = find_enrollment(user.id, course_id, db)
        record = enrollment_to_record(enrollment)
        if record is None:
            raise NotEnrolledError(result=result)

        topic_completed = False
        if result.passed or not require_pass:
            topic_completed = record_topic_completion(record, topic_id, len(course.topics))

        state = gamification_state(user)
        touch_streak(state, today or datetime.utcnow().date())
        points_earned = award_quiz_points(state, result)

        prompt = build_quiz_advisor_prompt(
            skill_level=user.skill_level,
            course_name=course.name,
            course_level=course.level,
            topic_title=db_topic.title,
            score=result.score_percent,
            correct=result.correct_count,
            total=result.total_count,
            time_spent_seconds=time_spent_seconds,
            weak_areas=result.wrong_question_prompts,
        )
        recommendation = await build_recommendation(
            result,
            db_topic.title,
            generator=generator,
            prompt=prompt,
            timeout=timeout,
        )

        apply_enrollment_record(enrollment, record)
        apply_gamification_state(user, state)
        user.total_study_time = int(user.total_study_time or 0) + max(0, time_spent_seconds) // 60
        db.add(
            QuizAttempt(
                id=str(uuid4()),
                user_id=user.id,
                course_id=course_id,
                topic_id=topic_id,
                topic_title=db_topic.title,
                score=result.score_percent,
                total_questions=result.total_count,
                correct_answers=result.correct_count,
                time_spent_seconds=max(0, time_spent_seconds),
                difficulty=difficulty_for_score(result.score_percent).value,
                weak_areas=list(result.wrong_question_prompts),
                recommendation=recommendation.model_dump(),
                completed_at=datetime.utcnow(),
            )
        )
        db.add(enrollment)
        db.add(user)
        db.commit()

        return GradeAndUpdateOutcome(
            result=result,
            points_earned=points_earned,
            new_total_points=state.points,
            streak_count=state.streak_count,
            course_progress_percent=record.progress_percent,
            topic_completed=topic_completed,
            recommendation=recommendation,
        )
