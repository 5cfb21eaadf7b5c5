"""
Course catalogue, enrollment and quiz endpoints.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from api.bootstrap import get_text_generator
from api.config import get_db, settings
from api.models.models import Course, Enrollment, User
from api.schemas.course_schemas import (
    CourseListResponse,
    CourseResponse,
    CourseTopicsResponse,
    QuizQuestionView,
    TopicQuizResponse,
    TopicSummary,
)
from api.schemas.quiz_schemas import (
    GradingResponse,
    SubmitQuizRequest,
    SubmitQuizResponse,
)
from api.schemas.user_progress_schemas import EnrolledCourse, EnrolledCoursesResponse, EnrollResponse
from api.services.grading_service import grade_and_update
from api.utils.auth import get_current_user
from api.utils.common import find_enrollment, get_course_or_404, get_topic_or_404, iso_format
from api.utils.logger import configure_logging
from learning.core.llm import LLM
from learning.grading.types import SubmittedAnswer

course_routes = APIRouter()
logger = configure_logging()


def _course_response(c: Course) -> CourseResponse:
    return CourseResponse(
        id=c.id,
        name=c.name,
        slug=c.slug,
        description=c.description,
        long_description=c.long_description,
        category=c.category,
        programming_language=c.programming_language,
        level=c.level,
        duration_hours=int(c.duration_hours or 0),
        learning_outcomes=list(c.learning_outcomes or []),
        is_featured=bool(c.is_featured),
        enrolled_count=int(c.enrolled_count or 0),
        topic_count=len(c.topics),
        created_at=iso_format(c.created_at),
    )


def _published_course_or_error(course_id: str, db: Session) -> Course:
    course = get_course_or_404(course_id, db)
    if not course.is_published:
        raise HTTPException(status_code=403, detail="Course is not available")
    return course


@course_routes.get("/courses", response_model=CourseListResponse)
async def list_courses(
    category: Optional[str] = None,
    level: Optional[str] = None,
    language: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
) -> CourseListResponse:
    """Published courses, featured first then newest."""
    query = db.query(Course).filter(Course.is_published.is_(True))
    if category:
        query = query.filter(Course.category == category)
    if level:
        query = query.filter(Course.level == level)
    if language:
        query = query.filter(Course.programming_language == language)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Course.name.ilike(pattern), Course.description.ilike(pattern)))
    courses = query.order_by(Course.is_featured.desc(), Course.created_at.desc()).all()
    return CourseListResponse(count=len(courses), courses=[_course_response(c) for c in courses])


# Declared before /courses/{course_id} so "my-courses" is not taken for an id.
@course_routes.get("/courses/my-courses/enrolled", response_model=EnrolledCoursesResponse)
async def my_courses(current_user: User = Depends(get_current_user)) -> EnrolledCoursesResponse:
    enrollments = sorted(current_user.enrollments, key=lambda e: e.enrolled_at, reverse=True)
    courses = [
        EnrolledCourse(
            course_id=e.course_id,
            name=e.course.name,
            description=e.course.description,
            category=e.course.category,
            level=e.course.level,
            duration_hours=int(e.course.duration_hours or 0),
            enrolled_at=iso_format(e.enrolled_at),
            progress=int(e.progress or 0),
            completed_topics_count=len(e.completed_topic_ids or []),
        )
        for e in enrollments
    ]
    return EnrolledCoursesResponse(count=len(courses), courses=courses)


@course_routes.get("/courses/{course_id}", response_model=CourseResponse)
async def get_course(course_id: str, db: Session = Depends(get_db)) -> CourseResponse:
    return _course_response(_published_course_or_error(course_id, db))


@course_routes.post("/courses/{course_id}/enroll", response_model=EnrollResponse)
async def enroll(
    course_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EnrollResponse:
    course = _published_course_or_error(course_id, db)
    if find_enrollment(current_user.id, course_id, db) is not None:
        raise HTTPException(status_code=400, detail="Already enrolled in this course")

    enrollment = Enrollment(
        id=str(uuid4()),
        user_id=current_user.id,
        course_id=course_id,
        enrolled_at=datetime.utcnow(),
        progress=0,
        completed_topic_ids=[],
    )
    course.enrolled_count = int(course.enrolled_count or 0) + 1
    db.add(enrollment)
    db.add(course)
    db.commit()
    logger.info("enrolled user=%s course=%s", current_user.id, course_id)
    return EnrollResponse(
        message="Successfully enrolled in course",
        course_id=course_id,
        course_name=course.name,
        enrolled_at=iso_format(enrollment.enrolled_at),
    )


@course_routes.get("/courses/{course_id}/topics", response_model=CourseTopicsResponse)
async def get_course_topics(
    course_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CourseTopicsResponse:
    """Topic list for enrolled learners, with per-topic completion."""
    course = get_course_or_404(course_id, db)
    enrollment = find_enrollment(current_user.id, course_id, db)
    if enrollment is None:
        raise HTTPException(status_code=403, detail="You must be enrolled in this course")
    completed = set(enrollment.completed_topic_ids or [])
    return CourseTopicsResponse(
        course_id=course.id,
        course_name=course.name,
        progress=int(enrollment.progress or 0),
        topics=[
            TopicSummary(
                id=t.id,
                title=t.title,
                description=t.description or "",
                order_index=t.order_index,
                duration_minutes=t.duration_minutes,
                content=t.content,
                is_completed=t.id in completed,
                quiz_question_count=len(t.questions),
            )
            for t in course.topics
        ],
    )


@course_routes.get("/courses/{course_id}/topics/{topic_id}/quiz", response_model=TopicQuizResponse)
async def get_topic_quiz(
    course_id: str,
    topic_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TopicQuizResponse:
    """The quiz as the learner sees it: no correct answers, no explanations."""
    assert current_user is not None
    course = get_course_or_404(course_id, db)
    topic = get_topic_or_404(course, topic_id)
    return TopicQuizResponse(
        topic_id=topic.id,
        topic_title=topic.title,
        passing_score=int(topic.passing_score),
        time_limit_minutes=int(topic.time_limit_minutes),
        questions=[
            QuizQuestionView(
                id=q.id,
                prompt=q.prompt,
                options=list(q.options or []),
                difficulty=q.difficulty,
                points=int(q.points),
            )
            for q in topic.questions
        ],
    )


@course_routes.post("/courses/{course_id}/topics/{topic_id}/quiz/submit", response_model=SubmitQuizResponse)
async def submit_quiz(
    course_id: str,
    topic_id: str,
    req: SubmitQuizRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    generator: LLM = Depends(get_text_generator),
) -> SubmitQuizResponse:
    """Grading errors are turned into 404/400/403 by the handlers in api.api."""
    answers = [SubmittedAnswer(question_id=a.question_id, selected_option_index=a.selected_option) for a in req.answers]
    outcome = await grade_and_update(
        db,
        course_id,
        topic_id,
        current_user.id,
        answers,
        req.time_spent_seconds,
        generator=generator,
        timeout=settings.advisor_timeout_seconds,
        require_pass=settings.require_pass_to_progress,
    )
    return SubmitQuizResponse(
        grading=GradingResponse.from_result(outcome.result),
        points_earned=outcome.points_earned,
        new_total_points=outcome.new_total_points,
        streak_count=outcome.streak_count,
        course_progress=outcome.course_progress_percent,
        topic_completed=outcome.topic_completed,
        time_spent_seconds=req.time_spent_seconds,
        recommendation=outcome.recommendation,
    )
