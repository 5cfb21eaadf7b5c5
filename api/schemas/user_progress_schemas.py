"""
Learner enrollment progress schemas (my courses list).
"""

from pydantic import BaseModel


class EnrolledCourse(BaseModel):
    """Per-course enrollment state for the learner's course list."""
    course_id: str
    name: str
    description: str
    category: str
    level: str
    duration_hours: int
    enrolled_at: str
    progress: int
    completed_topics_count: int


class EnrolledCoursesResponse(BaseModel):
    count: int
    courses: list[EnrolledCourse]


class EnrollResponse(BaseModel):
    message: str
    course_id: str
    course_name: str
    enrolled_at: str
