"""
Course, topic and quiz schemas. Public views never carry correct answers.
"""

from pydantic import BaseModel
from typing import Optional


class CourseResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    long_description: Optional[str] = None
    category: str
    programming_language: str
    level: str
    duration_hours: int
    learning_outcomes: list[str] = []
    is_featured: bool
    enrolled_count: int
    topic_count: int
    created_at: str


class CourseListResponse(BaseModel):
    count: int
    courses: list[CourseResponse]


class TopicSummary(BaseModel):
    id: str
    title: str
    description: str
    order_index: int
    duration_minutes: Optional[int] = None
    content: Optional[str] = None
    is_completed: bool
    quiz_question_count: int


class CourseTopicsResponse(BaseModel):
    course_id: str
    course_name: str
    progress: int
    topics: list[TopicSummary]


class QuizQuestionView(BaseModel):
    id: str
    prompt: str
    options: list[str]
    difficulty: str
    points: int


class TopicQuizResponse(BaseModel):
    topic_id: str
    topic_title: str
    passing_score: int
    time_limit_minutes: int
    questions: list[QuizQuestionView]
