"""
Learner profile and statistics schemas.
"""

from pydantic import BaseModel
from typing import Optional


class UserProfile(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    skill_level: str
    preferences: Optional[dict] = None
    points: int
    streak_count: int
    last_activity_date: Optional[str] = None  # ISO date
    total_study_time: int
    enrolled_courses: int
    created_at: str


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    preferences: Optional[dict] = None


class QuizActivity(BaseModel):
    topic_id: str
    topic_title: str
    score: int
    total_questions: int
    correct_answers: int
    time_spent_seconds: int
    difficulty: str
    weak_areas: list[str]
    completed_at: Optional[str] = None


class UserStatsOverview(BaseModel):
    total_quizzes: int
    average_score: int
    completed_courses: int
    enrolled_courses: int
    streak_count: int
    total_points: int
    total_study_time: int


class UserStatsResponse(BaseModel):
    overview: UserStatsOverview
    skill_level: str
    recent_activity: list[QuizActivity]
