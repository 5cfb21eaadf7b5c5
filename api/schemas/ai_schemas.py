"""
Schemas for the AI helper endpoints (doubt resolution, learning path).
"""

from pydantic import BaseModel, Field
from typing import Optional


class DoubtRequest(BaseModel):
    question: str = Field(min_length=1)
    context: Optional[str] = None


class DoubtResponse(BaseModel):
    question: str
    answer: str
    timestamp: str


class WeeklyGoal(BaseModel):
    week: int
    focus: str
    daily_tasks: list[str] = []
    milestone: str = ""


class LearningPathResponse(BaseModel):
    assessment: str
    weekly_goals: list[WeeklyGoal]
    recommended_courses: list[str] = []
    career_alignment: str = ""
    motivation: str = ""


class ProviderStatusResponse(BaseModel):
    model: str
    available: bool
