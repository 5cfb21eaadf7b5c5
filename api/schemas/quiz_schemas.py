"""
Quiz submission and grading schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional

from learning.grading.recommendation import Recommendation
from learning.grading.types import GradingResult


class AnswerIn(BaseModel):
    question_id: str
    selected_option: Optional[int] = Field(default=None, ge=0)  # None = skipped


class SubmitQuizRequest(BaseModel):
    answers: list[AnswerIn]
    time_spent_seconds: int = Field(default=0, ge=0)


class QuestionOutcomeResponse(BaseModel):
    question_id: str
    prompt: str
    selected_option: Optional[int] = None
    correct_option: int
    is_correct: bool
    explanation: str


class GradingResponse(BaseModel):
    score: int
    correct_answers: int
    total_questions: int
    passed: bool
    passing_score: int
    wrong_answers: list[str]
    results: list[QuestionOutcomeResponse]

    @classmethod
    def from_result(cls, result: GradingResult) -> "GradingResponse":
        return cls(
            score=result.score_percent,
            correct_answers=result.correct_count,
            total_questions=result.total_count,
            passed=result.passed,
            passing_score=result.passing_score_percent,
            wrong_answers=list(result.wrong_question_prompts),
            results=[
                QuestionOutcomeResponse(
                    question_id=o.question_id,
                    prompt=o.prompt,
                    selected_option=o.selected_option_index,
                    correct_option=o.correct_option_index,
                    is_correct=o.is_correct,
                    explanation=o.explanation,
                )
                for o in result.outcomes
            ],
        )


class SubmitQuizResponse(BaseModel):
    grading: GradingResponse
    points_earned: int
    new_total_points: int
    streak_count: int
    course_progress: int
    topic_completed: bool
    time_spent_seconds: int
    recommendation: Recommendation
