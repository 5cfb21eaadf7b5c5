from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass
class Question:
    id: str
    prompt: str
    options: List[str]
    correct_option_index: int
    explanation: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    point_value: int = 10


@dataclass
class Topic:
    id: str
    title: str
    questions: List[Question] = field(default_factory=list)
    content: str = ""
    passing_score_percent: int = 70
    time_limit_minutes: int = 30

    def question_by_id(self, question_id: str) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None


@dataclass(frozen=True)
class SubmittedAnswer:
    question_id: str
    selected_option_index: Optional[int]  # None = skipped


@dataclass(frozen=True)
class QuestionOutcome:
    question_id: str
    prompt: str
    selected_option_index: Optional[int]
    correct_option_index: int
    is_correct: bool
    explanation: str


@dataclass(frozen=True)
class GradingResult:
    correct_count: int
    total_count: int
    score_percent: int
    passed: bool
    passing_score_percent: int
    outcomes: List[QuestionOutcome] = field(default_factory=list)
    wrong_question_prompts: List[str] = field(default_factory=list)


@dataclass
class EnrollmentRecord:
    course_id: str
    enrolled_at: Optional[datetime] = None
    progress_percent: int = 0
    completed_topic_ids: List[str] = field(default_factory=list)


@dataclass
class GamificationState:
    points: int = 0
    streak_count: int = 0
    last_activity_date: Optional[date] = None


@dataclass
class QuizHistoryEntry:
    topic_id: str
    score_percent: int
    total_questions: int
    correct_count: int
    time_spent_seconds: int = 0
    difficulty: Difficulty = Difficulty.MEDIUM
    weak_areas: List[str] = field(default_factory=list)
    topic_title: str = ""
    completed_at: Optional[datetime] = None
