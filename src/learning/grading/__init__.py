"""
Quiz grading core.

Import surface:
- scorer: grade_submission, percent, round_half_up, difficulty_for_score
- progress: record_topic_completion
- gamification: touch_streak, points_for, award_quiz_points
- recommendation: Recommendation, build_recommendation, format_recommendation, fallback_recommendation
- stats: summarize_stats, weak_area_ranking, average_score, rounded_average_score
"""

from learning.grading.errors import InvalidInputError, LearningError, NotEnrolledError, UnknownEntityError
from learning.grading.gamification import award_quiz_points, points_for, touch_streak
from learning.grading.progress import record_topic_completion
from learning.grading.recommendation import (
    Recommendation,
    build_recommendation,
    fallback_recommendation,
    fetch_advisory_text,
    format_recommendation,
    parse_advisory_text,
)
from learning.grading.scorer import difficulty_for_score, grade_submission, percent, round_half_up
from learning.grading.stats import average_score, rounded_average_score, summarize_stats, weak_area_ranking
from learning.grading.types import (
    Difficulty,
    EnrollmentRecord,
    GamificationState,
    GradingResult,
    Question,
    QuestionOutcome,
    QuizHistoryEntry,
    SubmittedAnswer,
    Topic,
)

__all__ = [
    # errors
    "InvalidInputError",
    "LearningError",
    "NotEnrolledError",
    "UnknownEntityError",
    # gamification
    "award_quiz_points",
    "points_for",
    "touch_streak",
    # progress
    "record_topic_completion",
    # recommendation
    "Recommendation",
    "build_recommendation",
    "fallback_recommendation",
    "fetch_advisory_text",
    "format_recommendation",
    "parse_advisory_text",
    # scorer
    "difficulty_for_score",
    "grade_submission",
    "percent",
    "round_half_up",
    # stats
    "average_score",
    "rounded_average_score",
    "summarize_stats",
    "weak_area_ranking",
    # types
    "Difficulty",
    "EnrollmentRecord",
    "GamificationState",
    "GradingResult",
    "Question",
    "QuestionOutcome",
    "QuizHistoryEntry",
    "SubmittedAnswer",
    "Topic",
]
