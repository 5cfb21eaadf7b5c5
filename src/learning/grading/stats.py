"""Aggregates over a learner's quiz history and enrollments (profile stats, learning path)."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from fractions import Fraction
from typing import Any, Dict, List, Sequence

from learning.grading.scorer import round_half_up
from learning.grading.types import EnrollmentRecord, GamificationState, QuizHistoryEntry


def average_score(history: Sequence[QuizHistoryEntry]) -> float:
    if not history:
        return 0.0
    return sum(h.score_percent for h in history) / len(history)


def rounded_average_score(history: Sequence[QuizHistoryEntry]) -> int:
    """Mean score rounded half-up on the exact fraction, 0 for no history."""
    if not history:
        return 0
    return round_half_up(Fraction(sum(h.score_percent for h in history), len(history)))


def _by_recency(history: Sequence[QuizHistoryEntry]) -> List[QuizHistoryEntry]:
    return sorted(history, key=lambda h: h.completed_at or datetime.min, reverse=True)


def weak_area_ranking(
    history: Sequence[QuizHistoryEntry],
    *,
    window: int = 10,
    below: int = 70,
    limit: int = 5,
) -> List[str]:
    """
    Most frequent weak areas among the last `window` attempts scoring under `below`.
    Ties keep first-seen order.
    """
    recent = list(history)[-window:]
    counts: Counter = Counter()
    for entry in recent:
        if entry.score_percent < below:
            counts.update(entry.weak_areas)
    return [area for area, _ in counts.most_common(limit)]


def summarize_stats(
    history: Sequence[QuizHistoryEntry],
    enrollments: Sequence[EnrollmentRecord],
    state: GamificationState,
    *,
    total_study_time: int = 0,
    recent_limit: int = 5,
) -> Dict[str, Any]:
    return {
        "total_quizzes": len(history),
        "average_score": rounded_average_score(history),
        "completed_courses": sum(1 for e in enrollments if e.progress_percent == 100),
        "enrolled_courses": len(enrollments),
        "streak_count": state.streak_count,
        "total_points": state.points,
        "total_study_time": total_study_time,
        "recent_activity": _by_recency(history)[:recent_limit],
    }
