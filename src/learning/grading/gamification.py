"""
Streak and points bookkeeping.

Streaks count consecutive calendar days with activity; points only ever grow.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from learning.grading.types import GamificationState, GradingResult

POINTS_PER_CORRECT = 10
HIGH_SCORE_BONUS = 50
HIGH_SCORE_THRESHOLD = 80


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def touch_streak(state: GamificationState, today: Union[date, datetime]) -> int:
    """Record activity on `today` and return the new streak count."""
    today = _as_date(today)
    last = state.last_activity_date

    if last is None:
        state.streak_count = 1
    else:
        gap = (today - _as_date(last)).days
        if gap == 1:
            state.streak_count += 1
        elif gap > 1:
            state.streak_count = 1
        # gap <= 0: same day (or clock skew), unchanged

    state.last_activity_date = today
    return state.streak_count


def points_for(result: GradingResult) -> int:
    bonus = HIGH_SCORE_BONUS if result.score_percent >= HIGH_SCORE_THRESHOLD else 0
    return max(0, result.correct_count) * POINTS_PER_CORRECT + bonus


def award_quiz_points(state: GamificationState, result: GradingResult) -> int:
    """Add the points earned by `result` and return the increment."""
    earned = points_for(result)
    state.points += earned
    return earned
