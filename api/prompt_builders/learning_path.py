"""30-day learning roadmap prompt."""

from __future__ import annotations

from typing import List

from learning.core.prompt_builder import build_from_template, join_or_default

TEMPLATE_LEARNING_PATH = """ROLE: Career Advisor
As a career advisor at Leoaxis Technologies, create a personalized 30-day learning roadmap.

STUDENT PROFILE:
- Current Level: {skill_level}
- Average Quiz Score: {average_score}%
- Enrolled Courses: {enrolled_courses}
- Top Weak Areas: {weak_areas}
- Total Study Time: {study_minutes} minutes
- Current Streak: {streak} days

Reply with ONLY a JSON object:
{{
  "assessment": "2-3 sentence current skill level assessment",
  "weekly_goals": [
    {{"week": 1, "focus": "Main learning objective", "daily_tasks": ["task 1", "task 2"], "milestone": "What should be achieved"}}
  ],
  "recommended_courses": ["course name"],
  "career_alignment": "How this path leads to job readiness",
  "motivation": "Personal encouragement"
}}
"""


def build_learning_path_prompt(
    *,
    skill_level: str,
    average_score: int,
    enrolled_courses: int,
    weak_areas: List[str],
    study_minutes: int,
    streak: int,
) -> str:
    return build_from_template(
        TEMPLATE_LEARNING_PATH,
        skill_level=skill_level or "Beginner",
        average_score=average_score,
        enrolled_courses=enrolled_courses,
        weak_areas=join_or_default(weak_areas, "None identified yet"),
        study_minutes=study_minutes,
        streak=streak,
    ).strip()
