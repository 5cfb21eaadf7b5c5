"""Quiz advisor prompt: asks the provider for a JSON recommendation after a graded quiz."""

from __future__ import annotations

from typing import List

from learning.core.prompt_builder import build_from_template, join_or_default

TEMPLATE_QUIZ_ADVISOR = """ROLE: Technical Mentor
You are an expert technical mentor at Leoaxis Technologies, specializing in software engineering education.

STUDENT CONTEXT:
- Current Level: {skill_level}
- Course: {course_name} ({course_level})
- Topic Completed: {topic_title}
- Quiz Performance: {score}% ({correct}/{total} correct)
- Time Spent: {minutes} minutes
- Struggling Areas: {weak_areas}

TASK:
Reply with ONLY a JSON object with these fields:
{{
  "performance_summary": "2-3 sentence assessment of their performance",
  "strengths": ["2-3 concepts they understood well"],
  "weak_areas": ["2-3 specific concepts to review"],
  "next_steps": {{
    "immediate": "one specific action to take now",
    "short_term": "focus for this week",
    "long_term": "career-aligned goal"
  }},
  "recommended_resources": [
    {{"title": "Resource name", "type": "video/article/practice", "focus": "What it helps with"}}
  ],
  "motivational_message": "Encouraging 1-2 line message",
  "industry_readiness": 0
}}

Rules:
- industry_readiness is an integer from 0 to 100.
- Be specific and actionable; reference real-world applications.
- Match tone to the level (beginner = encouraging, advanced = challenging).
"""


def build_quiz_advisor_prompt(
    *,
    skill_level: str,
    course_name: str,
    course_level: str,
    topic_title: str,
    score: int,
    correct: int,
    total: int,
    time_spent_seconds: int,
    weak_areas: List[str],
) -> str:
    return build_from_template(
        TEMPLATE_QUIZ_ADVISOR,
        skill_level=skill_level or "Beginner",
        course_name=course_name,
        course_level=course_level,
        topic_title=topic_title,
        score=score,
        correct=correct,
        total=total,
        minutes=round(max(0, time_spent_seconds) / 60),
        weak_areas=join_or_default(weak_areas, "None"),
    ).strip()
