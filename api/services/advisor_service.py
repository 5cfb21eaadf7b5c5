"""
Provider-backed helpers without a local fallback: doubt resolution and the
30-day learning path. Failures surface as ProviderUnavailableError (503).
"""

import json
from typing import Optional

from pydantic import ValidationError

from api.models.models import User
from api.prompt_builders.doubt import build_doubt_prompt
from api.prompt_builders.learning_path import build_learning_path_prompt
from api.schemas.ai_schemas import LearningPathResponse
from api.utils.common import attempt_to_history
from api.utils.logger import configure_logging
from learning.core.llm import LLM
from learning.grading.recommendation import fetch_advisory_text, strip_code_fences
from learning.grading.stats import rounded_average_score, weak_area_ranking

logger = configure_logging()

RECENT_ATTEMPTS_WINDOW = 10


class ProviderUnavailableError(Exception):
    pass


async def resolve_doubt(generator: Optional[LLM], question: str, context: Optional[str], *, timeout: float) -> str:
    prompt = build_doubt_prompt(question=question, context=context)
    text = await fetch_advisory_text(generator, prompt, timeout=timeout)
    if text is None or not text.strip():
        raise ProviderUnavailableError("Unable to process your question. Please try again.")
    return text.strip()


async def generate_learning_path(user: User, generator: Optional[LLM], *, timeout: float) -> LearningPathResponse:
    history = [attempt_to_history(a) for a in user.quiz_attempts]
    recent = history[-RECENT_ATTEMPTS_WINDOW:]
    prompt = build_learning_path_prompt(
        skill_level=user.skill_level,
        average_score=rounded_average_score(recent),
        enrolled_courses=len(user.enrollments),
        weak_areas=weak_area_ranking(history, window=RECENT_ATTEMPTS_WINDOW),
        study_minutes=int(user.total_study_time or 0),
        streak=int(user.streak_count or 0),
    )
    text = await fetch_advisory_text(generator, prompt, timeout=timeout)
    if text is None:
        raise ProviderUnavailableError("Unable to generate learning path. Please try again.")
    try:
        return LearningPathResponse.model_validate(json.loads(strip_code_fences(text)))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("learning path output not usable for user=%s: %s", user.id, e)
        raise ProviderUnavailableError("Unable to generate learning path. Please try again.") from e
