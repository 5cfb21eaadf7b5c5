"""
Recommendation formatter.

Turns a grading result plus optional provider text into a fixed-shape payload.
If the provider is missing, slow, failing, or returns something that does not fit
the schema, a deterministic fallback built from local data is used instead.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
import re
import time
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from learning.core.llm import LLM
from learning.grading.types import GradingResult

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


class NextSteps(BaseModel):
    immediate: str
    short_term: str
    long_term: str


class RecommendedResource(BaseModel):
    title: str
    type: str
    focus: str


class Recommendation(BaseModel):
    performance_summary: str
    strengths: list[str]
    weak_areas: list[str]
    next_steps: NextSteps
    recommended_resources: list[RecommendedResource] = Field(default_factory=list)
    motivational_message: str
    industry_readiness: int
    source: Literal["generated", "fallback"] = "generated"

    @field_validator("industry_readiness", mode="before")
    @classmethod
    def _coerce_readiness(cls, v):
        # Providers answer "75%", "75", 75 or 75.0
        if isinstance(v, bool):
            raise ValueError("industry_readiness must be a number")
        if isinstance(v, str):
            v = v.strip().rstrip("%").strip()
        try:
            value = float(v)
        except (TypeError, ValueError) as e:
            raise ValueError(f"industry_readiness is not a number: {v!r}") from e
        # json.loads accepts Infinity, NaN and 1e400; round() cannot take them.
        if not math.isfinite(value):
            raise ValueError(f"industry_readiness is not finite: {v!r}")
        return max(0, min(100, round(value)))


def strip_code_fences(text: str) -> str:
    cleaned = _FENCE_RE.sub("", text).strip()
    if cleaned.startswith("{"):
        return cleaned
    # Tolerate prose around the object.
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start != -1 and end > start:
        return cleaned[start : end + 1]
    return cleaned


def parse_advisory_text(text: Optional[str]) -> Optional[Recommendation]:
    """Parse provider output; None when it is empty or not structurally conforming."""
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        logger.info("advisory text is not JSON: %s", e)
        return None
    if not isinstance(data, dict):
        return None
    data["source"] = "generated"
    try:
        return Recommendation.model_validate(data)
    except ValidationError as e:
        logger.info("advisory text does not match recommendation schema: %s", e.error_count())
        return None


def fallback_recommendation(result: GradingResult, topic_title: str) -> Recommendation:
    """Deterministic recommendation from the score and the wrong-answer prompts only."""
    verdict = "Great job!" if result.passed else "Keep practicing!"
    return Recommendation(
        performance_summary=f"You scored {result.score_percent}% on {topic_title}. {verdict}",
        strengths=["Understanding core concepts"] if result.passed else [],
        weak_areas=list(result.wrong_question_prompts),
        next_steps=NextSteps(
            immediate="Review incorrect answers",
            short_term="Practice more problems on weak areas",
            long_term="Apply concepts in real projects",
        ),
        recommended_resources=[],
        motivational_message="Every quiz is a learning opportunity. Keep going!",
        industry_readiness=result.score_percent,
        source="fallback",
    )


def format_recommendation(
    result: GradingResult,
    topic_title: str,
    advisory_text: Optional[str] = None,
) -> Recommendation:
    parsed = parse_advisory_text(advisory_text)
    if parsed is not None:
        return parsed
    return fallback_recommendation(result, topic_title)


async def fetch_advisory_text(generator: Optional[LLM], prompt: str, *, timeout: float) -> Optional[str]:
    """
    Ask the provider for advisory text, bounded by `timeout` seconds.
    Returns None on timeout or any provider failure; never raises.
    """
    if generator is None:
        return None
    start_time = time.time()
    try:
        text = await asyncio.wait_for(generator.agenerate(prompt), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("advisory text timed out after %.2fs (timeout=%ss)", time.time() - start_time, timeout)
        return None
    except Exception as e:
        logger.warning("advisory text generation failed after %.2fs: %s", time.time() - start_time, e)
        return None
    logger.debug("advisory text received in %.2fs", time.time() - start_time)
    return text if isinstance(text, str) else None


async def build_recommendation(
    result: GradingResult,
    topic_title: str,
    *,
    generator: Optional[LLM],
    prompt: str,
    timeout: float,
) -> Recommendation:
    text = await fetch_advisory_text(generator, prompt, timeout=timeout)
    return format_recommendation(result, topic_title, text)
