"""Unit tests for the recommendation formatter and its provider fallback."""
import asyncio
import json

import pytest

from learning.grading.recommendation import (
    Recommendation,
    build_recommendation,
    fallback_recommendation,
    fetch_advisory_text,
    format_recommendation,
    parse_advisory_text,
    strip_code_fences,
)
from learning.grading.scorer import grade_submission

GOOD_PAYLOAD = {
    "performance_summary": "Solid work on variables.",
    "strengths": ["Assignment"],
    "weak_areas": ["Scope"],
    "next_steps": {"immediate": "Redo quiz", "short_term": "Practice", "long_term": "Build a CLI"},
    "recommended_resources": [{"title": "Python docs", "type": "article", "focus": "Scope"}],
    "motivational_message": "Keep going",
    "industry_readiness": "75%",
}


def _payload_with_raw_readiness(raw: str) -> str:
    """GOOD_PAYLOAD as JSON text with `raw` spliced in verbatim as industry_readiness."""
    return json.dumps(dict(GOOD_PAYLOAD, industry_readiness="__READINESS__")).replace('"__READINESS__"', raw)


NON_FINITE_READINESS = ["Infinity", "-Infinity", "NaN", "1e400", '"inf"', '"-inf"', '"nan%"']


@pytest.fixture
def failed_result(topic_factory, answers_factory):
    topic = topic_factory(3)
    return grade_submission(topic, answers_factory(topic, {"q1"}))


@pytest.fixture
def passed_result(topic_factory, answers_factory):
    topic = topic_factory(5)
    return grade_submission(topic, answers_factory(topic, {"q1", "q2", "q3", "q4"}))


@pytest.mark.unit
class TestParseAdvisoryText:
    def test_valid_json(self):
        rec = parse_advisory_text(json.dumps(GOOD_PAYLOAD))
        assert isinstance(rec, Recommendation)
        assert rec.source == "generated"
        assert rec.industry_readiness == 75
        assert rec.next_steps.immediate == "Redo quiz"

    def test_code_fenced_json(self):
        text = "```json\n" + json.dumps(GOOD_PAYLOAD) + "\n```"
        assert parse_advisory_text(text) is not None

    def test_prose_around_object(self):
        text = "Here you go:\n" + json.dumps(GOOD_PAYLOAD) + "\nGood luck!"
        assert parse_advisory_text(text) is not None

    @pytest.mark.parametrize("text", [None, "", "   ", "not json at all", "[1, 2, 3]"])
    def test_unusable_text(self, text):
        assert parse_advisory_text(text) is None

    def test_missing_field(self):
        payload = dict(GOOD_PAYLOAD)
        del payload["next_steps"]
        assert parse_advisory_text(json.dumps(payload)) is None

    def test_readiness_clamped(self):
        payload = dict(GOOD_PAYLOAD, industry_readiness=140)
        assert parse_advisory_text(json.dumps(payload)).industry_readiness == 100

    def test_readiness_not_a_number(self):
        payload = dict(GOOD_PAYLOAD, industry_readiness="high")
        assert parse_advisory_text(json.dumps(payload)) is None

    @pytest.mark.parametrize("raw", NON_FINITE_READINESS)
    def test_readiness_not_finite(self, raw):
        assert parse_advisory_text(_payload_with_raw_readiness(raw)) is None

    def test_readiness_large_but_finite_clamped(self):
        assert parse_advisory_text(_payload_with_raw_readiness("1e300")).industry_readiness == 100


@pytest.mark.unit
class TestStripCodeFences:
    def test_strips_fences(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_text_unchanged(self):
        assert strip_code_fences("hello") == "hello"


@pytest.mark.unit
class TestFallbackRecommendation:
    def test_failed_quiz(self, failed_result):
        rec = fallback_recommendation(failed_result, "Variables")
        assert rec.source == "fallback"
        assert rec.performance_summary == "You scored 33% on Variables. Keep practicing!"
        assert rec.strengths == []
        assert rec.weak_areas == ["Prompt 2", "Prompt 3"]
        assert rec.industry_readiness == 33
        assert rec.next_steps.immediate == "Review incorrect answers"

    def test_passed_quiz(self, passed_result):
        rec = fallback_recommendation(passed_result, "Variables")
        assert rec.performance_summary.endswith("Great job!")
        assert rec.strengths == ["Understanding core concepts"]
        assert rec.weak_areas == ["Prompt 5"]

    def test_is_deterministic(self, failed_result):
        assert fallback_recommendation(failed_result, "X") == fallback_recommendation(failed_result, "X")

    def test_format_uses_fallback_on_bad_text(self, failed_result):
        rec = format_recommendation(failed_result, "Variables", "sorry, I can't")
        assert rec == fallback_recommendation(failed_result, "Variables")


@pytest.mark.unit
class TestBuildRecommendation:
    @pytest.mark.asyncio
    async def test_generated_text_used_verbatim(self, failed_result, fake_generator):
        gen = fake_generator(text=json.dumps(GOOD_PAYLOAD))
        rec = await build_recommendation(failed_result, "Variables", generator=gen, prompt="p", timeout=1.0)
        assert rec.source == "generated"
        assert rec.weak_areas == ["Scope"]
        assert gen.prompts == ["p"]

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, failed_result, fake_generator):
        gen = fake_generator(text=json.dumps(GOOD_PAYLOAD), delay=1.0)
        rec = await build_recommendation(failed_result, "Variables", generator=gen, prompt="p", timeout=0.05)
        assert rec.source == "fallback"
        assert rec.weak_areas == failed_result.wrong_question_prompts
        assert rec == fallback_recommendation(failed_result, "Variables")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", NON_FINITE_READINESS)
    async def test_non_finite_readiness_falls_back(self, failed_result, fake_generator, raw):
        gen = fake_generator(text=_payload_with_raw_readiness(raw))
        rec = await build_recommendation(failed_result, "Variables", generator=gen, prompt="p", timeout=1.0)
        assert rec.source == "fallback"
        assert rec == fallback_recommendation(failed_result, "Variables")

    @pytest.mark.asyncio
    async def test_provider_error_falls_back(self, failed_result, fake_generator):
        gen = fake_generator(error=ConnectionError("ollama down"))
        rec = await build_recommendation(failed_result, "Variables", generator=gen, prompt="p", timeout=1.0)
        assert rec.source == "fallback"

    @pytest.mark.asyncio
    async def test_no_generator_falls_back(self, failed_result):
        rec = await build_recommendation(failed_result, "Variables", generator=None, prompt="p", timeout=1.0)
        assert rec.source == "fallback"

    @pytest.mark.asyncio
    async def test_fetch_never_raises(self, fake_generator):
        gen = fake_generator(error=RuntimeError("boom"))
        assert await fetch_advisory_text(gen, "p", timeout=1.0) is None

    @pytest.mark.asyncio
    async def test_fetch_cancels_slow_call(self, fake_generator):
        gen = fake_generator(text="late", delay=5.0)
        loop = asyncio.get_running_loop()
        start = loop.time()
        assert await fetch_advisory_text(gen, "p", timeout=0.05) is None
        assert loop.time() - start < 2.0
