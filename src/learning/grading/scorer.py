"""
Score calculator: grade a quiz submission against a topic's question bank.

Pure functions only; nothing here touches persistence or the network.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import List, Sequence, Set

from learning.grading.errors import InvalidInputError
from learning.grading.types import (
    Difficulty,
    GradingResult,
    QuestionOutcome,
    SubmittedAnswer,
    Topic,
)


def round_half_up(value: Fraction) -> int:
    return int(math.floor(value + Fraction(1, 2)))


def percent(part: int, whole: int) -> int:
    """round(100 * part / whole) with half-up rounding, computed exactly."""
    if whole <= 0:
        raise InvalidInputError("Cannot compute a percentage of an empty total")
    return round_half_up(Fraction(100 * part, whole))


def _validate_answers(answers: Sequence[SubmittedAnswer]) -> None:
    if not isinstance(answers, (list, tuple)):
        raise InvalidInputError("Answers must be a list")
    for a in answers:
        if not isinstance(a, SubmittedAnswer):
            raise InvalidInputError(f"Malformed answer: {a!r}")
        sel = a.selected_option_index
        # bool is an int subclass; reject it explicitly.
        if sel is not None and (isinstance(sel, bool) or not isinstance(sel, int)):
            raise InvalidInputError(f"Malformed option index for question {a.question_id}: {sel!r}")


def grade_submission(topic: Topic, answers: Sequence[SubmittedAnswer]) -> GradingResult:
    """
    Grade `answers` against `topic.questions`.

    - Unknown question ids are skipped; only the first answer per question counts.
    - The denominator is the size of the bank, so unanswered questions count as wrong.
    - An empty bank is an InvalidInputError.
    """
    total = len(topic.questions)
    if total == 0:
        raise InvalidInputError(f"Topic {topic.id} has no quiz questions")
    _validate_answers(answers)

    correct = 0
    seen: Set[str] = set()
    outcomes: List[QuestionOutcome] = []
    wrong_prompts: List[str] = []

    for answer in answers:
        question = topic.question_by_id(answer.question_id)
        if question is None or question.id in seen:
            continue
        seen.add(question.id)

        is_correct = answer.selected_option_index == question.correct_option_index
        if is_correct:
            correct += 1
        elif question.prompt not in wrong_prompts:
            wrong_prompts.append(question.prompt)

        outcomes.append(
            QuestionOutcome(
                question_id=question.id,
                prompt=question.prompt,
                selected_option_index=answer.selected_option_index,
                correct_option_index=question.correct_option_index,
                is_correct=is_correct,
                explanation=question.explanation,
            )
        )

    score = percent(correct, total)
    return GradingResult(
        correct_count=correct,
        total_count=total,
        score_percent=score,
        passed=score >= topic.passing_score_percent,
        passing_score_percent=topic.passing_score_percent,
        outcomes=outcomes,
        wrong_question_prompts=wrong_prompts,
    )


def difficulty_for_score(score_percent: int) -> Difficulty:
    """How hard the quiz was for this learner, judged from the score."""
    if score_percent >= 80:
        return Difficulty.EASY
    if score_percent < 50:
        return Difficulty.HARD
    return Difficulty.MEDIUM
