"""Errors raised by the grading core. Callers translate them to transport errors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from learning.grading.types import GradingResult


class LearningError(Exception):
    pass


class InvalidInputError(LearningError, ValueError):
    """Empty question bank, malformed answers, unknown course or topic. Nothing was mutated."""


class UnknownEntityError(InvalidInputError):
    """A referenced course, topic or learner does not exist."""


class NotEnrolledError(LearningError):
    """
    Progress or points update requested for a learner without an enrollment.
    The grading is still available on `result` so the caller can report it.
    """

    def __init__(self, message: str = "Learner is not enrolled in this course", result: Optional["GradingResult"] = None):
        super().__init__(message)
        self.result = result
