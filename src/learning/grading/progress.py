"""Progress tracker: per-course topic completion for one enrollment."""

from __future__ import annotations

from typing import Optional

from learning.grading.errors import InvalidInputError, NotEnrolledError
from learning.grading.scorer import percent
from learning.grading.types import EnrollmentRecord


def record_topic_completion(
    enrollment: Optional[EnrollmentRecord],
    topic_id: str,
    total_topics: int,
) -> bool:
    """
    Mark `topic_id` complete and recompute `progress_percent`.

    Returns True when the enrollment changed. Completing a topic twice is a no-op.
    Does not look at pass/fail; callers that gate on passing check before calling.
    """
    if enrollment is None:
        raise NotEnrolledError()
    if total_topics <= 0:
        raise InvalidInputError("Course has no topics")
    if topic_id in enrollment.completed_topic_ids:
        return False

    enrollment.completed_topic_ids.append(topic_id)
    enrollment.progress_percent = min(100, percent(len(enrollment.completed_topic_ids), total_topics))
    return True
