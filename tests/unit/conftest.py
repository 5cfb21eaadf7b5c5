"""
Unit test fixtures. Use plain records and fakes; no real LLM.
"""
import pytest

from learning.grading.types import Question, SubmittedAnswer, Topic


def make_topic(n_questions: int, passing: int = 70, topic_id: str = "t1") -> Topic:
    """Topic whose question i has correct option i % 4."""
    return Topic(
        id=topic_id,
        title="Variables",
        passing_score_percent=passing,
        questions=[
            Question(
                id=f"q{i}",
                prompt=f"Prompt {i}",
                options=["a", "b", "c", "d"],
                correct_option_index=i % 4,
                explanation=f"Because {i}",
            )
            for i in range(1, n_questions + 1)
        ],
    )


def answers_for(topic: Topic, correct_ids) -> list:
    """Answer every question; those in `correct_ids` correctly, the rest wrongly."""
    out = []
    for q in topic.questions:
        sel = q.correct_option_index if q.id in correct_ids else (q.correct_option_index + 1) % len(q.options)
        out.append(SubmittedAnswer(question_id=q.id, selected_option_index=sel))
    return out


@pytest.fixture
def topic_factory():
    return make_topic


@pytest.fixture
def answers_factory():
    return answers_for
