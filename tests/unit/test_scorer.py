"""Unit tests for the score calculator."""
import copy
from fractions import Fraction

import pytest

from learning.grading.errors import InvalidInputError
from learning.grading.scorer import difficulty_for_score, grade_submission, percent, round_half_up
from learning.grading.types import Difficulty, SubmittedAnswer, Topic


@pytest.mark.unit
class TestPercent:
    @pytest.mark.parametrize(
        "part,whole,expected",
        [(2, 3, 67), (1, 3, 33), (4, 5, 80), (1, 8, 13), (1, 200, 1), (0, 7, 0), (7, 7, 100)],
    )
    def test_half_up_rounding(self, part, whole, expected):
        assert percent(part, whole) == expected

    def test_exact_half_rounds_up(self):
        # 100 * 1 / 8 == 12.5
        assert percent(1, 8) == 13

    @pytest.mark.parametrize(
        "value,expected",
        [(Fraction(145, 2), 73), (Fraction(217, 3), 72), (Fraction(1, 2), 1), (Fraction(0), 0), (Fraction(299, 3), 100)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_zero_whole_raises(self):
        with pytest.raises(InvalidInputError):
            percent(1, 0)


@pytest.mark.unit
class TestGradeSubmission:
    def test_two_of_three_below_passing(self, topic_factory, answers_factory):
        topic = topic_factory(3, passing=70)
        result = grade_submission(topic, answers_factory(topic, {"q1", "q2"}))
        assert result.correct_count == 2
        assert result.total_count == 3
        assert result.score_percent == 67
        assert result.passed is False
        assert result.wrong_question_prompts == ["Prompt 3"]

    def test_four_of_five_scores_80(self, topic_factory, answers_factory):
        topic = topic_factory(5)
        result = grade_submission(topic, answers_factory(topic, {"q1", "q2", "q3", "q4"}))
        assert result.score_percent == 80
        assert result.passed is True

    def test_pass_at_exact_threshold(self, topic_factory, answers_factory):
        topic = topic_factory(10, passing=70)
        correct = {f"q{i}" for i in range(1, 8)}
        result = grade_submission(topic, answers_factory(topic, correct))
        assert result.score_percent == 70
        assert result.passed is True

    def test_unanswered_questions_count_as_wrong(self, topic_factory):
        topic = topic_factory(4)
        answers = [SubmittedAnswer(question_id="q1", selected_option_index=1)]
        result = grade_submission(topic, answers)
        assert result.correct_count == 1
        assert result.total_count == 4
        assert result.score_percent == 25
        assert len(result.outcomes) == 1

    def test_empty_answers_score_zero(self, topic_factory):
        result = grade_submission(topic_factory(3), [])
        assert result.correct_count == 0
        assert result.score_percent == 0
        assert result.passed is False
        assert result.wrong_question_prompts == []

    def test_skipped_answer_is_wrong(self, topic_factory):
        topic = topic_factory(2)
        answers = [
            SubmittedAnswer(question_id="q1", selected_option_index=None),
            SubmittedAnswer(question_id="q2", selected_option_index=2),
        ]
        result = grade_submission(topic, answers)
        assert result.correct_count == 1
        assert result.outcomes[0].is_correct is False
        assert result.outcomes[0].selected_option_index is None
        assert result.wrong_question_prompts == ["Prompt 1"]

    def test_unknown_question_ids_skipped(self, topic_factory):
        topic = topic_factory(2)
        answers = [
            SubmittedAnswer(question_id="nope", selected_option_index=0),
            SubmittedAnswer(question_id="q1", selected_option_index=1),
        ]
        result = grade_submission(topic, answers)
        assert result.correct_count == 1
        assert [o.question_id for o in result.outcomes] == ["q1"]

    def test_duplicate_answers_only_first_counts(self, topic_factory):
        topic = topic_factory(2)
        answers = [
            SubmittedAnswer(question_id="q1", selected_option_index=1),
            SubmittedAnswer(question_id="q1", selected_option_index=1),
            SubmittedAnswer(question_id="q1", selected_option_index=1),
        ]
        result = grade_submission(topic, answers)
        assert result.correct_count == 1
        assert result.correct_count <= result.total_count
        assert result.score_percent == 50

    def test_wrong_prompts_keep_submission_order(self, topic_factory):
        topic = topic_factory(3)
        answers = [
            SubmittedAnswer(question_id="q3", selected_option_index=0),
            SubmittedAnswer(question_id="q1", selected_option_index=0),
        ]
        result = grade_submission(topic, answers)
        assert result.wrong_question_prompts == ["Prompt 3", "Prompt 1"]

    def test_outcomes_carry_explanation(self, topic_factory):
        topic = topic_factory(1)
        result = grade_submission(topic, [SubmittedAnswer("q1", 0)])
        outcome = result.outcomes[0]
        assert outcome.correct_option_index == 1
        assert outcome.explanation == "Because 1"

    def test_empty_bank_raises(self):
        with pytest.raises(InvalidInputError):
            grade_submission(Topic(id="empty", title="Empty"), [])

    def test_malformed_answers_raise(self, topic_factory):
        topic = topic_factory(2)
        with pytest.raises(InvalidInputError):
            grade_submission(topic, "q1=0")
        with pytest.raises(InvalidInputError):
            grade_submission(topic, [{"question_id": "q1", "selected_option_index": 0}])
        with pytest.raises(InvalidInputError):
            grade_submission(topic, [SubmittedAnswer("q1", "0")])
        with pytest.raises(InvalidInputError):
            grade_submission(topic, [SubmittedAnswer("q1", True)])

    def test_same_inputs_same_result_and_inputs_untouched(self, topic_factory, answers_factory):
        topic = topic_factory(5)
        answers = answers_factory(topic, {"q2", "q4"})
        answers.append(SubmittedAnswer(question_id="q2", selected_option_index=0))
        answers.append(SubmittedAnswer(question_id="nope", selected_option_index=1))
        questions_before = copy.deepcopy(topic.questions)
        answers_before = list(answers)

        r1 = grade_submission(topic, answers)
        r2 = grade_submission(topic, answers)

        assert r1 == r2
        assert r1 is not r2
        assert topic.questions == questions_before
        assert answers == answers_before

    def test_score_in_bounds(self, topic_factory, answers_factory):
        for n in range(1, 12):
            topic = topic_factory(n)
            for k in range(n + 1):
                correct = {f"q{i}" for i in range(1, k + 1)}
                result = grade_submission(topic, answers_factory(topic, correct))
                assert 0 <= result.score_percent <= 100
                assert result.correct_count == k
                assert result.passed == (result.score_percent >= topic.passing_score_percent)


@pytest.mark.unit
class TestDifficultyForScore:
    @pytest.mark.parametrize(
        "score,expected",
        [(100, Difficulty.EASY), (80, Difficulty.EASY), (79, Difficulty.MEDIUM), (50, Difficulty.MEDIUM), (49, Difficulty.HARD), (0, Difficulty.HARD)],
    )
    def test_thresholds(self, score, expected):
        assert difficulty_for_score(score) is expected
