"""
Unit Tests for Question Model

Tests for the Question dataclass: validation, exact-match answer checks
and serialization of the stored camelCase shape.
"""

import pytest

from paper_press.core.models.questions import Question, QuestionType


class TestQuestion:
    """Tests for Question dataclass."""

    def test_init_when_valid_data_then_creates_question(self):
        """Valid question data should be created successfully."""
        q = Question(
            order=1,
            type=QuestionType.MCQ,
            question_text="What is 2 + 2?",
            options=("1", "2", "3", "4"),
            correct_answer="4",
        )
        assert q.order == 1
        assert q.is_mcq
        assert q.options == ("1", "2", "3", "4")

    @pytest.mark.parametrize("order", [0, -3, True, "1"])
    def test_init_when_order_not_positive_int_then_raises_error(self, order):
        """Order must be a positive integer."""
        with pytest.raises(ValueError, match="order must be a positive integer"):
            Question(order=order, type=QuestionType.MCQ, question_text="x")

    def test_init_when_type_is_string_then_coerced_to_enum(self):
        """Raw stored type strings are accepted."""
        q = Question(order=2, type="short_answer", question_text="x", correct_answer="y")
        assert q.type is QuestionType.SHORT_ANSWER

    def test_init_when_unknown_type_then_raises_error(self):
        """Unknown types are rejected."""
        with pytest.raises(ValueError):
            Question(order=1, type="essay", question_text="x")

    def test_init_when_options_and_answers_are_lists_then_stored_as_tuples(self):
        """Lists are frozen to tuples so the question stays immutable."""
        q = Question(order=1, type=QuestionType.MCQ, question_text="x",
                     options=["2", "4"], correct_answer=["2"])
        assert q.options == ("2", "4")
        assert q.correct_answer == ("2",)


class TestIsCorrect:
    """Exact-match correctness checks."""

    def test_single_answer_matches_only_equal_option(self):
        q = Question(order=1, type=QuestionType.MCQ, question_text="x",
                     options=("1", "2", "3", "4"), correct_answer="4")
        assert [q.is_correct(o) for o in q.options] == [False, False, False, True]

    def test_multiple_answers_match_members(self):
        q = Question(order=1, type=QuestionType.MCQ, question_text="x",
                     options=("2", "4", "7", "9"), correct_answer=("2", "7"))
        assert [q.is_correct(o) for o in q.options] == [True, False, True, False]

    @pytest.mark.parametrize("option", ["4 ", " 4", "four", "44"])
    def test_no_normalization_or_partial_matching(self, option):
        """Whitespace, spelling and substrings never count as a match."""
        q = Question(order=1, type=QuestionType.MCQ, question_text="x", correct_answer="4")
        assert q.is_correct(option) is False

    def test_case_sensitive(self):
        q = Question(order=1, type=QuestionType.MCQ, question_text="x", correct_answer="Paris")
        assert q.is_correct("paris") is False
        assert q.is_correct("Paris") is True

    def test_missing_answer_matches_nothing(self):
        q = Question(order=1, type=QuestionType.MCQ, question_text="x", options=("a", "b"))
        assert not q.has_answer
        assert not any(q.is_correct(o) for o in q.options)

    def test_empty_answer_counts_as_missing(self):
        assert not Question(order=1, type=QuestionType.SHORT_ANSWER, question_text="x",
                            correct_answer="").has_answer
        assert not Question(order=1, type=QuestionType.MCQ, question_text="x",
                            correct_answer=()).has_answer


class TestQuestionText:
    """Display helpers."""

    def test_answer_text_joins_multiple_answers(self):
        q = Question(order=1, type=QuestionType.SHORT_ANSWER, question_text="x",
                     correct_answer=("alpha", "beta"))
        assert q.answer_text() == "alpha, beta"

    @pytest.mark.parametrize("answers", [{"gamma", "alpha", "beta"}, frozenset({"beta", "gamma", "alpha"})])
    def test_answer_text_when_set_then_sorted(self, answers):
        q = Question(order=1, type=QuestionType.SHORT_ANSWER, question_text="x", correct_answer=answers)
        assert q.correct_answer == ("alpha", "beta", "gamma")
        assert q.answer_text() == "alpha, beta, gamma"

    def test_list_answers_keep_given_order(self):
        q = Question(order=1, type=QuestionType.SHORT_ANSWER, question_text="x",
                     correct_answer=["gamma", "alpha"])
        assert q.answer_text() == "gamma, alpha"

    @pytest.mark.parametrize("explanation,expected", [
        (None, False),
        ("", False),
        ("   \n", False),
        ("Because.", True),
    ])
    def test_has_explanation(self, explanation, expected):
        q = Question(order=1, type=QuestionType.MCQ, question_text="x", explanation=explanation)
        assert q.has_explanation is expected


class TestQuestionSerialization:
    """to_dict / from_dict with the stored document shape."""

    def test_from_dict_when_list_answer_then_tuple(self):
        q = Question.from_dict({
            "id": "q1",
            "order": 3,
            "type": "mcq",
            "questionText": "Pick primes",
            "options": ["2", "4", "7", "9"],
            "correctAnswer": ["2", "7"],
            "explanation": "2 and 7 are prime.",
        })
        assert q.order == 3
        assert q.correct_answer == ("2", "7")
        assert q.explanation == "2 and 7 are prime."
        assert q.id == "q1"

    def test_from_dict_when_short_answer_without_options_then_empty_tuple(self):
        q = Question.from_dict({"order": 1, "type": "short_answer", "questionText": "g?",
                                "correctAnswer": "9.81"})
        assert q.options == ()

    def test_to_dict_then_from_dict_preserves_question(self):
        q = Question(order=5, type=QuestionType.MCQ, question_text="x",
                     options=("a", "b"), correct_answer=("a",), explanation="e", id="abc")
        assert Question.from_dict(q.to_dict()) == q

    def test_to_dict_uses_stored_field_names(self):
        d = Question(order=1, type=QuestionType.SHORT_ANSWER, question_text="x",
                     correct_answer="y").to_dict()
        assert d == {"order": 1, "type": "short_answer", "questionText": "x", "correctAnswer": "y"}
