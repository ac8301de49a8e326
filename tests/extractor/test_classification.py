"""
Tests for extractor.classification module.
"""

import pytest

from predictwise.common.thresholds import ClassifierThresholds
from predictwise.core.models.questions import QuestionType
from predictwise.extractor.classification import (
    classify,
    estimate_question_type,
    extract_keywords,
)


class TestEstimateQuestionType:
    """Tests for the priority-ordered type rules."""

    @pytest.mark.parametrize("question,expected", [
        ("Calculate the resistance of a 10 ohm wire.", QuestionType.NUMERICAL),
        ("Find 3 solutions of the given equation.", QuestionType.NUMERICAL),
        ("Define the term entropy in thermodynamics.", QuestionType.SHORT_ANSWER),
        ("Find the meaning of inertia in mechanics.", QuestionType.SHORT_ANSWER),
        ("Explain the working of a transformer.", QuestionType.LONG_ANSWER),
        ("Compare paging and segmentation techniques.", QuestionType.COMPARISON),
        ("Differences between TCP and UDP protocols.", QuestionType.COMPARISON),
        ("List the advantages of optical fibre.", QuestionType.LIST),
        ("Derive the equation of motion for a pendulum.", QuestionType.DERIVATION),
        ("Show that the sum of the angles is constant.", QuestionType.DERIVATION),
        ("Draw the circuit of a full adder.", QuestionType.DIAGRAM),
        ("Write short notes on caching.", QuestionType.LONG_ANSWER),
    ])
    def test_estimate_when_wording_matches_rule_then_type(self, question, expected):
        assert estimate_question_type(question) == expected

    def test_estimate_when_number_in_other_sentence_then_not_numerical(self):
        """A numerical lead word needs a number in the same sentence."""
        question = "Find the root cause of congestion. Give 2 remedies."

        assert estimate_question_type(question) != QuestionType.NUMERICAL

    @pytest.mark.parametrize("question", [
        "Explain the 3 laws and find their use.",
        "Find the total energy stored in the whole system of 3 capacitors.",
    ])
    def test_estimate_when_number_not_near_lead_word_then_not_numerical(self, question):
        """The number must follow the lead word within five words."""
        assert estimate_question_type(question) != QuestionType.NUMERICAL

    def test_estimate_when_number_five_words_after_lead_word_then_numerical(self):
        question = "Find the current through the 4 ohm resistor."

        assert estimate_question_type(question) == QuestionType.NUMERICAL

    def test_estimate_when_short_and_comparison_both_match_then_short_answer_wins(self):
        """'What is' precedes 'difference between' in the rule order."""
        question = "What is the difference between a stack and a queue?"

        assert estimate_question_type(question) == QuestionType.SHORT_ANSWER


class TestExtractKeywords:
    """Tests for extract_keywords() function."""

    def test_extract_keywords_when_sentence_then_stop_words_removed(self):
        result = extract_keywords("Explain the working of a stack, with a diagram.")

        assert result == ["explain", "working", "stack", "diagram"]

    def test_extract_keywords_when_repeated_words_then_unique_first_seen(self):
        result = extract_keywords("Stack and queue: compare stack with queue.")

        assert result == ["stack", "queue", "compare"]

    def test_extract_keywords_when_many_words_then_capped_at_ten(self):
        # Arrange
        question = (
            "Explain compilers interpreters assemblers linkers loaders editors "
            "debuggers profilers tracers emulators simulators"
        )

        # Act
        result = extract_keywords(question)

        # Assert
        assert len(result) == 10
        assert result[0] == "explain"

    def test_extract_keywords_when_threshold_changed_then_cap_follows(self):
        thresholds = ClassifierThresholds(max_keywords=2, min_keyword_length=3)

        result = extract_keywords("Explain virtual memory and paging", thresholds)

        assert result == ["explain", "virtual"]

    def test_extract_keywords_when_short_tokens_then_dropped(self):
        result = extract_keywords("Is an OS a VM or an API?")

        assert result == ["api"]


class TestClassify:
    """Tests for classify() function."""

    def test_classify_when_question_then_type_and_keyword_tuple(self):
        result = classify("What is the difference between a stack and a queue?")

        assert result.estimated_type == QuestionType.SHORT_ANSWER
        assert result.keywords == ("what", "difference", "stack", "queue")
