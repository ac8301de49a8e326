"""
Module: extractor.classification

Purpose:
    Coarse question type estimation and keyword extraction for accepted
    questions. Rules are regex patterns evaluated in a fixed priority
    order; the first match wins.

Key Functions:
    - classify(): Type label plus keywords for one question
    - estimate_question_type(): Priority-ordered type rules
    - extract_keywords(): Stop-word filtered keywords in first-seen order

Dependencies:
    - re (std)
    - predictwise.core.models.questions: QuestionType

Used By:
    - extractor.pipeline: Annotates QuestionRecord
    - prediction.heuristic: Type guesses for fallback predictions
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

from predictwise.common.thresholds import CLASSIFIER_THRESHOLDS, ClassifierThresholds
from predictwise.core.models.questions import QuestionType

_NUMERICAL_KW = r"\b(?:calculate|find|solve|compute|determine|evaluate)\w*"

# First matching rule wins
TYPE_RULES: Tuple[Tuple[QuestionType, re.Pattern], ...] = (
    # Numerical lead word followed by a number within five words
    (QuestionType.NUMERICAL, re.compile(rf"{_NUMERICAL_KW}(?:\s+[^\s\d.?!]+){{0,5}}\s+[^\s\d.?!]*\d")),
    (QuestionType.SHORT_ANSWER, re.compile(r"\bdefine|\bwhat\s+is\b|\bmeaning\s+of\b")),
    (QuestionType.LONG_ANSWER, re.compile(r"\b(?:explain|describe|discuss|elaborate|analy[sz]e)")),
    (QuestionType.COMPARISON, re.compile(r"\b(?:compare|differentiate|distinguish)|\bdifferences?\s+between\b")),
    (QuestionType.LIST, re.compile(r"\b(?:list|enumerate|name|mention)")),
    (QuestionType.DERIVATION, re.compile(r"\b(?:derive|prove|show\s+that)")),
    (QuestionType.DIAGRAM, re.compile(r"\b(?:draw|sketch|diagram)")),
)

DEFAULT_TYPE = QuestionType.LONG_ANSWER

STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "an", "the", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "need", "dare",
    "ought", "used", "to", "of", "in", "for", "on", "with", "at", "by",
    "from", "as", "into", "through", "during", "before", "after", "above",
    "below", "between", "under", "again", "further", "then", "once", "and",
    "but", "or", "nor", "so", "yet", "both", "either", "neither", "not",
    "only", "own", "same", "than", "too", "very", "just", "also",
})

NON_WORD_RE = re.compile(r"[^\w\s]")


@dataclass(frozen=True)
class Classification:
    """Classifier output for one question."""
    estimated_type: QuestionType
    keywords: Tuple[str, ...]


def estimate_question_type(question: str) -> QuestionType:
    """
    Estimate the question type from its wording.

    Example:
        >>> estimate_question_type("What is the difference between a stack and a queue?")
        <QuestionType.SHORT_ANSWER: 'Short Answer'>
    """
    lower = question.lower()
    for question_type, rule in TYPE_RULES:
        if rule.search(lower):
            return question_type
    return DEFAULT_TYPE


def extract_keywords(
    question: str,
    thresholds: ClassifierThresholds = CLASSIFIER_THRESHOLDS,
) -> List[str]:
    """
    Extract unique lowercase keywords in order of first occurrence.

    Punctuation is removed, short tokens and stop words are dropped, and
    the result is capped at ``thresholds.max_keywords``.

    Example:
        >>> extract_keywords("Explain the working of a stack, with a diagram.")
        ['explain', 'working', 'stack', 'diagram']
    """
    words = NON_WORD_RE.sub("", question.lower()).split()
    keywords = dict.fromkeys(
        w for w in words
        if len(w) >= thresholds.min_keyword_length and w not in STOP_WORDS
    )
    return list(keywords)[: thresholds.max_keywords]


def classify(
    question: str,
    thresholds: ClassifierThresholds = CLASSIFIER_THRESHOLDS,
) -> Classification:
    """Classify a question and extract its keywords."""
    return Classification(
        estimated_type=estimate_question_type(question),
        keywords=tuple(extract_keywords(question, thresholds)),
    )
