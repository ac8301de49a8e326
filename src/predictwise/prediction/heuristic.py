"""
Module: prediction.heuristic

Purpose:
    Offline predictor used when no model-backed predictor is available.
    Ranks the extracted questions themselves as predictions and pads the
    paper with concept questions for frequently mentioned topics.

Key Classes:
    - HeuristicPredictor: Keyword-counting Predictor implementation

Key Functions:
    - count_topics(): Frequency of known topics across questions
    - extract_topic(): Best-effort topic name for one question
    - guess_difficulty(): Easy/Medium/Hard from wording and length

Dependencies:
    - extractor.classification: Question type estimate

Used By:
    - services.analysis: Default predictor
    - cli: ``predictwise predict``
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence

from predictwise.common.thresholds import PREDICTION_THRESHOLDS, PredictionThresholds
from predictwise.core.models.predictions import Prediction, PredictionReport
from predictwise.core.models.questions import QuestionType
from predictwise.extractor.classification import estimate_question_type
from .base import Predictor

logger = logging.getLogger(__name__)

NO_QUESTIONS_ERROR = "No questions extracted from files"

# Common CS/engineering/science topics, matched case-insensitively
TOPIC_KEYWORDS = (
    "algorithm", "data structure", "tree", "graph", "sorting", "searching",
    "array", "linked list", "stack", "queue", "hash", "heap", "binary",
    "complexity", "recursion", "dynamic programming", "greedy", "backtracking",
    "database", "sql", "normalization", "transaction", "query", "index",
    "operating system", "process", "thread", "memory", "scheduling", "deadlock",
    "network", "protocol", "tcp", "ip", "routing", "osi", "http",
    "compiler", "parsing", "lexical", "syntax", "semantic",
    "oop", "inheritance", "polymorphism", "encapsulation", "abstraction",
    "pointer", "function", "class", "object", "method", "variable",
    "loop", "condition", "exception", "error", "debug",
    "file", "input", "output", "stream", "buffer",
    "security", "encryption", "authentication", "authorization",
    "web", "api", "rest", "json", "xml", "html", "css",
    "machine learning", "neural network", "classification", "regression",
    "physics", "chemistry", "mathematics", "calculus", "algebra",
    "mechanics", "thermodynamics", "electromagnetism", "optics", "waves",
)

_TOPIC_RES = tuple(
    (kw, re.compile(rf"\b{re.escape(kw)}(?:s|es)?\b", re.IGNORECASE))
    for kw in TOPIC_KEYWORDS
)

TOPIC_PATTERNS = (
    re.compile(
        r"(?:explain|describe|discuss|what is|define)\s+(?:the\s+)?(?:concept of\s+)?([a-z\s]+?)(?:\.|,|\?|$)",
        re.IGNORECASE,
    ),
    re.compile(r"(?:write|give)\s+(?:a\s+)?(?:short\s+)?note on\s+([a-z\s]+?)(?:\.|,|\?|$)", re.IGNORECASE),
    re.compile(r"([a-z\s]+?)\s+(?:algorithm|method|technique|approach)", re.IGNORECASE),
)
MAX_TOPIC_LENGTH = 50
FALLBACK_TOPIC_WORDS = 6

HARD_MARKERS = ("derive", "prove", "analyze", "compare and contrast", "design")
EASY_MARKERS = ("define", "list", "name", "what is")
EASY_MAX_LENGTH = 50

LEADING_NUMBER_RE = re.compile(r"^\d+[.)]\s*")
WHITESPACE_RE = re.compile(r"\s+")


def capitalize_words(text: str) -> str:
    """Title-case each space-separated word ("linked list" -> "Linked List")."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def count_topics(
    questions: Sequence[str],
    limit: int = PREDICTION_THRESHOLDS.max_topics,
) -> Dict[str, int]:
    """
    Count questions mentioning each known topic.

    Returns:
        Topic -> count, most frequent first. Ties keep first-seen order.
    """
    counts: Dict[str, int] = {}
    for question in questions:
        for kw, pattern in _TOPIC_RES:
            if pattern.search(question):
                counts[kw] = counts.get(kw, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return dict(ranked[:limit])


def extract_topic(question: str) -> str:
    """
    Derive a topic name from a question.

    Tries "explain/define X", "note on X" and "X algorithm/method"
    phrasings, then falls back to the first six words.

    Example:
        >>> extract_topic("Explain the concept of virtual memory.")
        'Virtual Memory'
    """
    for pattern in TOPIC_PATTERNS:
        match = pattern.search(question)
        if match:
            candidate = match.group(1).strip()
            if 3 < len(candidate) < MAX_TOPIC_LENGTH:
                return capitalize_words(WHITESPACE_RE.sub(" ", candidate))

    words = " ".join(question.split()[:FALLBACK_TOPIC_WORDS])
    if len(words) > MAX_TOPIC_LENGTH:
        return words[:MAX_TOPIC_LENGTH] + "..."
    return words


def guess_difficulty(question: str) -> str:
    lower = question.lower()
    if any(marker in lower for marker in HARD_MARKERS):
        return "Hard"
    if any(marker in lower for marker in EASY_MARKERS) or len(question) < EASY_MAX_LENGTH:
        return "Easy"
    return "Medium"


def _section_for_rank(rank: int) -> str:
    if rank < 3:
        return "A"
    if rank < 7:
        return "B"
    return "C"


class HeuristicPredictor(Predictor):
    """
    Predict questions by recycling and ranking the extracted ones.

    The first unique questions (up to 15) become predictions, one per
    topic, with probability starting at 0.85 and falling 0.05 per rank.
    Remaining slots are filled with concept questions for frequent
    topics not yet covered.

    Example:
        >>> predictor = HeuristicPredictor()
        >>> report = predictor.predict(questions, "Data Structures")
        >>> report.predictions[0].probability
        0.85
    """

    name = "heuristic"

    def __init__(self, thresholds: Optional[PredictionThresholds] = None) -> None:
        self.thresholds = thresholds or PREDICTION_THRESHOLDS

    def predict(
        self,
        questions: Sequence[str],
        subject: str,
        exam_name: str = "",
    ) -> PredictionReport:
        t = self.thresholds
        unique = list(dict.fromkeys(q for q in questions if isinstance(q, str) and q.strip()))
        if not unique:
            logger.warning(f"No questions to analyze for {subject!r}")
            return PredictionReport(error=NO_QUESTIONS_ERROR)

        logger.info(f"Generating heuristic predictions for {subject!r} from {len(unique)} questions")
        topic_counts = count_topics(unique, t.max_topics)
        predictions: List[Prediction] = []

        for question in unique[:t.max_source_questions]:
            if len(predictions) >= t.max_predictions:
                break
            topic = extract_topic(question)
            if any(p.topic.lower() == topic.lower() for p in predictions):
                continue

            rank = len(predictions)
            predictions.append(Prediction(
                id=rank + 1,
                topic=topic,
                question=WHITESPACE_RE.sub(" ", LEADING_NUMBER_RE.sub("", question)).strip(),
                difficulty=guess_difficulty(question),
                probability=round(t.base_probability - rank * t.probability_step, 2),
                type=estimate_question_type(question).value,
                rationale="This question or similar variations appeared in the analyzed papers",
                section=_section_for_rank(rank),
            ))

        for topic, count in topic_counts.items():
            if len(predictions) >= t.max_predictions:
                break
            if any(topic in p.topic.lower() for p in predictions):
                continue

            predictions.append(Prediction(
                id=len(predictions) + 1,
                topic=capitalize_words(topic),
                question=f"Explain the concept of {topic} with suitable examples and applications.",
                difficulty="Medium",
                probability=round(min(0.8, 0.4 + count * 0.1), 2),
                type=QuestionType.LONG_ANSWER.value,
                rationale=f'Topic "{topic}" appeared {count} times in the analyzed papers',
                section="B",
            ))

        summary = tuple(capitalize_words(topic) for topic in list(topic_counts)[:t.summary_topics])
        return PredictionReport(predictions=tuple(predictions), summary=summary)
