"""
Module: prediction.base

Purpose:
    Predictor interface and cleanup of raw prediction payloads returned
    by external backends (e.g. an LLM asked for JSON).

Key Classes:
    - Predictor: Abstract strategy turning questions into a report

Key Functions:
    - clean_text(): Strip OCR noise and fix punctuation spacing
    - report_from_payload(): Validate, clean and rank a raw payload

Dependencies:
    - core.schemas.validator: Payload shape checks
    - core.models.predictions: Report structures

Used By:
    - prediction.heuristic: Keyword-counting fallback
    - services.analysis: Runs the configured predictor
"""

from __future__ import annotations

import logging
import math
import re
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from predictwise.common.thresholds import PREDICTION_THRESHOLDS, PredictionThresholds
from predictwise.core.models.predictions import (
    DIFFICULTIES,
    SECTIONS,
    Prediction,
    PredictionReport,
)
from predictwise.core.models.questions import QuestionType
from predictwise.core.schemas.validator import validate_prediction_report

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "General Topic"
DEFAULT_RATIONALE = "Based on analysis of previous papers"
DEFAULT_DIFFICULTY = "Medium"
DEFAULT_SECTION = "B"

MIN_TOPIC_LENGTH = 3
MAX_TOPIC_LENGTH = 100

NOISE_RE = re.compile(r"""[^\w\s.?!,:;\-()'"/+=*%]""", re.ASCII)
WHITESPACE_RE = re.compile(r"\s+")
SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,?!;:])")
# Decimals like "3.14" keep their point
MISSING_SPACE_AFTER_PUNCT_RE = re.compile(r"([.,?!;:])(?=[^\s\d.,?!;:])")
WORD_RUN_RE = re.compile(r"[a-zA-Z]{5,}")
CAPITAL_START_RE = re.compile(r"^[A-Z]")


class Predictor(ABC):
    """
    Strategy that predicts exam questions from extracted ones.

    Implementations may call external services; they should still
    return a PredictionReport (possibly with ``error`` set) rather than
    raise for ordinary "nothing to predict" situations.
    """

    name: str = "predictor"

    @abstractmethod
    def predict(
        self,
        questions: Sequence[str],
        subject: str,
        exam_name: str = "",
    ) -> PredictionReport:
        """
        Predict likely questions for the next paper.

        Args:
            questions: Extracted questions, in source order.
            subject: Subject name, e.g. "Engineering Mathematics".
            exam_name: Optional exam label.

        Returns:
            Ranked PredictionReport.
        """


def clean_text(text: Any) -> str:
    """
    Remove OCR noise from free text and normalize punctuation spacing.

    Example:
        >>> clean_text("Explain  caching ,with examples.It matters")
        'Explain caching, with examples. It matters'
    """
    if not isinstance(text, str) or not text:
        return ""
    text = NOISE_RE.sub(" ", text)
    text = WHITESPACE_RE.sub(" ", text)
    text = SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    text = MISSING_SPACE_AFTER_PUNCT_RE.sub(r"\1 ", text)
    return text.strip()


def _clamp_probability(value: Any, thresholds: PredictionThresholds) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return thresholds.default_probability
    if math.isnan(value):
        return thresholds.default_probability
    return min(thresholds.max_probability, max(thresholds.min_probability, float(value)))


def _is_presentable(topic: str, question: str, thresholds: PredictionThresholds) -> bool:
    if not (MIN_TOPIC_LENGTH <= len(topic) <= MAX_TOPIC_LENGTH):
        return False
    if not (thresholds.min_question_length <= len(question) <= thresholds.max_question_length):
        return False
    if not CAPITAL_START_RE.match(topic):
        return False
    return bool(WORD_RUN_RE.search(question))


def report_from_payload(
    payload: Any,
    *,
    strict: bool = False,
    thresholds: PredictionThresholds = PREDICTION_THRESHOLDS,
) -> PredictionReport:
    """
    Build a PredictionReport from an untrusted backend payload.

    Each entry is cleaned and defaulted (difficulty "Medium", section "B",
    probability clamped to [0.3, 0.95] or 0.5 when missing). Entries with
    unusable topic or question text are dropped. Survivors are sorted by
    probability, highest first, and renumbered from 1.

    Args:
        payload: Parsed JSON object with a ``predictions`` list.
        strict: Also validate against the bundled JSON schema.
        thresholds: Probability and length bounds.

    Raises:
        ValidationError: If the payload structure is invalid.
    """
    validate_prediction_report(payload, strict=strict)

    cleaned: List[dict] = []
    for raw in payload["predictions"]:
        topic = clean_text(raw.get("topic")) or DEFAULT_TOPIC
        question = clean_text(raw.get("question"))
        if not _is_presentable(topic, question, thresholds):
            logger.debug(f"Dropped unusable prediction: topic={topic[:40]!r}")
            continue

        difficulty = raw.get("difficulty")
        section = raw.get("section")
        qtype = raw.get("type")
        cleaned.append({
            "topic": topic,
            "question": question,
            "difficulty": difficulty if difficulty in DIFFICULTIES else DEFAULT_DIFFICULTY,
            "probability": _clamp_probability(raw.get("probability"), thresholds),
            "type": qtype if isinstance(qtype, str) and qtype else QuestionType.LONG_ANSWER.value,
            "rationale": clean_text(raw.get("rationale")) or DEFAULT_RATIONALE,
            "section": section if section in SECTIONS else DEFAULT_SECTION,
        })

    cleaned.sort(key=lambda item: item["probability"], reverse=True)
    predictions = tuple(
        Prediction(id=index, **item) for index, item in enumerate(cleaned, start=1)
    )

    raw_summary = payload.get("summary")
    summary: tuple = ()
    if isinstance(raw_summary, list):
        summary = tuple(s for s in (clean_text(item) for item in raw_summary) if s)

    error: Optional[str] = payload.get("error") if isinstance(payload.get("error"), str) else None

    logger.info(f"Accepted {len(predictions)} of {len(payload['predictions'])} predictions")
    return PredictionReport(predictions=predictions, summary=summary, error=error)
