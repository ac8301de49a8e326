"""
Module: predictions

Purpose:
    Provides the predicted exam paper structures returned by a predictor
    strategy. These are the only hard contract between the extraction
    core's consumers and any prediction backend.

Key Classes:
    - Prediction: One predicted exam question with metadata
    - PredictionReport: Ordered predictions plus topic summary

Dependencies:
    - dataclasses (std)

Used By:
    - prediction.base: Predictor interface and payload cleaning
    - prediction.heuristic: Keyword-counting fallback predictor
    - services.analysis: Cached per-request reports
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Tuple

Difficulty = Literal["Easy", "Medium", "Hard"]
Section = Literal["A", "B", "C"]

DIFFICULTIES: Tuple[str, ...] = ("Easy", "Medium", "Hard")
SECTIONS: Tuple[str, ...] = ("A", "B", "C")


@dataclass(frozen=True)
class Prediction:
    """
    Single predicted exam question.

    Attributes:
        id: 1-based rank in the report.
        topic: Capitalized topic name, e.g. "Laplace Transform".
        question: Question text.
        difficulty: "Easy", "Medium" or "Hard".
        probability: Likelihood estimate in [0, 1].
        type: Free-form type label, usually a QuestionType value.
        rationale: Why the question is expected.
        section: Paper section "A", "B" or "C".
    """
    id: int
    topic: str
    question: str
    difficulty: Difficulty
    probability: float
    type: str
    rationale: str
    section: Section

    def __post_init__(self) -> None:
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(f"Invalid difficulty: {self.difficulty!r}")
        if self.section not in SECTIONS:
            raise ValueError(f"Invalid section: {self.section!r}")
        if not (0.0 <= self.probability <= 1.0):
            raise ValueError(f"probability must be within [0, 1]: {self.probability}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "topic": self.topic,
            "question": self.question,
            "difficulty": self.difficulty,
            "probability": self.probability,
            "type": self.type,
            "rationale": self.rationale,
            "section": self.section,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Prediction:
        return cls(
            id=data["id"],
            topic=data["topic"],
            question=data["question"],
            difficulty=data["difficulty"],
            probability=float(data["probability"]),
            type=data["type"],
            rationale=data["rationale"],
            section=data["section"],
        )


@dataclass(frozen=True)
class PredictionReport:
    """
    Predicted exam paper.

    Attributes:
        predictions: Predictions ordered by rank.
        summary: Most frequent topics, most frequent first.
        error: Set when no prediction could be made.
    """
    predictions: Tuple[Prediction, ...] = ()
    summary: Tuple[str, ...] = ()
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "predictions": [p.to_dict() for p in self.predictions],
            "summary": list(self.summary),
        }
        if self.error:
            d["error"] = self.error
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PredictionReport:
        return cls(
            predictions=tuple(Prediction.from_dict(p) for p in data.get("predictions", [])),
            summary=tuple(data.get("summary", [])),
            error=data.get("error"),
        )
