"""
Module: questions

Purpose:
    Provides the question data structures passed out of the extraction
    pipeline. QuestionCandidate is the transient per-match value produced
    by the pattern matcher; QuestionRecord is the final, immutable output
    unit handed to downstream consumers.

Key Classes:
    - QuestionType: Coarse question type label
    - QuestionCandidate: A cleaned match plus the pattern that produced it
    - QuestionRecord: Accepted question with derived metadata

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - extractor.patterns: Produces QuestionCandidate
    - extractor.pipeline: Produces QuestionRecord
    - core.schemas.validator: Validates QuestionRecord dicts
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


class QuestionType(str, Enum):
    """Coarse type label assigned by the classifier."""
    NUMERICAL = "Numerical"
    SHORT_ANSWER = "Short Answer"
    LONG_ANSWER = "Long Answer"
    COMPARISON = "Comparison"
    LIST = "List"
    DERIVATION = "Derivation"
    DIAGRAM = "Diagram"


@dataclass(frozen=True)
class QuestionCandidate:
    """
    Cleaned question candidate produced by one pattern match.

    Candidates are compared on ``text`` only when deduplicating; the
    pattern id is kept for diagnostics.

    Attributes:
        text: Match text after question cleaning.
        source_pattern_id: Identifier of the pattern (or ``line_scan``).
    """
    text: str
    source_pattern_id: str


@dataclass(frozen=True)
class QuestionRecord:
    """
    Accepted question with classifier metadata (immutable).

    Attributes:
        id: 1-based position in the extracted sequence.
        text: Cleaned question text.
        estimated_type: Type label from the classifier.
        keywords: Up to 10 unique lowercase keywords in first-seen order.

    Invariants:
        - id >= 1
        - text is non-empty
        - keywords contain no duplicates

    Example:
        >>> r = QuestionRecord(1, "What is a stack data structure used for?",
        ...                    QuestionType.SHORT_ANSWER, ("stack", "data"))
        >>> r.word_count
        8
        >>> r.has_question_mark
        True
    """

    id: int
    text: str
    estimated_type: QuestionType
    keywords: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate record on construction."""
        if self.id < 1:
            raise ValueError(f"id must be >= 1: {self.id}")
        if not self.text or not self.text.strip():
            raise ValueError("text must be non-empty")
        if len(set(self.keywords)) != len(self.keywords):
            raise ValueError(f"keywords must be unique: {self.keywords!r}")

    @property
    def has_question_mark(self) -> bool:
        return "?" in self.text

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to dictionary for JSON output.

        Derived fields are included so consumers do not need to
        recompute them.
        """
        return {
            "id": self.id,
            "text": self.text,
            "has_question_mark": self.has_question_mark,
            "word_count": self.word_count,
            "estimated_type": self.estimated_type.value,
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuestionRecord:
        """Deserialize from dictionary. Derived fields are ignored."""
        return cls(
            id=data["id"],
            text=data["text"],
            estimated_type=QuestionType(data["estimated_type"]),
            keywords=tuple(data.get("keywords", [])),
        )
