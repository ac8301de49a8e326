"""Centralized threshold and magic number configuration.

This module contains the numeric heuristics used by the question
extraction pipeline. Having these in one place makes tuning easier and
documents what each value controls.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizerThresholds:
    """Thresholds for raw text normalization."""

    short_line_length: int = 10  # Lines shorter than this survive the symbol filter
    symbol_to_letter_ratio: int = 2  # Drop line when symbols > ratio * letters
    max_passes: int = 5  # Normalization is repeated until it reaches a fixed point


@dataclass(frozen=True)
class ValidationThresholds:
    """Thresholds for accepting a candidate as a real exam question."""

    min_length: int = 20
    max_length: int = 500
    min_letter_run: int = 4  # Longest run of consecutive letters must reach this
    # Rejects terse fragments such as "Define entropy." on purpose.
    # Lower it to trade precision for recall.
    min_word_count: int = 5
    min_alpha_ratio: float = 0.5
    line_scan_min_length: int = 15  # Shorter lines never look like questions


@dataclass(frozen=True)
class ClassifierThresholds:
    """Thresholds for question classification."""

    max_keywords: int = 10
    min_keyword_length: int = 3


@dataclass(frozen=True)
class PredictionThresholds:
    """Thresholds for predictor output."""

    max_predictions: int = 10
    max_source_questions: int = 15
    max_topics: int = 15
    summary_topics: int = 5
    base_probability: float = 0.85
    probability_step: float = 0.05
    min_probability: float = 0.3
    max_probability: float = 0.95
    default_probability: float = 0.5
    min_question_length: int = 20
    max_question_length: int = 500


# Global instances for easy import
NORMALIZER_THRESHOLDS = NormalizerThresholds()
VALIDATION_THRESHOLDS = ValidationThresholds()
CLASSIFIER_THRESHOLDS = ClassifierThresholds()
PREDICTION_THRESHOLDS = PredictionThresholds()
