"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .thresholds import (
    CLASSIFIER_THRESHOLDS,
    NORMALIZER_THRESHOLDS,
    PREDICTION_THRESHOLDS,
    VALIDATION_THRESHOLDS,
    ClassifierThresholds,
    NormalizerThresholds,
    PredictionThresholds,
    ValidationThresholds,
)

__all__ = [
    "ClassifierThresholds",
    "NormalizerThresholds",
    "PredictionThresholds",
    "ValidationThresholds",
    "CLASSIFIER_THRESHOLDS",
    "NORMALIZER_THRESHOLDS",
    "PREDICTION_THRESHOLDS",
    "VALIDATION_THRESHOLDS",
]
