"""
Core Models Package

Immutable, validated data models shared by the extractor, the
predictors and the analysis service.

All models in this package are frozen dataclasses.
"""

from .questions import QuestionCandidate, QuestionRecord, QuestionType
from .predictions import Prediction, PredictionReport

__all__ = [
    "QuestionCandidate",
    "QuestionRecord",
    "QuestionType",
    "Prediction",
    "PredictionReport",
]
