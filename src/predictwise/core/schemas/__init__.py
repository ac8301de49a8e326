"""
Schema Validation Package

JSON schemas and validation helpers for serialized records.
"""

from .validator import (
    ValidationError,
    validate_prediction_report,
    validate_question_record,
)

__all__ = [
    "ValidationError",
    "validate_prediction_report",
    "validate_question_record",
]
