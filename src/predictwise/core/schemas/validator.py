"""
Schema Validation Utilities

Validates serialized question records and prediction payloads.

Basic checks run on every call and fail fast with a precise path.
Strict mode additionally runs the bundled JSON Schema through
``jsonschema``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..models.questions import QuestionType


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}

_QUESTION_TYPES = {t.value for t in QuestionType}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _run_schema(data: dict[str, Any], schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        )


def validate_question_record(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a serialized QuestionRecord.

    Args:
        data: Record dictionary to validate
        strict: If True, also validate against the JSON schema

    Raises:
        ValidationError: If data is invalid
    """
    required = ["id", "text", "estimated_type", "keywords"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    record_id = data["id"]
    if not isinstance(record_id, int) or record_id < 1:
        raise ValidationError(f"Invalid id: {record_id!r} (must be >= 1)", path="id")

    text = data["text"]
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("text must be a non-empty string", path="text")

    if data["estimated_type"] not in _QUESTION_TYPES:
        raise ValidationError(
            f"Invalid estimated_type: {data['estimated_type']!r}",
            path="estimated_type",
        )

    keywords = data["keywords"]
    if not isinstance(keywords, list):
        raise ValidationError("keywords must be a list", path="keywords")
    if len(keywords) > 10:
        raise ValidationError(
            f"Too many keywords: {len(keywords)} (max 10)", path="keywords"
        )
    if len(set(keywords)) != len(keywords):
        raise ValidationError("keywords must be unique", path="keywords")

    if strict:
        _run_schema(data, "question_record")


def validate_prediction_report(data: Any, *, strict: bool = False) -> None:
    """
    Validate a raw prediction payload before it is cleaned.

    Only the shape is checked here; field values are cleaned and clamped
    by ``prediction.base.report_from_payload``.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Prediction payload must be an object", path="")

    predictions = data.get("predictions")
    if not isinstance(predictions, list):
        raise ValidationError(
            "Invalid response structure: predictions must be a list",
            path="predictions",
        )
    for i, item in enumerate(predictions):
        if not isinstance(item, dict):
            raise ValidationError(
                "Prediction must be an object", path=f"predictions[{i}]"
            )

    if strict:
        _run_schema(data, "prediction_report")
