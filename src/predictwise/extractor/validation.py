"""
Module: extractor.validation

Purpose:
    Content-quality predicate deciding whether a cleaned candidate is a
    genuine exam question. Rejection is the routine outcome for OCR noise
    and is never an error.

Key Functions:
    - check_question(): First failed check as a short reason, or None
    - is_valid(): Boolean acceptance predicate

Dependencies:
    - re (std)
    - predictwise.common.thresholds: Length, word and ratio thresholds

Used By:
    - extractor.pipeline: Filters the candidate stream
    - extractor.diagnostics: Records rejection reasons
"""

from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from predictwise.common.thresholds import VALIDATION_THRESHOLDS, ValidationThresholds

# Administrative lead-ins that are never questions
FILTER_PREFIXES: Tuple[str, ...] = (
    "note:", "hint:", "given:", "assume:", "figure", "diagram",
    "marks", "time:", "instructions", "attempt", "compulsory",
    "section", "part", "unit", "module", "chapter",
)

# Plain prefix match: "Partial ..." and "Units ..." are filtered too
FILTER_PREFIX_RE = re.compile(
    "^(?:" + "|".join(re.escape(p) for p in FILTER_PREFIXES) + ")",
    re.IGNORECASE,
)

NUMERIC_ONLY_RE = re.compile(r"^[\d\s.,\-+=()]+$")
GARBAGE_OPENER_RE = re.compile(r"^[a-zA-Z]\s*\.\s*[a-zA-Z]{1,3}\s*\.\s*\d", re.IGNORECASE)
CAPS_GARBAGE_RE = re.compile(r"[A-Z]\s+[A-Z0-9]{1,2}\s+[A-Z]\s+[A-Z]{2,3}\s+[A-Z]")
LETTER_RE = re.compile(r"[A-Za-z]")


def check_question(
    text: Any,
    thresholds: ValidationThresholds = VALIDATION_THRESHOLDS,
) -> Optional[str]:
    """
    Run every acceptance check and report the first failure.

    Args:
        text: Candidate question text.
        thresholds: Tunable acceptance thresholds.

    Returns:
        None when the candidate is accepted, otherwise a short reason
        such as ``"too_short"`` or ``"low_alpha_ratio"``.
    """
    if not isinstance(text, str):
        return "not_text"

    trimmed = text.strip()
    length = len(trimmed)
    if length < thresholds.min_length:
        return "too_short"
    if length > thresholds.max_length:
        return "too_long"

    if not LETTER_RE.match(trimmed):
        return "bad_first_char"

    if not re.search(rf"[a-zA-Z]{{{thresholds.min_letter_run},}}", trimmed):
        return "no_letter_run"

    if len(trimmed.split()) < thresholds.min_word_count:
        return "too_few_words"

    if FILTER_PREFIX_RE.match(trimmed):
        return "administrative"

    if NUMERIC_ONLY_RE.match(trimmed):
        return "numeric_only"

    if GARBAGE_OPENER_RE.match(trimmed) or CAPS_GARBAGE_RE.search(trimmed):
        return "ocr_garbage"

    letters = len(LETTER_RE.findall(trimmed))
    if letters / length < thresholds.min_alpha_ratio:
        return "low_alpha_ratio"

    return None


def is_valid(
    text: Any,
    thresholds: ValidationThresholds = VALIDATION_THRESHOLDS,
) -> bool:
    """
    Check whether a candidate is a genuine exam question.

    Example:
        >>> is_valid("Explain the working of a two stroke petrol engine.")
        True
        >>> is_valid("Define entropy.")
        False
    """
    return check_question(text, thresholds) is None
