"""
Module: extractor.pipeline

Purpose:
    Main entry points for question extraction. Composes the normalizer,
    pattern matcher, validator and classifier into pure functions of the
    input text.

Key Functions:
    - extract_questions(): Ordered, deduplicated question strings
    - extract_questions_with_metadata(): Same questions as QuestionRecord

Dependencies:
    - extractor.normalizer: Text cleanup
    - extractor.patterns: Candidate stream
    - extractor.validation: Acceptance predicate
    - extractor.classification: Type and keyword annotation

Used By:
    - services.analysis: Per-file extraction
    - cli: ``predictwise extract``
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from predictwise.core.models.questions import QuestionRecord
from .classification import classify
from .config import DEFAULT_CONFIG, ExtractionConfig
from .diagnostics import ExtractionDiagnostics
from .normalizer import normalize
from .patterns import iter_candidates
from .validation import check_question

logger = logging.getLogger(__name__)


def extract_questions(
    text: Any,
    *,
    config: Optional[ExtractionConfig] = None,
    diagnostics: Optional[ExtractionDiagnostics] = None,
    source_name: str = "",
) -> List[str]:
    """
    Extract question strings from raw PDF/OCR text.

    Pipeline:
    1. Normalize the raw text
    2. Run the pattern battery and the line-scan fallback
    3. Drop duplicates (exact text) keeping first-seen order
    4. Drop candidates the validator rejects

    Args:
        text: Raw text for one uploaded file. Non-strings count as empty.
        config: Thresholds and switches. Defaults to ``ExtractionConfig()``.
        diagnostics: Optional collector for pattern and rejection stats.
        source_name: Label recorded in diagnostics (e.g. file name).

    Returns:
        Accepted questions, possibly empty. Never raises for any input.

    Example:
        >>> extract_questions("Q.1 What is the difference between a stack and a queue? [5 marks]")
        ['What is the difference between a stack and a queue?']
    """
    config = config or DEFAULT_CONFIG
    normalized = normalize(text, config.normalizer)
    if diagnostics is not None and source_name:
        diagnostics.add_source(source_name)
    if not normalized:
        return []

    seen: set[str] = set()
    accepted: List[str] = []
    for candidate in iter_candidates(
        normalized,
        use_line_scan=config.use_line_scan,
        thresholds=config.validation,
    ):
        if diagnostics is not None:
            diagnostics.add_match(candidate.source_pattern_id)

        if candidate.text in seen:
            if diagnostics is not None:
                diagnostics.add_duplicate()
            continue
        seen.add(candidate.text)

        reason = check_question(candidate.text, config.validation)
        if reason is not None:
            if diagnostics is not None:
                diagnostics.add_rejected(
                    candidate.text, candidate.source_pattern_id, reason, source_name
                )
            continue

        if diagnostics is not None:
            diagnostics.add_accepted(candidate.source_pattern_id)
        accepted.append(candidate.text)

    logger.debug(
        f"Extracted {len(accepted)} questions from {len(seen)} unique candidates"
        + (f" ({source_name})" if source_name else "")
    )
    return accepted


def extract_questions_with_metadata(
    text: Any,
    *,
    config: Optional[ExtractionConfig] = None,
    diagnostics: Optional[ExtractionDiagnostics] = None,
    source_name: str = "",
) -> List[QuestionRecord]:
    """
    Extract questions and annotate each with type and keywords.

    Runs ``extract_questions`` then the classifier, numbering records
    from 1 in output order.

    Returns:
        QuestionRecord list, possibly empty. Never raises for any input.
    """
    config = config or DEFAULT_CONFIG
    questions = extract_questions(
        text, config=config, diagnostics=diagnostics, source_name=source_name
    )

    records: List[QuestionRecord] = []
    for index, question in enumerate(questions, start=1):
        result = classify(question, config.classifier)
        records.append(
            QuestionRecord(
                id=index,
                text=question,
                estimated_type=result.estimated_type,
                keywords=result.keywords,
            )
        )
    return records
