"""
Module: extractor

Purpose:
    Question extraction pipeline for noisy PDF/OCR text. Normalizes raw
    text, matches question patterns, validates candidates and classifies
    the survivors.

Key Functions:
    - extract_questions(): Main entry point, returns question strings
    - extract_questions_with_metadata(): Returns QuestionRecord objects

Key Classes:
    - ExtractionConfig: Thresholds and switches for one run
    - ExtractionDiagnostics: Optional per-run statistics collector

Used By:
    - predictwise.services.analysis: Per-file extraction
    - predictwise.cli: Command-line extraction
"""

from .config import ExtractionConfig
from .diagnostics import ExtractionDiagnostics
from .pipeline import extract_questions, extract_questions_with_metadata

__all__ = [
    "extract_questions",
    "extract_questions_with_metadata",
    "ExtractionConfig",
    "ExtractionDiagnostics",
]
