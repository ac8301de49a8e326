"""
Module: services.analysis

Purpose:
    Analysis orchestration for a batch of uploaded exam papers: text
    extraction per file, question extraction, prediction and caching.

Key Classes:
    - UploadedFile: Name and raw bytes of one upload
    - AnalysisResult: Report plus the questions it was built from
    - AnalysisService: Runs the full analysis with a pluggable predictor

Dependencies:
    - extractor: Question extraction
    - extractor.utils.pdf: PDF text layer (PyMuPDF)
    - prediction: Predictor strategies
    - services.cache: Result store and keys

Used By:
    - cli: ``predictwise predict``
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from predictwise.core.models.predictions import PredictionReport
from predictwise.extractor.config import ExtractionConfig
from predictwise.extractor.diagnostics import ExtractionDiagnostics
from predictwise.extractor.pipeline import extract_questions
from predictwise.extractor.utils.pdf import PdfExtractionError, extract_pdf_text
from predictwise.prediction.base import Predictor
from .cache import ANONYMOUS_USER, AnalysisStore, InMemoryStore, generate_cache_key

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class UploadedFile:
    """One uploaded document."""
    name: str
    data: bytes

    @property
    def is_pdf(self) -> bool:
        return self.name.lower().endswith(".pdf")

    @classmethod
    def from_path(cls, path: Path) -> UploadedFile:
        path = Path(path)
        return cls(name=path.name, data=path.read_bytes())


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of one analysis request.

    Attributes:
        report: Predictor output.
        questions: Questions extracted across all files, deduplicated.
        warnings: Per-file problems (unreadable or scanned PDFs).
        failed_files: Names of files that could not be read at all.
        cache_key: Key the result is stored under.
        cached: True when served from the store.
    """
    report: PredictionReport
    questions: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    failed_files: Tuple[str, ...] = ()
    cache_key: str = ""
    cached: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d = self.report.to_dict()
        d["questions"] = list(self.questions)
        d["warnings"] = list(self.warnings)
        d["failed_files"] = list(self.failed_files)
        d["cached"] = self.cached
        return d


@dataclass
class _FileText:
    name: str
    text: str = ""
    warnings: List[str] = field(default_factory=list)
    failed: bool = False


class AnalysisService:
    """
    Analyze uploaded exam papers and predict likely questions.

    Files are read concurrently; questions are merged in upload order
    with duplicates across files removed. Successful reports are cached
    per user, subject and exam.

    Example:
        >>> service = AnalysisService(HeuristicPredictor())
        >>> result = service.analyze([UploadedFile.from_path(p)], "Operating Systems")
        >>> result.report.predictions[0].topic
        'Deadlock'
    """

    def __init__(
        self,
        predictor: Predictor,
        store: Optional[AnalysisStore] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        config: Optional[ExtractionConfig] = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.predictor = predictor
        self.store = store if store is not None else InMemoryStore()
        self.max_workers = max_workers
        self.config = config

    def analyze(
        self,
        files: Sequence[UploadedFile],
        subject: str,
        exam_name: str = "",
        user_id: str = ANONYMOUS_USER,
        *,
        diagnostics: Optional[ExtractionDiagnostics] = None,
    ) -> AnalysisResult:
        """
        Run extraction and prediction for a batch of files.

        Args:
            files: Uploaded documents; ``.pdf`` names are parsed as PDF,
                anything else is decoded as UTF-8 text.
            subject: Subject name passed to the predictor.
            exam_name: Optional exam label.
            user_id: Owner of the cached result.
            diagnostics: Optional collector shared across files.

        Returns:
            AnalysisResult. Unreadable files become warnings rather than
            errors; if nothing could be extracted the report carries an
            ``error`` message.
        """
        key = generate_cache_key((f.data for f in files), subject, exam_name, user_id)
        cached = self.store.get(key)
        if cached is not None:
            logger.info(f"Serving cached analysis for {user_id}")
            return AnalysisResult(
                report=cached.report,
                questions=cached.questions,
                warnings=cached.warnings,
                failed_files=cached.failed_files,
                cache_key=key,
                cached=True,
            )

        texts = self._read_files(files)
        questions: List[str] = []
        seen: set[str] = set()
        warnings: List[str] = []
        failed: List[str] = []
        for item in texts:
            warnings.extend(item.warnings)
            if item.failed:
                failed.append(item.name)
                continue
            for question in extract_questions(
                item.text, config=self.config, diagnostics=diagnostics, source_name=item.name
            ):
                if question not in seen:
                    seen.add(question)
                    questions.append(question)

        logger.info(f"Extracted {len(questions)} questions from {len(files)} files")
        report = self.predictor.predict(questions, subject, exam_name)
        result = AnalysisResult(
            report=report,
            questions=tuple(questions),
            warnings=tuple(warnings),
            failed_files=tuple(failed),
            cache_key=key,
        )
        if report.error is None and not failed:
            self.store.set(key, result)
        return result

    def _read_files(self, files: Sequence[UploadedFile]) -> List[_FileText]:
        if len(files) <= 1:
            return [self._read_file(f) for f in files]

        workers = min(self.max_workers, len(files))
        logger.debug(f"Reading {len(files)} files with {workers} threads")
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # Keep upload order
            return list(pool.map(self._read_file, files))

    @staticmethod
    def _read_file(upload: UploadedFile) -> _FileText:
        if not upload.is_pdf:
            return _FileText(upload.name, upload.data.decode("utf-8", errors="replace"))

        try:
            pdf = extract_pdf_text(upload.data)
        except PdfExtractionError as e:
            logger.warning(f"{upload.name}: {e}")
            return _FileText(upload.name, warnings=[f"{upload.name}: {e}"], failed=True)

        result = _FileText(upload.name, pdf.text)
        if pdf.is_likely_scanned:
            result.warnings.append(
                f"{upload.name}: little extractable text, the PDF may be scanned"
            )
        return result
