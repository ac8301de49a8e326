"""
Command-line entry point.

Usage:
    predictwise extract paper1.pdf notes.txt --metadata
    predictwise extract paper.pdf --diagnostics out/diagnostics.json -v
    predictwise predict paper1.pdf paper2.pdf --subject "Operating Systems"

Both commands print JSON to stdout. Files that cannot be read are
reported on stderr and make the exit status 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from . import __version__
from .extractor.classification import classify
from .extractor.config import DEFAULT_CONFIG, ExtractionConfig
from .extractor.diagnostics import ExtractionDiagnostics
from .extractor.pipeline import extract_questions
from .extractor.utils.pdf import PdfExtractionError, extract_pdf_text
from .core.models.questions import QuestionRecord
from .prediction.heuristic import HeuristicPredictor
from .services.analysis import AnalysisService, UploadedFile

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="predictwise",
        description="Extract exam questions from PDF/OCR text and predict likely questions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Extract questions from files")
    extract.add_argument("files", nargs="+", type=Path, help="PDF or text files")
    extract.add_argument("--metadata", action="store_true",
                         help="Emit question records with type and keywords")
    extract.add_argument("--diagnostics", type=Path, metavar="PATH",
                         help="Write an extraction diagnostics report to PATH")
    extract.add_argument("--min-words", type=int, metavar="N",
                         help="Minimum words per question (default 5)")
    extract.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    predict = sub.add_parser("predict", help="Predict likely questions from past papers")
    predict.add_argument("files", nargs="+", type=Path, help="PDF or text files")
    predict.add_argument("--subject", required=True, help="Subject name")
    predict.add_argument("--exam-name", default="", help="Exam name")
    predict.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _read_text(path: Path) -> str:
    """Read a file as text, using the PDF text layer for ``.pdf`` files."""
    if path.suffix.lower() == ".pdf":
        return extract_pdf_text(path).text
    return path.read_bytes().decode("utf-8", errors="replace")


def _run_extract(args: argparse.Namespace) -> Tuple[list, int]:
    config: ExtractionConfig = DEFAULT_CONFIG
    if args.min_words is not None:
        config = config.with_min_word_count(args.min_words)
    diagnostics = ExtractionDiagnostics() if args.diagnostics else None

    status = 0
    questions: List[str] = []
    for path in args.files:
        try:
            text = _read_text(path)
        except (OSError, PdfExtractionError) as e:
            print(f"error: {path}: {e}", file=sys.stderr)
            status = 1
            continue
        for question in extract_questions(
            text, config=config, diagnostics=diagnostics, source_name=path.name
        ):
            if question not in questions:
                questions.append(question)

    if diagnostics is not None:
        diagnostics.generate_report().save(args.diagnostics)

    if not args.metadata:
        return questions, status

    records = []
    for index, question in enumerate(questions, start=1):
        result = classify(question, config.classifier)
        records.append(QuestionRecord(
            id=index,
            text=question,
            estimated_type=result.estimated_type,
            keywords=result.keywords,
        ).to_dict())
    return records, status


def _run_predict(args: argparse.Namespace) -> Tuple[dict, int]:
    status = 0
    uploads: List[UploadedFile] = []
    for path in args.files:
        try:
            uploads.append(UploadedFile.from_path(path))
        except OSError as e:
            print(f"error: {path}: {e}", file=sys.stderr)
            status = 1

    service = AnalysisService(HeuristicPredictor())
    result = service.analyze(uploads, args.subject, args.exam_name)
    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    if result.failed_files:
        status = 1
    return result.to_dict(), status


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "extract":
        if args.min_words is not None and args.min_words < 1:
            parser.error("--min-words must be >= 1")
        payload, status = _run_extract(args)
    else:
        payload, status = _run_predict(args)

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return status


if __name__ == "__main__":
    sys.exit(main())
