"""
Module: extractor.utils.pdf

Purpose:
    PDF text extraction for uploaded exam papers. Produces the raw text
    handed to the question pipeline, cleaned of recurring exam-paper
    artifacts, and flags documents that look scanned.

Key Functions:
    - extract_pdf_text(): Text, page count and metadata from a PDF
    - clean_extracted_text(): Remove headers, stamps and page numbers
    - is_likely_scanned(): Heuristic for image-only PDFs

Dependencies:
    - fitz (PyMuPDF): PDF text extraction

Used By:
    - services.analysis: Reads uploaded PDFs
    - cli: Reads PDF arguments
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

import fitz

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_MAX_PAGES = 50
MIN_CHARS_PER_PAGE = 100  # Fewer extracted chars per page suggests a scan
MIN_ALPHA_RATIO = 0.3

INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff]")
ARTIFACT_PATTERNS = (
    re.compile(r"QP[\dA-Z]+_\d+\s*\|\s*", re.IGNORECASE),  # "QP23EP1_290 | " paper codes
    re.compile(r"Printed Page:\s*\d+\s*of\s*\d+", re.IGNORECASE),
    re.compile(r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}"),  # IP stamps in headers
    re.compile(r"\d{1,2}:\d{2}:\d{2}\s*(?:AM|PM)?", re.IGNORECASE),
    re.compile(r"\d{1,2}[-/]\d{1,2}[-/]\d{2,4}"),
)
PIPE_RUN_RE = re.compile(r"\|+")
PAGE_LINE_RE = re.compile(r"^\s*Page\s*\d+\s*$", re.IGNORECASE | re.MULTILINE)
NUMBER_LINE_RE = re.compile(r"^\s*\d+\s*$", re.MULTILINE)
HORIZONTAL_SPACE_RE = re.compile(r"[ \t\f\v]+")
BLANK_LINES_RE = re.compile(r"\n\s*\n+")


class PdfExtractionError(Exception):
    """Raised when a PDF cannot be opened or read."""


@dataclass(frozen=True)
class PdfText:
    """
    Text extracted from a PDF.

    Attributes:
        text: Cleaned text of all processed pages.
        page_count: Total pages in the document.
        pages_processed: Pages actually read (bounded by max_pages).
        metadata: Title/author/subject/creator/producer/dates when present.
        is_likely_scanned: True when the text layer looks empty or garbled.
    """
    text: str
    page_count: int
    pages_processed: int
    metadata: Dict[str, Optional[str]] = field(default_factory=dict)
    is_likely_scanned: bool = False


def clean_extracted_text(text: str) -> str:
    """
    Clean text extracted from a PDF text layer.

    Removes invisible characters, paper codes, "Printed Page" stamps,
    IP addresses, timestamps, dates, pipe runs, "Page n" lines and
    number-only lines. Horizontal whitespace is collapsed but line
    breaks are kept for the normalizer's line filter.

    Example:
        >>> clean_extracted_text("Printed Page: 1 of 4\\n1. Define   entropy.\\n7\\n")
        '1. Define entropy.'
    """
    if not text:
        return ""

    text = INVISIBLE_RE.sub("", text)
    for pattern in ARTIFACT_PATTERNS:
        text = pattern.sub("", text)
    text = PIPE_RUN_RE.sub(" ", text)
    text = PAGE_LINE_RE.sub("", text)
    text = NUMBER_LINE_RE.sub("", text)
    text = HORIZONTAL_SPACE_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = BLANK_LINES_RE.sub("\n", text)
    return text.strip()


def is_likely_scanned(text: str, page_count: int) -> bool:
    """
    Check whether a PDF is probably image-based.

    Args:
        text: Extracted text.
        page_count: Number of pages the text came from.

    Returns:
        True when there is no text, fewer than 100 characters per page,
        or less than 30% alphabetic characters.
    """
    if not text or page_count <= 0:
        return True
    if len(text) / page_count < MIN_CHARS_PER_PAGE:
        return True
    alpha = sum(1 for ch in text if ch.isascii() and ch.isalpha())
    return alpha / len(text) < MIN_ALPHA_RATIO


def _document_metadata(doc: fitz.Document) -> Dict[str, Optional[str]]:
    meta = doc.metadata or {}
    return {
        "title": meta.get("title") or None,
        "author": meta.get("author") or None,
        "subject": meta.get("subject") or None,
        "creator": meta.get("creator") or None,
        "producer": meta.get("producer") or None,
        "creation_date": meta.get("creationDate") or None,
        "modification_date": meta.get("modDate") or None,
    }


def extract_pdf_text(
    source: Union[str, Path, bytes],
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> PdfText:
    """
    Extract and clean the text layer of a PDF.

    Args:
        source: Path to a PDF, or the PDF bytes.
        max_pages: Maximum pages to read. Defaults to 50.

    Returns:
        PdfText with cleaned text and a scanned-document flag.

    Raises:
        PdfExtractionError: If the document cannot be opened.

    Example:
        >>> result = extract_pdf_text(Path("maths_2023.pdf"))
        >>> result.page_count, result.is_likely_scanned
        (4, False)
    """
    try:
        if isinstance(source, (bytes, bytearray)):
            doc = fitz.open(stream=bytes(source), filetype="pdf")
        else:
            doc = fitz.open(str(source))
    except (RuntimeError, ValueError, OSError) as e:
        raise PdfExtractionError(f"Cannot open PDF: {e}") from e

    with doc:
        page_count = doc.page_count
        limit = min(page_count, max_pages) if max_pages > 0 else page_count
        parts = []
        for index in range(limit):
            try:
                parts.append(doc[index].get_text("text"))
            except (RuntimeError, ValueError) as e:
                logger.debug(f"Failed to extract text from page {index}: {e}")
        metadata = _document_metadata(doc)

    text = clean_extracted_text("\n".join(parts))
    scanned = is_likely_scanned(text, limit)
    if scanned:
        logger.info(f"PDF text layer looks scanned ({len(text)} chars over {limit} pages)")

    return PdfText(
        text=text,
        page_count=page_count,
        pages_processed=limit,
        metadata=metadata,
        is_likely_scanned=scanned,
    )
