"""
Module: extractor.utils

Purpose:
    Helpers that feed the extraction pipeline.

Key Modules:
    - pdf: PDF text extraction and artifact cleanup

Dependencies:
    - fitz (PyMuPDF): PDF operations
"""

from .pdf import PdfExtractionError, PdfText, extract_pdf_text

__all__ = ["PdfExtractionError", "PdfText", "extract_pdf_text"]
