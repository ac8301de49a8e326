"""
Tests for extractor.utils.pdf module.

PDFs are generated with PyMuPDF in tmp_path.
"""

import pytest

from predictwise.extractor.pipeline import extract_questions
from predictwise.extractor.utils.pdf import (
    PdfExtractionError,
    clean_extracted_text,
    extract_pdf_text,
    is_likely_scanned,
)


class TestCleanExtractedText:
    """Tests for clean_extracted_text() function."""

    def test_clean_when_page_stamps_then_removed(self):
        text = "Printed Page: 1 of 4\n1. Define   entropy.\n7\n"

        assert clean_extracted_text(text) == "1. Define entropy."

    def test_clean_when_header_artifacts_then_removed(self):
        # Arrange
        text = (
            "QP23EP1_290 | 10.20.30.40 | 12-05-2023 10:15:30 AM\n"
            "Page 3\n"
            "Explain DNS resolution."
        )

        # Act
        result = clean_extracted_text(text)

        # Assert
        assert result == "Explain DNS resolution."

    @pytest.mark.parametrize("code", ["QP23EP1_290", "qp7a2b_15", "QP101_4"])
    def test_clean_when_paper_code_then_removed(self, code):
        assert clean_extracted_text(f"{code} | Explain DNS resolution.") == "Explain DNS resolution."

    def test_clean_when_multiple_lines_then_newlines_kept(self):
        text = "1. What is a stack?\n\n\n2. What is a queue?"

        assert clean_extracted_text(text) == "1. What is a stack?\n2. What is a queue?"

    def test_clean_when_zero_width_chars_then_removed(self):
        assert clean_extracted_text("Def\u200bine\ufeff caching.") == "Define caching."

    def test_clean_when_empty_then_empty(self):
        assert clean_extracted_text("") == ""


class TestIsLikelyScanned:
    """Tests for is_likely_scanned() heuristic."""

    def test_scanned_when_no_text_then_true(self):
        assert is_likely_scanned("", 1)

    def test_scanned_when_little_text_per_page_then_true(self):
        assert is_likely_scanned("a" * 150, 2)

    def test_scanned_when_mostly_digits_then_true(self):
        assert is_likely_scanned("12345 " * 40, 1)

    def test_scanned_when_enough_prose_then_false(self):
        assert not is_likely_scanned("Explain the working of a diode. " * 5, 1)


class TestExtractPdfText:
    """Tests for extract_pdf_text() with generated PDFs."""

    def test_extract_when_path_then_text_and_page_count(self, sample_pdf, sample_paper_lines):
        # Act
        result = extract_pdf_text(sample_pdf)

        # Assert
        assert result.page_count == 1
        assert result.pages_processed == 1
        assert not result.is_likely_scanned
        for line in sample_paper_lines:
            assert line in result.text

    def test_extract_when_bytes_then_same_text_as_path(self, sample_pdf):
        from_path = extract_pdf_text(sample_pdf)

        from_bytes = extract_pdf_text(sample_pdf.read_bytes())

        assert from_bytes.text == from_path.text

    def test_extract_when_blank_page_then_flagged_scanned(self, blank_pdf):
        result = extract_pdf_text(blank_pdf)

        assert result.text == ""
        assert result.is_likely_scanned

    def test_extract_when_max_pages_then_later_pages_skipped(self, pdf_factory):
        # Arrange
        pdf = pdf_factory(
            "three.pdf",
            [["Explain page one topics."], ["Explain page two topics."], ["Explain page three topics."]],
        )

        # Act
        result = extract_pdf_text(pdf, max_pages=2)

        # Assert
        assert result.page_count == 3
        assert result.pages_processed == 2
        assert "page two" in result.text
        assert "page three" not in result.text

    def test_extract_when_metadata_set_then_returned(self, pdf_factory, sample_paper_lines):
        pdf = pdf_factory(
            "meta.pdf",
            [sample_paper_lines],
            metadata={"title": "Operating Systems 2023", "author": "Exam Board"},
        )

        result = extract_pdf_text(pdf)

        assert result.metadata["title"] == "Operating Systems 2023"
        assert result.metadata["author"] == "Exam Board"

    def test_extract_when_not_a_pdf_then_raises(self):
        with pytest.raises(PdfExtractionError, match="Cannot open PDF"):
            extract_pdf_text(b"this is not a pdf")

    def test_extract_when_missing_file_then_raises(self, tmp_path):
        with pytest.raises(PdfExtractionError):
            extract_pdf_text(tmp_path / "missing.pdf")

    def test_extract_when_fed_to_pipeline_then_questions_found(self, sample_pdf):
        text = extract_pdf_text(sample_pdf).text

        result = extract_questions(text)

        assert set(result) == {
            "Explain the working of a two stroke petrol engine.",
            "Describe the architecture of a distributed database.",
            "What is the purpose of a page table in memory?",
        }
