"""
Tests for the predictwise command-line entry point.
"""

import json

import pytest

from predictwise import __version__
from predictwise.cli import main


@pytest.fixture
def paper_txt(tmp_path, sample_paper_text):
    path = tmp_path / "paper.txt"
    path.write_text(sample_paper_text, encoding="utf-8")
    return path


class TestExtractCommand:
    """Tests for ``predictwise extract``."""

    def test_extract_when_text_file_then_prints_questions(self, paper_txt, sample_paper_lines, capsys):
        # Act
        status = main(["extract", str(paper_txt)])

        # Assert
        assert status == 0
        questions = json.loads(capsys.readouterr().out)
        assert set(questions) == {line.split(". ", 1)[1] for line in sample_paper_lines}

    def test_extract_when_pdf_file_then_prints_questions(self, sample_pdf, capsys):
        status = main(["extract", str(sample_pdf)])

        assert status == 0
        assert len(json.loads(capsys.readouterr().out)) == 3

    def test_extract_when_same_paper_twice_then_deduplicated(self, paper_txt, sample_pdf, capsys):
        main(["extract", str(paper_txt), str(sample_pdf)])

        assert len(json.loads(capsys.readouterr().out)) == 3

    def test_extract_when_metadata_then_prints_records(self, paper_txt, capsys):
        main(["extract", str(paper_txt), "--metadata"])

        records = json.loads(capsys.readouterr().out)
        assert [r["id"] for r in records] == [1, 2, 3]
        assert set(records[0]) == {
            "id", "text", "has_question_mark", "word_count", "estimated_type", "keywords",
        }

    def test_extract_when_diagnostics_path_then_report_written(self, paper_txt, tmp_path, capsys):
        # Arrange
        report_path = tmp_path / "out" / "diagnostics.json"

        # Act
        main(["extract", str(paper_txt), "--diagnostics", str(report_path)])

        # Assert
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert report["sources"] == ["paper.txt"]
        assert report["total_accepted"] == 3

    def test_extract_when_min_words_raised_then_fewer_questions(self, tmp_path, capsys):
        path = tmp_path / "short.txt"
        path.write_text(
            "1. What is a page table?\n"
            "2. Describe the architecture of a distributed database system.",
            encoding="utf-8",
        )

        main(["extract", str(path), "--min-words", "7"])

        assert json.loads(capsys.readouterr().out) == [
            "Describe the architecture of a distributed database system."
        ]

    def test_extract_when_min_words_zero_then_usage_error(self, paper_txt):
        with pytest.raises(SystemExit) as exc:
            main(["extract", str(paper_txt), "--min-words", "0"])

        assert exc.value.code == 2

    def test_extract_when_file_missing_then_error_and_status_one(self, tmp_path, paper_txt, capsys):
        missing = tmp_path / "missing.txt"

        status = main(["extract", str(missing), str(paper_txt)])

        captured = capsys.readouterr()
        assert status == 1
        assert f"error: {missing}" in captured.err
        assert len(json.loads(captured.out)) == 3

    def test_extract_when_pdf_corrupt_then_error_and_status_one(self, tmp_path, capsys):
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"not a pdf")

        status = main(["extract", str(broken)])

        captured = capsys.readouterr()
        assert status == 1
        assert "Cannot open PDF" in captured.err
        assert json.loads(captured.out) == []


class TestPredictCommand:
    """Tests for ``predictwise predict``."""

    def test_predict_when_papers_given_then_prints_report(self, paper_txt, capsys):
        # Act
        status = main(["predict", str(paper_txt), "--subject", "Engineering"])

        # Assert
        assert status == 0
        data = json.loads(capsys.readouterr().out)
        assert data["predictions"]
        assert data["cached"] is False
        assert len(data["questions"]) == 3
        assert data["failed_files"] == []

    def test_predict_when_no_questions_then_error_in_report(self, tmp_path, capsys):
        path = tmp_path / "empty.txt"
        path.write_text("Page 1 of 2", encoding="utf-8")

        status = main(["predict", str(path), "--subject", "Engineering"])

        data = json.loads(capsys.readouterr().out)
        assert status == 0
        assert data["error"] == "No questions extracted from files"

    def test_predict_when_pdf_corrupt_then_warning_and_status_one(self, tmp_path, paper_txt, capsys):
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"not a pdf")

        status = main(["predict", str(broken), str(paper_txt), "--subject", "Engineering"])

        captured = capsys.readouterr()
        assert status == 1
        assert "warning: broken.pdf:" in captured.err
        assert json.loads(captured.out)["failed_files"] == ["broken.pdf"]

    def test_predict_when_subject_missing_then_usage_error(self, paper_txt):
        with pytest.raises(SystemExit):
            main(["predict", str(paper_txt)])


def test_version_when_requested_then_printed(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])

    assert __version__ in capsys.readouterr().out
