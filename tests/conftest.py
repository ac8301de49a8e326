import pytest
import sys
from pathlib import Path

import fitz

# Add src to sys.path so we can import predictwise
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


SAMPLE_PAPER_LINES = [
    "1. Explain the working of a two stroke petrol engine.",
    "2. Describe the architecture of a distributed database.",
    "3. What is the purpose of a page table in memory?",
]


# Common test fixtures
@pytest.fixture
def sample_paper_lines() -> list[str]:
    return list(SAMPLE_PAPER_LINES)


@pytest.fixture
def sample_paper_text() -> str:
    """Return a small, clean exam paper as plain text."""
    return "\n".join(SAMPLE_PAPER_LINES)


def build_pdf(path: Path, pages: list[list[str]], metadata: dict | None = None) -> Path:
    """Write a PDF with one text line per entry, one inner list per page."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        y = 72
        for line in lines:
            page.insert_text((72, y), line, fontsize=10)
            y += 16
    if metadata:
        doc.set_metadata(metadata)
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def pdf_factory(tmp_path: Path):
    """Return a builder writing PDFs into tmp_path: pdf_factory(name, pages, metadata=None)."""
    def _build(name: str, pages: list[list[str]], metadata: dict | None = None) -> Path:
        return build_pdf(tmp_path / name, pages, metadata)
    return _build


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """Create a one-page PDF containing the sample paper."""
    return build_pdf(tmp_path / "paper.pdf", [SAMPLE_PAPER_LINES])


@pytest.fixture
def blank_pdf(tmp_path: Path) -> Path:
    """Create a PDF with an empty page (no text layer)."""
    return build_pdf(tmp_path / "blank.pdf", [[]])
