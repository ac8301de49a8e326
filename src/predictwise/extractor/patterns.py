"""
Module: extractor.patterns

Purpose:
    Question pattern matching over normalized text. An ordered battery of
    declarative pattern descriptors is run independently across the text,
    followed by a line-scan fallback that admits any line which looks like
    a question. Every raw match is passed through the question cleaner
    before it becomes a candidate.

Key Functions:
    - iter_candidates(): Yield every cleaned candidate with its pattern id
    - find_candidates(): Deduplicated candidate strings in first-seen order
    - clean_question(): Strip numbering prefixes and mark annotations
    - looks_like_question(): Line-scan acceptance test

Key Classes:
    - QuestionPattern: Immutable pattern descriptor (id, regex, group)

Dependencies:
    - re (std)
    - predictwise.core.models.questions: QuestionCandidate

Used By:
    - extractor.pipeline: Produces the raw candidate stream
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from predictwise.common.thresholds import VALIDATION_THRESHOLDS, ValidationThresholds
from predictwise.core.models.questions import QuestionCandidate

logger = logging.getLogger(__name__)

LINE_SCAN_ID = "line_scan"

# Lead words of direct and imperative exam questions
PATTERN_KEYWORDS: Tuple[str, ...] = (
    "Explain", "Define", "Describe", "What", "How", "Why", "Compare",
    "Differentiate", "List", "State", "Derive", "Prove", "Calculate",
    "Find", "Solve", "Discuss", "Enumerate", "Illustrate", "Analyze",
    "Evaluate", "Justify", "Examine",
)

# Lead words accepted by the line scan
QUESTION_KEYWORDS: Tuple[str, ...] = (
    "explain", "define", "describe", "what", "how", "why", "compare",
    "differentiate", "list", "state", "derive", "prove", "calculate",
    "find", "solve", "discuss", "enumerate", "illustrate", "analyze",
    "evaluate", "justify", "examine", "write", "draw", "sketch",
    "distinguish", "elaborate", "mention", "give", "name",
)

NUMERICAL_KEYWORDS: Tuple[str, ...] = (
    "Calculate", "Find", "Determine", "Compute", "Solve", "Evaluate",
)

_PATTERN_KW = "|".join(PATTERN_KEYWORDS)
_QUESTION_KW = "|".join(QUESTION_KEYWORDS)
_NUMERICAL_KW = "|".join(NUMERICAL_KEYWORDS)


@dataclass(frozen=True)
class QuestionPattern:
    """
    Declarative question pattern.

    Attributes:
        id: Stable identifier, reported as ``source_pattern_id``.
        regex: Compiled pattern, line-anchored with ``re.MULTILINE``.
        group: Capture group holding the question (0 = whole match).
        description: Human-readable summary for diagnostics.
    """
    id: str
    regex: re.Pattern
    group: int
    description: str

    def matches(self, text: str) -> Iterator[str]:
        """Yield the question text of every non-overlapping match."""
        for match in self.regex.finditer(text):
            yield match.group(self.group)


QUESTION_PATTERNS: Tuple[QuestionPattern, ...] = (
    QuestionPattern(
        "numbered",
        re.compile(r"^\s*(\d+)\.\s*(.+?\?)", re.MULTILINE),
        2,
        "1. ...?",
    ),
    QuestionPattern(
        "q_numbered",
        re.compile(r"^\s*Q\.?\s*(\d+)[.)]\s*(.+?\?)", re.MULTILINE | re.IGNORECASE),
        2,
        "Q1. ...? / Q.1) ...?",
    ),
    QuestionPattern(
        "letter_part",
        re.compile(r"^\s*\([a-z]\)\s*(.+?\?)", re.MULTILINE),
        1,
        "(a) ...?",
    ),
    QuestionPattern(
        "roman_part",
        re.compile(r"^\s*\([ivxlcdm]+\)\s*(.+?\?)", re.MULTILINE | re.IGNORECASE),
        1,
        "(ii) ...?",
    ),
    QuestionPattern(
        "bracketed",
        re.compile(r"^\s*\[\d+\]\s*(.+?\?)", re.MULTILINE),
        1,
        "[1] ...?",
    ),
    QuestionPattern(
        "keyword_question",
        re.compile(rf"^\s*(?:{_PATTERN_KW})\s+.+?\?", re.MULTILINE | re.IGNORECASE),
        0,
        "Explain ...?",
    ),
    QuestionPattern(
        "keyword_statement",
        re.compile(rf"^\s*(?:{_PATTERN_KW})\s+.{{20,}}\.$", re.MULTILINE | re.IGNORECASE),
        0,
        "Explain ... .",
    ),
    QuestionPattern(
        "q_no",
        re.compile(r"^\s*Q\.?\s*no\.?\s*(\d+)[.:)]\s*(.+)", re.MULTILINE | re.IGNORECASE),
        2,
        "Q no. 1: ...",
    ),
    QuestionPattern(
        "short_note",
        re.compile(
            r"^\s*(?:Write\s+short\s+notes?\s+on|Write\s+a\s+note\s+on)\s+.+",
            re.MULTILINE | re.IGNORECASE,
        ),
        0,
        "Write short notes on ...",
    ),
    QuestionPattern(
        "numerical",
        re.compile(rf"^\s*(\d+)\.\s*(?:{_NUMERICAL_KW})\s+.+", re.MULTILINE | re.IGNORECASE),
        0,
        "1. Calculate ...",
    ),
)

# Numbering, lettering and Q prefixes: "12. ", "Q.3) ", "(a) ", "(iv) ", "[2] ", "Q no. 4: "
LEADING_MARKER_RE = re.compile(
    r"^(?:\((?:[a-z]|[ivxlcdm]+)\)|[\s\d.)(\[\]:]|[Qq](?:\s*[Nn][Oo]\b\.?)?(?![A-Za-z]))+"
)
MARKS_RE = re.compile(r"[\[(]\s*\d+\s*marks?\s*[\])]", re.IGNORECASE)
WHITESPACE_RE = re.compile(r"\s+")

KEYWORD_START_RE = re.compile(rf"^(?:{_QUESTION_KW})[ :]", re.IGNORECASE)
NUMBERED_KEYWORD_RE = re.compile(rf"^\d+[.)]\s*(?:{_QUESTION_KW})\b", re.IGNORECASE)


def clean_question(text: str) -> str:
    """
    Clean a raw match into question text.

    Removes the leading numbering/lettering prefix and any ``[n marks]``
    or ``(n marks)`` annotation, then collapses whitespace. A trailing
    question mark is always kept.

    Example:
        >>> clean_question("Q.1 What is a stack?  [5 marks]")
        'What is a stack?'
    """
    if not text:
        return ""
    text = LEADING_MARKER_RE.sub("", text)
    text = text.rstrip()
    text = MARKS_RE.sub("", text)
    return WHITESPACE_RE.sub(" ", text).strip()


def looks_like_question(
    line: str,
    thresholds: ValidationThresholds = VALIDATION_THRESHOLDS,
) -> bool:
    """
    Check whether a single line looks like a question.

    A line qualifies when it contains a question mark, starts with a
    question keyword followed by a space or colon, or starts with a
    number followed by a question keyword.
    """
    if not line or len(line) < thresholds.line_scan_min_length:
        return False
    if "?" in line:
        return True
    if KEYWORD_START_RE.match(line):
        return True
    return bool(NUMBERED_KEYWORD_RE.match(line))


def iter_candidates(
    normalized_text: str,
    *,
    use_line_scan: bool = True,
    thresholds: ValidationThresholds = VALIDATION_THRESHOLDS,
) -> Iterator[QuestionCandidate]:
    """
    Yield cleaned candidates from the pattern battery and the line scan.

    Candidates are yielded in battery order, then line order, and may
    repeat; deduplication is the caller's job. Empty cleaned matches are
    skipped.

    Args:
        normalized_text: Output of ``normalizer.normalize``.
        use_line_scan: Run the per-line fallback after the battery.
        thresholds: Supplies the line-scan minimum length.
    """
    if not normalized_text:
        return

    for pattern in QUESTION_PATTERNS:
        hits = 0
        for raw in pattern.matches(normalized_text):
            cleaned = clean_question(raw)
            if cleaned:
                hits += 1
                yield QuestionCandidate(cleaned, pattern.id)
        if hits:
            logger.debug(f"Pattern {pattern.id}: {hits} matches")

    if not use_line_scan:
        return

    for line in normalized_text.split("\n"):
        stripped = line.strip()
        if looks_like_question(stripped, thresholds):
            cleaned = clean_question(stripped)
            if cleaned:
                yield QuestionCandidate(cleaned, LINE_SCAN_ID)


def find_candidates(
    normalized_text: str,
    *,
    use_line_scan: bool = True,
    thresholds: ValidationThresholds = VALIDATION_THRESHOLDS,
) -> List[str]:
    """
    Find the deduplicated set of candidate strings in first-seen order.

    Example:
        >>> find_candidates("1. What is a queue used for?")
        ['What is a queue used for?']
    """
    seen = dict.fromkeys(
        c.text
        for c in iter_candidates(
            normalized_text, use_line_scan=use_line_scan, thresholds=thresholds
        )
    )
    return list(seen)
