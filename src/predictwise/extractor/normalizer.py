"""
Module: extractor.normalizer

Purpose:
    Cleans raw text from PDF parsing or OCR before pattern matching.
    Removes invisible characters, leading OCR noise and symbol-heavy
    lines, collapses layout whitespace, and puts every question-start
    token ("12. ", "Q.5") at the beginning of its own line so the
    line-anchored patterns can find it.

Key Functions:
    - normalize(): Normalize raw text to a fixed point

Dependencies:
    - re (std)
    - predictwise.common.thresholds: Line filter thresholds

Used By:
    - extractor.pipeline: First stage of question extraction
"""

from __future__ import annotations

import logging
import re
from typing import Any

from predictwise.common.thresholds import NORMALIZER_THRESHOLDS, NormalizerThresholds

logger = logging.getLogger(__name__)

# Zero-width space/non-joiner/joiner, word joiner, BOM
INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")

# "i. si. 9 2 5" style openers; repeated openers are stripped together.
# "Q. No. 1" question headers have the same shape and are kept.
LEADING_GARBAGE_RE = re.compile(
    r"^(?:[ \t]*(?![Qq][ \t]*\.[ \t]*[Nn][Oo][ \t]*\.)"
    r"[a-zA-Z][ \t]*\.[ \t]*[a-zA-Z]{1,3}[ \t]*\.[ \t]*\d[\d \t]*)+",
    re.MULTILINE,
)

# Runs of isolated capitals/digits such as "I K3 C PTS A"
CAPS_GARBAGE_RE = re.compile(
    r"\b[A-Z][ \t]+[A-Z0-9]{1,3}[ \t]+[A-Z][ \t]+[A-Z]{2,4}[ \t]+[A-Z]"
)

LETTER_RE = re.compile(r"[A-Za-z]")
SYMBOL_RE = re.compile(r"[^A-Za-z0-9\s]")
WHITESPACE_RE = re.compile(r"\s+")

# "Q.5", "Q7", "q 3", "Q no. 4"
Q_START_RE = re.compile(r" ?\b([Qq](?:\.[ ]?|[ ]?)(?:[Nn][Oo]\.?[ ]?)?\d)")

# "12. " not preceded by a word character, a period, or a "Q"/"Q no." prefix
NUMBER_START_RE = re.compile(
    r" ?(?<![\w.])(?<![Qq] )(?<![Nn][Oo] )(?<![Nn][Oo]\. )(\d+\.)(?= )"
)

# OCR misreads in numeric context
PIPE_OR_L_BEFORE_DIGIT_RE = re.compile(r"(?<![A-Za-z])[|l](?=\d)")
PIPE_OR_L_AFTER_DIGIT_RE = re.compile(r"(?<=\d)[|l](?![A-Za-z])")
LETTER_O_AFTER_DIGIT_RE = re.compile(r"(?<=\d)O(?=\.)")
LETTER_O_BEFORE_DECIMAL_RE = re.compile(r"(?<![A-Za-z])O(?=\.\d)")

# Fullwidth, small form, emoji, Arabic and reversed question marks
QUESTION_MARK_RE = re.compile("[\uff1f\ufe56\u2753\u2754\u061f\u2e2e]")


def _is_noise_line(line: str, thresholds: NormalizerThresholds) -> bool:
    """Check whether a line is dominated by symbols.

    Short lines are never noise here; they may be headers or the start
    of a question that gets merged back by whitespace collapsing.
    """
    stripped = line.strip()
    if len(stripped) < thresholds.short_line_length:
        return False
    letters = len(LETTER_RE.findall(stripped))
    symbols = len(SYMBOL_RE.findall(stripped))
    return symbols > thresholds.symbol_to_letter_ratio * letters


def _normalize_pass(text: str, thresholds: NormalizerThresholds) -> str:
    """Apply every normalization step once, in order."""
    text = INVISIBLE_RE.sub("", text)

    text = LEADING_GARBAGE_RE.sub("", text)
    text = CAPS_GARBAGE_RE.sub("", text)

    text = "\n".join(
        line for line in text.splitlines() if not _is_noise_line(line, thresholds)
    )

    text = WHITESPACE_RE.sub(" ", text)
    text = Q_START_RE.sub(r"\n\1", text)
    text = NUMBER_START_RE.sub(r"\n\1", text)

    text = PIPE_OR_L_BEFORE_DIGIT_RE.sub("1", text)
    text = PIPE_OR_L_AFTER_DIGIT_RE.sub("1", text)
    text = LETTER_O_AFTER_DIGIT_RE.sub("0", text)
    text = LETTER_O_BEFORE_DECIMAL_RE.sub("0", text)

    text = QUESTION_MARK_RE.sub("?", text)

    return text.strip()


def normalize(text: Any, thresholds: NormalizerThresholds = NORMALIZER_THRESHOLDS) -> str:
    """
    Normalize raw extracted text for question pattern matching.

    Steps, in order: strip invisible characters, strip OCR garbage
    openers, drop symbol-dominated lines, collapse whitespace while
    starting a new line at each question number, repair numeric OCR
    misreads, unify question marks, trim.

    The steps are repeated until the output stops changing (bounded by
    ``thresholds.max_passes``), so ``normalize(normalize(x)) == normalize(x)``.

    Args:
        text: Raw text. Anything that is not a ``str`` is treated as empty.
        thresholds: Line filter and pass-count thresholds.

    Returns:
        Normalized text, possibly empty. Never raises.

    Example:
        >>> normalize("1. Define entropy.   2. State  Hess's law.")
        "1. Define entropy.\\n2. State Hess's law."
    """
    if not isinstance(text, str) or not text:
        return ""

    result = _normalize_pass(text, thresholds)
    passes = 1
    while passes < thresholds.max_passes:
        again = _normalize_pass(result, thresholds)
        passes += 1
        if again == result:
            break
        result = again

    logger.debug(f"Normalized {len(text)} -> {len(result)} chars in {passes} passes")
    return result
