"""
Module: extractor.diagnostics

Captures per-run extraction statistics for tuning the heuristics:
which patterns fired, which candidates the validator rejected and why,
and how many duplicates were suppressed.

The collector is owned by the caller and passed into the pipeline; it is
never shared implicitly between runs.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class RejectedCandidate:
    """A candidate dropped by the validator."""
    text: str
    source_pattern_id: str
    reason: str
    source_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "text": self.text[:500],
            "pattern": self.source_pattern_id,
            "reason": self.reason,
        }
        if self.source_name:
            d["source"] = self.source_name
        return d


class ExtractionDiagnostics:
    """
    Thread-safe collector for extraction statistics.

    Example:
        >>> diagnostics = ExtractionDiagnostics()
        >>> extract_questions(text, diagnostics=diagnostics)
        >>> diagnostics.generate_report().summary_by_reason
        {'too_short': 3, 'ocr_garbage': 1}
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pattern_hits: Dict[str, int] = {}
        self._accepted: Dict[str, int] = {}
        self._rejected: List[RejectedCandidate] = []
        self._duplicates = 0
        self._sources: List[str] = []

    def add_source(self, name: str) -> None:
        """Record the name of a processed input (file name or label)."""
        with self._lock:
            if name not in self._sources:
                self._sources.append(name)

    def add_match(self, pattern_id: str) -> None:
        with self._lock:
            self._pattern_hits[pattern_id] = self._pattern_hits.get(pattern_id, 0) + 1

    def add_accepted(self, pattern_id: str) -> None:
        with self._lock:
            self._accepted[pattern_id] = self._accepted.get(pattern_id, 0) + 1

    def add_duplicate(self) -> None:
        with self._lock:
            self._duplicates += 1

    def add_rejected(
        self,
        text: str,
        pattern_id: str,
        reason: str,
        source_name: str = "",
    ) -> None:
        """Record a candidate the validator dropped."""
        with self._lock:
            self._rejected.append(
                RejectedCandidate(text, pattern_id, reason, source_name)
            )

    @property
    def rejected_count(self) -> int:
        with self._lock:
            return len(self._rejected)

    @property
    def duplicate_count(self) -> int:
        with self._lock:
            return self._duplicates

    def generate_report(self) -> "ExtractionDiagnosticsReport":
        with self._lock:
            return ExtractionDiagnosticsReport.from_collected(
                pattern_hits=dict(self._pattern_hits),
                accepted_by_pattern=dict(self._accepted),
                rejected=list(self._rejected),
                duplicates=self._duplicates,
                sources=list(self._sources),
            )


@dataclass
class ExtractionDiagnosticsReport:
    """Complete diagnostics report."""
    generated_at: str
    sources: List[str]
    pattern_hits: Dict[str, int]
    accepted_by_pattern: Dict[str, int]
    duplicates: int
    summary_by_reason: Dict[str, int]
    rejected: List[RejectedCandidate] = field(default_factory=list)

    @classmethod
    def from_collected(
        cls,
        *,
        pattern_hits: Dict[str, int],
        accepted_by_pattern: Dict[str, int],
        rejected: List[RejectedCandidate],
        duplicates: int,
        sources: Optional[List[str]] = None,
    ) -> "ExtractionDiagnosticsReport":
        summary_by_reason: Dict[str, int] = {}
        for item in rejected:
            summary_by_reason[item.reason] = summary_by_reason.get(item.reason, 0) + 1

        return cls(
            generated_at=datetime.now(timezone.utc).isoformat(),
            sources=sources or [],
            pattern_hits=pattern_hits,
            accepted_by_pattern=accepted_by_pattern,
            duplicates=duplicates,
            summary_by_reason=summary_by_reason,
            rejected=rejected,
        )

    @property
    def total_accepted(self) -> int:
        return sum(self.accepted_by_pattern.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "sources": self.sources,
            "pattern_hits": self.pattern_hits,
            "accepted_by_pattern": self.accepted_by_pattern,
            "total_accepted": self.total_accepted,
            "duplicates": self.duplicates,
            "total_rejected": len(self.rejected),
            "summary_by_reason": self.summary_by_reason,
            "rejected": [item.to_dict() for item in self.rejected],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info(f"Extraction diagnostics saved: {path}")
