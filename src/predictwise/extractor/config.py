"""
Module: extractor.config

Purpose:
    Configuration dataclass for the question extraction pipeline. Bundles
    the normalizer, validator and classifier thresholds so callers can
    tune them per call without touching module state.

Key Classes:
    - ExtractionConfig: Main configuration for extraction

Dependencies:
    - dataclasses: For frozen dataclass support
    - predictwise.common.thresholds: Default threshold instances

Used By:
    - extractor.pipeline: Uses ExtractionConfig for every stage
    - cli: Builds a config from command-line overrides
"""

from dataclasses import dataclass, field, replace

from predictwise.common.thresholds import (
    CLASSIFIER_THRESHOLDS,
    NORMALIZER_THRESHOLDS,
    VALIDATION_THRESHOLDS,
    ClassifierThresholds,
    NormalizerThresholds,
    ValidationThresholds,
)


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for question extraction pipeline.

    Attributes:
        normalizer: Thresholds for text normalization
        validation: Thresholds for the question validator
        classifier: Thresholds for keyword extraction
        use_line_scan: Run the line-scan fallback after the pattern battery (default True)
    """
    normalizer: NormalizerThresholds = field(default_factory=lambda: NORMALIZER_THRESHOLDS)
    validation: ValidationThresholds = field(default_factory=lambda: VALIDATION_THRESHOLDS)
    classifier: ClassifierThresholds = field(default_factory=lambda: CLASSIFIER_THRESHOLDS)
    use_line_scan: bool = True

    def with_min_word_count(self, min_word_count: int) -> "ExtractionConfig":
        """Return a copy with a different validator word-count threshold."""
        if min_word_count < 1:
            raise ValueError(f"min_word_count must be >= 1: {min_word_count}")
        return replace(
            self,
            validation=replace(self.validation, min_word_count=min_word_count),
        )


DEFAULT_CONFIG = ExtractionConfig()
