"""
Services layer: analysis orchestration and result caching.
"""

from .analysis import AnalysisResult, AnalysisService, UploadedFile
from .cache import (
    AnalysisStore,
    InMemoryStore,
    generate_cache_key,
    generate_file_hash,
    invalidate_user,
)

__all__ = [
    "AnalysisService",
    "AnalysisResult",
    "UploadedFile",
    "AnalysisStore",
    "InMemoryStore",
    "generate_cache_key",
    "generate_file_hash",
    "invalidate_user",
]
