"""
Prediction strategies.

Exports the Predictor interface, payload cleaning for external
backends, and the offline HeuristicPredictor.
"""

from .base import Predictor, clean_text, report_from_payload
from .heuristic import HeuristicPredictor

__all__ = ["Predictor", "HeuristicPredictor", "clean_text", "report_from_payload"]
