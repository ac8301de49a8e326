"""
Unit Tests for Prediction Models
"""

import pytest

from predictwise.core.models.predictions import Prediction, PredictionReport


def _prediction(**overrides) -> Prediction:
    data = dict(
        id=1,
        topic="Laplace Transform",
        question="Find the Laplace transform of t times e to the power minus 2t.",
        difficulty="Medium",
        probability=0.85,
        type="Numerical",
        rationale="Appears in most papers",
        section="B",
    )
    data.update(overrides)
    return Prediction(**data)


class TestPrediction:
    """Tests for Prediction dataclass."""

    def test_init_when_valid_then_created(self):
        p = _prediction()

        assert p.topic == "Laplace Transform"
        assert p.probability == 0.85

    @pytest.mark.parametrize("field,value,message", [
        ("difficulty", "Impossible", "Invalid difficulty"),
        ("section", "D", "Invalid section"),
        ("probability", 1.5, "probability must be within"),
        ("probability", -0.1, "probability must be within"),
    ])
    def test_init_when_invalid_field_then_raises_error(self, field, value, message):
        with pytest.raises(ValueError, match=message):
            _prediction(**{field: value})

    def test_to_dict_when_round_tripped_then_equal(self):
        p = _prediction()

        assert Prediction.from_dict(p.to_dict()) == p


class TestPredictionReport:
    """Tests for PredictionReport dataclass."""

    def test_to_dict_when_no_error_then_error_key_omitted(self):
        report = PredictionReport(predictions=(_prediction(),), summary=("Laplace Transform",))

        data = report.to_dict()

        assert set(data) == {"predictions", "summary"}
        assert data["summary"] == ["Laplace Transform"]

    def test_to_dict_when_error_then_error_included(self):
        report = PredictionReport(error="No questions extracted from files")

        data = report.to_dict()

        assert data == {
            "predictions": [],
            "summary": [],
            "error": "No questions extracted from files",
        }

    def test_from_dict_when_round_tripped_then_equal(self):
        report = PredictionReport(predictions=(_prediction(), _prediction(id=2, section="C")))

        assert PredictionReport.from_dict(report.to_dict()) == report
