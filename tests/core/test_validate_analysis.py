"""Analysis Validation — pure field checks reporting every violation.

Tests cover:
    - a complete valid input has no violations
    - required measurements, probability and labels must be present
    - inclusive bounds for probability [0, 100] and metrics [0, 1]
    - closed vocabularies for classification and confidence level
    - non-numeric values (including bool) rejected
"""

import math

import pytest

from exoplanet_api.core.domain_types import Classification, ConfidenceLevel
from exoplanet_api.core.errors import ValidationError
from exoplanet_api.core.validate_analysis import (
    collect_violations, validate_analysis_input,
)


def _valid(**overrides) -> dict:
    data = {
        "orbital_period": 10.5,
        "transit_duration": 3.2,
        "transit_depth": 1.5,
        "snr": 15.0,
        "planet_radius": 2.1,
        "probability": 75.5,
        "accuracy": 0.85,
        "classification": "Strong Candidate",
        "confidence_level": "High",
    }
    data.update(overrides)
    return data


def test_valid_input_has_no_violations():
    assert collect_violations(_valid()) == {}
    validate_analysis_input(_valid())


def test_empty_input_lists_every_required_field():
    errors = collect_violations({})
    assert set(errors) == {
        "orbital_period", "transit_duration", "transit_depth", "snr",
        "planet_radius", "probability", "classification", "confidence_level",
    }
    assert errors["orbital_period"] == "Orbital period is required"
    assert errors["snr"] == "SNR is required"


@pytest.mark.parametrize("value", [0.0, 100.0, 50])
def test_probability_inclusive_bounds(value):
    assert collect_violations(_valid(probability=value)) == {}


@pytest.mark.parametrize("value", [-0.01, 100.01, 150.0, math.nan])
def test_probability_out_of_range(value):
    errors = collect_violations(_valid(probability=value))
    assert errors == {"probability": "Probability must be between 0 and 100"}


@pytest.mark.parametrize(
    "name", ["accuracy", "f1_score", "precision", "recall", "false_positive_rate"],
)
def test_metric_bounds(name):
    assert collect_violations(_valid(**{name: 0.0})) == {}
    assert collect_violations(_valid(**{name: 1.0})) == {}
    assert set(collect_violations(_valid(**{name: 1.5}))) == {name}
    assert set(collect_violations(_valid(**{name: -0.5}))) == {name}


def test_missing_optional_metrics_are_fine():
    data = _valid()
    del data["accuracy"]
    assert collect_violations(data) == {}


def test_measurements_are_unconstrained():
    assert collect_violations(_valid(snr=-3.0, planet_radius=1e6)) == {}


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_measurements_must_be_finite(value):
    errors = collect_violations(_valid(snr=value, orbital_period=value))
    assert errors == {
        "snr": "SNR must be a finite number",
        "orbital_period": "Orbital period must be a finite number",
    }


def test_bool_is_not_a_number():
    errors = collect_violations(_valid(snr=True, accuracy=False))
    assert errors == {
        "snr": "SNR must be a number",
        "accuracy": "Accuracy must be a number",
    }


def test_unknown_labels_rejected():
    errors = collect_violations(
        _valid(classification="Maybe", confidence_level="Sure"),
    )
    assert set(errors) == {"classification", "confidence_level"}
    assert "Confirmed Exoplanet" in errors["classification"]


def test_blank_label_is_missing():
    errors = collect_violations(_valid(classification="   "))
    assert errors == {"classification": "Classification is required"}


def test_enum_members_accepted():
    data = _valid(
        classification=Classification.FALSE_POSITIVE,
        confidence_level=ConfidenceLevel.VERY_LOW,
    )
    assert collect_violations(data) == {}


def test_validate_raises_with_all_fields():
    with pytest.raises(ValidationError) as exc:
        validate_analysis_input(_valid(probability=150.0, accuracy=1.5))
    assert set(exc.value.errors) == {"probability", "accuracy"}
    assert exc.value.http_status == 400
