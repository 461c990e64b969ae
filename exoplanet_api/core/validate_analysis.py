"""Analysis Input Validation — pure field checks, all violations reported at once.

Invariants:
    - collect_violations is PURE: returns field -> message, never raises
    - Every violated field appears in the result (not just the first)
    - Required measurements are unbounded but must be finite (no NaN or ±inf)
    - probability bounds are inclusive [0, 100]; optional metrics inclusive [0, 1]
    - Labels must belong to the closed Classification / ConfidenceLevel vocabularies
    - Field keys are internal (snake_case) names from domain_types

Design Decisions:
    - Validation lives in core instead of only in pydantic Field constraints:
      the service is callable without the HTTP boundary and must enforce the same rules
    - bool is rejected as a number even though it subclasses int in Python
"""

import math
from collections.abc import Mapping

from exoplanet_api.core.domain_types import (
    Classification, ConfidenceLevel, REQUIRED_MEASUREMENTS, OPTIONAL_METRICS,
)
from exoplanet_api.core.errors import ValidationError


PROBABILITY_MIN: float = 0.0
PROBABILITY_MAX: float = 100.0
METRIC_MIN: float = 0.0
METRIC_MAX: float = 1.0

_LABELS: dict[str, str] = {
    "orbital_period": "Orbital period",
    "transit_duration": "Transit duration",
    "transit_depth": "Transit depth",
    "snr": "SNR",
    "planet_radius": "Planet radius",
    "probability": "Probability",
    "accuracy": "Accuracy",
    "f1_score": "F1 score",
    "precision": "Precision",
    "recall": "Recall",
    "false_positive_rate": "False positive rate",
    "classification": "Classification",
    "confidence_level": "Confidence level",
}


def collect_violations(data: Mapping[str, object]) -> dict[str, str]:
    """Check every field of an analysis input. Pure — returns violations only."""
    errors: dict[str, str] = {}

    for name in REQUIRED_MEASUREMENTS:
        value = data.get(name)
        message = _check_required_number(name, value)
        if message is None and isinstance(value, float) and not math.isfinite(value):
            message = f"{_LABELS[name]} must be a finite number"
        if message:
            errors[name] = message

    message = _check_required_number("probability", data.get("probability"))
    if message is None and not _in_range(
        data["probability"], PROBABILITY_MIN, PROBABILITY_MAX,
    ):
        message = "Probability must be between 0 and 100"
    if message:
        errors["probability"] = message

    for name in OPTIONAL_METRICS:
        value = data.get(name)
        if value is None:
            continue
        if not _is_number(value):
            errors[name] = f"{_LABELS[name]} must be a number"
        elif not _in_range(value, METRIC_MIN, METRIC_MAX):
            errors[name] = f"{_LABELS[name]} must be between 0 and 1"

    message = _check_label(
        "classification", data.get("classification"), Classification,
    )
    if message:
        errors["classification"] = message

    message = _check_label(
        "confidence_level", data.get("confidence_level"), ConfidenceLevel,
    )
    if message:
        errors["confidence_level"] = message

    return errors


def validate_analysis_input(data: Mapping[str, object]) -> None:
    """Raise ValidationError listing every violated field, if any."""
    errors = collect_violations(data)
    if errors:
        raise ValidationError(errors)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _in_range(value, low: float, high: float) -> bool:
    return not math.isnan(value) and low <= value <= high


def _check_required_number(name: str, value: object) -> str | None:
    if value is None:
        return f"{_LABELS[name]} is required"
    if not _is_number(value):
        return f"{_LABELS[name]} must be a number"
    return None


def _check_label(name: str, value: object, vocabulary: type) -> str | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return f"{_LABELS[name]} is required"
    allowed = [member.value for member in vocabulary]
    if isinstance(value, vocabulary) or value in allowed:
        return None
    return f"{_LABELS[name]} must be one of: {', '.join(allowed)}"
