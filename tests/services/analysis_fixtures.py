"""Analysis fixture factories — canonical inputs shared by store, service and route tests.

Each factory returns a fresh dict of internal (snake_case) field names;
keyword overrides replace or add fields.
"""

from pydantic.alias_generators import to_camel


def strong_candidate(**overrides) -> dict:
    data = {
        "orbital_period": 10.5,
        "transit_duration": 3.2,
        "transit_depth": 1.5,
        "snr": 15.0,
        "planet_radius": 2.1,
        "probability": 75.5,
        "accuracy": 0.85,
        "f1_score": 0.83,
        "precision": 0.88,
        "recall": 0.79,
        "false_positive_rate": 0.05,
        "classification": "Strong Candidate",
        "confidence_level": "High",
        "chart_data": None,
    }
    data.update(overrides)
    return data


def confirmed_exoplanet(**overrides) -> dict:
    data = {
        "orbital_period": 365.25,
        "transit_duration": 4.5,
        "transit_depth": 1.2,
        "snr": 20.0,
        "planet_radius": 1.0,
        "probability": 95.8,
        "accuracy": 0.95,
        "f1_score": 0.92,
        "precision": 0.93,
        "recall": 0.91,
        "false_positive_rate": 0.02,
        "classification": "Confirmed Exoplanet",
        "confidence_level": "Very High",
        "chart_data": {
            "lightCurve": {"time": [0.0, 0.5, 1.0], "flux": [1.0, 0.98, 1.0]},
            "featureImportance": [
                {"name": "snr", "value": 0.41},
                {"name": "transit_depth", "value": 0.27},
            ],
            "annotated": True,
            "note": None,
        },
    }
    data.update(overrides)
    return data


def weak_signal(**overrides) -> dict:
    data = {
        "orbital_period": 5.2,
        "transit_duration": 1.8,
        "transit_depth": 0.3,
        "snr": 5.0,
        "planet_radius": 0.8,
        "probability": 25.3,
        "accuracy": 0.65,
        "f1_score": 0.60,
        "precision": 0.62,
        "recall": 0.58,
        "false_positive_rate": 0.15,
        "classification": "Weak Signal",
        "confidence_level": "Low",
        "chart_data": None,
    }
    data.update(overrides)
    return data


def to_wire(data: dict) -> dict:
    """Internal names → camelCase request body."""
    return {to_camel(k): v for k, v in data.items()}
