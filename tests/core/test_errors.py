"""Error Hierarchy — codes, statuses and REST envelopes.

Tests:
    - every domain error is an ExoplanetApiError with the documented code/status
    - to_response carries error-specific details
"""

from exoplanet_api.core.errors import (
    DatabaseError, ErrorCategory, ExoplanetApiError, InvalidQueryError,
    NotFoundError, SerializationError, ValidationError,
)


def test_validation_error_envelope():
    err = ValidationError({"probability": "too big", "snr": "missing"})
    body = err.to_response()["error"]
    assert err.http_status == 400
    assert body["code"] == "VALIDATION_ERROR"
    assert body["category"] == ErrorCategory.VALIDATION.value
    assert body["errors"] == {"probability": "too big", "snr": "missing"}
    assert "probability" in body["message"] and "snr" in body["message"]


def test_not_found_carries_id():
    err = NotFoundError("Exoplanet analysis", 42)
    assert err.http_status == 404
    assert err.context.analysis_id == 42
    assert err.to_response()["error"]["resource_id"] == 42
    assert err.message == "Exoplanet analysis not found with id: 42"


def test_invalid_query_carries_parameter():
    err = InvalidQueryError("bad size", "size")
    assert err.http_status == 400
    assert err.to_response()["error"]["parameter"] == "size"


def test_serialization_and_database_errors():
    ser = SerializationError("cycle")
    db = DatabaseError("down", "execute")
    assert ser.http_status == 422
    assert ser.code == "CHART_DATA_SERIALIZATION_ERROR"
    assert db.http_status == 503
    assert db.operation == "execute"


def test_all_errors_share_base():
    for err in (
        ValidationError({}), NotFoundError("x", 1), InvalidQueryError("m", "p"),
        SerializationError("m"), DatabaseError("m", "o"),
    ):
        assert isinstance(err, ExoplanetApiError)
        assert "timestamp" in err.to_response()["error"]
