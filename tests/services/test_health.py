"""Health Probes and Logging — liveness, readiness, JSON log formatting."""

import json
import logging

import exoplanet_api.infrastructure.database as db_module
from exoplanet_api.infrastructure.observability import JSONFormatter


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client):
    db_module.db_manager = None
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


def test_json_formatter_surfaces_extras():
    record = logging.LogRecord(
        "exoplanet_api.services", logging.INFO, __file__, 1,
        "Saved exoplanet analysis with id: %s", (5,), None,
    )
    record.analysis_id = 5
    log = json.loads(JSONFormatter().format(record))
    assert log["message"] == "Saved exoplanet analysis with id: 5"
    assert log["analysis_id"] == 5
    assert log["level"] == "INFO"
    assert "error_code" not in log
