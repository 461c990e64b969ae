"""Chart Data Codec — strict encode, lenient decode.

Tests cover:
    - JSON-native documents survive encode → decode unchanged
    - unsupported values, non-string keys, cycles and NaN raise SerializationError
    - malformed text decodes to None and is logged
"""

import logging
import math

import pytest

from exoplanet_api.core.chart_data import decode_chart_data, encode_chart_data
from exoplanet_api.core.errors import SerializationError


def test_none_stays_none_both_ways():
    assert encode_chart_data(None) is None
    assert decode_chart_data(None) is None


def test_nested_document_round_trips():
    doc = {
        "lightCurve": {"time": [0, 0.5, 1.0], "flux": [1.0, 0.97, 1.0]},
        "labels": ["a", "ä", "天"],
        "flags": {"folded": True, "binned": False, "note": None},
    }
    assert decode_chart_data(encode_chart_data(doc)) == doc


def test_scalar_documents_are_allowed():
    assert decode_chart_data(encode_chart_data("just text")) == "just text"
    assert decode_chart_data(encode_chart_data(42)) == 42


def test_encode_keeps_non_ascii_verbatim():
    assert encode_chart_data({"name": "Kepler-186f ✓"}) == '{"name": "Kepler-186f ✓"}'


def test_unsupported_type_raises():
    with pytest.raises(SerializationError):
        encode_chart_data({"bins": {1, 2}})


def test_non_string_key_raises():
    with pytest.raises(SerializationError) as exc:
        encode_chart_data({"series": {1: "first"}})
    assert "keys must be strings" in exc.value.message


def test_cycle_raises():
    items: list = []
    items.append(items)
    with pytest.raises(SerializationError):
        encode_chart_data({"items": items})


def test_shared_substructure_is_not_a_cycle():
    shared = {"x": 1}
    doc = {"a": shared, "b": shared}
    assert decode_chart_data(encode_chart_data(doc)) == {"a": {"x": 1}, "b": {"x": 1}}


def test_nan_raises():
    with pytest.raises(SerializationError):
        encode_chart_data({"flux": [1.0, math.nan]})


def test_malformed_text_decodes_to_none(caplog):
    with caplog.at_level(logging.ERROR, logger="exoplanet_api.core.chart_data"):
        assert decode_chart_data('{"flux": [1, 2') is None
    assert "Failed to parse stored chart data" in caplog.text


def test_empty_text_decodes_to_none():
    assert decode_chart_data("") is None


def test_deeply_nested_document_raises():
    doc: list = []
    for _ in range(5000):
        doc = [doc]
    with pytest.raises(SerializationError):
        encode_chart_data(doc)


def test_tuples_encode_as_arrays():
    text = encode_chart_data({"range": (0.5, 1.5)})
    assert text == '{"range": [0.5, 1.5]}'
    assert decode_chart_data(text) == {"range": [0.5, 1.5]}
