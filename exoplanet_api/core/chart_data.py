"""Chart Data Codec — encodes the opaque visualization document to text and back.

Invariants:
    - encode_chart_data is strict: unrepresentable documents raise SerializationError
    - decode_chart_data never raises: malformed text is logged and yields None
    - None in, None out on both sides (absent chart data stays absent)
    - Only JSON-native values survive: null/bool/number/string/list/map with str keys
    - Tuples are accepted as arrays and decode back as lists

Design Decisions:
    - Asymmetry is deliberate: a corrupted stored payload must never block
      retrieval of the rest of the record, but a bad payload must never be stored
    - allow_nan=False: NaN/Infinity have no JSON text form, so they are rejected
      at write time rather than producing text other parsers refuse
"""

import json
import logging

from exoplanet_api.core.domain_types import ChartValue
from exoplanet_api.core.errors import SerializationError

logger = logging.getLogger(__name__)


def encode_chart_data(document: ChartValue) -> str | None:
    """Serialize a chart document to JSON text. Raises SerializationError."""
    if document is None:
        return None
    try:
        _check_keys(document, set())
        return json.dumps(document, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        logger.error(f"Failed to convert chart data to JSON: {e}")
        raise SerializationError(str(e)) from e


def decode_chart_data(text: str | None) -> ChartValue:
    """Parse stored chart text. Malformed text degrades to None."""
    if text is None:
        return None
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.error(
            f"Failed to parse stored chart data, returning None: {e}",
        )
        return None


def _check_keys(value: object, seen: set[int]) -> None:
    """Reject non-string map keys (json.dumps would silently stringify them)."""
    if isinstance(value, dict):
        if id(value) in seen:
            raise SerializationError("Circular reference detected")
        seen.add(id(value))
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(
                    f"map keys must be strings, got {type(key).__name__}",
                )
            _check_keys(item, seen)
        seen.discard(id(value))
    elif isinstance(value, (list, tuple)):
        if id(value) in seen:
            raise SerializationError("Circular reference detected")
        seen.add(id(value))
        for item in value:
            _check_keys(item, seen)
        seen.discard(id(value))
