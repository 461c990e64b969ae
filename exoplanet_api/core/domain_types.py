"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AnalysisId wraps the store-assigned integer; never use a bare int in domain logic
    - Classification and ConfidenceLevel are closed vocabularies (unknown labels rejected)
    - RECORD_FIELDS is the single source of truth for internal field names (snake_case)
    - ChartValue is the JSON-like document model: null/bool/number/string/list/map

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, compare equal to their label
    - Vocabulary keeps observed variants (Weak Candidate / Weak Signal, Moderate / Medium)
      so existing producers keep working (ADR: closed set, but not narrower than observed)
"""

from enum import Enum
from typing import NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

AnalysisId = NewType("AnalysisId", int)


# ─── Value Types ─────────────────────────────────────────────────

ChartValue = Union[
    None, bool, int, float, str,
    list["ChartValue"], dict[str, "ChartValue"],
]


# ─── Enums ───────────────────────────────────────────────────────

class Classification(str, Enum):
    """Categorical verdict label on an analysis record."""
    CONFIRMED_EXOPLANET = "Confirmed Exoplanet"
    STRONG_CANDIDATE = "Strong Candidate"
    WEAK_CANDIDATE = "Weak Candidate"
    WEAK_SIGNAL = "Weak Signal"
    POTENTIAL_CANDIDATE = "Potential Candidate"
    UNLIKELY_DETECTION = "Unlikely Detection"
    FALSE_POSITIVE = "False Positive"


class ConfidenceLevel(str, Enum):
    """Categorical certainty label paired with a classification."""
    VERY_HIGH = "Very High"
    HIGH = "High"
    MODERATE = "Moderate"
    MEDIUM = "Medium"
    LOW = "Low"
    VERY_LOW = "Very Low"


class SortDirection(str, Enum):
    """Listing sort direction."""
    ASC = "ASC"
    DESC = "DESC"


class FilterField(str, Enum):
    """The single query axis a listing call may select."""
    CLASSIFICATION = "classification"
    CONFIDENCE_LEVEL = "confidence_level"
    MIN_PROBABILITY = "min_probability"


# ─── Field Names ─────────────────────────────────────────────────

REQUIRED_MEASUREMENTS: tuple[str, ...] = (
    "orbital_period", "transit_duration", "transit_depth",
    "snr", "planet_radius",
)
OPTIONAL_METRICS: tuple[str, ...] = (
    "accuracy", "f1_score", "precision", "recall", "false_positive_rate",
)
RECORD_FIELDS: tuple[str, ...] = (
    "id",
    *REQUIRED_MEASUREMENTS,
    "probability",
    *OPTIONAL_METRICS,
    "classification",
    "confidence_level",
    "chart_data",
    "created_at",
)
