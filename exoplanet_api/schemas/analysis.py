"""Analysis Schemas — Pydantic request/response shapes for the analysis boundary.

Invariants:
    - Wire names are camelCase (orbitalPeriod, f1Score, createdAt); Python attributes snake_case
    - populate_by_name=True: both spellings accepted on input, mapping is lossless both ways
    - AnalysisCreate only checks types; field rules (required, ranges, vocabulary)
      are enforced by core/validate_analysis.py so every violation is reported at once
    - chartData is opaque: any JSON value, stored verbatim

Design Decisions:
    - alias_generator over per-field aliases: one rule, no drift when fields are added
    - AnalysisCreate has no id/createdAt fields: both are server-assigned (extra keys ignored)
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisCreate(_CamelModel):
    """Analysis creation input — presence and ranges validated by the service."""
    orbital_period: float | None = None
    transit_duration: float | None = None
    transit_depth: float | None = None
    snr: float | None = None
    planet_radius: float | None = None
    probability: float | None = None
    accuracy: float | None = None
    f1_score: float | None = None
    precision: float | None = None
    recall: float | None = None
    false_positive_rate: float | None = None
    classification: str | None = None
    confidence_level: str | None = None
    chart_data: Any = None


class AnalysisResponse(_CamelModel):
    """Analysis response — stored record with chart data decoded."""
    id: int
    orbital_period: float
    transit_duration: float
    transit_depth: float
    snr: float
    planet_radius: float
    probability: float
    accuracy: float | None = None
    f1_score: float | None = None
    precision: float | None = None
    recall: float | None = None
    false_positive_rate: float | None = None
    classification: str
    confidence_level: str
    chart_data: Any = None
    created_at: datetime


class AnalysisPageResponse(_CamelModel):
    """One page of analyses plus navigation counts."""
    items: list[AnalysisResponse] = Field(default_factory=list)
    total_elements: int
    total_pages: int
    page_number: int
    page_size: int


class ClassificationStats(_CamelModel):
    """Record count per classification label."""
    counts: dict[str, int]
    total: int
