"""Analysis Query Construction — pure filter, sort and page parameter handling.

Invariants:
    - build_analysis_query is PURE: validates raw parameters, returns an immutable AnalysisQuery
    - At most one filter dimension per query from the external surface
    - Unknown sort fields, unknown filter fields, negative page, size <= 0 → InvalidQueryError
    - Sort fields accept wire (camelCase) and internal (snake_case) names; chart_data is never sortable
    - total_pages(0, size) == 0

Design Decisions:
    - Criteria is a tuple, not a single value: the store contract can AND several
      criteria, even though the service surface only passes one (ADR: keep store general)
    - Filter values are coerced here (label → enum, threshold → float) so the store
      never sees raw strings from the wire
"""

import math
from dataclasses import dataclass

from pydantic.alias_generators import to_camel

from exoplanet_api.core.domain_types import (
    Classification, ConfidenceLevel, FilterField, SortDirection, RECORD_FIELDS,
)
from exoplanet_api.core.errors import InvalidQueryError


DEFAULT_SORT_FIELD: str = "id"
DEFAULT_SORT_DIRECTION: SortDirection = SortDirection.DESC
DEFAULT_PAGE_SIZE: int = 10

SORTABLE_FIELDS: tuple[str, ...] = tuple(
    name for name in RECORD_FIELDS if name != "chart_data"
)
_SORT_ALIASES: dict[str, str] = {
    **{name: name for name in SORTABLE_FIELDS},
    **{to_camel(name): name for name in SORTABLE_FIELDS},
}
_FILTER_ALIASES: dict[str, FilterField] = {
    "classification": FilterField.CLASSIFICATION,
    "confidence_level": FilterField.CONFIDENCE_LEVEL,
    "confidenceLevel": FilterField.CONFIDENCE_LEVEL,
    "probability": FilterField.MIN_PROBABILITY,
    "min_probability": FilterField.MIN_PROBABILITY,
    "minProbability": FilterField.MIN_PROBABILITY,
}


@dataclass(frozen=True)
class Criterion:
    """One filter predicate: exact label match or probability >= threshold."""
    field: FilterField
    value: Classification | ConfidenceLevel | float


@dataclass(frozen=True)
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    direction: SortDirection = DEFAULT_SORT_DIRECTION


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index plus page size."""
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class AnalysisQuery:
    criteria: tuple[Criterion, ...] = ()
    sort: SortSpec = SortSpec()
    page: PageRequest = PageRequest()


def build_criterion(
    filter_field: FilterField | str, filter_value: object,
) -> Criterion:
    """Coerce one raw filter pair into a typed Criterion."""
    field = _resolve_filter_field(filter_field)
    if filter_value is None or (
        isinstance(filter_value, str) and not filter_value.strip()
    ):
        raise InvalidQueryError(
            f"filter '{field.value}' requires a value", "filter_value",
        )
    if field is FilterField.CLASSIFICATION:
        return Criterion(field, _coerce_label(filter_value, Classification))
    if field is FilterField.CONFIDENCE_LEVEL:
        return Criterion(field, _coerce_label(filter_value, ConfidenceLevel))
    return Criterion(field, _coerce_threshold(filter_value))


def build_sort(
    sort_by: str | None = None, direction: SortDirection | str | None = None,
) -> SortSpec:
    """Resolve sort field name and direction. Unknown names are errors."""
    name = sort_by or DEFAULT_SORT_FIELD
    field = _SORT_ALIASES.get(name)
    if field is None:
        raise InvalidQueryError(
            f"Unknown sort field '{name}'. "
            f"Allowed: {', '.join(to_camel(f) for f in SORTABLE_FIELDS)}",
            "sort_by",
        )
    if direction is None:
        return SortSpec(field, DEFAULT_SORT_DIRECTION)
    if isinstance(direction, SortDirection):
        return SortSpec(field, direction)
    try:
        return SortSpec(field, SortDirection(str(direction).upper()))
    except ValueError:
        raise InvalidQueryError(
            f"Unknown sort direction '{direction}'. Allowed: ASC, DESC",
            "sort_direction",
        )


def build_page_request(
    page: int = 0, size: int = DEFAULT_PAGE_SIZE, max_size: int | None = None,
) -> PageRequest:
    """Validate zero-based page index and positive page size."""
    if page < 0:
        raise InvalidQueryError(
            f"Page index must be >= 0, got {page}", "page",
        )
    if size <= 0:
        raise InvalidQueryError(
            f"Page size must be > 0, got {size}", "size",
        )
    if max_size is not None and size > max_size:
        raise InvalidQueryError(
            f"Page size must be <= {max_size}, got {size}", "size",
        )
    return PageRequest(page, size)


def build_analysis_query(
    filter_field: FilterField | str | None = None,
    filter_value: object = None,
    sort_by: str | None = None,
    sort_direction: SortDirection | str | None = None,
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
    max_size: int | None = None,
) -> AnalysisQuery:
    """Build a single-dimension query from raw listing parameters."""
    if filter_field is None and filter_value is not None:
        raise InvalidQueryError(
            "filter_value given without filter_field", "filter_field",
        )
    criteria = ()
    if filter_field is not None:
        criteria = (build_criterion(filter_field, filter_value),)
    return AnalysisQuery(
        criteria=criteria,
        sort=build_sort(sort_by, sort_direction),
        page=build_page_request(page, size, max_size),
    )


def total_pages(total_elements: int, page_size: int) -> int:
    return math.ceil(total_elements / page_size) if total_elements else 0


def _resolve_filter_field(filter_field: FilterField | str) -> FilterField:
    if isinstance(filter_field, FilterField):
        return filter_field
    field = _FILTER_ALIASES.get(filter_field)
    if field is None:
        raise InvalidQueryError(
            f"Unknown filter field '{filter_field}'. "
            "Allowed: classification, confidenceLevel, minProbability",
            "filter_field",
        )
    return field


def _coerce_label(value: object, vocabulary: type):
    try:
        return vocabulary(value)
    except ValueError:
        allowed = ", ".join(member.value for member in vocabulary)
        raise InvalidQueryError(
            f"Unknown label '{value}'. Allowed: {allowed}", "filter_value",
        )


def _coerce_threshold(value: object) -> float:
    try:
        threshold = float(value)
    except (TypeError, ValueError):
        raise InvalidQueryError(
            f"Probability threshold must be a number, got '{value}'",
            "filter_value",
        )
    if not math.isfinite(threshold):
        raise InvalidQueryError(
            f"Probability threshold must be finite, got '{value}'",
            "filter_value",
        )
    return threshold
