"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - transaction() commits on normal exit and rolls back on every exceptional exit

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - No update method: records are append/delete only (ADR: scope boundary, not an omission)
    - delete_by_id returns bool so callers can tell "removed" from "was never there"
"""

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Protocol, TypeVar

from exoplanet_api.core.analysis_query import AnalysisQuery
from exoplanet_api.core.domain_types import AnalysisId

T = TypeVar("T")


class AnalysisRecordLike(Protocol):
    """Structural contract for stored analysis records handed to the service.

    Avoids coupling the service to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: int
    orbital_period: float
    transit_duration: float
    transit_depth: float
    snr: float
    planet_radius: float
    probability: float
    accuracy: float | None
    f1_score: float | None
    precision: float | None
    recall: float | None
    false_positive_rate: float | None
    classification: str
    confidence_level: str
    chart_data: str | None
    created_at: datetime


@dataclass
class Page(Generic[T]):
    """One page of a listing plus the counts needed to navigate it."""
    items: list[T] = field(default_factory=list)
    total_elements: int = 0
    total_pages: int = 0
    page_number: int = 0
    page_size: int = 0

    def map(self, fn) -> "Page":
        """Transform items, keeping counts (per-item, never aborts the page)."""
        return Page(
            items=[fn(item) for item in self.items],
            total_elements=self.total_elements,
            total_pages=self.total_pages,
            page_number=self.page_number,
            page_size=self.page_size,
        )


class AnalysisRepository(Protocol):
    """Contract for analysis record persistence — implemented by shell."""
    def transaction(self) -> AbstractAsyncContextManager[None]: ...
    async def insert(self, values: dict) -> AnalysisRecordLike: ...
    async def get_by_id(
        self, analysis_id: AnalysisId,
    ) -> AnalysisRecordLike | None: ...
    async def delete_by_id(self, analysis_id: AnalysisId) -> bool: ...
    async def delete_by_ids(self, analysis_ids: set[AnalysisId]) -> int: ...
    async def delete_all(self) -> int: ...
    async def count(self) -> int: ...
    async def list_page(
        self, query: AnalysisQuery,
    ) -> Page[AnalysisRecordLike]: ...
    async def count_by_classification(self) -> dict[str, int]: ...
    async def find_high_confidence(
        self, min_probability: float, min_accuracy: float,
    ) -> list[AnalysisRecordLike]: ...
