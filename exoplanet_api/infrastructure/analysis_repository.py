"""Analysis Repository — SQLAlchemy implementation of the AnalysisRepository protocol.

Invariants:
    - Owns the durable representation: callers receive ORM rows, never build SQL
    - transaction() commits on normal exit, rolls back on every exceptional exit
    - delete_by_ids ignores ids that are not stored; an empty id set is a no-op
    - list_page() always appends id as tie-breaker so pagination is stable
    - Sort field is re-checked against SORTABLE_FIELDS (never getattr on raw input)

Design Decisions:
    - Single-statement bulk deletes (DELETE ... WHERE id IN): atomic, no per-row loads
    - Count and page are two statements inside the caller's transaction
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from exoplanet_api.core.analysis_query import (
    AnalysisQuery, Criterion, SORTABLE_FIELDS, total_pages,
)
from exoplanet_api.core.domain_types import AnalysisId, FilterField, SortDirection
from exoplanet_api.core.errors import InvalidQueryError
from exoplanet_api.core.repository_protocols import Page
from exoplanet_api.models.exoplanet_analysis import ExoplanetAnalysis


class SqlAnalysisRepository:
    """AnalysisRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[None, None]:
        """One unit of work: commit on success, rollback on any failure."""
        try:
            yield
        except BaseException:
            await self.db.rollback()
            raise
        else:
            await self.db.commit()

    async def insert(self, values: dict) -> ExoplanetAnalysis:
        record = ExoplanetAnalysis(**values)
        self.db.add(record)
        await self.db.flush()
        return record

    async def get_by_id(self, analysis_id: AnalysisId) -> ExoplanetAnalysis | None:
        result = await self.db.execute(
            select(ExoplanetAnalysis).where(ExoplanetAnalysis.id == analysis_id),
        )
        return result.scalar_one_or_none()

    async def delete_by_id(self, analysis_id: AnalysisId) -> bool:
        result = await self.db.execute(
            delete(ExoplanetAnalysis).where(ExoplanetAnalysis.id == analysis_id),
        )
        return result.rowcount > 0

    async def delete_by_ids(self, analysis_ids: set[AnalysisId]) -> int:
        if not analysis_ids:
            return 0
        result = await self.db.execute(
            delete(ExoplanetAnalysis).where(
                ExoplanetAnalysis.id.in_(sorted(analysis_ids)),
            ),
        )
        return result.rowcount

    async def delete_all(self) -> int:
        result = await self.db.execute(delete(ExoplanetAnalysis))
        return result.rowcount

    async def count(self) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(ExoplanetAnalysis),
        )
        return result.scalar_one()

    async def list_page(self, query: AnalysisQuery) -> Page[ExoplanetAnalysis]:
        """Filtered, sorted, paginated listing plus totals."""
        if query.sort.field not in SORTABLE_FIELDS:
            raise InvalidQueryError(
                f"Unknown sort field '{query.sort.field}'", "sort_by",
            )
        conditions = [_to_condition(c) for c in query.criteria]

        count_stmt = select(func.count()).select_from(ExoplanetAnalysis)
        stmt = select(ExoplanetAnalysis)
        if conditions:
            count_stmt = count_stmt.where(*conditions)
            stmt = stmt.where(*conditions)

        order = asc if query.sort.direction is SortDirection.ASC else desc
        ordering = [order(getattr(ExoplanetAnalysis, query.sort.field))]
        if query.sort.field != "id":
            ordering.append(order(ExoplanetAnalysis.id))
        stmt = (
            stmt.order_by(*ordering)
            .offset(query.page.offset)
            .limit(query.page.size)
        )

        total = (await self.db.execute(count_stmt)).scalar_one()
        items = list((await self.db.execute(stmt)).scalars().all())
        return Page(
            items=items,
            total_elements=total,
            total_pages=total_pages(total, query.page.size),
            page_number=query.page.page,
            page_size=query.page.size,
        )

    async def count_by_classification(self) -> dict[str, int]:
        result = await self.db.execute(
            select(ExoplanetAnalysis.classification, func.count())
            .group_by(ExoplanetAnalysis.classification)
            .order_by(ExoplanetAnalysis.classification),
        )
        return {label: count for label, count in result.all()}

    async def find_high_confidence(
        self, min_probability: float, min_accuracy: float,
    ) -> list[ExoplanetAnalysis]:
        """Records with probability >= p AND accuracy >= a (NULL accuracy never matches)."""
        result = await self.db.execute(
            select(ExoplanetAnalysis)
            .where(ExoplanetAnalysis.probability >= min_probability)
            .where(ExoplanetAnalysis.accuracy >= min_accuracy)
            .order_by(
                ExoplanetAnalysis.probability.desc(),
                ExoplanetAnalysis.id.desc(),
            ),
        )
        return list(result.scalars().all())


def _to_condition(criterion: Criterion):
    if criterion.field is FilterField.CLASSIFICATION:
        return ExoplanetAnalysis.classification == criterion.value.value
    if criterion.field is FilterField.CONFIDENCE_LEVEL:
        return ExoplanetAnalysis.confidence_level == criterion.value.value
    return ExoplanetAnalysis.probability >= criterion.value
