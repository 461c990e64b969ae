"""Analysis Service — orchestrates validation, chart-data codec and the record store.

Invariants:
    - Every operation runs its store calls inside exactly one repository.transaction()
    - save validates BEFORE encoding, and encodes BEFORE inserting: a record is never
      persisted with chart data that failed to encode
    - Responses always carry chart data decoded from the stored text (read/write symmetry)
    - Per-item decode failures yield chartData=None, never abort a page
    - delete_by_id checks existence explicitly so NotFoundError carries the id
    - delete_by_ids and delete_all never fail because ids are missing or the store is empty
    - No update operation: records are append/delete only

Design Decisions:
    - Impureim sandwich: pure checks in core/ (validate_analysis, analysis_query),
      IO through the AnalysisRepository protocol (ADR: testable without a database)
    - Service returns schema objects, not ORM rows: callers never hold store-owned state
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from pydantic import BaseModel

from exoplanet_api.core.analysis_query import AnalysisQuery
from exoplanet_api.core.chart_data import decode_chart_data, encode_chart_data
from exoplanet_api.core.domain_types import (
    AnalysisId, Classification, ConfidenceLevel,
    REQUIRED_MEASUREMENTS, OPTIONAL_METRICS,
)
from exoplanet_api.core.errors import NotFoundError
from exoplanet_api.core.repository_protocols import (
    AnalysisRecordLike, AnalysisRepository,
)
from exoplanet_api.core.validate_analysis import validate_analysis_input
from exoplanet_api.schemas.analysis import (
    AnalysisCreate, AnalysisPageResponse, AnalysisResponse, ClassificationStats,
)

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "Exoplanet analysis"


class AnalysisService:
    """Business rules for exoplanet analysis records."""

    def __init__(self, repository: AnalysisRepository):
        self.repository = repository

    async def save(self, data: AnalysisCreate | Mapping) -> AnalysisResponse:
        """Validate, encode chart data, persist, return the stored record."""
        values = (
            data.model_dump() if isinstance(data, BaseModel) else dict(data)
        )
        logger.info(
            f"Saving exoplanet analysis: classification={values.get('classification')}, "
            f"probability={values.get('probability')}",
        )
        validate_analysis_input(values)
        chart_text = encode_chart_data(values.get("chart_data"))

        row = {name: values[name] for name in REQUIRED_MEASUREMENTS}
        row["probability"] = values["probability"]
        row.update({name: values.get(name) for name in OPTIONAL_METRICS})
        row["classification"] = Classification(values["classification"]).value
        row["confidence_level"] = ConfidenceLevel(
            values["confidence_level"],
        ).value
        row["chart_data"] = chart_text

        async with self.repository.transaction():
            record = await self.repository.insert(row)
        logger.info(
            f"Saved exoplanet analysis with id: {record.id}",
            extra={"analysis_id": record.id},
        )
        return to_analysis_response(record)

    async def find_by_id(self, analysis_id: AnalysisId) -> AnalysisResponse:
        async with self.repository.transaction():
            record = await self.repository.get_by_id(analysis_id)
        if record is None:
            logger.warning(
                f"Exoplanet analysis not found with id: {analysis_id}",
                extra={"analysis_id": analysis_id},
            )
            raise NotFoundError(RESOURCE_TYPE, analysis_id)
        return to_analysis_response(record)

    async def list_analyses(
        self, query: AnalysisQuery | None = None,
    ) -> AnalysisPageResponse:
        """Filtered, sorted, paginated listing with chart data decoded per item."""
        query = query or AnalysisQuery()
        logger.info(
            f"Listing exoplanet analyses: criteria={len(query.criteria)}, "
            f"sort={query.sort.field} {query.sort.direction.value}, "
            f"page={query.page.page}, size={query.page.size}",
        )
        async with self.repository.transaction():
            page = await self.repository.list_page(query)
        logger.info(
            f"Found {page.total_elements} exoplanet analyses",
            extra={"count": page.total_elements},
        )
        page = page.map(to_analysis_response)
        return AnalysisPageResponse(
            items=page.items,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            page_number=page.page_number,
            page_size=page.page_size,
        )

    async def delete_by_id(self, analysis_id: AnalysisId) -> None:
        logger.info(
            f"Deleting exoplanet analysis with id: {analysis_id}",
            extra={"analysis_id": analysis_id},
        )
        async with self.repository.transaction():
            if await self.repository.get_by_id(analysis_id) is None:
                logger.warning(
                    f"Cannot delete - exoplanet analysis not found with id: {analysis_id}",
                    extra={"analysis_id": analysis_id},
                )
                raise NotFoundError(RESOURCE_TYPE, analysis_id)
            await self.repository.delete_by_id(analysis_id)
        logger.info(
            f"Deleted exoplanet analysis with id: {analysis_id}",
            extra={"analysis_id": analysis_id},
        )

    async def delete_by_ids(self, analysis_ids: Iterable[AnalysisId]) -> int:
        """Best-effort bulk delete. Unknown ids are ignored. Returns rows removed."""
        ids = set(analysis_ids)
        logger.info(f"Deleting {len(ids)} exoplanet analyses", extra={"count": len(ids)})
        async with self.repository.transaction():
            removed = await self.repository.delete_by_ids(ids)
        logger.info(
            f"Deleted {removed} of {len(ids)} requested exoplanet analyses",
            extra={"count": removed},
        )
        return removed

    async def delete_all(self) -> int:
        logger.info("Deleting all exoplanet analyses")
        async with self.repository.transaction():
            removed = await self.repository.delete_all()
        logger.info(
            f"Deleted {removed} exoplanet analyses", extra={"count": removed},
        )
        return removed

    async def count(self) -> int:
        async with self.repository.transaction():
            return await self.repository.count()

    async def count_by_classification(self) -> ClassificationStats:
        async with self.repository.transaction():
            counts = await self.repository.count_by_classification()
        return ClassificationStats(counts=counts, total=sum(counts.values()))

    async def find_high_confidence(
        self, min_probability: float, min_accuracy: float,
    ) -> list[AnalysisResponse]:
        """Records at or above both the probability and accuracy thresholds."""
        logger.info(
            f"Finding high-confidence analyses: probability >= {min_probability}, "
            f"accuracy >= {min_accuracy}",
        )
        async with self.repository.transaction():
            records = await self.repository.find_high_confidence(
                min_probability, min_accuracy,
            )
        return [to_analysis_response(r) for r in records]


def to_analysis_response(record: AnalysisRecordLike) -> AnalysisResponse:
    """Entity → response, decoding chart data (malformed text → None)."""
    return AnalysisResponse(
        id=record.id,
        orbital_period=record.orbital_period,
        transit_duration=record.transit_duration,
        transit_depth=record.transit_depth,
        snr=record.snr,
        planet_radius=record.planet_radius,
        probability=record.probability,
        accuracy=record.accuracy,
        f1_score=record.f1_score,
        precision=record.precision,
        recall=record.recall,
        false_positive_rate=record.false_positive_rate,
        classification=record.classification,
        confidence_level=record.confidence_level,
        chart_data=decode_chart_data(record.chart_data),
        created_at=_as_utc(record.created_at),
    )


def _as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on read; stored timestamps are always UTC."""
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value
