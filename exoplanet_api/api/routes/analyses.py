"""Analysis Routes — HTTP boundary for creating, reading, listing and deleting analyses.

Invariants:
    - Routes never contain business logic: parameters go through core/analysis_query,
      everything else through AnalysisService
    - Query parameters use wire names (filterField, sortBy, minProbability...)
    - Fixed paths (/all, /probability, /stats/...) registered before /{analysis_id}
    - DELETE responses carry no body (204)

Design Decisions:
    - Filtered shortcut routes (/classification, /confidence, /probability) kept for
      existing clients; they build the same single-dimension AnalysisQuery as GET ""
    - Page/size bounds checked in core (InvalidQueryError), not with Query(ge=...),
      so the error shape matches direct service callers
"""

import logging

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from exoplanet_api.config import get_settings
from exoplanet_api.core.analysis_query import build_analysis_query
from exoplanet_api.core.domain_types import AnalysisId, FilterField, SortDirection
from exoplanet_api.infrastructure.analysis_repository import SqlAnalysisRepository
from exoplanet_api.infrastructure.database import get_db
from exoplanet_api.schemas.analysis import (
    AnalysisCreate, AnalysisPageResponse, AnalysisResponse, ClassificationStats,
)
from exoplanet_api.services.analysis_service import AnalysisService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/analyses", tags=["analyses"])


def get_analysis_service(db: AsyncSession = Depends(get_db)) -> AnalysisService:
    """Per-request service bound to the request's DB session."""
    return AnalysisService(SqlAnalysisRepository(db))


@router.post(
    "", response_model=AnalysisResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_analysis(
    body: AnalysisCreate,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Save an exoplanet analysis result."""
    return await service.save(body)


@router.get("", response_model=AnalysisPageResponse)
async def list_analyses(
    filter_field: str | None = Query(None, alias="filterField"),
    filter_value: str | None = Query(None, alias="filterValue"),
    sort_by: str = Query("id", alias="sortBy"),
    sort_direction: str = Query("DESC", alias="sortDirection"),
    page: int = Query(0),
    size: int | None = Query(None),
    service: AnalysisService = Depends(get_analysis_service),
):
    """List analyses, optionally filtered on one dimension, sorted and paginated."""
    settings = get_settings()
    query = build_analysis_query(
        filter_field, filter_value, sort_by, sort_direction,
        page, size if size is not None else settings.default_page_size,
        max_size=settings.max_page_size,
    )
    return await service.list_analyses(query)


@router.get(
    "/classification/{classification}", response_model=AnalysisPageResponse,
)
async def list_by_classification(
    classification: str,
    page: int = Query(0),
    size: int | None = Query(None),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Analyses with an exact classification, newest first."""
    return await _list_filtered(
        service, FilterField.CLASSIFICATION, classification,
        "created_at", page, size,
    )


@router.get(
    "/confidence/{confidence_level}", response_model=AnalysisPageResponse,
)
async def list_by_confidence_level(
    confidence_level: str,
    page: int = Query(0),
    size: int | None = Query(None),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Analyses with an exact confidence level, newest first."""
    return await _list_filtered(
        service, FilterField.CONFIDENCE_LEVEL, confidence_level,
        "created_at", page, size,
    )


@router.get("/probability", response_model=AnalysisPageResponse)
async def list_by_min_probability(
    min_probability: float = Query(..., alias="minProbability"),
    page: int = Query(0),
    size: int | None = Query(None),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Analyses with probability >= threshold, most probable first."""
    return await _list_filtered(
        service, FilterField.MIN_PROBABILITY, min_probability,
        "probability", page, size,
    )


@router.get("/high-confidence", response_model=list[AnalysisResponse])
async def list_high_confidence(
    min_probability: float = Query(..., alias="minProbability"),
    min_accuracy: float = Query(..., alias="minAccuracy"),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Analyses at or above both probability and accuracy thresholds."""
    return await service.find_high_confidence(min_probability, min_accuracy)


@router.get("/stats/classification", response_model=ClassificationStats)
async def classification_stats(
    service: AnalysisService = Depends(get_analysis_service),
):
    """Record count per classification label."""
    return await service.count_by_classification()


@router.get("/{analysis_id}", response_model=AnalysisResponse)
async def get_analysis(
    analysis_id: int,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Get one analysis by id."""
    return await service.find_by_id(AnalysisId(analysis_id))


@router.delete("/all", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_analyses(
    service: AnalysisService = Depends(get_analysis_service),
):
    """Delete every analysis. Succeeds on an empty store."""
    await service.delete_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{analysis_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_analysis(
    analysis_id: int,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Delete one analysis; 404 if it does not exist."""
    await service.delete_by_id(AnalysisId(analysis_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_analyses(
    ids: list[int] = Body(...),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Delete several analyses. Unknown ids are ignored."""
    await service.delete_by_ids(AnalysisId(i) for i in ids)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _list_filtered(
    service: AnalysisService,
    filter_field: FilterField,
    filter_value: object,
    sort_by: str,
    page: int,
    size: int | None,
) -> AnalysisPageResponse:
    settings = get_settings()
    query = build_analysis_query(
        filter_field, filter_value, sort_by, SortDirection.DESC,
        page, size if size is not None else settings.default_page_size,
        max_size=settings.max_page_size,
    )
    return await service.list_analyses(query)
