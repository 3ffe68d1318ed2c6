"""Stored analysis routes: dashboard listing, detail and review status."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_store
from api.schemas.analysis import (
    AnalysisDetail,
    AnalysisSummary,
    StatusUpdateResponse,
)
from treatment_assistant.errors import NotFoundError
from treatment_assistant.models.analysis import AnalysisRecord
from treatment_assistant.storage.analysis_store import AnalysisStore

router = APIRouter()


def _summary(record: AnalysisRecord) -> AnalysisSummary:
    return AnalysisSummary(
        id=record.id,
        patient_name=record.patient_name,
        primary_complaint=record.primary_complaint,
        risk_score=record.risk_score,
        status=record.status.value,
        created_at=record.created_at,
    )


@router.get("/analyses", response_model=list[AnalysisSummary], response_model_by_alias=True)
async def list_analyses(
    status: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    store: AnalysisStore = Depends(get_store),
) -> list[AnalysisSummary]:
    """List stored analyses, newest first."""
    return [_summary(r) for r in store.list_analyses(status=status, limit=limit)]


@router.get("/analyses/{analysis_id}", response_model=AnalysisDetail, response_model_by_alias=True)
async def get_analysis(
    analysis_id: str,
    store: AnalysisStore = Depends(get_store),
) -> AnalysisDetail:
    """Get a stored analysis by ID."""
    record = store.get(analysis_id)
    if record is None:
        raise NotFoundError("Analysis not found")

    return AnalysisDetail(
        **_summary(record).model_dump(),
        treatment_plan=record.treatment_plan,
        patient_data=record.patient_data,
        metadata=record.metadata,
    )


@router.post("/analyses/{analysis_id}/status", response_model=StatusUpdateResponse)
async def update_status(
    analysis_id: str,
    request: Request,
    store: AnalysisStore = Depends(get_store),
) -> StatusUpdateResponse:
    """
    Change the review status of an analysis.

    Body: {"status": "pending" | "approved" | "modified" | "rejected"}.
    Anything else, including a missing or non-JSON body, is rejected with
    "Invalid status" before the store is touched.
    """
    status = _requested_status(await _read_json(request))
    updated = store.update_status(analysis_id, status)
    if updated is None:
        raise NotFoundError("Analysis not found")

    return StatusUpdateResponse(status=updated.status.value)


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def _requested_status(body: Any) -> Any:
    if isinstance(body, dict):
        return body.get("status")
    return None
