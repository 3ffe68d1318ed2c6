"""Analysis submission route."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from api.dependencies import get_pipeline
from api.schemas.analysis import AnalysisMetadataResponse, AnalyzeResponse
from treatment_assistant.pipeline import AnalysisPipeline

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse, response_model_by_alias=True)
async def analyze(
    payload: Any = Body(...),
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> AnalyzeResponse:
    """
    Submit a patient intake and generate a treatment analysis.

    The intake is validated, enriched with RxNorm and openFDA data and sent
    to the configured model. Failures return the error envelope with the
    status mapped from the error kind.
    """
    outcome = await pipeline.analyze(payload)

    return AnalyzeResponse(
        treatment_plan=outcome.result.model_dump(mode="json", by_alias=True, exclude_none=True),
        analysis_id=outcome.analysis_id,
        metadata=AnalysisMetadataResponse(
            provider=outcome.metadata.provider,
            model=outcome.metadata.model,
            enriched_medications_count=outcome.metadata.enriched_medications_count,
            timestamp=outcome.metadata.timestamp,
        ),
    )
