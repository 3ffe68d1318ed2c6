"""Analysis API schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Responses use camelCase keys like the rest of the wire format."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisMetadataResponse(CamelModel):
    provider: str
    model: str
    enriched_medications_count: int
    timestamp: str


class AnalyzeResponse(CamelModel):
    """Successful analysis envelope."""
    success: bool = True
    treatment_plan: dict[str, Any] = Field(..., description="Validated treatment analysis")
    analysis_id: Optional[str] = None
    metadata: AnalysisMetadataResponse


class StatusUpdateResponse(BaseModel):
    success: bool = True
    status: str


class AnalysisSummary(CamelModel):
    """Dashboard row for a stored analysis."""
    id: str
    patient_name: Optional[str] = None
    primary_complaint: Optional[str] = None
    risk_score: Optional[str] = None
    status: str
    created_at: datetime


class AnalysisDetail(AnalysisSummary):
    """Full stored analysis."""
    treatment_plan: dict[str, Any]
    patient_data: dict[str, Any]
    metadata: dict[str, Any]
