"""
Stored analysis runs and their review lifecycle.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ReviewStatus(str, Enum):
    """Review status a clinician assigns to a stored analysis."""

    PENDING = "pending"  # Awaiting review
    APPROVED = "approved"
    MODIFIED = "modified"  # Approved with changes
    REJECTED = "rejected"


class AnalysisRecord(BaseModel):
    """A persisted analysis run. Plan, patient data and metadata are opaque."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    patient_name: Optional[str] = None
    primary_complaint: Optional[str] = None
    risk_score: Optional[str] = None
    status: ReviewStatus = ReviewStatus.PENDING
    treatment_plan: dict[str, Any] = Field(default_factory=dict)
    patient_data: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
