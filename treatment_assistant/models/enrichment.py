"""
Data models for medication enrichment.

These models hold the reference data gathered for each current medication
(RxNorm identifiers and openFDA label sections) before it is rendered into
the model prompt.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from treatment_assistant.models.patient import CurrentMedication, PatientIntakeRecord


class RxNormConcept(BaseModel):
    """Normalized drug identifier from RxNorm."""

    rxcui: str = Field(..., description="RxNorm concept unique identifier")
    name: str = Field(..., description="Canonical drug name")
    synonym: Optional[str] = Field(default=None, description="Alternate name if any")
    tty: Optional[str] = Field(default=None, description="RxNorm term type")


class DrugLabel(BaseModel):
    """Structured drug label sections from openFDA. Absent sections are empty."""

    boxed_warning: list[str] = Field(default_factory=list)
    contraindications: list[str] = Field(default_factory=list)
    drug_interactions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    warnings_and_cautions: list[str] = Field(default_factory=list)
    dosage_and_administration: list[str] = Field(default_factory=list)
    pregnancy: list[str] = Field(default_factory=list)
    nursing_mothers: list[str] = Field(default_factory=list)
    pediatric_use: list[str] = Field(default_factory=list)
    geriatric_use: list[str] = Field(default_factory=list)
    adverse_reactions: list[str] = Field(default_factory=list)
    overdosage: list[str] = Field(default_factory=list)


class EnrichmentStatus(str, Enum):
    """How much reference data was gathered for one medication."""

    COMPLETE = "complete"  # Identifier and label both found
    PARTIAL = "partial"  # Exactly one of them found
    UNAVAILABLE = "unavailable"  # Neither found


class MedicationEnrichment(BaseModel):
    """Reference data for a single user-entered medication."""

    medication: CurrentMedication = Field(..., description="The medication as entered")
    rxnorm: Optional[RxNormConcept] = Field(default=None)
    label: Optional[DrugLabel] = Field(default=None)
    errors: list[str] = Field(
        default_factory=list,
        description="Messages from lookups that failed unexpectedly",
    )

    @property
    def status(self) -> EnrichmentStatus:
        found = sum(1 for item in (self.rxnorm, self.label) if item is not None)
        if found == 2:
            return EnrichmentStatus.COMPLETE
        if found == 1:
            return EnrichmentStatus.PARTIAL
        return EnrichmentStatus.UNAVAILABLE


class EnrichedContext(BaseModel):
    """The intake record plus everything gathered about its medications."""

    patient: PatientIntakeRecord
    medications: list[MedicationEnrichment] = Field(default_factory=list)
    summary: str = Field(..., description="Rendered label summary for the prompt")
