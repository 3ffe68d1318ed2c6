"""
Treatment Plan Assistant - Treatment Analysis

The shape the language model must reply with. Validation is strict on
enums and ranges; nothing is coerced into an allowed value.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat
from pydantic.alias_generators import to_camel


RiskLevel = Literal["LOW", "MEDIUM", "HIGH"]
SafetyFlagSeverity = Literal["critical", "warning", "info"]
SafetyFlagType = Literal[
    "drug-interaction",
    "allergy-conflict",
    "contraindication",
    "dosage-concern",
    "age-related",
    "other",
]


class TreatmentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Medication(TreatmentModel):
    """A medication recommended by the model."""

    name: str
    generic_name: Optional[str] = None
    brand_name: Optional[str] = None
    dosage: str
    frequency: str
    duration: str
    special_instructions: Optional[str] = None
    purpose: str


class SafetyFlag(TreatmentModel):
    """One itemized safety concern attached to a plan."""

    severity: SafetyFlagSeverity
    type: SafetyFlagType
    title: str
    description: str
    affected_medications: Optional[list[str]] = None
    recommendation: Optional[str] = None


class AlternativeTreatment(TreatmentModel):
    approach: str
    medications: Optional[list[Medication]] = None
    pros: list[str]
    cons: list[str]
    appropriate_for: Optional[str] = None


class TreatmentPlan(TreatmentModel):
    medications: list[Medication]
    duration: str
    special_instructions: Optional[str] = None
    follow_up_recommendations: Optional[list[str]] = None
    lifestyle_modifications: Optional[list[str]] = None


class TreatmentAnalysisResult(TreatmentModel):
    """A validated treatment analysis returned by the model."""

    treatment_plan: TreatmentPlan
    risk_score: RiskLevel
    safety_flags: list[SafetyFlag]
    alternatives: list[AlternativeTreatment]
    rationale: str
    confidence: Optional[StrictFloat] = Field(default=None, ge=0.0, le=1.0)
    citations: Optional[list[str]] = None
    specialist_consultation_required: Optional[StrictBool] = None
    monitoring_recommendations: Optional[list[str]] = None

    @property
    def critical_flags(self) -> list[SafetyFlag]:
        """Safety flags with critical severity."""
        return [flag for flag in self.safety_flags if flag.severity == "critical"]
