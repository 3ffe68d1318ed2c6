"""Data models for the treatment plan assistant."""

from treatment_assistant.models.analysis import AnalysisRecord, ReviewStatus
from treatment_assistant.models.enrichment import (
    DrugLabel,
    EnrichedContext,
    EnrichmentStatus,
    MedicationEnrichment,
    RxNormConcept,
)
from treatment_assistant.models.llm import LLMResponse
from treatment_assistant.models.patient import (
    Allergy,
    CurrentMedication,
    HealthMetrics,
    LifestyleFactors,
    MedicalCondition,
    PatientIntakeRecord,
    PrimaryComplaint,
)
from treatment_assistant.models.progress import (
    PipelineStage,
    ProgressCallback,
    ProgressUpdate,
)
from treatment_assistant.models.treatment import (
    AlternativeTreatment,
    Medication,
    SafetyFlag,
    TreatmentAnalysisResult,
    TreatmentPlan,
)

__all__ = [
    "AnalysisRecord",
    "ReviewStatus",
    "DrugLabel",
    "EnrichedContext",
    "EnrichmentStatus",
    "MedicationEnrichment",
    "RxNormConcept",
    "LLMResponse",
    "Allergy",
    "CurrentMedication",
    "HealthMetrics",
    "LifestyleFactors",
    "MedicalCondition",
    "PatientIntakeRecord",
    "PrimaryComplaint",
    "PipelineStage",
    "ProgressCallback",
    "ProgressUpdate",
    "AlternativeTreatment",
    "Medication",
    "SafetyFlag",
    "TreatmentAnalysisResult",
    "TreatmentPlan",
]
