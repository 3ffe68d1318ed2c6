"""
Treatment Plan Assistant - Patient Intake

Intake record models. Wire names are camelCase to match the intake form;
attributes are snake_case. Numbers and booleans are strict: "55" is not an
age.
"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel


Severity = Literal["mild", "moderate", "severe"]


class IntakeModel(BaseModel):
    """Base for intake models: camelCase aliases, frozen after validation."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class MedicalCondition(IntakeModel):
    """A diagnosed medical condition."""

    name: str = Field(..., min_length=1)
    diagnosed_date: Optional[str] = None
    severity: Optional[Severity] = None


class Allergy(IntakeModel):
    """A known allergy and the reaction it causes."""

    allergen: str = Field(..., min_length=1)
    reaction: str = Field(..., min_length=1)
    severity: Severity


class CurrentMedication(IntakeModel):
    """A medication the patient currently takes."""

    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    frequency: str = Field(..., min_length=1)
    duration: Optional[str] = None
    purpose: Optional[str] = None


class BloodPressure(IntakeModel):
    systolic: StrictFloat = Field(..., ge=0)
    diastolic: StrictFloat = Field(..., ge=0)


class HealthMetrics(IntakeModel):
    """Demographics and vitals."""

    age: StrictInt = Field(..., ge=0, le=150)
    weight: StrictFloat = Field(..., ge=0)
    weight_unit: Literal["kg", "lbs"]
    height: Optional[StrictFloat] = Field(default=None, ge=0)
    height_unit: Optional[Literal["cm", "inches"]] = None
    bmi: Optional[StrictFloat] = Field(default=None, ge=0)
    blood_pressure: Optional[BloodPressure] = None
    heart_rate: Optional[StrictFloat] = Field(default=None, ge=0)
    blood_glucose: Optional[StrictFloat] = Field(default=None, ge=0)


class LifestyleFactors(IntakeModel):
    """Smoking, alcohol, exercise, diet and sleep."""

    smoking_status: Literal["never", "former", "current"]
    packs_per_day: Optional[StrictFloat] = Field(default=None, ge=0)
    alcohol_consumption: Literal["never", "occasional", "moderate", "frequent"]
    drinks_per_week: Optional[StrictFloat] = Field(default=None, ge=0)
    exercise_frequency: Literal["sedentary", "light", "moderate", "active", "very-active"]
    diet_type: Optional[str] = None
    sleep_hours: Optional[StrictFloat] = Field(default=None, ge=0, le=24)


class PrimaryComplaint(IntakeModel):
    """The reason for the visit."""

    complaint: str = Field(..., min_length=1)
    severity: Severity
    duration: str = Field(..., min_length=1)
    impact_on_life: Literal["minimal", "moderate", "significant", "severe"]
    additional_notes: Optional[str] = None


class PatientIntakeRecord(IntakeModel):
    """
    A validated patient questionnaire.

    List order is preserved everywhere downstream: the enrichment summary
    and the prompt both render entries in the order they were entered.
    """

    medical_conditions: list[MedicalCondition]
    allergies: list[Allergy]
    past_surgeries: Optional[list[str]] = None
    family_history: Optional[list[str]] = None
    current_medications: list[CurrentMedication]
    health_metrics: HealthMetrics
    lifestyle_factors: LifestyleFactors
    primary_complaint: PrimaryComplaint

    # Metadata
    patient_name: Optional[str] = None
    patient_id: Optional[str] = None
    submitted_at: Optional[Union[datetime, str]] = None
