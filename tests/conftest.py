"""
Pytest configuration and shared fixtures for the test suite.
"""

import copy
import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from treatment_assistant.config import Settings
from treatment_assistant.models.enrichment import DrugLabel, RxNormConcept
from treatment_assistant.models.llm import LLMResponse


# ============================================================================
# Intake Payloads
# ============================================================================

LOW_RISK_PAYLOAD = {
    "patientName": "Sarah Johnson",
    "medicalConditions": [],
    "allergies": [],
    "pastSurgeries": [],
    "familyHistory": [],
    "currentMedications": [],
    "healthMetrics": {
        "age": 35,
        "weight": 70,
        "weightUnit": "kg",
        "height": 175,
        "heightUnit": "cm",
        "bmi": 22.9,
        "bloodPressure": {"systolic": 120, "diastolic": 80},
        "heartRate": 72,
    },
    "lifestyleFactors": {
        "smokingStatus": "never",
        "alcoholConsumption": "occasional",
        "drinksPerWeek": 2,
        "exerciseFrequency": "moderate",
        "dietType": "balanced",
        "sleepHours": 7,
    },
    "primaryComplaint": {
        "complaint": "Hair Loss",
        "severity": "moderate",
        "duration": "6 months",
        "impactOnLife": "moderate",
        "additionalNotes": "Gradual thinning at crown and temples",
    },
    "patientId": "demo-low-risk",
}

MEDIUM_RISK_PAYLOAD = {
    "patientName": "Michael Chen",
    "medicalConditions": [
        {"name": "Type 2 Diabetes", "diagnosedDate": "2020-03-15", "severity": "moderate"},
    ],
    "allergies": [
        {"allergen": "Penicillin", "reaction": "Hives", "severity": "moderate"},
    ],
    "pastSurgeries": ["Appendectomy (2005)"],
    "familyHistory": ["Cardiovascular disease", "Type 2 Diabetes"],
    "currentMedications": [
        {
            "name": "Metformin",
            "dosage": "500mg",
            "frequency": "Twice daily",
            "duration": "4 years",
            "purpose": "Blood sugar control",
        },
    ],
    "healthMetrics": {
        "age": 55,
        "weight": 85,
        "weightUnit": "kg",
        "height": 172,
        "heightUnit": "cm",
        "bmi": 28.7,
        "bloodPressure": {"systolic": 135, "diastolic": 85},
        "heartRate": 78,
        "bloodGlucose": 145,
    },
    "lifestyleFactors": {
        "smokingStatus": "former",
        "alcoholConsumption": "moderate",
        "drinksPerWeek": 5,
        "exerciseFrequency": "light",
        "sleepHours": 6.5,
    },
    "primaryComplaint": {
        "complaint": "Erectile Dysfunction",
        "severity": "moderate",
        "duration": "1 year",
        "impactOnLife": "significant",
    },
    "patientId": "demo-medium-risk",
}


@pytest.fixture
def low_risk_payload():
    """Intake with no current medications."""
    return copy.deepcopy(LOW_RISK_PAYLOAD)


@pytest.fixture
def medium_risk_payload():
    """Intake with one current medication (Metformin)."""
    return copy.deepcopy(MEDIUM_RISK_PAYLOAD)


@pytest.fixture
def multi_medication_payload():
    """Intake with three current medications."""
    payload = copy.deepcopy(MEDIUM_RISK_PAYLOAD)
    payload["currentMedications"] = [
        {"name": "Warfarin", "dosage": "5mg", "frequency": "Once daily"},
        {"name": "Metformin", "dosage": "500mg", "frequency": "Twice daily"},
        {"name": "Lisinopril", "dosage": "10mg", "frequency": "Once daily", "duration": "2 years"},
    ]
    return payload


# ============================================================================
# Model Replies
# ============================================================================

VALID_ANALYSIS = {
    "treatmentPlan": {
        "medications": [
            {
                "name": "Tadalafil (Cialis)",
                "genericName": "tadalafil",
                "brandName": "Cialis",
                "dosage": "5mg",
                "frequency": "Once daily",
                "duration": "12 weeks",
                "specialInstructions": "Take at the same time each day",
                "purpose": "Treatment of erectile dysfunction",
            }
        ],
        "duration": "12 weeks with follow-up",
        "followUpRecommendations": ["Follow-up visit in 4 weeks"],
        "lifestyleModifications": ["Increase physical activity"],
    },
    "riskScore": "MEDIUM",
    "safetyFlags": [
        {
            "severity": "warning",
            "type": "drug-interaction",
            "title": "Monitor blood pressure",
            "description": "Additive hypotensive effects are possible.",
            "affectedMedications": ["Tadalafil"],
            "recommendation": "Check blood pressure at follow-up",
        }
    ],
    "alternatives": [
        {
            "approach": "Lifestyle-first approach",
            "pros": ["No drug interactions"],
            "cons": ["Slower onset"],
        }
    ],
    "rationale": "Based on the provided FDA label data for metformin.",
    "confidence": 0.8,
    "citations": ["FDA label: Metformin"],
    "specialistConsultationRequired": False,
    "monitoringRecommendations": ["Check HbA1c in 3 months"],
}


@pytest.fixture
def valid_analysis():
    """A model reply that matches the treatment analysis schema."""
    return copy.deepcopy(VALID_ANALYSIS)


@pytest.fixture
def valid_analysis_text(valid_analysis):
    return json.dumps(valid_analysis)


# ============================================================================
# Reference Data
# ============================================================================

@pytest.fixture
def metformin_concept():
    return RxNormConcept(rxcui="6809", name="metformin", tty="IN")


@pytest.fixture
def metformin_label():
    """Label with one contraindication and no boxed warning."""
    return DrugLabel(
        contraindications=["Severe renal impairment (eGFR below 30 mL/min/1.73 m2)."],
        dosage_and_administration=["Starting dose 500 mg twice daily with meals."],
    )


@pytest.fixture
def mock_rxnorm_client(metformin_concept):
    client = MagicMock()
    client.resolve = AsyncMock(return_value=metformin_concept)
    return client


@pytest.fixture
def mock_openfda_client(metformin_label):
    client = MagicMock()
    client.fetch_label = AsyncMock(return_value=metformin_label)
    return client


# ============================================================================
# Mock LLM Client
# ============================================================================

@pytest.fixture
def mock_llm_response():
    """Factory for creating mock LLM responses."""
    def _create(content: str, model: str = "test-model", input_tokens: int = 100, output_tokens: int = 50):
        return LLMResponse(
            content=content,
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
    return _create


@pytest.fixture
def mock_llm_client(mock_llm_response, valid_analysis_text):
    """Mock LLM client that returns a valid analysis by default."""
    client = MagicMock()
    client.complete = AsyncMock(return_value=mock_llm_response(valid_analysis_text))
    return client


# ============================================================================
# Settings
# ============================================================================

@pytest.fixture
def settings():
    return Settings(provider="openrouter", api_key="test-key", model="test-model", llm_timeout=5.0)
