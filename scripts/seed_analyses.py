"""
Seed the analysis store with sample runs for the review dashboard.

Usage:
    ANALYSIS_STORE_PATH=data/analyses.json python scripts/seed_analyses.py
"""

import sys

from dotenv import load_dotenv

from treatment_assistant.config import Settings
from treatment_assistant.models.analysis import AnalysisRecord, ReviewStatus
from treatment_assistant.storage.analysis_store import AnalysisStore
from treatment_assistant.utils.logging import setup_logging


SAMPLES = [
    AnalysisRecord(
        patient_name="Alice Nguyen",
        primary_complaint="Hair loss follow-up",
        risk_score="LOW",
        status=ReviewStatus.PENDING,
        treatment_plan={
            "summary": "Continue topical minoxidil; monitor scalp irritation.",
            "medications": [{"name": "Minoxidil 5% topical", "dosage": "1 mL nightly", "duration": "90 days"}],
            "followUp": "Reassess shedding and regrowth in 12 weeks.",
        },
        patient_data={"age": 39, "sex": "F", "vitals": {"bp": "118/72"}},
        metadata={"source": "seed-script", "note": "Low-risk sample"},
    ),
    AnalysisRecord(
        patient_name="Brian Lopez",
        primary_complaint="Erectile dysfunction with hypertension",
        risk_score="MEDIUM",
        status=ReviewStatus.APPROVED,
        treatment_plan={
            "summary": "Daily tadalafil with safety monitoring; counsel on nitrate avoidance.",
            "medications": [{"name": "Tadalafil", "dosage": "5 mg daily", "caution": "Do not combine with nitrates."}],
            "followUp": "BP check and adverse effects review in 4 weeks.",
        },
        patient_data={"age": 47, "sex": "M", "comorbidities": ["hypertension"], "medications": ["amlodipine"]},
        metadata={"source": "seed-script", "note": "Approved example"},
    ),
    AnalysisRecord(
        patient_name="Dana Kim",
        primary_complaint="Chest discomfort during exercise",
        risk_score="HIGH",
        status=ReviewStatus.REJECTED,
        treatment_plan={
            "summary": "Defer pharmacotherapy; escalate to cardiology evaluation.",
            "actions": ["Order stress test", "Hold PDE5 inhibitors until cleared"],
        },
        patient_data={"age": 52, "sex": "F", "flags": ["Refer to cardiology"], "vitals": {"bp": "142/86"}},
        metadata={"source": "seed-script", "note": "Rejected until cardiology review"},
    ),
]


def seed(store: AnalysisStore) -> list[str]:
    """Insert the sample runs and return their IDs."""
    return [store.create(sample.model_copy()) for sample in SAMPLES]


def main() -> int:
    load_dotenv()
    settings = Settings.from_env()
    logger = setup_logging(settings)

    if not settings.analysis_store_path:
        logger.error("ANALYSIS_STORE_PATH is not set; nothing to seed.")
        return 1

    ids = seed(AnalysisStore(storage_path=settings.analysis_store_path))
    logger.info(f"Seeded {len(ids)} analysis runs: {', '.join(ids)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
