"""
Prompt composition for treatment analysis.

Renders an intake record and its enrichment context into the user prompt.
Output is deterministic: the same inputs always produce byte-identical
text (no timestamps, no unordered collections).
"""

from treatment_assistant.models.enrichment import EnrichedContext
from treatment_assistant.models.patient import PatientIntakeRecord
from treatment_assistant.prompts.loader import get_system_prompt


TASK_INSTRUCTIONS = """=== TASK ===
Based ONLY on the patient information and FDA drug label data provided above, generate a comprehensive, safety-checked treatment plan.

YOU MUST:
1. Check for drug interactions between current medications and any new recommendations
2. Check for contraindications based on patient's conditions and allergies
3. Verify dosages are appropriate for patient's age, weight, and health status
4. Flag any safety concerns (critical, warning, or info severity)
5. Provide alternative treatments if primary recommendation has safety issues
6. Include lifestyle modifications based on patient's current lifestyle factors
7. Include follow-up recommendations for monitoring

IMPORTANT: Always include lifestyleModifications array (even if empty) and followUpRecommendations array in your response.

RESPOND ONLY IN VALID JSON FORMAT matching the schema defined in the system prompt."""


def _num(value: float) -> str:
    """Render a number without a trailing '.0' for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_patient_data(record: PatientIntakeRecord) -> str:
    """
    Format the intake record as structured text for the model.

    Args:
        record: Validated intake record

    Returns:
        Patient information block
    """
    metrics = record.health_metrics
    lines = ["=== PATIENT INFORMATION ===", ""]

    lines.append("## DEMOGRAPHICS & HEALTH METRICS")
    lines.append(f"Age: {metrics.age} years")
    lines.append(f"Weight: {_num(metrics.weight)} {metrics.weight_unit}")
    if metrics.height:
        lines.append(f"Height: {_num(metrics.height)} {metrics.height_unit or ''}".rstrip())
    if metrics.bmi:
        lines.append(f"BMI: {_num(metrics.bmi)}")
    if metrics.blood_pressure:
        bp = metrics.blood_pressure
        lines.append(f"Blood Pressure: {_num(bp.systolic)}/{_num(bp.diastolic)} mmHg")
    if metrics.heart_rate:
        lines.append(f"Heart Rate: {_num(metrics.heart_rate)} bpm")
    if metrics.blood_glucose:
        lines.append(f"Blood Glucose: {_num(metrics.blood_glucose)} mg/dL")
    lines.append("")

    lines.append("## MEDICAL CONDITIONS")
    if record.medical_conditions:
        for condition in record.medical_conditions:
            line = f"- {condition.name}"
            if condition.severity:
                line += f" (Severity: {condition.severity})"
            if condition.diagnosed_date:
                line += f" [Diagnosed: {condition.diagnosed_date}]"
            lines.append(line)
    else:
        lines.append("None reported")
    lines.append("")

    lines.append("## KNOWN ALLERGIES")
    if record.allergies:
        for allergy in record.allergies:
            lines.append(f"- Allergen: {allergy.allergen}")
            lines.append(f"  Reaction: {allergy.reaction}")
            lines.append(f"  Severity: {allergy.severity}")
    else:
        lines.append("No known allergies")
    lines.append("")

    if record.past_surgeries:
        lines.append("## PAST SURGERIES")
        lines.extend(f"- {surgery}" for surgery in record.past_surgeries)
        lines.append("")

    if record.family_history:
        lines.append("## FAMILY HISTORY")
        lines.extend(f"- {entry}" for entry in record.family_history)
        lines.append("")

    lifestyle = record.lifestyle_factors
    lines.append("## LIFESTYLE FACTORS")
    smoking = f"Smoking: {lifestyle.smoking_status}"
    if lifestyle.packs_per_day:
        smoking += f" ({_num(lifestyle.packs_per_day)} packs/day)"
    lines.append(smoking)
    alcohol = f"Alcohol: {lifestyle.alcohol_consumption}"
    if lifestyle.drinks_per_week:
        alcohol += f" ({_num(lifestyle.drinks_per_week)} drinks/week)"
    lines.append(alcohol)
    lines.append(f"Exercise: {lifestyle.exercise_frequency}")
    if lifestyle.diet_type:
        lines.append(f"Diet: {lifestyle.diet_type}")
    if lifestyle.sleep_hours:
        lines.append(f"Sleep: {_num(lifestyle.sleep_hours)} hours/night")
    lines.append("")

    lines.append("## CURRENT MEDICATIONS")
    if record.current_medications:
        for med in record.current_medications:
            line = f"- {med.name}: {med.dosage}, {med.frequency}"
            if med.duration:
                line += f", Duration: {med.duration}"
            if med.purpose:
                line += f" (Purpose: {med.purpose})"
            lines.append(line)
    else:
        lines.append("None reported")
    lines.append("")

    complaint = record.primary_complaint
    lines.append("## PRIMARY COMPLAINT")
    lines.append(f"Chief Complaint: {complaint.complaint}")
    lines.append(f"Severity: {complaint.severity}")
    lines.append(f"Duration: {complaint.duration}")
    lines.append(f"Impact on Life: {complaint.impact_on_life}")
    if complaint.additional_notes:
        lines.append(f"Additional Notes: {complaint.additional_notes}")
    lines.append("")

    return "\n".join(lines) + "\n"


def compose_user_prompt(record: PatientIntakeRecord, context: EnrichedContext) -> str:
    """
    Build the full user prompt: patient block, FDA context, task.

    Args:
        record: Validated intake record
        context: Enrichment context for the same record

    Returns:
        The user prompt text
    """
    return (
        f"{format_patient_data(record)}\n\n"
        f"{context.summary}\n\n"
        f"{TASK_INSTRUCTIONS}"
    )


def build_messages(record: PatientIntakeRecord, context: EnrichedContext) -> list[dict]:
    """
    Build the chat messages for the model call.

    Returns:
        System instruction followed by the composed user prompt
    """
    return [
        {"role": "system", "content": get_system_prompt()},
        {"role": "user", "content": compose_user_prompt(record, context)},
    ]
