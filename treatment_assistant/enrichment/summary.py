"""
Rendering of enrichment results into the FDA context block.

Label sections are emitted in a fixed priority order so the most severe
information (boxed warnings, contraindications) always comes first.
"""

from treatment_assistant.models.enrichment import MedicationEnrichment


NO_MEDICATIONS_SUMMARY = "Patient is not currently taking any medications."

SUMMARY_HEADER = "=== FDA DRUG LABEL DATA FOR CURRENT MEDICATIONS ==="

SECTION_RULE = "=" * 80

# (DrugLabel field, rendered heading) in priority order
LABEL_SECTIONS = [
    ("boxed_warning", "⚠️  BLACK BOX WARNING:"),
    ("contraindications", "CONTRAINDICATIONS:"),
    ("drug_interactions", "DRUG INTERACTIONS:"),
    ("warnings", "WARNINGS:"),
    ("dosage_and_administration", "DOSAGE AND ADMINISTRATION:"),
    ("pregnancy", "PREGNANCY:"),
    ("pediatric_use", "PEDIATRIC USE:"),
    ("geriatric_use", "GERIATRIC USE:"),
]


def build_label_summary(enrichments: list[MedicationEnrichment]) -> str:
    """
    Build the FDA context summary for the model prompt.

    Args:
        enrichments: Enriched medications in intake order

    Returns:
        Rendered summary text
    """
    if not enrichments:
        return NO_MEDICATIONS_SUMMARY

    lines = [SUMMARY_HEADER, ""]
    for enrichment in enrichments:
        lines.extend(_render_medication(enrichment))
    return "\n".join(lines) + "\n"


def _render_medication(enrichment: MedicationEnrichment) -> list[str]:
    medication = enrichment.medication
    lines = [
        f"MEDICATION: {medication.name}",
        f"Current Dosage: {medication.dosage}, {medication.frequency}",
    ]
    if medication.duration:
        lines.append(f"Duration: {medication.duration}")

    if enrichment.rxnorm:
        lines.append(f"RxNorm Name: {enrichment.rxnorm.name}")
        lines.append(f"RxCUI: {enrichment.rxnorm.rxcui}")
    lines.append("")

    if enrichment.label:
        for field_name, heading in LABEL_SECTIONS:
            entries = getattr(enrichment.label, field_name)
            if not entries:
                continue
            lines.append(heading)
            lines.extend(entries)
            lines.append("")
    elif enrichment.errors:
        lines.append("⚠️  Could not retrieve FDA data for this medication.")
        lines.append(f"Errors: {', '.join(enrichment.errors)}")
        lines.append("")
    else:
        lines.append("⚠️  No FDA label data available for this medication.")
        lines.append("")

    lines.append(SECTION_RULE)
    lines.append("")
    return lines
