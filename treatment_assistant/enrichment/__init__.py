"""Medication enrichment with external reference data."""

from treatment_assistant.enrichment.engine import EnrichmentEngine
from treatment_assistant.enrichment.summary import NO_MEDICATIONS_SUMMARY, build_label_summary

__all__ = ["EnrichmentEngine", "NO_MEDICATIONS_SUMMARY", "build_label_summary"]
