"""Persistence for analysis runs."""

from treatment_assistant.storage.analysis_store import AnalysisStore, parse_status

__all__ = ["AnalysisStore", "parse_status"]
