"""Utility functions and helpers."""

from treatment_assistant.utils.logging import setup_logging

__all__ = ["setup_logging"]
