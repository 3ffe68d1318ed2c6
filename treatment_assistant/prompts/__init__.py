"""Prompt loading and composition."""

from treatment_assistant.prompts.composer import (
    TASK_INSTRUCTIONS,
    build_messages,
    compose_user_prompt,
    format_patient_data,
)
from treatment_assistant.prompts.loader import get_system_prompt, load_prompt

__all__ = [
    "TASK_INSTRUCTIONS",
    "build_messages",
    "compose_user_prompt",
    "format_patient_data",
    "get_system_prompt",
    "load_prompt",
]
