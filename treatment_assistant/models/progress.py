"""
Progress tracking models for analysis requests.

One request moves through these stages exactly once; there is no
re-entry and no automatic retry.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class PipelineStage(str, Enum):
    """Stages of a single analysis request."""

    RECEIVED = "received"
    VALIDATED = "validated"
    ENRICHING = "enriching"
    COMPOSED = "composed"
    AWAITING_MODEL = "awaiting_model"

    # Model output parsing
    PARSED = "parsed"
    MALFORMED_OUTPUT = "malformed_output"

    # Model output schema check
    SCHEMA_OK = "schema_ok"
    SCHEMA_MISMATCH = "schema_mismatch"

    # Terminal
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineStage.DONE, PipelineStage.FAILED)


@dataclass
class ProgressUpdate:
    """
    Progress update event for callers that want to observe a request.

    Attributes:
        stage: Current stage of the request
        message: Human-readable status message
        percent: Overall progress percentage (0-100)
        detail: Optional extra information (medication count, model, etc.)
    """
    stage: PipelineStage
    message: str
    percent: int
    detail: dict = field(default_factory=dict)


class ProgressCallback(Protocol):
    """Protocol for progress callback functions."""

    def __call__(self, update: ProgressUpdate) -> None:
        """Called with progress updates during an analysis request."""
        ...
