"""
Error taxonomy for analysis requests.

Every failure that terminates a request carries a machine-readable
ErrorKind and a human-readable message. Reference lookup failures are the
one exception: they are recovered inside enrichment and never raised.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Machine-distinguishable failure kinds."""

    INVALID_INPUT = "invalid_input"
    UPSTREAM_LOOKUP_FAILURE = "upstream_lookup_failure"  # Never surfaced
    MODEL_UNAVAILABLE = "model_unavailable"
    MALFORMED_MODEL_OUTPUT = "malformed_model_output"
    SCHEMA_MISMATCH = "schema_mismatch"
    PERSISTENCE_FAILURE = "persistence_failure"
    NOT_FOUND = "not_found"


class AssistantError(Exception):
    """Base class for failures surfaced to callers."""

    kind: ErrorKind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_envelope(self) -> dict:
        """Render the error as the API's error envelope."""
        return {
            "success": False,
            "error": {
                "kind": self.kind.value,
                "message": self.message,
                "details": self.details,
            },
        }


class InvalidInputError(AssistantError):
    """The intake payload failed structural validation."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, violations: list, message: str = "Invalid patient data"):
        self.violations = violations
        super().__init__(
            message,
            details={"violations": [v.model_dump() for v in violations]},
        )


class InvalidStatusError(AssistantError):
    """A review status outside the allowed set."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, status: Any):
        self.status = status
        super().__init__("Invalid status", details={"status": status})


class NotFoundError(AssistantError):
    kind = ErrorKind.NOT_FOUND


class ModelUnavailableError(AssistantError):
    """
    The model call failed.

    ``reason`` separates credential problems ("authentication") from slow
    or unreachable providers ("timeout", "upstream") so callers know
    whether to fix configuration or try again later.
    """

    kind = ErrorKind.MODEL_UNAVAILABLE

    AUTHENTICATION = "authentication"
    TIMEOUT = "timeout"
    UPSTREAM = "upstream"

    def __init__(self, message: str, reason: str = UPSTREAM, **details: Any):
        self.reason = reason
        super().__init__(message, details={"reason": reason, **details})


class MalformedModelOutputError(AssistantError):
    """The model reply was not valid JSON."""

    kind = ErrorKind.MALFORMED_MODEL_OUTPUT

    def __init__(self, raw_text: str, message: str = "Invalid JSON response from LLM"):
        self.raw_text = raw_text
        super().__init__(message, details={"raw_response": raw_text})


class SchemaMismatchError(AssistantError):
    """The model reply parsed but does not match the treatment analysis shape."""

    kind = ErrorKind.SCHEMA_MISMATCH

    def __init__(
        self,
        violations: list,
        raw_payload: Any,
        message: str = "LLM response does not match expected schema",
    ):
        self.violations = violations
        self.raw_payload = raw_payload
        super().__init__(
            message,
            details={
                "violations": [v.model_dump() for v in violations],
                "raw_response": raw_payload,
            },
        )


class PersistenceError(AssistantError):
    """Storage read or write failed. Internal details are logged, not surfaced."""

    kind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(self, message: str = "Failed to access analysis storage"):
        super().__init__(message)
