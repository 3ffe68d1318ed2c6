"""
Structural validation at the two pipeline boundaries.

Inbound: an arbitrary payload becomes a PatientIntakeRecord or a list of
field violations. Outbound: raw model text becomes a TreatmentAnalysisResult
or a typed failure. Neither side repairs or guesses.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from treatment_assistant.errors import MalformedModelOutputError, SchemaMismatchError
from treatment_assistant.models.patient import PatientIntakeRecord
from treatment_assistant.models.treatment import TreatmentAnalysisResult


logger = logging.getLogger(__name__)


class FieldViolation(BaseModel):
    """One failed check, located by dotted wire path."""

    path: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of intake validation: a record or its violations, never both."""

    record: Optional[PatientIntakeRecord] = None
    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.record is not None

    def violation_paths(self) -> list[str]:
        return [v.path for v in self.violations]


def violations_from_error(error: ValidationError) -> list[FieldViolation]:
    """
    Convert a pydantic ValidationError into field violations.

    Args:
        error: The pydantic error raised by model validation

    Returns:
        List of FieldViolation with paths such as "healthMetrics.age"
    """
    violations = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue.get("loc", ()))
        violations.append(FieldViolation(path=path or "<root>", message=issue["msg"]))
    return violations


def validate_intake(payload: Any) -> ValidationResult:
    """
    Validate an inbound intake payload without raising.

    Args:
        payload: Decoded JSON body (expected to be a dict with camelCase keys)

    Returns:
        ValidationResult holding either the record or the violations
    """
    try:
        record = PatientIntakeRecord.model_validate(payload)
    except ValidationError as e:
        violations = violations_from_error(e)
        logger.info(f"Intake validation failed with {len(violations)} violation(s)")
        return ValidationResult(violations=violations)

    return ValidationResult(record=record)


def validate_treatment_response(raw_text: str) -> TreatmentAnalysisResult:
    """
    Parse and validate the model's raw reply.

    Args:
        raw_text: The completion text exactly as returned by the model

    Returns:
        The validated TreatmentAnalysisResult

    Raises:
        MalformedModelOutputError: If the text is not valid JSON
        SchemaMismatchError: If the JSON does not match the expected shape
    """
    try:
        parsed = json.loads(raw_text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"Failed to parse LLM response as JSON: {e}")
        raise MalformedModelOutputError(raw_text) from e

    try:
        return TreatmentAnalysisResult.model_validate(parsed)
    except ValidationError as e:
        violations = violations_from_error(e)
        logger.error(
            f"LLM response failed schema validation: "
            f"{', '.join(v.path for v in violations)}"
        )
        raise SchemaMismatchError(violations, parsed) from e
