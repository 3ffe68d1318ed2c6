"""
Analysis Pipeline.

Runs one intake submission end to end:

    received -> validated -> enriching -> composed -> awaiting_model
             -> parsed | malformed_output -> schema_ok | schema_mismatch
             -> done | failed

Each request builds its own context and prompt; nothing is shared across
requests and nothing is retried.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from treatment_assistant.config import Settings
from treatment_assistant.enrichment.engine import EnrichmentEngine
from treatment_assistant.errors import (
    AssistantError,
    InvalidInputError,
    MalformedModelOutputError,
    ModelUnavailableError,
    SchemaMismatchError,
)
from treatment_assistant.llm.protocols import LLMClientProtocol
from treatment_assistant.models.analysis import AnalysisRecord
from treatment_assistant.models.patient import PatientIntakeRecord
from treatment_assistant.models.progress import PipelineStage, ProgressCallback, ProgressUpdate
from treatment_assistant.models.treatment import TreatmentAnalysisResult
from treatment_assistant.prompts.composer import build_messages
from treatment_assistant.references.openfda_client import OpenFDAClient
from treatment_assistant.references.rxnorm_client import RxNormClient
from treatment_assistant.storage.analysis_store import AnalysisStore
from treatment_assistant.validation import validate_intake, validate_treatment_response


logger = logging.getLogger(__name__)


class AnalysisMetadata(BaseModel):
    """Metadata returned alongside a successful analysis."""

    provider: str
    model: str
    enriched_medications_count: int
    timestamp: str
    input_tokens: int = 0
    output_tokens: int = 0


class AnalysisOutcome(BaseModel):
    """Result of a successful analysis request."""

    result: TreatmentAnalysisResult
    metadata: AnalysisMetadata
    analysis_id: Optional[str] = Field(default=None, description="Set when persisted")


class AnalysisPipeline:
    """Validates, enriches, composes, calls the model and validates the reply."""

    def __init__(
        self,
        settings: Settings,
        llm_client: LLMClientProtocol,
        enrichment_engine: Optional[EnrichmentEngine] = None,
        store: Optional[AnalysisStore] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Model name, temperature and timeouts
            llm_client: Chat completion client
            enrichment_engine: Medication enrichment (built from settings if not provided)
            store: Optional store; successful analyses are persisted when set
            on_progress: Optional callback for stage transitions
        """
        self.settings = settings
        self.llm_client = llm_client
        self.enrichment = enrichment_engine or EnrichmentEngine(
            rxnorm_client=RxNormClient(
                base_url=settings.rxnorm_base_url,
                timeout=settings.lookup_timeout,
            ),
            openfda_client=OpenFDAClient(
                api_key=settings.openfda_api_key,
                base_url=settings.openfda_base_url,
                timeout=settings.lookup_timeout,
            ),
            max_concurrency=settings.enrichment_concurrency,
        )
        self.store = store
        self.on_progress = on_progress

    def _emit(self, stage: PipelineStage, message: str, percent: int, **detail: Any) -> None:
        logger.info(f"[{stage.value}] {message}")
        if self.on_progress:
            self.on_progress(ProgressUpdate(stage=stage, message=message, percent=percent, detail=detail))

    async def analyze(self, payload: Any) -> AnalysisOutcome:
        """
        Run a full analysis for an intake payload.

        Args:
            payload: Decoded intake JSON (camelCase keys)

        Returns:
            AnalysisOutcome with the validated result and metadata

        Raises:
            InvalidInputError: Intake failed validation (no network call made)
            ModelUnavailableError: Model call failed or timed out
            MalformedModelOutputError: Model reply was not JSON
            SchemaMismatchError: Model reply did not match the expected shape
            PersistenceError: Storing the result failed
        """
        self._emit(PipelineStage.RECEIVED, "Received intake submission", 0)

        try:
            validation = validate_intake(payload)
            if not validation.is_valid:
                raise InvalidInputError(validation.violations)
            record = validation.record
            self._emit(PipelineStage.VALIDATED, "Intake validated", 10)

            return await self._run(record)
        except AssistantError as e:
            self._emit(PipelineStage.FAILED, e.message, 100, kind=e.kind.value)
            raise

    async def _run(self, record: PatientIntakeRecord) -> AnalysisOutcome:
        self._emit(
            PipelineStage.ENRICHING,
            "Enriching medications with FDA and RxNorm data",
            20,
            medications=len(record.current_medications),
        )
        context = await self.enrichment.enrich(record)

        messages = build_messages(record, context)
        self._emit(PipelineStage.COMPOSED, "Prompt composed", 40)

        self._emit(
            PipelineStage.AWAITING_MODEL,
            f"Calling {self.settings.provider} LLM (model: {self.settings.model})",
            50,
        )
        response = await self._call_model(messages)

        try:
            result = validate_treatment_response(response.content)
        except MalformedModelOutputError:
            self._emit(PipelineStage.MALFORMED_OUTPUT, "Model reply is not valid JSON", 90)
            raise
        except SchemaMismatchError:
            self._emit(PipelineStage.PARSED, "Model reply parsed", 80)
            self._emit(PipelineStage.SCHEMA_MISMATCH, "Model reply failed schema validation", 90)
            raise
        self._emit(PipelineStage.PARSED, "Model reply parsed", 80)
        self._emit(PipelineStage.SCHEMA_OK, "Model reply matches schema", 90)

        metadata = AnalysisMetadata(
            provider=self.settings.provider,
            model=response.model,
            enriched_medications_count=len(context.medications),
            timestamp=datetime.now(timezone.utc).isoformat(),
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
        )

        analysis_id = None
        if self.store is not None:
            analysis_id = self.store.create(_build_record(record, result, metadata))

        self._emit(PipelineStage.DONE, "Treatment plan generated successfully", 100)
        return AnalysisOutcome(result=result, metadata=metadata, analysis_id=analysis_id)

    async def _call_model(self, messages: list[dict]):
        """Single bounded model call; expiry is a distinct timeout failure."""
        try:
            return await asyncio.wait_for(
                self.llm_client.complete(
                    model=self.settings.model,
                    messages=messages,
                    temperature=self.settings.temperature,
                    max_tokens=self.settings.max_tokens,
                    json_mode=True,
                ),
                timeout=self.settings.llm_timeout,
            )
        except asyncio.TimeoutError as e:
            raise ModelUnavailableError(
                f"LLM did not respond within {self.settings.llm_timeout:g} seconds",
                reason=ModelUnavailableError.TIMEOUT,
                provider=self.settings.provider,
                model=self.settings.model,
            ) from e


def _build_record(
    record: PatientIntakeRecord,
    result: TreatmentAnalysisResult,
    metadata: AnalysisMetadata,
) -> AnalysisRecord:
    return AnalysisRecord(
        patient_name=record.patient_name,
        primary_complaint=record.primary_complaint.complaint,
        risk_score=result.risk_score,
        treatment_plan=result.model_dump(mode="json", by_alias=True, exclude_none=True),
        patient_data=record.model_dump(mode="json", by_alias=True, exclude_none=True),
        metadata=metadata.model_dump(),
    )
