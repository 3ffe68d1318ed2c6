"""
Enrichment Engine for current medications.

Orchestrates RxNorm and openFDA lookups for every medication a patient
reports and renders the findings into a single context block for the
model prompt.
"""

import asyncio
import logging
from typing import Optional

from treatment_assistant.enrichment.summary import NO_MEDICATIONS_SUMMARY, build_label_summary
from treatment_assistant.models.enrichment import EnrichedContext, MedicationEnrichment
from treatment_assistant.models.patient import CurrentMedication, PatientIntakeRecord
from treatment_assistant.references.openfda_client import OpenFDAClient
from treatment_assistant.references.rxnorm_client import RxNormClient


logger = logging.getLogger(__name__)


class EnrichmentEngine:
    """
    Gathers reference data for each current medication.

    A failed lookup degrades that medication's data but never aborts the
    pass: every input medication yields exactly one MedicationEnrichment,
    in input order.
    """

    def __init__(
        self,
        rxnorm_client: Optional[RxNormClient] = None,
        openfda_client: Optional[OpenFDAClient] = None,
        max_concurrency: int = 1,
    ):
        """
        Initialize the enrichment engine.

        Args:
            rxnorm_client: RxNorm client instance (creates default if not provided)
            openfda_client: openFDA client instance (creates default if not provided)
            max_concurrency: Medications enriched at once. 1 keeps lookups sequential.
        """
        self.rxnorm = rxnorm_client or RxNormClient()
        self.openfda = openfda_client or OpenFDAClient()
        self.max_concurrency = max(1, max_concurrency)

    async def enrich(self, record: PatientIntakeRecord) -> EnrichedContext:
        """
        Enrich all current medications of an intake record.

        Args:
            record: Validated intake record

        Returns:
            EnrichedContext with one enrichment per medication and the summary
        """
        if not record.current_medications:
            return EnrichedContext(
                patient=record,
                medications=[],
                summary=NO_MEDICATIONS_SUMMARY,
            )

        logger.info(
            f"Enriching {len(record.current_medications)} medication(s) "
            "with RxNorm and openFDA"
        )

        if self.max_concurrency == 1:
            enrichments = []
            for medication in record.current_medications:
                enrichments.append(await self._enrich_medication(medication))
        else:
            enrichments = await self._enrich_concurrently(record.current_medications)

        return EnrichedContext(
            patient=record,
            medications=enrichments,
            summary=build_label_summary(enrichments),
        )

    async def _enrich_concurrently(
        self,
        medications: list[CurrentMedication],
    ) -> list[MedicationEnrichment]:
        """Run per-medication lookups in parallel; gather keeps input order."""
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(medication: CurrentMedication) -> MedicationEnrichment:
            async with semaphore:
                return await self._enrich_medication(medication)

        return list(await asyncio.gather(*(bounded(m) for m in medications)))

    async def _enrich_medication(
        self,
        medication: CurrentMedication,
    ) -> MedicationEnrichment:
        """
        Look up one medication: RxNorm first, then the openFDA label.

        Unexpected exceptions are recorded on the enrichment rather than
        raised; whichever lookup succeeded is kept.
        """
        enrichment = MedicationEnrichment(medication=medication)

        try:
            enrichment.rxnorm = await self.rxnorm.resolve(medication.name)
        except Exception as e:
            enrichment.errors.append(_describe(e))
            logger.error(f"Error resolving RxNorm for {medication.name}: {e}")

        try:
            enrichment.label = await self.openfda.fetch_label(medication.name)
        except Exception as e:
            enrichment.errors.append(_describe(e))
            logger.error(f"Error fetching FDA label for {medication.name}: {e}")

        logger.debug(f"Enriched {medication.name}: {enrichment.status.value}")
        return enrichment


def _describe(error: Exception) -> str:
    return str(error) or "Unknown error during API call"
