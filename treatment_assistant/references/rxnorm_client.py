"""
RxNorm client for drug name normalization.

Uses the NLM RxNav REST API to resolve a free-text drug name to an RxCUI
and its canonical properties.
API documentation: https://lhncbc.nlm.nih.gov/RxNav/APIs/RxNormAPIs.html
"""

import logging
from typing import Optional

import httpx

from treatment_assistant.models.enrichment import RxNormConcept


logger = logging.getLogger(__name__)


class RxNormClient:
    """
    Client for resolving drug names via RxNav.

    Every failure (non-200, timeout, transport error, malformed body)
    resolves to None; nothing is raised to the caller.
    """

    BASE_URL = "https://rxnav.nlm.nih.gov/REST"

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10.0):
        """
        Initialize the RxNorm client.

        Args:
            base_url: Override for the RxNav REST root
            timeout: HTTP request timeout in seconds
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout

    async def resolve(self, drug_name: str) -> Optional[RxNormConcept]:
        """
        Resolve a drug name to an RxNorm concept.

        Args:
            drug_name: Free-text drug name as entered by the patient

        Returns:
            RxNormConcept if an identifier was found, None otherwise
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    f"{self.base_url}/rxcui.json",
                    params={"name": drug_name},
                    headers={"Accept": "application/json"},
                )
                if response.status_code != 200:
                    logger.warning(
                        f"RxNorm API returned {response.status_code} for {drug_name}"
                    )
                    return None

                rxcui = self._extract_rxcui(response.json())
                if not rxcui:
                    logger.warning(f"No RxCUI found for {drug_name}")
                    return None

                return await self._fetch_properties(client, rxcui, drug_name)

        except httpx.HTTPError as e:
            logger.warning(f"RxNorm API error for {drug_name}: {e}")
            return None
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            # Body was not JSON or not the expected shape
            logger.warning(f"RxNorm API returned malformed body for {drug_name}: {e}")
            return None

    async def _fetch_properties(
        self,
        client: httpx.AsyncClient,
        rxcui: str,
        drug_name: str,
    ) -> RxNormConcept:
        """Fetch canonical properties; fall back to the entered name."""
        response = await client.get(
            f"{self.base_url}/rxcui/{rxcui}/properties.json",
            headers={"Accept": "application/json"},
        )
        if response.status_code != 200:
            return RxNormConcept(rxcui=rxcui, name=drug_name)

        data = response.json()
        properties = data.get("properties") if isinstance(data, dict) else None
        if not isinstance(properties, dict):
            return RxNormConcept(rxcui=rxcui, name=drug_name)

        return RxNormConcept(
            rxcui=rxcui,
            name=_text(properties.get("name")) or drug_name,
            synonym=_text(properties.get("synonym")),
            tty=_text(properties.get("tty")),
        )

    @staticmethod
    def _extract_rxcui(data) -> Optional[str]:
        """Pull the first RxCUI out of an rxcui.json response."""
        if not isinstance(data, dict):
            return None
        id_group = data.get("idGroup")
        if not isinstance(id_group, dict):
            return None
        ids = id_group.get("rxnormId")
        if not isinstance(ids, list) or not ids:
            return None
        return _text(ids[0])


def _text(value) -> Optional[str]:
    """Non-empty string or None."""
    if isinstance(value, str) and value:
        return value
    return None
