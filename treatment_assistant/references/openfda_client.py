"""
openFDA client for structured drug labels.

Uses the openFDA drug label endpoint to fetch warnings, interactions,
contraindications and dosing text for a drug name.
API documentation: https://open.fda.gov/apis/drug/label/
"""

import logging
import os
from typing import Optional

import httpx

from treatment_assistant.models.enrichment import DrugLabel


logger = logging.getLogger(__name__)


class OpenFDAClient:
    """
    Client for the openFDA drug label API.

    Rate limits:
    - Without API key: 1,000 requests/day per IP
    - With API key: 120,000 requests/day
    """

    BASE_URL = "https://api.fda.gov"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize the openFDA client.

        Args:
            api_key: openFDA API key for higher rate limits (optional)
            base_url: Override for the openFDA root
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key or os.getenv("OPENFDA_API_KEY")
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout

    def _build_params(self, drug_name: str) -> dict:
        """Search generic and brand names; keep the best match only."""
        params = {
            "search": (
                f'openfda.generic_name:"{drug_name}"'
                f'+openfda.brand_name:"{drug_name}"'
            ),
            "limit": "1",
        }
        if self.api_key:
            params["api_key"] = self.api_key
        return params

    async def fetch_label(self, drug_name: str) -> Optional[DrugLabel]:
        """
        Fetch the drug label for a medication.

        Args:
            drug_name: Free-text drug name as entered by the patient

        Returns:
            DrugLabel if a label record was found, None otherwise
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    f"{self.base_url}/drug/label.json",
                    params=self._build_params(drug_name),
                    headers={"Accept": "application/json"},
                )
                if response.status_code != 200:
                    logger.warning(
                        f"OpenFDA API returned {response.status_code} for {drug_name}"
                    )
                    return None

                return self._parse_label(response.json(), drug_name)

        except httpx.HTTPError as e:
            logger.warning(f"OpenFDA API error for {drug_name}: {e}")
            return None
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"OpenFDA API returned malformed body for {drug_name}: {e}")
            return None

    def _parse_label(self, data, drug_name: str) -> Optional[DrugLabel]:
        """Extract label sections from a label.json response."""
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            logger.warning(f"No FDA label found for {drug_name}")
            return None

        record = results[0]
        sections = {}
        for name in DrugLabel.model_fields:
            value = record.get(name) or []
            if isinstance(value, str):
                value = [value]
            elif not isinstance(value, list):
                logger.warning(f"Skipping malformed {name} section for {drug_name}")
                value = []
            sections[name] = [str(item) for item in value]

        return DrugLabel(**sections)
