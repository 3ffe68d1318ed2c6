"""
Tests for the openFDA drug label client.

Uses mocked HTTP responses to test client logic without making real API calls.
"""

import pytest
from unittest.mock import AsyncMock, patch, MagicMock
import httpx

from treatment_assistant.references.openfda_client import OpenFDAClient


LABEL_RESPONSE = {
    "meta": {"results": {"total": 1}},
    "results": [
        {
            "boxed_warning": ["WARNING: LACTIC ACIDOSIS. Postmarketing cases of metformin-associated lactic acidosis..."],
            "contraindications": ["Severe renal impairment (eGFR below 30 mL/min/1.73 m2)."],
            "drug_interactions": ["Carbonic anhydrase inhibitors may increase the risk of lactic acidosis."],
            "dosage_and_administration": "Starting dose 500 mg twice daily.",
            "openfda": {"generic_name": ["METFORMIN HYDROCHLORIDE"]},
        }
    ],
}


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json = MagicMock(return_value=payload)
    return response


def patched_client(mock_client, response):
    mock_instance = AsyncMock()
    mock_instance.get = AsyncMock(return_value=response)
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    mock_client.return_value = mock_instance
    return mock_instance


class TestOpenFDAClientInit:
    """Tests for OpenFDAClient initialization."""

    def test_default_init(self, monkeypatch):
        monkeypatch.delenv("OPENFDA_API_KEY", raising=False)
        client = OpenFDAClient()
        assert client.api_key is None
        assert client.base_url == "https://api.fda.gov"
        assert client.timeout == 10.0

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENFDA_API_KEY", "env-key")
        client = OpenFDAClient()
        assert client.api_key == "env-key"

    def test_explicit_api_key_wins(self, monkeypatch):
        monkeypatch.setenv("OPENFDA_API_KEY", "env-key")
        client = OpenFDAClient(api_key="explicit-key")
        assert client.api_key == "explicit-key"


class TestBuildParams:
    """Tests for query parameter construction."""

    def test_searches_generic_and_brand(self, monkeypatch):
        monkeypatch.delenv("OPENFDA_API_KEY", raising=False)
        params = OpenFDAClient()._build_params("Metformin")

        assert params["search"] == 'openfda.generic_name:"Metformin"+openfda.brand_name:"Metformin"'
        assert params["limit"] == "1"
        assert "api_key" not in params

    def test_includes_api_key(self):
        params = OpenFDAClient(api_key="abc")._build_params("Metformin")
        assert params["api_key"] == "abc"


class TestFetchLabel:
    """Tests for label retrieval."""

    @pytest.mark.asyncio
    async def test_fetch_found(self):
        client = OpenFDAClient(api_key="abc")

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = patched_client(mock_client, make_response(payload=LABEL_RESPONSE))

            label = await client.fetch_label("Metformin")

        assert label is not None
        assert label.boxed_warning[0].startswith("WARNING: LACTIC ACIDOSIS")
        assert label.contraindications == ["Severe renal impairment (eGFR below 30 mL/min/1.73 m2)."]
        assert label.warnings == []
        assert label.pregnancy == []

        call = mock_instance.get.call_args
        assert call.args[0] == "https://api.fda.gov/drug/label.json"
        assert call.kwargs["params"]["api_key"] == "abc"

    @pytest.mark.asyncio
    async def test_string_section_is_wrapped(self):
        client = OpenFDAClient()

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(mock_client, make_response(payload=LABEL_RESPONSE))

            label = await client.fetch_label("Metformin")

        assert label.dosage_and_administration == ["Starting dose 500 mg twice daily."]

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = OpenFDAClient()

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(mock_client, make_response(status_code=404, payload={"error": {"code": "NOT_FOUND"}}))

            label = await client.fetch_label("notadrug")

        assert label is None

    @pytest.mark.asyncio
    async def test_empty_results(self):
        client = OpenFDAClient()

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(mock_client, make_response(payload={"results": []}))

            label = await client.fetch_label("Metformin")

        assert label is None

    @pytest.mark.asyncio
    async def test_transport_error(self):
        client = OpenFDAClient()

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = patched_client(mock_client, None)
            mock_instance.get = AsyncMock(side_effect=httpx.ConnectTimeout("timed out"))

            label = await client.fetch_label("Metformin")

        assert label is None

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        client = OpenFDAClient()
        response = make_response()
        response.json = MagicMock(side_effect=ValueError("Expecting value"))

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(mock_client, response)

            label = await client.fetch_label("Metformin")

        assert label is None


class TestFetchLabelWrongShapeBodies:
    """JSON bodies that parse but do not have the label shape resolve to no data."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"results": {"a": 1}},
        {"results": "label"},
        {"results": ["label"]},
        ["results"],
    ])
    async def test_bad_results_payload(self, payload):
        client = OpenFDAClient()

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(mock_client, make_response(payload=payload))

            label = await client.fetch_label("Metformin")

        assert label is None

    @pytest.mark.asyncio
    async def test_bad_section_is_skipped(self):
        client = OpenFDAClient()
        payload = {
            "results": [
                {
                    "boxed_warning": {"text": "nested"},
                    "contraindications": ["Severe renal impairment."],
                }
            ]
        }

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(mock_client, make_response(payload=payload))

            label = await client.fetch_label("Metformin")

        assert label.boxed_warning == []
        assert label.contraindications == ["Severe renal impairment."]
