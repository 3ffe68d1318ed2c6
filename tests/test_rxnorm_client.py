"""
Tests for the RxNorm client.

Uses mocked HTTP responses to test client logic without making real API calls.
"""

import pytest
from unittest.mock import AsyncMock, patch, MagicMock
import httpx

from treatment_assistant.references.rxnorm_client import RxNormClient


RXCUI_RESPONSE = {"idGroup": {"name": "metformin", "rxnormId": ["6809"]}}

RXCUI_EMPTY_RESPONSE = {"idGroup": {"name": "notadrug"}}

PROPERTIES_RESPONSE = {
    "properties": {
        "rxcui": "6809",
        "name": "metformin",
        "synonym": "",
        "tty": "IN",
    }
}


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json = MagicMock(return_value=payload)
    return response


def patched_client(mock_client, *responses):
    mock_instance = AsyncMock()
    mock_instance.get = AsyncMock(side_effect=list(responses))
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    mock_client.return_value = mock_instance
    return mock_instance


class TestRxNormClientInit:
    """Tests for RxNormClient initialization."""

    def test_default_init(self):
        client = RxNormClient()
        assert client.base_url == "https://rxnav.nlm.nih.gov/REST"
        assert client.timeout == 10.0

    def test_base_url_override_strips_slash(self):
        client = RxNormClient(base_url="http://localhost:9000/REST/", timeout=2.5)
        assert client.base_url == "http://localhost:9000/REST"
        assert client.timeout == 2.5


class TestRxNormResolve:
    """Tests for drug name resolution."""

    @pytest.mark.asyncio
    async def test_resolve_found(self):
        client = RxNormClient()

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = patched_client(
                mock_client,
                make_response(payload=RXCUI_RESPONSE),
                make_response(payload=PROPERTIES_RESPONSE),
            )

            concept = await client.resolve("Metformin")

        assert concept is not None
        assert concept.rxcui == "6809"
        assert concept.name == "metformin"
        assert concept.tty == "IN"
        assert concept.synonym is None

        first_call = mock_instance.get.call_args_list[0]
        assert first_call.args[0].endswith("/rxcui.json")
        assert first_call.kwargs["params"] == {"name": "Metformin"}
        assert mock_instance.get.call_args_list[1].args[0].endswith("/rxcui/6809/properties.json")

    @pytest.mark.asyncio
    async def test_resolve_no_identifier(self):
        client = RxNormClient()

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = patched_client(mock_client, make_response(payload=RXCUI_EMPTY_RESPONSE))

            concept = await client.resolve("notadrug")

        assert concept is None
        assert mock_instance.get.call_count == 1

    @pytest.mark.asyncio
    async def test_resolve_non_200(self):
        client = RxNormClient()

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(mock_client, make_response(status_code=503))

            concept = await client.resolve("Metformin")

        assert concept is None

    @pytest.mark.asyncio
    async def test_properties_failure_falls_back_to_entered_name(self):
        client = RxNormClient()

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(
                mock_client,
                make_response(payload=RXCUI_RESPONSE),
                make_response(status_code=500),
            )

            concept = await client.resolve("Metformin")

        assert concept.rxcui == "6809"
        assert concept.name == "Metformin"

    @pytest.mark.asyncio
    async def test_resolve_transport_error(self):
        client = RxNormClient()

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = patched_client(mock_client)
            mock_instance.get = AsyncMock(side_effect=httpx.ConnectError("Connection failed"))

            concept = await client.resolve("Metformin")

        assert concept is None

    @pytest.mark.asyncio
    async def test_resolve_timeout(self):
        client = RxNormClient(timeout=0.1)

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = patched_client(mock_client)
            mock_instance.get = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))

            concept = await client.resolve("Metformin")

        assert concept is None
        mock_client.assert_called_once_with(timeout=0.1)

    @pytest.mark.asyncio
    async def test_resolve_malformed_body(self):
        client = RxNormClient()
        response = make_response()
        response.json = MagicMock(side_effect=ValueError("Expecting value"))

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(mock_client, response)

            concept = await client.resolve("Metformin")

        assert concept is None


class TestExtractRxcui:
    """Tests for RxCUI extraction."""

    def test_first_identifier_wins(self):
        data = {"idGroup": {"rxnormId": ["111", "222"]}}
        assert RxNormClient._extract_rxcui(data) == "111"

    @pytest.mark.parametrize("data", [None, [], {}, {"idGroup": None}, {"idGroup": {"rxnormId": []}}])
    def test_missing_identifier(self, data):
        assert RxNormClient._extract_rxcui(data) is None


class TestRxNormWrongShapeBodies:
    """JSON bodies that parse but do not have the RxNav shape resolve to no data."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"idGroup": "oops"},
        {"idGroup": {"rxnormId": "6809"}},
        {"idGroup": {"rxnormId": [6809]}},
        ["6809"],
    ])
    async def test_bad_identifier_payload(self, payload):
        client = RxNormClient()

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = patched_client(mock_client, make_response(payload=payload))

            concept = await client.resolve("Metformin")

        assert concept is None
        assert mock_instance.get.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"properties": "metformin"},
        {"properties": ["metformin"]},
        "not an object",
    ])
    async def test_bad_properties_payload_keeps_identifier(self, payload):
        client = RxNormClient()

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(
                mock_client,
                make_response(payload=RXCUI_RESPONSE),
                make_response(payload=payload),
            )

            concept = await client.resolve("Metformin")

        assert concept.rxcui == "6809"
        assert concept.name == "Metformin"
        assert concept.tty is None

    @pytest.mark.asyncio
    async def test_non_string_property_values_ignored(self):
        client = RxNormClient()
        payload = {"properties": {"name": ["metformin"], "tty": 7}}

        with patch("httpx.AsyncClient") as mock_client:
            patched_client(
                mock_client,
                make_response(payload=RXCUI_RESPONSE),
                make_response(payload=payload),
            )

            concept = await client.resolve("Metformin")

        assert concept.name == "Metformin"
        assert concept.tty is None
