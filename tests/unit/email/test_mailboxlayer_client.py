"""Unit tests for MailboxLayerClient."""

import httpx
import pytest

from core.exceptions import EmailServiceNotConfiguredError
from infrastructure.email.mailboxlayer_client import MailboxLayerClient

BASE_URL = "http://apilayer.test/api/check"


def _payload(**overrides):
    data = {
        "email": "ann@example.com",
        "did_you_mean": "",
        "user": "ann",
        "domain": "example.com",
        "format_valid": True,
        "mx_found": True,
        "smtp_check": True,
        "catch_all": None,
        "role": False,
        "disposable": False,
        "free": False,
        "score": 0.8,
    }
    data.update(overrides)
    return data


def _client(handler, api_key: str = "test-key") -> MailboxLayerClient:
    return MailboxLayerClient(
        api_key=api_key,
        base_url=BASE_URL,
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestVerify:
    @pytest.mark.asyncio
    async def test_deliverable_address(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=_payload())

        verdict = await _client(handler).verify("ann@example.com")

        assert verdict.deliverable
        assert verdict.suggestion is None
        assert verdict.additional_info["domain"] == "example.com"
        assert len(requests) == 1
        params = requests[0].url.params
        assert params["access_key"] == "test-key"
        assert params["email"] == "ann@example.com"
        assert params["smtp"] == "1"
        assert params["format"] == "1"

    @pytest.mark.asyncio
    async def test_score_below_threshold(self):
        verdict = await _client(lambda r: httpx.Response(200, json=_payload(score=0.59))).verify(
            "ann@example.com"
        )

        assert not verdict.deliverable
        assert verdict.reason == "Low quality score"
        assert not verdict.service_unavailable

    @pytest.mark.asyncio
    async def test_maps_suggestion(self):
        verdict = await _client(
            lambda r: httpx.Response(
                200, json=_payload(mx_found=False, did_you_mean="ann@gmail.com")
            )
        ).verify("ann@gmial.com")

        assert verdict.suggestion == "ann@gmail.com"
        assert verdict.reason == "MX record not found"

    @pytest.mark.asyncio
    async def test_every_call_hits_the_service(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_payload())

        client = _client(handler)
        await client.verify("ann@example.com")
        await client.verify("ann@example.com")

        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_malformed_address_short_circuits(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no network call expected")

        verdict = await _client(handler).verify("not-an-email")

        assert not verdict.deliverable
        assert verdict.reason == "Invalid format"
        assert not verdict.service_unavailable

    @pytest.mark.asyncio
    async def test_empty_address_short_circuits(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no network call expected")

        verdict = await _client(handler).verify("")

        assert verdict.reason == "Invalid format"

    @pytest.mark.asyncio
    async def test_missing_api_key_is_configuration_error(self):
        with pytest.raises(EmailServiceNotConfiguredError):
            await _client(lambda r: httpx.Response(200, json=_payload()), api_key="").verify(
                "ann@example.com"
            )


class TestUnavailable:
    @pytest.mark.asyncio
    async def test_http_error_status(self):
        verdict = await _client(lambda r: httpx.Response(503)).verify("ann@example.com")

        assert verdict.service_unavailable
        assert not verdict.deliverable
        assert verdict.reason == "Validation service unavailable"
        assert "503" in verdict.error_detail
        assert "test-key" not in verdict.error_detail

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        verdict = await _client(handler).verify("ann@example.com")

        assert verdict.service_unavailable
        assert "ConnectTimeout" in verdict.error_detail

    @pytest.mark.asyncio
    async def test_service_reported_error(self):
        body = {
            "success": False,
            "error": {"code": 104, "type": "usage_limit_reached", "info": "Monthly limit reached"},
        }
        verdict = await _client(lambda r: httpx.Response(200, json=body)).verify("ann@example.com")

        assert verdict.service_unavailable
        assert verdict.error_detail == "Monthly limit reached"

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        verdict = await _client(lambda r: httpx.Response(200, text="<html>")).verify(
            "ann@example.com"
        )

        assert verdict.service_unavailable
