"""Integration tests for the email validation endpoint."""

import pytest
from httpx import AsyncClient

from core.exceptions import EmailServiceNotConfiguredError
from domain.entities.email_verification import EmailVerificationVerdict
from tests.conftest import FakeEmailVerifier, deliverable_verdict


@pytest.mark.asyncio
async def test_deliverable(api_client: AsyncClient):
    response = await api_client.post("/api/validate-email", json={"email": "ann@example.com"})

    assert response.status_code == 200
    body = response.json()
    assert body["isValid"] is True
    assert body["result"] == "deliverable"
    assert body["details"]["score"] == 0.8


@pytest.mark.asyncio
async def test_undeliverable_with_suggestion(
    api_client: AsyncClient, email_verifier: FakeEmailVerifier
):
    email_verifier.verdicts["ann@gmial.com"] = deliverable_verdict(
        "ann@gmial.com", mx_found=False, suggestion="ann@gmail.com"
    )

    response = await api_client.post("/api/validate-email", json={"email": "ann@gmial.com"})

    assert response.status_code == 200
    body = response.json()
    assert body["isValid"] is False
    assert body["result"] == "undeliverable"
    assert body["reason"] == "MX record not found"
    assert body["suggestion"] == "ann@gmail.com"


@pytest.mark.asyncio
async def test_email_required(api_client: AsyncClient, email_verifier: FakeEmailVerifier):
    response = await api_client.post("/api/validate-email", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "Email is required"
    assert email_verifier.calls == []


@pytest.mark.asyncio
async def test_unavailable(api_client: AsyncClient, email_verifier: FakeEmailVerifier):
    email_verifier.verdicts["ann@example.com"] = EmailVerificationVerdict.unavailable(
        "ann@example.com", "upstream returned HTTP 503"
    )

    response = await api_client.post("/api/validate-email", json={"email": "ann@example.com"})

    assert response.status_code == 500
    assert response.json()["error_code"] == "EMAIL_SERVICE_UNAVAILABLE"


@pytest.mark.asyncio
async def test_not_configured(api_client: AsyncClient, email_verifier: FakeEmailVerifier):
    email_verifier.error = EmailServiceNotConfiguredError()

    response = await api_client.post("/api/validate-email", json={"email": "ann@example.com"})

    assert response.status_code == 500
    assert response.json()["error"] == "Email validation service not configured"
