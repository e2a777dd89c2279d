from __future__ import annotations

import asyncio

import httpx
import pytest

from conftest import provider_config
from contact_enrichment.config.settings import Settings
from contact_enrichment.providers.base import EmailVerificationProvider
from contact_enrichment.providers.icypeas import IcypeasVerifier, is_valid_payload
from contact_enrichment.pipeline.verification import build_verifier, verify_email


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"isValid": True}, True),
        ({"isValid": False}, False),
        ({"item": {"status": "FOUND"}}, True),
        ({"item": {"status": "DEBITED"}}, True),
        ({"item": {"status": "DEBITED_NOT_FOUND"}}, False),
        ({"item": {"status": "BAD_INPUT"}}, False),
        ({"status": "found"}, True),
        ({}, False),
        (["isValid"], False),
    ],
)
def test_is_valid_payload(payload, expected):
    assert is_valid_payload(payload) is expected


@pytest.mark.asyncio
async def test_valid_address(http_stub):
    stub = http_stub(lambda request: httpx.Response(200, json={"isValid": True}))
    assert await verify_email("ada@analytical.io", verifier=IcypeasVerifier(provider_config())) is True
    assert stub.paths() == ["/email-verification"]
    assert stub.json_body(0)["email"] == "ada@analytical.io"


@pytest.mark.asyncio
async def test_invalid_address(http_stub):
    http_stub(lambda request: httpx.Response(200, json={"isValid": False}))
    assert await verify_email("nobody@analytical.io", verifier=IcypeasVerifier(provider_config())) is False


@pytest.mark.asyncio
async def test_unreachable_provider_is_false(http_stub):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    stub = http_stub(handler)
    assert await verify_email("ada@analytical.io", verifier=IcypeasVerifier(provider_config())) is False
    # single attempt, no retries
    assert len(stub.requests) == 1


@pytest.mark.asyncio
async def test_slow_provider_is_bounded_and_false(http_stub):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json={"isValid": True})

    http_stub(handler)
    loop = asyncio.get_running_loop()
    started = loop.time()
    verifier = IcypeasVerifier(provider_config(timeout_s=0.1))
    assert await verify_email("ada@analytical.io", verifier=verifier) is False
    assert loop.time() - started < 2


@pytest.mark.asyncio
async def test_provider_error_status_is_false(http_stub):
    http_stub(lambda request: httpx.Response(500, json={"message": "oops"}))
    assert await verify_email("ada@analytical.io", verifier=IcypeasVerifier(provider_config())) is False


@pytest.mark.asyncio
async def test_missing_key_is_false_without_network(http_stub):
    stub = http_stub(lambda request: httpx.Response(200, json={"isValid": True}))
    assert await verify_email("ada@analytical.io", verifier=IcypeasVerifier(provider_config(api_key=None))) is False
    assert stub.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["", "   "])
async def test_empty_email_is_false(http_stub, email):
    stub = http_stub(lambda request: httpx.Response(200, json={"isValid": True}))
    assert await verify_email(email, verifier=IcypeasVerifier(provider_config())) is False
    assert stub.requests == []


@pytest.mark.asyncio
async def test_verifier_exception_is_false():
    class Exploding(EmailVerificationProvider):
        async def verify(self, email: str) -> bool:
            raise RuntimeError("boom")

    assert await verify_email("ada@analytical.io", verifier=Exploding()) is False


@pytest.mark.asyncio
async def test_webhook_url_is_attached(http_stub):
    stub = http_stub(lambda request: httpx.Response(200, json={"isValid": True}))
    verifier = build_verifier(Settings(_env_file=None, ICYPEAS_API_KEY="k", ICYPEAS_BASE_URL="https://stub.test/api", API_URL="https://crm.example.com/"))
    assert await verify_email("ada@analytical.io", verifier=verifier) is True

    custom = stub.json_body(0)["customObject"]
    assert custom["webhookUrl"] == "https://crm.example.com/api/webhook/email-verification"
    assert custom["externalId"].startswith("verify_")
    assert stub.requests[0].url.path == "/api/email-verification"


@pytest.mark.asyncio
async def test_no_webhook_without_api_url(http_stub):
    stub = http_stub(lambda request: httpx.Response(200, json={"isValid": True}))
    verifier = build_verifier(Settings(_env_file=None, ICYPEAS_API_KEY="k", API_URL=None))
    await verify_email("ada@analytical.io", verifier=verifier)
    assert "webhookUrl" not in stub.json_body(0)["customObject"]
