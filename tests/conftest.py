from __future__ import annotations

import asyncio
import json
from typing import Callable, List, Optional

import httpx
import pytest

from contact_enrichment.models.schemas import EnrichmentQuery, ProviderResult
from contact_enrichment.providers import apollo, clearbit, findy, hunter, icypeas
from contact_enrichment.providers.base import EnrichmentProvider, ProviderConfig

PROVIDER_MODULES = (icypeas, findy, apollo, hunter, clearbit)


class HttpStub:
    """Routes outgoing provider requests to a handler and records them."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def make_client(self, headers: dict | None = None, timeout: float | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self._handle),
            headers=headers or {},
            timeout=timeout or 5,
        )

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def json_body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def http_stub(monkeypatch):
    """Call with a handler; returns the HttpStub wired into every provider module."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> HttpStub:
        stub = HttpStub(handler)
        for mod in PROVIDER_MODULES:
            monkeypatch.setattr(mod, "make_client", stub.make_client)
        return stub

    return install


def provider_config(api_key: Optional[str] = "test-key", base_url: str = "https://stub.test", timeout_s: float = 5.0):
    return ProviderConfig(api_key=api_key, base_url=base_url, timeout_s=timeout_s)


@pytest.fixture
def query() -> EnrichmentQuery:
    return EnrichmentQuery(full_name="Ada Lovelace", domain="analytical.io")


class StaticProvider(EnrichmentProvider):
    """In-memory provider returning a fixed result after an optional delay."""

    def __init__(
        self,
        name: str,
        result: Optional[ProviderResult] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
        timeout_s: float = 5.0,
    ):
        super().__init__(provider_config(timeout_s=timeout_s))
        self.name = name
        self.result = result or ProviderResult()
        self.delay = delay
        self.error = error
        self.calls = 0

    async def _lookup(self, query: EnrichmentQuery) -> ProviderResult:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result
