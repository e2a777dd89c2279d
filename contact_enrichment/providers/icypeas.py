import asyncio
import time
import orjson
from typing import Any, Optional
from contact_enrichment.models.schemas import EnrichmentQuery, ProviderResult
from contact_enrichment.providers.base import (
    EmailVerificationProvider, EnrichmentProvider, ProviderConfig, clean_str, expect_dict, logger,
)
from contact_enrichment.utils.http import make_client, retryable

# Item statuses Icypeas uses for a deliverable address
VALID_STATUSES = ("FOUND", "DEBITED")

def is_valid_payload(data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    if data.get("isValid") is True:
        return True
    item = data.get("item")
    if isinstance(item, dict):
        if item.get("isValid") is True:
            return True
        return (item.get("status") or "").upper() in VALID_STATUSES
    return (data.get("status") or "").upper() in VALID_STATUSES

def _headers(api_key: str) -> dict:
    return {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}

class IcypeasProvider(EnrichmentProvider):
    """Email search, followed by a verification call when an address is found."""
    name = "icypeas"

    async def _lookup(self, query: EnrichmentQuery) -> ProviderResult:
        search_payload = {
            "firstname": query.first_name,
            "lastname": query.last_name,
            "domainOrCompany": query.domain,
            "customObject": {"externalId": f"{query.first_name}-{query.last_name}-{query.domain}"},
        }
        async with make_client(headers=_headers(self.config.api_key)) as client:
            @retryable()
            async def post(path: str, payload: dict):
                resp = await client.post(f"{self.base_url}{path}", content=orjson.dumps(payload))
                resp.raise_for_status()
                return expect_dict(resp.json())

            found = await post("/email-search", search_payload)
            email = clean_str(found.get("email"))
            if not email:
                return ProviderResult()

            checked = await post("/email-verification", {
                "email": email,
                "customObject": {"externalId": f"verify-{email}"},
            })
        return ProviderResult(email=email, verified=is_valid_payload(checked))

class IcypeasVerifier(EmailVerificationProvider):
    name = "icypeas"

    def __init__(self, config: ProviderConfig, webhook_url: Optional[str] = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.webhook_url = webhook_url

    async def verify(self, email: str) -> bool:
        if not self.config.api_key:
            logger.debug("%s: no API key configured, cannot verify", self.name)
            return False
        custom = {"externalId": f"verify_{int(time.time() * 1000)}"}
        if self.webhook_url:
            custom["webhookUrl"] = self.webhook_url
        payload = {"email": email, "customObject": custom}
        return await asyncio.wait_for(self._check(payload), timeout=self.config.timeout_s)

    async def _check(self, payload: dict) -> bool:
        async with make_client(headers=_headers(self.config.api_key), timeout=self.config.timeout_s) as client:
            resp = await client.post(f"{self.base_url}/email-verification", content=orjson.dumps(payload))
            resp.raise_for_status()
            data = resp.json()
        return is_valid_payload(data)
