from contact_enrichment.models.schemas import EnrichmentQuery, ProviderResult
from contact_enrichment.providers.base import EnrichmentProvider, clean_str, expect_dict
from contact_enrichment.utils.http import make_client, retryable

def _location(company: dict) -> str | None:
    location = company.get("location")
    if isinstance(location, str) and location.strip():
        return location.strip()
    geo = company.get("geo") if isinstance(company.get("geo"), dict) else {}
    parts = [geo.get(k) for k in ("city", "state", "country")]
    parts = [p.strip() for p in parts if isinstance(p, str) and p.strip()]
    return ", ".join(parts) or None

class ClearbitProvider(EnrichmentProvider):
    """Firmographic lookup; works on the domain alone."""
    name = "clearbit"

    async def _lookup(self, query: EnrichmentQuery) -> ProviderResult:
        headers = {"Authorization": f"Bearer {self.config.api_key}"}
        async with make_client(headers=headers) as client:
            @retryable()
            async def do():
                resp = await client.get(f"{self.base_url}/v2/companies/find", params={"domain": query.domain})
                if resp.status_code in (404, 422):
                    return None
                resp.raise_for_status()
                return expect_dict(resp.json())
            data = await do()
        if data is None:
            return ProviderResult()
        return ProviderResult(
            company_name=clean_str(data.get("name")),
            location=_location(data),
        )
