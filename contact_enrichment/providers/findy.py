from contact_enrichment.models.schemas import EnrichmentQuery, ProviderResult
from contact_enrichment.providers.base import EnrichmentProvider, clean_str, expect_dict
from contact_enrichment.utils.http import make_client, retryable

class FindyProvider(EnrichmentProvider):
    name = "findy"

    async def _lookup(self, query: EnrichmentQuery) -> ProviderResult:
        headers = {"X-API-Key": self.config.api_key}
        params = {"full_name": query.full_name, "company_domain": query.domain}
        async with make_client(headers=headers) as client:
            @retryable()
            async def do():
                resp = await client.get(f"{self.base_url}/v2/lookup", params=params)
                if resp.status_code == 404:
                    return {}
                resp.raise_for_status()
                return expect_dict(resp.json())
            data = await do()
        return ProviderResult(
            email=clean_str(data.get("email")),
            phone=clean_str(data.get("phone")),
        )
