import orjson
from contact_enrichment.models.schemas import EnrichmentQuery, ProviderResult
from contact_enrichment.providers.base import EnrichmentProvider, clean_str, expect_dict
from contact_enrichment.utils.http import make_client, retryable

def _location(person: dict) -> str | None:
    parts = [person.get(k) for k in ("city", "state", "country")]
    parts = [p.strip() for p in parts if isinstance(p, str) and p.strip()]
    return ", ".join(parts) or None

class ApolloProvider(EnrichmentProvider):
    name = "apollo"

    async def _lookup(self, query: EnrichmentQuery) -> ProviderResult:
        headers = {
            "Content-Type": "application/json",
            "Cache-Control": "no-cache",
        }
        payload = {
            "api_key": self.config.api_key,
            "name": query.full_name,
            "domain": query.domain,
        }

        async with make_client(headers=headers) as client:
            @retryable()
            async def do():
                resp = await client.post(f"{self.base_url}/v1/people/match", content=orjson.dumps(payload))
                if resp.status_code == 404:
                    return {}
                resp.raise_for_status()
                return expect_dict(resp.json())
            data = await do()

        # Newer API versions nest the match under "person"
        person = data.get("person") if isinstance(data.get("person"), dict) else data
        return ProviderResult(
            email=clean_str(person.get("email")),
            linkedin_url=clean_str(person.get("linkedin_url")),
            twitter_url=clean_str(person.get("twitter_url")),
            job_title=clean_str(person.get("title")),
            location=_location(person),
        )
