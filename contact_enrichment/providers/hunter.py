from contact_enrichment.models.schemas import EnrichmentQuery, ProviderResult
from contact_enrichment.providers.base import (
    EnrichmentProvider, ProviderConfig, ProviderSchemaError, clean_str, expect_dict,
)
from contact_enrichment.utils.http import make_client, retryable

def _twitter_url(handle: str | None) -> str | None:
    if not handle or handle.startswith("http"):
        return handle
    return f"https://twitter.com/{handle.lstrip('@')}"

class HunterProvider(EnrichmentProvider):
    name = "hunter"

    def __init__(self, config: ProviderConfig, verified_score: int = 75):
        super().__init__(config)
        self.verified_score = verified_score

    async def _lookup(self, query: EnrichmentQuery) -> ProviderResult:
        params = {"domain": query.domain, "full_name": query.full_name, "api_key": self.config.api_key}
        async with make_client() as client:
            @retryable()
            async def do():
                resp = await client.get(f"{self.base_url}/v2/email-finder", params=params)
                resp.raise_for_status()
                return expect_dict(resp.json())
            data = await do()

        found = expect_dict(data.get("data") or {})
        email = clean_str(found.get("email"))
        if not email:
            return ProviderResult()
        score = found.get("score")
        if score is not None and not isinstance(score, (int, float)):
            raise ProviderSchemaError(f"score is not numeric: {score!r}")
        verified = score > self.verified_score if score is not None else None
        return ProviderResult(
            email=email,
            verified=verified,
            job_title=clean_str(found.get("position")),
            linkedin_url=clean_str(found.get("linkedin_url")),
            twitter_url=_twitter_url(clean_str(found.get("twitter"))),
            phone=clean_str(found.get("phone_number")),
        )
