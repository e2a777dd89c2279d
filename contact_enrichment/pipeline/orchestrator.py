import asyncio
from typing import Any, Iterable, List, Optional, Sequence
from contact_enrichment.config.settings import Settings, settings as default_settings
from contact_enrichment.models.schemas import (
    ENRICHMENT_FIELDS, EnrichedContact, EnrichmentQuery, ProviderResult,
)
from contact_enrichment.providers.apollo import ApolloProvider
from contact_enrichment.providers.base import EnrichmentProvider, ProviderConfig
from contact_enrichment.providers.clearbit import ClearbitProvider
from contact_enrichment.providers.findy import FindyProvider
from contact_enrichment.providers.hunter import HunterProvider
from contact_enrichment.providers.icypeas import IcypeasProvider
from contact_enrichment.utils.log import get_logger

logger = get_logger("enrichment-aggregator")

def provider_config(cfg: Settings, prefix: str) -> ProviderConfig:
    return ProviderConfig(
        api_key=getattr(cfg, f"{prefix}_API_KEY"),
        base_url=getattr(cfg, f"{prefix}_BASE_URL"),
        timeout_s=cfg.PROVIDER_TIMEOUT_S,
    )

def build_enrichers(cfg: Optional[Settings] = None) -> List[EnrichmentProvider]:
    """Adapters in registration order; this order decides merge precedence."""
    cfg = cfg or default_settings
    return [
        IcypeasProvider(provider_config(cfg, "ICYPEAS")),
        FindyProvider(provider_config(cfg, "FINDY")),
        ApolloProvider(provider_config(cfg, "APOLLO")),
        HunterProvider(provider_config(cfg, "HUNTER"), verified_score=cfg.HUNTER_VERIFIED_SCORE),
        ClearbitProvider(provider_config(cfg, "CLEARBIT")),
    ]

def _has_value(value: Any) -> bool:
    # False counts as missing so a later provider can still report verified=True
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True

def merge_results(results: Iterable[ProviderResult]) -> EnrichedContact:
    """First non-empty value per field wins, in the order given."""
    merged: dict = {}
    for result in results:
        for field in ENRICHMENT_FIELDS:
            if field in merged:
                continue
            value = getattr(result, field)
            if _has_value(value):
                merged[field] = value
    return EnrichedContact(**merged)

async def _settle(providers: Sequence[EnrichmentProvider], query: EnrichmentQuery) -> List[ProviderResult]:
    outcomes = await asyncio.gather(
        *(p.enrich(query) for p in providers),
        return_exceptions=True,
    )
    results: List[ProviderResult] = []
    for provider, outcome in zip(providers, outcomes):
        if isinstance(outcome, BaseException):
            logger.error("%s escaped its error boundary: %r", provider.name, outcome)
            results.append(ProviderResult())
        else:
            results.append(outcome)
    return results

class Aggregator:
    def __init__(self, providers: Optional[Sequence[EnrichmentProvider]] = None):
        self.providers = list(providers) if providers is not None else build_enrichers()

    async def enrich(self, query: EnrichmentQuery) -> EnrichedContact:
        results = await _settle(self.providers, query)
        merged = merge_results(results)
        contributors = [p.name for p, r in zip(self.providers, results) if not r.is_empty()]
        logger.info(
            "enriched %s @ %s: %d/%d providers contributed %s",
            query.full_name, query.domain, len(contributors), len(self.providers), contributors,
        )
        return merged

async def enrich_contact_data(
    full_name: str,
    domain: str,
    providers: Optional[Sequence[EnrichmentProvider]] = None,
) -> EnrichedContact:
    query = EnrichmentQuery.parse(full_name, domain)
    return await Aggregator(providers).enrich(query)
