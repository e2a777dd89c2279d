import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional
from contact_enrichment.models.schemas import EnrichmentQuery, ProviderResult
from contact_enrichment.utils.log import get_logger

logger = get_logger("enrichment-providers")

@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and endpoint for one provider, built once at startup."""
    api_key: Optional[str]
    base_url: str
    timeout_s: float = 20.0

class ProviderSchemaError(ValueError):
    """Provider answered with a payload we cannot read."""

def clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ProviderSchemaError(f"expected string, got {type(value).__name__}")
    value = value.strip()
    return value or None

def expect_dict(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ProviderSchemaError(f"expected JSON object, got {type(data).__name__}")
    return data

class EnrichmentProvider(ABC):
    name: str = "base"

    def __init__(self, config: ProviderConfig):
        self.config = config
        self.base_url = config.base_url.rstrip("/")

    async def enrich(self, query: EnrichmentQuery) -> ProviderResult:
        """Look up ``query``; never raises, failures become an empty result."""
        if not self.config.api_key:
            logger.debug("%s: no API key configured, skipping", self.name)
            return ProviderResult()
        try:
            result = await asyncio.wait_for(self._lookup(query), timeout=self.config.timeout_s)
        except asyncio.TimeoutError:
            logger.warning("%s enrichment timed out after %ss", self.name, self.config.timeout_s)
            return ProviderResult()
        except Exception as e:
            logger.warning("%s enrichment failed: %s", self.name, e)
            return ProviderResult()
        if result.is_empty():
            logger.debug("%s: no data for %s @ %s", self.name, query.full_name, query.domain)
            return result
        return result.model_copy(update={"enrichment_source": self.name})

    @abstractmethod
    async def _lookup(self, query: EnrichmentQuery) -> ProviderResult:
        raise NotImplementedError

class EmailVerificationProvider(ABC):
    name: str = "base"

    @abstractmethod
    async def verify(self, email: str) -> bool:
        """Return True only when the provider reports the address as valid."""
        raise NotImplementedError
