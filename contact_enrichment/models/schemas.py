from urllib.parse import urlsplit
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, Dict, Any, Tuple

class InvalidArgument(ValueError):
    """Raised for malformed caller input, before any provider is contacted."""

def normalize_domain(value: str) -> str:
    """Reduce ``value`` to a bare lowercase hostname, or "" if nothing usable is left."""
    text = (value or "").strip().lower()
    if "://" in text:
        text = urlsplit(text).netloc
    text = text.split("/", 1)[0].split("?", 1)[0].split("#", 1)[0]
    text = text.rsplit("@", 1)[-1].split(":", 1)[0].rstrip(".")
    if text.startswith("www."):
        text = text[4:]
    if any(ch.isspace() for ch in text):
        return ""
    return text

class EnrichmentQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_name: str = Field(..., description="Person's full name")
    domain: str = Field(..., description="Company domain as a bare hostname")

    @field_validator("full_name")
    @classmethod
    def _check_full_name(cls, v: str) -> str:
        v = " ".join(v.split())
        if not v:
            raise ValueError("full_name must not be empty")
        return v

    @field_validator("domain")
    @classmethod
    def _check_domain(cls, v: str) -> str:
        v = normalize_domain(v)
        if not v:
            raise ValueError("domain must be a hostname")
        return v

    @classmethod
    def parse(cls, full_name: Any, domain: Any) -> "EnrichmentQuery":
        if not isinstance(full_name, str) or not full_name.strip():
            raise InvalidArgument("full_name must be a non-empty string")
        if not isinstance(domain, str) or not domain.strip():
            raise InvalidArgument("domain must be a non-empty string")
        try:
            return cls(full_name=full_name, domain=domain)
        except ValidationError as e:
            raise InvalidArgument(str(e)) from e

    @property
    def first_name(self) -> str:
        parts = self.full_name.split(" ", 1)
        return parts[0] if len(parts) > 1 else ""

    @property
    def last_name(self) -> str:
        return self.full_name.split(" ", 1)[-1]

class ProviderResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = Field(None, alias="linkedInUrl")
    twitter_url: Optional[str] = None
    company_name: Optional[str] = None
    job_title: Optional[str] = None
    location: Optional[str] = None
    verified: Optional[bool] = None
    enrichment_source: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f) is None for f in ENRICHMENT_FIELDS)

class EnrichedContact(ProviderResult):
    """Merged enrichment output.

    Each populated field holds the value of the first provider, in registration
    order, that supplied it. ``enrichment_source`` names the first provider that
    contributed anything.
    """

# Merge order of fields; must list every ProviderResult field.
ENRICHMENT_FIELDS: Tuple[str, ...] = (
    "email",
    "phone",
    "linkedin_url",
    "twitter_url",
    "company_name",
    "job_title",
    "location",
    "verified",
    "enrichment_source",
)

class EnrichRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(..., alias="fullName")
    domain: str

class VerifyEmailRequest(BaseModel):
    email: str = ""

class VerifyEmailResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    is_valid: bool = Field(..., alias="isValid")

class VerificationWebhookEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    email: Optional[str] = None
    status: Optional[str] = None
    is_valid: Optional[bool] = Field(None, alias="isValid")
    custom_object: Dict[str, Any] = Field(default_factory=dict, alias="customObject")
