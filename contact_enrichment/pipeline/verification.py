from typing import Optional
from contact_enrichment.config.settings import Settings, settings as default_settings
from contact_enrichment.providers.base import EmailVerificationProvider, ProviderConfig
from contact_enrichment.providers.icypeas import IcypeasVerifier
from contact_enrichment.utils.log import get_logger

logger = get_logger("email-verifier")

WEBHOOK_PATH = "/api/webhook/email-verification"

def build_verifier(cfg: Optional[Settings] = None) -> EmailVerificationProvider:
    cfg = cfg or default_settings
    webhook_url = f"{cfg.API_URL.rstrip('/')}{WEBHOOK_PATH}" if cfg.API_URL else None
    config = ProviderConfig(
        api_key=cfg.ICYPEAS_API_KEY,
        base_url=cfg.ICYPEAS_BASE_URL,
        timeout_s=cfg.VERIFY_TIMEOUT_S,
    )
    return IcypeasVerifier(config, webhook_url=webhook_url)

async def verify_email(email: str, verifier: Optional[EmailVerificationProvider] = None) -> bool:
    """Single verification attempt. Anything short of a positive answer is False."""
    if not isinstance(email, str) or not email.strip():
        return False
    verifier = verifier or build_verifier()
    try:
        return bool(await verifier.verify(email.strip()))
    except Exception as e:
        logger.warning("email verification failed for %s: %s", email, e)
        return False
