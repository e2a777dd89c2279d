from functools import lru_cache
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from contact_enrichment.models.schemas import (
    EnrichedContact, EnrichmentQuery, EnrichRequest, InvalidArgument, VerificationWebhookEvent,
    VerifyEmailRequest, VerifyEmailResponse,
)
from contact_enrichment.utils.log import get_logger
from contact_enrichment.pipeline.orchestrator import Aggregator
from contact_enrichment.pipeline.verification import build_verifier, verify_email
from contact_enrichment.pipeline.verification_events import handle_verification_event
from contact_enrichment.providers.base import EmailVerificationProvider

logger = get_logger("contact-enrichment")

app = FastAPI(title="Contact Enrichment Service", version="0.1.0")

@lru_cache(maxsize=1)
def get_aggregator() -> Aggregator:
    return Aggregator()

@lru_cache(maxsize=1)
def get_verifier() -> EmailVerificationProvider:
    return build_verifier()

@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    logger.info("rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"message": str(exc)})

@app.get("/health")
def health():
    return {"ok": True}

@app.post(
    "/api/enrich",
    response_model=EnrichedContact,
    response_model_exclude_none=True,
    response_model_by_alias=True,
)
async def enrich_endpoint(body: EnrichRequest, aggregator: Aggregator = Depends(get_aggregator)):
    query = EnrichmentQuery.parse(body.full_name, body.domain)
    return await aggregator.enrich(query)

@app.post("/api/verify-email", response_model=VerifyEmailResponse, response_model_by_alias=True)
async def verify_email_endpoint(body: VerifyEmailRequest, verifier: EmailVerificationProvider = Depends(get_verifier)):
    email = body.email.strip()
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")
    valid = await verify_email(email, verifier=verifier)
    return VerifyEmailResponse(email=email, is_valid=valid)

@app.post("/api/webhook/email-verification")
async def verification_webhook(event: VerificationWebhookEvent, request: Request):
    request_meta = {
        "ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("User-Agent"),
    }
    return await handle_verification_event(event, request_meta=request_meta)
