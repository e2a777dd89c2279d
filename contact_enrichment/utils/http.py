import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential
from contact_enrichment.config.settings import settings

def make_client(headers: dict | None = None, timeout: float | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT_S,
        headers=headers or {},
        follow_redirects=True,
    )

def is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return False

def retryable(attempts: int | None = None):
    return retry(
        stop=stop_after_attempt(attempts or settings.MAX_RETRIES),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=6),
        retry=retry_if_exception(is_transient),
        reraise=True,
    )
