import datetime
from pathlib import Path

import orjson

from contact_enrichment.config.settings import settings
from contact_enrichment.models.schemas import VerificationWebhookEvent
from contact_enrichment.providers.icypeas import is_valid_payload
from contact_enrichment.utils.log import get_logger

logger = get_logger("verification-events")


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _event_log_path() -> Path | None:
    path = (settings.VERIFICATION_EVENT_LOG_PATH or "").strip()
    if not path:
        return None
    return Path(path)


def _append_event_log(payload: dict) -> bool:
    path = _event_log_path()
    if not path:
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("ab") as handle:
            handle.write(orjson.dumps(payload))
            handle.write(b"\n")
    except Exception as exc:
        logger.warning("verification event log write failed: %s", exc)
        return False
    return True


async def handle_verification_event(event: VerificationWebhookEvent, request_meta: dict | None = None) -> dict:
    """Record an asynchronous verification callback from the provider."""
    raw = event.model_dump(by_alias=True)
    valid = is_valid_payload(raw)
    payload = {
        **raw,
        "valid": valid,
        "received_at": _now_iso(),
    }
    if request_meta:
        payload["request_meta"] = request_meta
    logged = _append_event_log(payload)
    logger.info("verification callback for %s: valid=%s status=%s", event.email, valid, event.status)
    return {"ok": True, "logged": logged, "email": event.email, "valid": valid}
