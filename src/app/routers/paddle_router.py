"""
Paddle Webhook Router

Handles Paddle Billing webhook events:
- signature verification using webhook secret (Billing, HMAC-SHA256)
- subscription / customer / transaction persistence via ProcessWebhook
- monthly token limit refresh on subscription changes

Store write failures are not caught here; they surface as 5xx so Paddle
redelivers the event.
"""
import json
import logging
import hmac
import hashlib
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, Header, HTTPException

from core.config import settings
from core.responses import success_response
from schemas.paddle_events import parse_billing_event
from services.webhook_processor import ProcessWebhook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/webhooks", tags=["webhooks", "paddle"])

webhook_processor: Optional[ProcessWebhook] = None


def set_dependencies(processor: Optional[ProcessWebhook]):
    """의존성 설정 (main.py 또는 테스트에서 호출)"""
    global webhook_processor
    webhook_processor = processor


def _get_processor() -> ProcessWebhook:
    if webhook_processor is not None:
        return webhook_processor

    from core.factory import ServiceFactory

    return ServiceFactory.get_webhook_processor()


def _parse_signature_header(signature: str) -> Dict[str, str]:
    parts: Dict[str, str] = {}
    for chunk in signature.split(";"):
        chunk = chunk.strip()
        if not chunk or "=" not in chunk:
            continue
        k, v = chunk.split("=", 1)
        parts[k.strip()] = v.strip()
    return parts


def _verify_signature(raw: bytes, signature: Optional[str]) -> bool:
    """Verify Paddle-Signature if configured (Billing HMAC-SHA256)."""

    strict = settings.PADDLE_WEBHOOK_STRICT_VERIFY
    secret = (settings.PADDLE_WEBHOOK_SECRET or "").strip()

    if not secret:
        if strict:
            logger.warning("[PADDLE] strict verify enabled but no webhook secret configured")
            return False
        return True

    if not signature:
        logger.warning("[PADDLE] missing Paddle-Signature header")
        return not strict

    parts = _parse_signature_header(signature)
    ts = parts.get("ts")
    provided = parts.get("h1")
    if not ts or not provided:
        logger.warning("[PADDLE] signature header missing ts/h1 component")
        return not strict

    # HMAC_SHA256(secret, f"{ts}:{raw}")
    payload = ts.encode("utf-8") + b":" + raw
    expected = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()

    if hmac.compare_digest(expected, provided):
        return True

    logger.error("[PADDLE] signature mismatch")
    return not strict


@router.get("/paddle")
async def paddle_webhook_get():
    return success_response(data={"ok": True}, message="paddle webhook alive")


@router.post("/paddle")
async def paddle_webhook(
    request: Request,
    paddle_signature: str | None = Header(default=None, alias="Paddle-Signature"),
):
    raw = await request.body()
    logger.info(
        "[PADDLE] webhook received: len=%s, has_signature=%s",
        len(raw),
        bool(paddle_signature),
    )

    if not _verify_signature(raw, paddle_signature):
        raise HTTPException(status_code=400, detail="invalid signature")

    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise HTTPException(status_code=400, detail="invalid json")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="invalid json")

    event = parse_billing_event(payload)
    processed = await _get_processor().process_event(event)

    event_type = getattr(event.event_type, "value", event.event_type)
    data: Dict[str, Any] = {
        "event_type": event_type,
        "event_id": event.event_id,
        "skipped": not processed,
    }

    if not processed:
        return success_response(data=data, message="event ignored")

    return success_response(data=data, message="paddle webhook processed")
