import hmac
import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from api.dependencies.rate_limits import get_limiter
from api.dependencies.services import get_notification_service
from core.config import settings
from core.logging import get_module_logger
from modules.match_notifications.service import MatchNotificationService

logger = get_module_logger()
router = APIRouter(tags=["Push Notifications"])
limiter = get_limiter()


def _is_authorized(authorization: Optional[str]) -> bool:
    secret = settings.server.WEBHOOK_SECRET
    if not secret:
        return True
    if not authorization or not authorization.startswith("Bearer "):
        return False
    return hmac.compare_digest(authorization[len("Bearer ") :], secret)


def _decode_payload(raw: bytes) -> Any:
    """Decode the webhook body, accepting a JSON object or a JSON-encoded string."""
    payload = json.loads(raw)
    if isinstance(payload, str):
        payload = json.loads(payload)
    return payload


@router.post("/push-notifications")
@limiter.limit(settings.server.PUSH_NOTIFICATIONS_RATE_LIMIT)
async def handle_push_notification(
    request: Request,
    service: MatchNotificationService = Depends(get_notification_service),
):
    """Handle a database change webhook and send the resulting push notification.

    Args:
        request (Request): The incoming HTTP request. Its body is the change
            event, either as a JSON object or a JSON-encoded string.
        service (MatchNotificationService): The notification pipeline.

    Returns:
        JSONResponse: The invocation status code and body.
    """
    if not _is_authorized(request.headers.get("authorization")):
        logger.warning(
            "push_notification_unauthorized",
            ip_address=request.client.host if request.client else "unknown",
        )
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    raw = await request.body()
    try:
        payload = _decode_payload(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("payload_validation_error", error=str(e))
        return JSONResponse(status_code=400, content={"error": str(e)})

    result = await run_in_threadpool(service.handle_event, payload)
    return JSONResponse(status_code=result.status_code, content=result.to_body())
