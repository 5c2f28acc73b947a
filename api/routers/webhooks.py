"""
Session write webhook.

Receives Supabase database-webhook calls for the workout_sessions table
(INSERT, UPDATE, DELETE) and schedules a dashboard recompute for the session
owner. The response is sent before the recompute runs, so a slow or failed
recompute never holds up the session write.
"""
import hmac
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_dashboard_service, get_settings
from backend.core.dashboard_service import DashboardService, SessionEvent
from backend.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/webhooks",
    tags=["Webhooks"],
)


class SessionWebhookPayload(BaseModel):
    """Supabase database webhook body."""
    type: str
    table: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    record: Optional[Dict[str, Any]] = None
    old_record: Optional[Dict[str, Any]] = None


def _verify_secret(provided: Optional[str], expected: Optional[str]) -> bool:
    """No configured secret means the endpoint is open (local development)."""
    if not expected:
        return True
    if not provided:
        return False
    return hmac.compare_digest(provided.encode(), expected.encode())


def _event_from_payload(payload: SessionWebhookPayload) -> SessionEvent:
    # DELETE carries only old_record
    row = payload.record or payload.old_record or {}
    return SessionEvent(
        user_id=str(row.get("user_id") or row.get("userId") or ""),
        event_type=payload.type.upper(),
        session_id=row.get("id"),
    )


@router.post("/sessions", status_code=202)
def session_webhook(
    payload: SessionWebhookPayload,
    background_tasks: BackgroundTasks,
    x_webhook_secret: Optional[str] = Header(None, alias="X-Webhook-Secret"),
    settings: Settings = Depends(get_settings),
    service: DashboardService = Depends(get_dashboard_service),
) -> dict:
    """
    Schedule a dashboard recompute for the owner of the written session.
    """
    if not _verify_secret(x_webhook_secret, settings.session_webhook_secret):
        raise HTTPException(status_code=401, detail="Invalid webhook secret")

    event = _event_from_payload(payload)
    if not event.user_id:
        raise HTTPException(status_code=400, detail="Payload has no user_id")

    logger.info(
        f"Session webhook received: type={event.event_type} "
        f"session={event.session_id} user={event.user_id}"
    )
    background_tasks.add_task(service.handle_session_event, event)

    return {"status": "accepted", "user_id": event.user_id}
