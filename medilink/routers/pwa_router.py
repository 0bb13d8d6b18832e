from typing import Optional
from fastapi import APIRouter, Depends, Query
import logging

from ..application.services.push_service import PushService
from ..dependencies import get_push_service
from ..schemas.push import (
    ActionResult,
    BulkNotificationRequest,
    ClientCapabilities,
    HealthAlertNotice,
    InstallPromptRequest,
    NotificationPayload,
    PermissionRequest,
    PWAStatus,
    SendNotificationRequest,
    SubscribeRequest,
    UnsubscribeRequest,
    UpcomingAppointmentNotice,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pwa", tags=["PWA"])


@router.post("/init", response_model=PWAStatus)
def init_context(capabilities: ClientCapabilities, push: PushService = Depends(get_push_service)):
    return push.init_client(capabilities, capabilities.client_id)


@router.get("/status", response_model=PWAStatus)
def pwa_status(
    user_id: Optional[str] = Query(None),
    client_id: Optional[str] = Query(None),
    push: PushService = Depends(get_push_service),
):
    return push.status(user_id, client_id)


@router.post("/permission", response_model=ActionResult)
def request_permission(body: PermissionRequest, push: PushService = Depends(get_push_service)):
    return push.request_permission(body.current, body.outcome)


@router.post("/subscribe", response_model=ActionResult)
def subscribe(body: SubscribeRequest, push: PushService = Depends(get_push_service)):
    return push.subscribe(body.subscription, body.user_id)


@router.post("/unsubscribe", response_model=ActionResult)
def unsubscribe(body: UnsubscribeRequest, push: PushService = Depends(get_push_service)):
    return push.unsubscribe(body.user_id)


@router.post("/install", response_model=ActionResult)
def prompt_install(body: InstallPromptRequest, push: PushService = Depends(get_push_service)):
    return push.prompt_install(body.outcome, body.client_id)


@router.post("/installed", response_model=PWAStatus)
def app_installed(client_id: Optional[str] = Query(None), push: PushService = Depends(get_push_service)):
    return push.mark_installed(client_id)


@router.post("/notifications", response_model=ActionResult)
def send_notification(body: SendNotificationRequest, push: PushService = Depends(get_push_service)):
    payload = NotificationPayload(**body.model_dump(exclude={"user_id"}))
    return push.send_notification(payload, body.user_id)


@router.post("/notifications/bulk", response_model=ActionResult)
def send_bulk(body: BulkNotificationRequest, push: PushService = Depends(get_push_service)):
    return push.send_bulk(body.user_ids, body.payload)


@router.post("/notifications/appointment-reminder", response_model=ActionResult)
def appointment_reminder(body: UpcomingAppointmentNotice, push: PushService = Depends(get_push_service)):
    return push.notify_upcoming_appointment(body.user_id, body.doctor_name, body.date, body.time, body.specialty)


@router.post("/notifications/health-alert", response_model=ActionResult)
def health_alert(body: HealthAlertNotice, push: PushService = Depends(get_push_service)):
    return push.notify_health_alert(body.user_id, body.type, body.message, body.priority)
