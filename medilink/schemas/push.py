# medilink/schemas/push.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional


class PushKeys(BaseModel):
    p256dh: str
    auth: str


class PushSubscription(BaseModel):
    """Browser PushSubscription.toJSON() shape."""

    model_config = ConfigDict(populate_by_name=True)

    endpoint: str
    expiration_time: Optional[float] = Field(default=None, alias="expirationTime")
    keys: PushKeys

    def to_webpush(self) -> Dict[str, Any]:
        return {"endpoint": self.endpoint, "keys": self.keys.model_dump()}


class SubscribeRequest(BaseModel):
    subscription: PushSubscription
    user_id: Optional[str] = None


class UnsubscribeRequest(BaseModel):
    user_id: Optional[str] = None


class NotificationPayload(BaseModel):
    title: str
    body: str
    icon: Optional[str] = None
    url: Optional[str] = None
    tag: Optional[str] = None
    requireInteraction: bool = False


class SendNotificationRequest(NotificationPayload):
    user_id: Optional[str] = None


class BulkNotificationRequest(BaseModel):
    user_ids: List[str]
    payload: NotificationPayload


class UpcomingAppointmentNotice(BaseModel):
    user_id: str
    doctor_name: str
    date: str
    time: str
    specialty: str


class HealthAlertNotice(BaseModel):
    user_id: str
    type: str
    message: str
    priority: Literal["low", "medium", "high"] = "medium"


class ClientCapabilities(BaseModel):
    """Readiness flags a browser client reports on each app start."""

    client_id: Optional[str] = None

    is_supported: bool = False
    is_standalone: bool = False
    is_ios: bool = False
    install_prompt_available: bool = False


class PermissionRequest(BaseModel):
    current: Literal["default", "granted", "denied", "unsupported"] = "default"
    outcome: Optional[Literal["default", "granted", "denied"]] = None


class InstallPromptRequest(BaseModel):
    client_id: Optional[str] = None
    outcome: Optional[Literal["accepted", "dismissed"]] = None


class ActionResult(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    outcome: Optional[str] = None
    permission: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class PWAStatus(BaseModel):
    is_supported: bool
    is_subscribed: bool
    is_installable: bool
    is_standalone: bool
    is_ios: bool
    is_ready: bool
