from dataclasses import dataclass, field
from typing import Dict, List, Optional
import json
import logging

from ...schemas.push import (
    ActionResult,
    ClientCapabilities,
    NotificationPayload,
    PushSubscription,
    PWAStatus,
)
from ..ports.push_sender import PushSender
from ..ports.subscription_repo import SubscriptionRepository

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"
DEFAULT_ICON = "/android-chrome-192x192.png"
DEFAULT_TAG = "medilink-notification"


@dataclass
class PushContext:
    """Install/notification readiness of one browser client.

    Created the first time a client id is seen and kept for the lifetime of
    the app; never torn down.
    """

    is_supported: bool = False
    is_standalone: bool = False
    is_ios: bool = False
    is_installable: bool = False
    deferred_prompt: bool = False
    is_ready: bool = False

    def init(self, capabilities: ClientCapabilities) -> None:
        self.is_supported = capabilities.is_supported
        self.is_ios = capabilities.is_ios
        self.is_standalone = capabilities.is_standalone
        # the browser re-fires beforeinstallprompt on every page load
        self.deferred_prompt = capabilities.install_prompt_available and not self.is_standalone
        self.is_installable = self.deferred_prompt
        self.is_ready = True
        logger.info(f"[PWA] Context ready (supported={self.is_supported}, standalone={self.is_standalone}, ios={self.is_ios})")

    def mark_installed(self) -> None:
        logger.info("[PWA] App installed")
        self.is_installable = False
        self.is_standalone = True
        self.deferred_prompt = False


def _key(user_id: Optional[str]) -> str:
    return user_id or DEFAULT_KEY


@dataclass
class PushService:
    repo: SubscriptionRepository
    sender: PushSender
    vapid_public_key: str = ""
    contexts: Dict[str, PushContext] = field(default_factory=dict)

    def context_for(self, client_id: Optional[str] = None) -> PushContext:
        key = _key(client_id)
        if key not in self.contexts:
            self.contexts[key] = PushContext()
        return self.contexts[key]

    def init_client(self, capabilities: ClientCapabilities, client_id: Optional[str] = None) -> PWAStatus:
        self.context_for(client_id).init(capabilities)
        return self.status(client_id=client_id)

    def mark_installed(self, client_id: Optional[str] = None) -> PWAStatus:
        self.context_for(client_id).mark_installed()
        return self.status(client_id=client_id)

    def status(self, user_id: Optional[str] = None, client_id: Optional[str] = None) -> PWAStatus:
        context = self.context_for(client_id)
        return PWAStatus(
            is_supported=context.is_supported,
            is_subscribed=self.repo.get(_key(user_id)) is not None,
            is_installable=context.is_installable,
            is_standalone=context.is_standalone,
            is_ios=context.is_ios,
            is_ready=context.is_ready,
        )

    def request_permission(self, current: str, outcome: Optional[str] = None) -> ActionResult:
        if current == "unsupported":
            return ActionResult(success=False, error="Este navegador no soporta notificaciones")
        if current == "granted":
            return ActionResult(success=True, permission="granted", message="Permisos ya concedidos")
        if outcome is None:
            return ActionResult(success=False, error="Error al solicitar permisos")
        granted = outcome == "granted"
        logger.info(f"[PWA] Notification permission: {outcome}")
        return ActionResult(
            success=granted,
            permission=outcome,
            message="Permisos concedidos" if granted else "Permisos denegados",
        )

    def subscribe(self, subscription: PushSubscription, user_id: Optional[str] = None) -> ActionResult:
        if not self.vapid_public_key:
            logger.error("[PWA] VAPID public key not configured")
            return ActionResult(success=False, error="Configuración de notificaciones incompleta")
        try:
            self.repo.save(_key(user_id), subscription)
        except Exception as e:
            logger.error(f"[PWA] Error saving subscription: {e}")
            return ActionResult(success=False, error="Error al registrar suscripción")
        logger.info(f"[PWA] Subscription stored for {_key(user_id)}")
        return ActionResult(success=True, message="Suscripción registrada correctamente")

    def unsubscribe(self, user_id: Optional[str] = None) -> ActionResult:
        key = _key(user_id)
        if self.repo.get(key) is None:
            return ActionResult(success=False, error="No hay suscripción activa")
        try:
            self.repo.delete(key)
        except Exception as e:
            logger.error(f"[PWA] Error removing subscription: {e}")
            return ActionResult(success=False, error="Error al eliminar suscripción")
        logger.info(f"[PWA] Subscription removed for {key}")
        return ActionResult(success=True, message="Suscripción eliminada correctamente")

    def prompt_install(self, outcome: Optional[str], client_id: Optional[str] = None) -> ActionResult:
        context = self.context_for(client_id)
        if not context.deferred_prompt:
            if context.is_ios:
                return ActionResult(success=False, error="En iOS debes usar: Compartir → Añadir a pantalla de inicio")
            return ActionResult(success=False, error="El prompt de instalación no está disponible en este momento")
        if outcome is None:
            return ActionResult(success=False, error="Error al instalar la aplicación")

        # the browser only lets a deferred prompt be shown once
        context.deferred_prompt = False
        if outcome == "accepted":
            context.is_installable = False
        return ActionResult(
            success=True,
            outcome=outcome,
            message="App instalada correctamente" if outcome == "accepted" else "Instalación cancelada",
        )

    def send_notification(self, payload: NotificationPayload, user_id: Optional[str] = None) -> ActionResult:
        subscription = self.repo.get(_key(user_id))
        if subscription is None:
            return ActionResult(success=False, error="No hay suscripción disponible")
        body = {
            "title": payload.title,
            "body": payload.body,
            "icon": payload.icon or DEFAULT_ICON,
            "url": payload.url or "/",
            "tag": payload.tag or DEFAULT_TAG,
            "requireInteraction": payload.requireInteraction,
        }
        try:
            self.sender.send(subscription, body)
        except Exception as e:
            logger.error(f"Error sending push notification: {e}")
            return ActionResult(success=False, error="Error al enviar notificación")
        logger.debug(f"Push sent to {_key(user_id)}: {json.dumps(body)}")
        return ActionResult(success=True, message="Notificación enviada correctamente")

    def send_bulk(self, user_ids: List[str], payload: NotificationPayload) -> ActionResult:
        results = [self.send_notification(payload, user_id) for user_id in user_ids]
        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful
        return ActionResult(
            success=True,
            message=f"Enviadas {successful} notificaciones, {failed} fallidas",
            details={"successful": successful, "failed": failed, "total": len(user_ids)},
        )

    def notify_upcoming_appointment(self, user_id: str, doctor_name: str, date: str, time: str, specialty: str) -> ActionResult:
        return self.send_notification(
            NotificationPayload(
                title="📅 Recordatorio de Cita",
                body=f"Tienes una cita con {doctor_name} ({specialty}) el {date} a las {time}",
                url="/user",
                tag="appointment-reminder",
                requireInteraction=True,
            ),
            user_id,
        )

    def notify_health_alert(self, user_id: str, type: str, message: str, priority: str) -> ActionResult:
        return self.send_notification(
            NotificationPayload(
                title=f"⚠️ Alerta de Salud - {type}",
                body=message,
                url="/user",
                tag="health-alert",
                requireInteraction=priority == "high",
            ),
            user_id,
        )
