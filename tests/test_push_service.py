from medilink.application.services.push_service import PushContext, PushService
from medilink.infrastructure.push.memory_subscription_repo import InMemorySubscriptionRepository
from medilink.schemas.push import ClientCapabilities, NotificationPayload, PushSubscription


class FakeSender:
    def __init__(self, fail_for=None):
        self.sent = []
        self.fail_for = fail_for

    def send(self, subscription, payload):
        if subscription.endpoint == self.fail_for:
            raise RuntimeError("gone")
        self.sent.append((subscription.endpoint, payload))


def make_sub(endpoint="https://push.example/abc"):
    return PushSubscription.model_validate({
        "endpoint": endpoint,
        "expirationTime": None,
        "keys": {"p256dh": "key", "auth": "secret"},
    })


def make_service(sender=None, vapid="pub", **context):
    svc = PushService(
        repo=InMemorySubscriptionRepository(),
        sender=sender or FakeSender(),
        vapid_public_key=vapid,
    )
    svc.contexts["default"] = PushContext(**context)
    return svc


def test_context_init_standalone_disables_install():
    ctx = PushContext()
    ctx.init(ClientCapabilities(is_supported=True, is_standalone=True, install_prompt_available=True))
    assert ctx.is_ready is True
    assert ctx.is_installable is False
    assert ctx.deferred_prompt is False


def test_context_reinit_without_prompt_clears_stale_prompt():
    ctx = PushContext()
    ctx.init(ClientCapabilities(is_supported=True, install_prompt_available=True))
    assert ctx.deferred_prompt is True
    ctx.init(ClientCapabilities(is_supported=True, install_prompt_available=False))
    assert ctx.deferred_prompt is False
    assert ctx.is_installable is False


def test_clients_keep_separate_contexts():
    svc = make_service()
    svc.init_client(ClientCapabilities(is_supported=True, install_prompt_available=True), "chrome")
    svc.init_client(ClientCapabilities(is_supported=True, is_ios=True), "ios")
    assert svc.status(client_id="chrome").is_installable is True
    assert svc.status(client_id="ios").is_ios is True
    assert svc.prompt_install("accepted", "ios").error.startswith("En iOS")
    assert svc.prompt_install("accepted", "chrome").success is True


def test_subscribe_needs_vapid_key():
    svc = make_service(vapid="")
    out = svc.subscribe(make_sub(), "u1")
    assert out.success is False
    assert out.error == "Configuración de notificaciones incompleta"


def test_subscribe_then_unsubscribe():
    svc = make_service()
    assert svc.subscribe(make_sub(), "u1").success is True
    assert svc.status("u1").is_subscribed is True
    assert svc.unsubscribe("u1").success is True
    out = svc.unsubscribe("u1")
    assert out.success is False
    assert out.error == "No hay suscripción activa"


def test_anonymous_subscription_uses_default_key():
    svc = make_service()
    svc.subscribe(make_sub())
    assert svc.status().is_subscribed is True
    assert svc.status("someone").is_subscribed is False


def test_permission_flow():
    svc = make_service()
    assert svc.request_permission("granted").message == "Permisos ya concedidos"
    assert svc.request_permission("unsupported").success is False
    denied = svc.request_permission("default", "denied")
    assert denied.success is False
    assert denied.permission == "denied"
    assert svc.request_permission("default", "granted").success is True


def test_install_prompt_without_deferred_event():
    assert make_service(is_ios=True).prompt_install("accepted").error.startswith("En iOS")
    out = make_service().prompt_install("accepted")
    assert out.error == "El prompt de instalación no está disponible en este momento"


def test_install_prompt_consumed_once():
    svc = make_service(deferred_prompt=True, is_installable=True)
    out = svc.prompt_install("accepted")
    assert out.success is True
    assert out.message == "App instalada correctamente"
    assert svc.context_for().is_installable is False
    assert svc.prompt_install("accepted").success is False


def test_send_notification_applies_defaults():
    sender = FakeSender()
    svc = make_service(sender=sender)
    svc.subscribe(make_sub(), "u1")
    out = svc.send_notification(NotificationPayload(title="Hola", body="Mundo"), "u1")
    assert out.success is True
    _, payload = sender.sent[0]
    assert payload["icon"] == "/android-chrome-192x192.png"
    assert payload["url"] == "/"
    assert payload["tag"] == "medilink-notification"


def test_send_notification_without_subscription():
    out = make_service().send_notification(NotificationPayload(title="a", body="b"), "nobody")
    assert out.error == "No hay suscripción disponible"


def test_bulk_counts_failures():
    sender = FakeSender(fail_for="https://push.example/bad")
    svc = make_service(sender=sender)
    svc.subscribe(make_sub(), "u1")
    svc.subscribe(make_sub("https://push.example/bad"), "u2")
    out = svc.send_bulk(["u1", "u2", "u3"], NotificationPayload(title="a", body="b"))
    assert out.details == {"successful": 1, "failed": 2, "total": 3}


def test_health_alert_high_priority_requires_interaction():
    sender = FakeSender()
    svc = make_service(sender=sender)
    svc.subscribe(make_sub(), "u1")
    svc.notify_health_alert("u1", "Presión", "Revisa tu presión arterial", "high")
    svc.notify_upcoming_appointment("u1", "Dra. Ruiz", "2030-05-10", "10:30", "Cardiología")
    alert, reminder = [p for _, p in sender.sent]
    assert alert["requireInteraction"] is True
    assert alert["tag"] == "health-alert"
    assert reminder["tag"] == "appointment-reminder"
    assert "Dra. Ruiz (Cardiología)" in reminder["body"]
