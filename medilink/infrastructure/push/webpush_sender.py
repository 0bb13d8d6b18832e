import json
import logging
from typing import Any, Dict, Optional

from pywebpush import WebPushException, webpush

from ...application.ports.push_sender import PushSender
from ...core.config import settings
from ...schemas.push import PushSubscription

logger = logging.getLogger(__name__)


class WebPushSender(PushSender):
    def __init__(self, private_key: Optional[str] = None, subject: Optional[str] = None):
        self.private_key = private_key if private_key is not None else settings.VAPID_PRIVATE_KEY
        self.subject = subject or settings.VAPID_SUBJECT

    def send(self, subscription: PushSubscription, payload: Dict[str, Any]) -> None:
        if not self.private_key:
            raise RuntimeError("VAPID private key not configured")
        try:
            webpush(
                subscription_info=subscription.to_webpush(),
                data=json.dumps(payload),
                vapid_private_key=self.private_key,
                vapid_claims={"sub": self.subject},
            )
        except WebPushException as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Web push rejected (status={status}): {e}")
            raise
