from typing import Any, Dict, Protocol

from ...schemas.push import PushSubscription


class PushSender(Protocol):
    def send(self, subscription: PushSubscription, payload: Dict[str, Any]) -> None:
        ...
