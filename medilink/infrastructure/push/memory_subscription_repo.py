from typing import Dict, Optional

from ...application.ports.subscription_repo import SubscriptionRepository
from ...schemas.push import PushSubscription


class InMemorySubscriptionRepository(SubscriptionRepository):
    """One subscription per user key, kept for the life of the process."""

    def __init__(self) -> None:
        self._store: Dict[str, PushSubscription] = {}

    def save(self, key: str, subscription: PushSubscription) -> None:
        self._store[key] = subscription

    def get(self, key: str) -> Optional[PushSubscription]:
        return self._store.get(key)

    def delete(self, key: str) -> bool:
        return self._store.pop(key, None) is not None
