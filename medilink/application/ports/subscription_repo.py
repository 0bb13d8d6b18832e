from typing import Optional, Protocol

from ...schemas.push import PushSubscription


class SubscriptionRepository(Protocol):
    def save(self, key: str, subscription: PushSubscription) -> None:
        ...

    def get(self, key: str) -> Optional[PushSubscription]:
        ...

    def delete(self, key: str) -> bool:
        ...
