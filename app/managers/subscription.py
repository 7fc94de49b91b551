"""Subscription creation and lookup."""

from app.managers.base import BaseEntityManager
from app.models.subscription import Subscription


class SubscriptionManager(BaseEntityManager[Subscription]):
    model = Subscription

    def create(self, name: str) -> Subscription:
        return Subscription(name=name)

    def get_by_id(self, subscription_id: int) -> Subscription | None:
        return self.query().filter(Subscription.id == subscription_id).first()
