"""
Account Service — NotificationBus

Appends one Notification per lifecycle event of interest to the
`notifications` collection. There is no de-duplication: repeating a
transition records it again.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

from nexus_accounts.core.errors import NotFoundError
from nexus_accounts.db.collection import JsonCollection
from nexus_accounts.db.kv import KeyValueStore
from nexus_accounts.models.account import Account, Role, utcnow
from nexus_accounts.models.notification import Notification, NotificationFactory, NotificationType

NOTIFICATIONS_KEY = "notifications"

logger = logging.getLogger(__name__)


class NotificationBus:
    def __init__(self, kv: KeyValueStore, clock: Callable[[], datetime] = utcnow):
        self._collection = JsonCollection(kv, NOTIFICATIONS_KEY, Notification)
        self._clock = clock

    def notify(self, type: NotificationType, subject: Account) -> Notification:
        notifications = self._collection.load()
        created_at = self._clock()
        # createdAt must strictly increase even when the clock does not tick.
        if notifications:
            newest = max(n.created_at for n in notifications)
            if created_at <= newest:
                created_at = newest + timedelta(microseconds=1)

        notification = NotificationFactory.build(type, subject, created_at=created_at)
        notifications.append(notification)
        self._collection.save(notifications)
        logger.info("Notification %s recorded for account %s", notification.event, subject.id)
        return notification

    def list(self) -> list[Notification]:
        return self._collection.load()

    def list_for_role(self, role: Role) -> list[Notification]:
        """Signup notifications waiting on `role` to act."""
        return [n for n in self.list() if n.audience_role is role]

    def list_for_account(self, account_id: str) -> list[Notification]:
        """Outcome notifications addressed to one account."""
        return [n for n in self.list() if n.recipient_id == account_id]

    def unread_count(self) -> int:
        return sum(1 for n in self.list() if not n.is_read)

    def mark_read(self, notification_id: str) -> Notification:
        notifications = self.list()
        for i, n in enumerate(notifications):
            if n.id == notification_id:
                notifications[i] = n.model_copy(update={"is_read": True})
                self._collection.save(notifications)
                return notifications[i]
        raise NotFoundError(f"Notification '{notification_id}' not found.")

    def mark_all_read(self) -> int:
        notifications = self.list()
        unread = sum(1 for n in notifications if not n.is_read)
        if unread:
            self._collection.save([n.model_copy(update={"is_read": True}) for n in notifications])
        return unread

    def clear_all(self) -> None:
        self._collection.save([])

    def prune(self, older_than: timedelta) -> int:
        """Drop notifications created before now - older_than. Caller-initiated only."""
        cutoff = self._clock() - older_than
        notifications = self.list()
        kept = [n for n in notifications if n.created_at >= cutoff]
        removed = len(notifications) - len(kept)
        if removed:
            self._collection.save(kept)
            logger.info("Pruned %d notifications older than %s", removed, cutoff.isoformat())
        return removed
