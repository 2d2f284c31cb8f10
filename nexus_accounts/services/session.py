"""
Account Service — SessionManager

A single "current account" slot persisted under `current-session`.
Last write wins; signing in again simply overwrites the slot.
"""
import json
import logging

from pydantic import ValidationError as PydanticValidationError

from nexus_accounts.core.errors import StorageError
from nexus_accounts.db.kv import KeyValueStore
from nexus_accounts.models.account import Account

SESSION_KEY = "current-session"

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(self, kv: KeyValueStore):
        self._kv = kv
        self._current: Account | None = None

    def init(self) -> Account | None:
        """Restore the slot from the store. Unreadable data clears it."""
        try:
            raw = self._kv.get(SESSION_KEY)
        except StorageError as exc:
            logger.warning("Session could not be restored: %s", exc)
            self._current = None
            return None

        if raw is None:
            self._current = None
            return None

        try:
            self._current = Account.model_validate(json.loads(raw))
        except (ValueError, PydanticValidationError) as exc:
            logger.warning("Invalid session data discarded: %s", exc)
            self._current = None
            try:
                self._kv.remove(SESSION_KEY)
            except StorageError as remove_exc:
                logger.warning("Could not clear invalid session: %s", remove_exc)
        return self._current

    def set_current(self, account: Account | None) -> None:
        if account is None:
            self._kv.remove(SESSION_KEY)
            logger.info("Session cleared")
        else:
            self._kv.set(SESSION_KEY, json.dumps(account.to_storage()))
            logger.info("Session set to account %s (%s)", account.id, account.role.value)
        self._current = account

    def get_current(self) -> Account | None:
        return self._current

    def teardown(self) -> None:
        self.set_current(None)
