"""
Account Service — AccountStore

Durable Account collection stored under the `accounts` key.
"""
from __future__ import annotations

from nexus_accounts.db.collection import JsonCollection
from nexus_accounts.db.kv import KeyValueStore
from nexus_accounts.models.account import Account, Role, Status

ACCOUNTS_KEY = "accounts"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountStore:
    def __init__(self, kv: KeyValueStore):
        self._collection = JsonCollection(kv, ACCOUNTS_KEY, Account)

    def list(self) -> list[Account]:
        return self._collection.load()

    def list_by_role(self, role: Role, status: Status | None = None) -> list[Account]:
        """Accounts with `role` (and `status`, if given) in store order."""
        return [
            a for a in self.list()
            if a.role is role and (status is None or a.status is status)
        ]

    def upsert(self, account: Account) -> None:
        accounts = self.list()
        for i, existing in enumerate(accounts):
            if existing.id == account.id:
                accounts[i] = account
                break
        else:
            accounts.append(account)
        self._collection.save(accounts)

    def remove(self, account_id: str) -> None:
        accounts = self.list()
        remaining = [a for a in accounts if a.id != account_id]
        if len(remaining) != len(accounts):
            self._collection.save(remaining)

    def find_by_id(self, account_id: str) -> Account | None:
        return next((a for a in self.list() if a.id == account_id), None)

    def find_by_email(self, email: str) -> Account | None:
        wanted = normalize_email(email)
        return next((a for a in self.list() if normalize_email(a.email) == wanted), None)
