"""
Shared fixtures: every test runs against an in-memory store and a clock
that ticks one second per reading.
"""
import os
import uuid

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("METRICS_ENABLED", "false")

from datetime import datetime, timedelta, timezone

import pytest

from nexus_accounts.core.config import Settings
from nexus_accounts.db.kv import InMemoryKeyValueStore
from nexus_accounts.models.account import Account, Role, Status
from nexus_accounts.services.accounts import AccountService

REGISTERED_AT = datetime(2024, 8, 1, tzinfo=timezone.utc)


class TickingClock:
    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
def clock():
    return TickingClock(datetime(2024, 9, 1, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def settings():
    return Settings(STORAGE_BACKEND="memory", METRICS_ENABLED=False, _env_file=None)


@pytest.fixture
def service(kv, settings, clock):
    return AccountService(kv, settings=settings, clock=clock)


def make_account(role: Role, status: Status = Status.APPROVED, **fields) -> Account:
    defaults = {
        "email": f"{role.value.lower()}-{uuid.uuid4().hex[:8]}@example.edu",
        "name": role.value.title(),
        "created_at": REGISTERED_AT,
        "updated_at": REGISTERED_AT,
    }
    defaults.update(fields)
    return Account(role=role, status=status, **defaults)


@pytest.fixture
def super_admin(service):
    account = make_account(Role.SUPER_ADMIN, email="root@progress.com", name="Root")
    service.store.upsert(account)
    return account


@pytest.fixture
def admin(service):
    account = make_account(
        Role.ADMIN, email="admin@techuniversity.edu", name="Tech University Admin",
        college_name="Tech University",
    )
    service.store.upsert(account)
    return account


@pytest.fixture
def teacher(service):
    account = make_account(
        Role.TEACHER, email="john.doe@techuniversity.edu", name="John Doe",
        college_name="Tech University", department="Computer Science",
    )
    service.store.upsert(account)
    return account


def student_payload(**overrides) -> dict:
    payload = {
        "email": "alice@techuniversity.edu",
        "name": "Alice Johnson",
        "role": "STUDENT",
        "collegeName": "Tech University",
        "department": "Computer Science",
        "rollNumber": "CS001",
        "section": "A",
        "year": "3rd Year",
    }
    payload.update(overrides)
    return payload
