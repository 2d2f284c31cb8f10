"""
SessionManager tests
"""
import json

from conftest import make_account

from nexus_accounts.core.errors import StorageError
from nexus_accounts.db.kv import InMemoryKeyValueStore
from nexus_accounts.models.account import Role
from nexus_accounts.services.session import SESSION_KEY, SessionManager


def test_empty_store_has_no_session(kv):
    assert SessionManager(kv).init() is None


def test_set_current_persists_and_survives_restart(kv):
    account = make_account(Role.TEACHER, name="John Doe")
    SessionManager(kv).set_current(account)

    restored = SessionManager(kv)

    assert restored.init() == account
    assert restored.get_current() == account
    assert json.loads(kv.get(SESSION_KEY))["id"] == account.id


def test_last_write_wins(kv):
    first, second = make_account(Role.ADMIN), make_account(Role.STUDENT)
    session = SessionManager(kv)

    session.set_current(first)
    session.set_current(second)

    assert SessionManager(kv).init().id == second.id


def test_teardown_removes_the_slot(kv):
    session = SessionManager(kv)
    session.set_current(make_account(Role.ADMIN))

    session.teardown()

    assert session.get_current() is None
    assert kv.get(SESSION_KEY) is None


def test_invalid_json_is_discarded(kv):
    kv.set(SESSION_KEY, "{{{")

    assert SessionManager(kv).init() is None
    assert kv.get(SESSION_KEY) is None


def test_invalid_account_shape_is_discarded(kv):
    kv.set(SESSION_KEY, json.dumps({"id": "x", "role": "NOBODY"}))

    assert SessionManager(kv).init() is None
    assert kv.get(SESSION_KEY) is None


def test_unreachable_store_yields_no_session():
    class DownStore(InMemoryKeyValueStore):
        def get(self, key):
            raise StorageError("down")

    assert SessionManager(DownStore()).init() is None
