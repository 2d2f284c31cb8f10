"""
NotificationFactory / NotificationBus tests
"""
import json
from datetime import timedelta

import pytest
from conftest import make_account

from nexus_accounts.core.errors import NotFoundError
from nexus_accounts.models.account import Role, Status
from nexus_accounts.models.notification import NotificationFactory, NotificationType
from nexus_accounts.services.notification_bus import NOTIFICATIONS_KEY, NotificationBus


@pytest.fixture
def bus(kv, clock):
    return NotificationBus(kv, clock=clock)


@pytest.fixture
def student():
    return make_account(
        Role.STUDENT, status=Status.PENDING, name="Alice Johnson", roll_number="CS001",
        college_name="Tech University", department="Computer Science",
    )


# ─── Factory ───────────────────────────────────────────────────────────────────
def test_student_signup_goes_to_teachers(student):
    n = NotificationFactory.build(NotificationType.SIGNUP, student)

    assert n.event == "student_signup"
    assert n.title == "New Student Registration"
    assert n.message == "Student Alice Johnson (Roll: CS001) has registered and is pending approval."
    assert n.audience_role is Role.TEACHER
    assert n.recipient_id is None
    assert n.subject.account_id == student.id
    assert n.is_read is False


def test_teacher_and_admin_signups_go_one_rank_up():
    teacher = make_account(Role.TEACHER, name="John Doe", college_name="Tech University")
    admin = make_account(Role.ADMIN, name="Ada", college_name="Tech University")

    t = NotificationFactory.build(NotificationType.SIGNUP, teacher)
    a = NotificationFactory.build(NotificationType.SIGNUP, admin)

    assert t.audience_role is Role.ADMIN
    assert t.message == "Teacher John Doe from Tech University has registered and is pending approval."
    assert a.audience_role is Role.SUPER_ADMIN
    assert a.message == "Admin Ada has registered for college Tech University and is pending approval."


def test_outcome_notifications_address_the_subject(student):
    approved = NotificationFactory.build(NotificationType.APPROVED, student)
    rejected = NotificationFactory.build(NotificationType.REJECTED, student)

    assert approved.event == "student_approved"
    assert approved.recipient_id == student.id
    assert approved.audience_role is None
    assert rejected.title == "Student Rejected"


def test_super_admin_has_no_templates():
    with pytest.raises(ValueError):
        NotificationFactory.build(NotificationType.SIGNUP, make_account(Role.SUPER_ADMIN))


# ─── Bus ───────────────────────────────────────────────────────────────────────
def test_notify_appends_in_order_as_camel_case_json(kv, bus, student):
    bus.notify(NotificationType.SIGNUP, student)
    bus.notify(NotificationType.APPROVED, student)

    stored = json.loads(kv.get(NOTIFICATIONS_KEY))
    assert [n["type"] for n in stored] == ["signup", "approved"]
    assert stored[0]["audienceRole"] == "TEACHER"
    assert stored[0]["subject"]["rollNumber"] == "CS001"
    assert stored[1]["isRead"] is False


def test_created_at_strictly_increases_even_with_a_frozen_clock(kv, student):
    frozen = make_account(Role.ADMIN).created_at
    bus = NotificationBus(kv, clock=lambda: frozen)

    for _ in range(3):
        bus.notify(NotificationType.SIGNUP, student)

    stamps = [n.created_at for n in bus.list()]
    assert stamps[0] < stamps[1] < stamps[2]


def test_repeated_events_are_not_deduplicated(bus, student):
    bus.notify(NotificationType.APPROVED, student)
    bus.notify(NotificationType.APPROVED, student)

    assert len(bus.list()) == 2


def test_filters_by_role_and_account(bus, student):
    other = make_account(Role.TEACHER, college_name="Tech University")
    bus.notify(NotificationType.SIGNUP, student)
    bus.notify(NotificationType.SIGNUP, other)
    bus.notify(NotificationType.APPROVED, student)

    assert [n.event for n in bus.list_for_role(Role.TEACHER)] == ["student_signup"]
    assert [n.event for n in bus.list_for_role(Role.ADMIN)] == ["teacher_signup"]
    assert [n.event for n in bus.list_for_account(student.id)] == ["student_approved"]


def test_mark_read_and_unread_count(bus, student):
    first = bus.notify(NotificationType.SIGNUP, student)
    bus.notify(NotificationType.APPROVED, student)

    assert bus.unread_count() == 2
    assert bus.mark_read(first.id).is_read is True
    assert bus.unread_count() == 1


def test_mark_read_unknown_id_raises(bus):
    with pytest.raises(NotFoundError):
        bus.mark_read("nope")


def test_mark_all_read_returns_number_changed(bus, student):
    bus.notify(NotificationType.SIGNUP, student)
    bus.notify(NotificationType.APPROVED, student)

    assert bus.mark_all_read() == 2
    assert bus.mark_all_read() == 0
    assert bus.unread_count() == 0


def test_clear_all(kv, bus, student):
    bus.notify(NotificationType.SIGNUP, student)

    bus.clear_all()

    assert bus.list() == []
    assert kv.get(NOTIFICATIONS_KEY) == "[]"


def test_prune_drops_only_old_notifications(bus, clock, student):
    bus.notify(NotificationType.SIGNUP, student)
    clock.advance(timedelta(days=40))
    recent = bus.notify(NotificationType.APPROVED, student)

    removed = bus.prune(timedelta(days=30))

    assert removed == 1
    assert [n.id for n in bus.list()] == [recent.id]
