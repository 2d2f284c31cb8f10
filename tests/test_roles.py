"""
Role hierarchy tests: ranking, strict outranking and approver lookup.
"""
import pytest

from nexus_accounts.models.account import Role
from nexus_accounts.services import roles


def test_ranks_form_a_total_order():
    assert [roles.rank(r) for r in (Role.SUPER_ADMIN, Role.ADMIN, Role.TEACHER, Role.STUDENT)] == [4, 3, 2, 1]


@pytest.mark.parametrize("role", list(Role))
def test_role_outranks_or_equals_itself_but_never_strictly_outranks_itself(role):
    assert roles.outranks_or_equals(role, role)
    assert not roles.outranks(role, role)


def test_outranks_is_strict_and_directional():
    assert roles.outranks(Role.SUPER_ADMIN, Role.ADMIN)
    assert roles.outranks(Role.ADMIN, Role.STUDENT)
    assert not roles.outranks(Role.TEACHER, Role.ADMIN)
    assert roles.outranks_or_equals(Role.TEACHER, Role.STUDENT)
    assert not roles.outranks_or_equals(Role.STUDENT, Role.TEACHER)


@pytest.mark.parametrize(
    "role,approver",
    [
        (Role.STUDENT, Role.TEACHER),
        (Role.TEACHER, Role.ADMIN),
        (Role.ADMIN, Role.SUPER_ADMIN),
        (Role.SUPER_ADMIN, None),
    ],
)
def test_approver_is_one_step_up(role, approver):
    assert roles.approver_for(role) is approver


def test_display_names_are_lowercase_words():
    assert roles.display_name(Role.SUPER_ADMIN) == "super admin"
    assert roles.display_name(Role.TEACHER) == "teacher"
