"""
Account Service — Role hierarchy

A total order over roles. Who may approve, reject, suspend or delete whom is
decided here and nowhere else.
"""
from nexus_accounts.models.account import Role

ROLE_RANK: dict[Role, int] = {
    Role.SUPER_ADMIN: 4,
    Role.ADMIN: 3,
    Role.TEACHER: 2,
    Role.STUDENT: 1,
}

_DISPLAY_NAMES: dict[Role, str] = {
    Role.SUPER_ADMIN: "super admin",
    Role.ADMIN: "admin",
    Role.TEACHER: "teacher",
    Role.STUDENT: "student",
}


def rank(role: Role) -> int:
    return ROLE_RANK[role]


def outranks_or_equals(a: Role, b: Role) -> bool:
    return rank(a) >= rank(b)


def outranks(a: Role, b: Role) -> bool:
    return rank(a) > rank(b)


def approver_for(role: Role) -> Role | None:
    """The role one step above `role`; SuperAdmin has no approver."""
    target = rank(role) + 1
    for candidate, level in ROLE_RANK.items():
        if level == target:
            return candidate
    return None


def display_name(role: Role) -> str:
    return _DISPLAY_NAMES[role]
