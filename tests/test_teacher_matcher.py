"""
TeacherMatcher tests

Tiers:
  1. same college + department
  2. same college
  3. same department
Only approved teachers are eligible; first in store order wins.
"""
from conftest import make_account

from nexus_accounts.models.account import Role, Status
from nexus_accounts.services.teacher_matcher import TeacherMatcher


def teacher(name, college, department, status=Status.APPROVED):
    return make_account(Role.TEACHER, status=status, name=name, college_name=college, department=department)


def test_exact_match_beats_earlier_college_only_match():
    college_only = teacher("Mary", "Tech University", "Mathematics")
    exact = teacher("John", "Tech University", "Computer Science")

    match = TeacherMatcher().match("Tech University", "Computer Science", [college_only, exact])

    assert match is exact


def test_college_tier_used_when_no_exact_match():
    dept_only = teacher("Dana", "Other College", "Physics")
    college_only = teacher("Mary", "Tech University", "Mathematics")

    match = TeacherMatcher().match("Tech University", "Physics", [dept_only, college_only])

    assert match is college_only


def test_department_tier_used_across_colleges():
    dept_only = teacher("Dana", "Other College", "Physics")

    assert TeacherMatcher().match("Tech University", "Physics", [dept_only]) is dept_only


def test_no_candidates_returns_none():
    unrelated = teacher("Zed", "Elsewhere", "History")

    assert TeacherMatcher().match("Tech University", "Physics", [unrelated]) is None
    assert TeacherMatcher().match("Tech University", "Physics", []) is None


def test_only_approved_teachers_are_eligible():
    pending = teacher("Pat", "Tech University", "Computer Science", status=Status.PENDING)
    suspended = teacher("Sam", "Tech University", "Computer Science", status=Status.SUSPENDED)
    admin = make_account(Role.ADMIN, college_name="Tech University", department="Computer Science")

    assert TeacherMatcher().match("Tech University", "Computer Science", [pending, suspended, admin]) is None


def test_comparison_ignores_case_and_surrounding_whitespace():
    t = teacher("John", "Tech University", "Computer Science")

    assert TeacherMatcher().match("  tech UNIVERSITY ", "computer science", [t]) is t


def test_first_in_store_order_wins_and_is_deterministic():
    first = teacher("First", "Tech University", "Computer Science")
    second = teacher("Second", "Tech University", "Computer Science")
    matcher = TeacherMatcher()

    results = {matcher.match("Tech University", "Computer Science", [first, second]).id for _ in range(5)}

    assert results == {first.id}


def test_missing_student_fields_never_match_missing_teacher_fields():
    t = teacher("John", None, None)

    assert TeacherMatcher().match(None, None, [t]) is None
