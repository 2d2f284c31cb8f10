"""
Account Service — Teacher matching for new students

Three tiers, tried in order, each over Approved teachers only:
  1. same college and same department
  2. same college, any department
  3. same department, any college
Within a tier the first candidate in store order wins. Candidates are not
ranked by load or any other score; a student always lands on the earliest
registered teacher of the best tier. The assignment is made once, at signup.
"""
import logging
from typing import Callable, Iterable

from nexus_accounts.models.account import Account, Role, Status

logger = logging.getLogger(__name__)


def _same(a: str | None, b: str | None) -> bool:
    return a is not None and b is not None and a.strip().lower() == b.strip().lower()


class TeacherMatcher:
    def match(self, college_name: str | None, department: str | None, candidates: Iterable[Account]) -> Account | None:
        teachers = [
            c for c in candidates
            if c.role is Role.TEACHER and c.status is Status.APPROVED
        ]
        tiers: list[tuple[str, Callable[[Account], bool]]] = [
            ("exact", lambda t: _same(t.college_name, college_name) and _same(t.department, department)),
            ("college", lambda t: _same(t.college_name, college_name)),
            ("department", lambda t: _same(t.department, department)),
        ]
        for tier, accepts in tiers:
            teacher = next((t for t in teachers if accepts(t)), None)
            if teacher is not None:
                logger.info("Teacher %s matched on %s tier for %s / %s", teacher.id, tier, college_name, department)
                return teacher

        logger.warning("No teacher found for %s / %s", college_name, department)
        return None
