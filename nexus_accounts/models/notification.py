"""
Account Service — Notification model and factory

Notifications are append-only records of lifecycle events. The dashboard
reads them to drive approval queues; only `is_read` ever changes.
"""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nexus_accounts.models.account import Account, Role, new_id, utcnow
from nexus_accounts.services.roles import approver_for


class NotificationType(str, Enum):
    SIGNUP = "signup"
    APPROVED = "approved"
    REJECTED = "rejected"


_CAMEL = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class NotificationSubject(BaseModel):
    model_config = _CAMEL

    account_id: str
    name: str
    email: str
    college_name: str | None = None
    college_id: str | None = None
    department: str | None = None
    section: str | None = None
    year: str | None = None
    roll_number: str | None = None


class Notification(BaseModel):
    model_config = _CAMEL

    id: str = Field(default_factory=new_id)
    type: NotificationType
    subject_role: Role
    title: str
    message: str
    subject: NotificationSubject
    audience_role: Role | None = None
    recipient_id: str | None = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def event(self) -> str:
        """Wire name used by the dashboard, e.g. ``student_signup``."""
        return f"{self.subject_role.value.lower()}_{self.type.value}"

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# (type, role) -> (title, message template)
_TEMPLATES: dict[tuple[NotificationType, Role], tuple[str, str]] = {
    (NotificationType.SIGNUP, Role.STUDENT): (
        "New Student Registration",
        "Student {name} (Roll: {roll_number}) has registered and is pending approval.",
    ),
    (NotificationType.SIGNUP, Role.TEACHER): (
        "New Teacher Registration",
        "Teacher {name} from {college_name} has registered and is pending approval.",
    ),
    (NotificationType.SIGNUP, Role.ADMIN): (
        "New Admin Registration",
        "Admin {name} has registered for college {college_name} and is pending approval.",
    ),
    (NotificationType.APPROVED, Role.STUDENT): (
        "Student Approved",
        "Student {name} (Roll: {roll_number}) has been approved and can now access their dashboard.",
    ),
    (NotificationType.APPROVED, Role.TEACHER): (
        "Teacher Approved",
        "Teacher {name} has been approved and can now manage their students.",
    ),
    (NotificationType.APPROVED, Role.ADMIN): (
        "Admin Approved",
        "Admin {name} has been approved and can now manage their college.",
    ),
    (NotificationType.REJECTED, Role.STUDENT): (
        "Student Rejected",
        "Student {name} (Roll: {roll_number}) has been rejected.",
    ),
    (NotificationType.REJECTED, Role.TEACHER): (
        "Teacher Rejected",
        "Teacher {name} has been rejected.",
    ),
    (NotificationType.REJECTED, Role.ADMIN): (
        "Admin Rejected",
        "Admin {name} has been rejected.",
    ),
}


class NotificationFactory:
    """Builds a Notification for one (event kind, subject account) pair."""

    @staticmethod
    def build(type: NotificationType, subject: Account, created_at: datetime | None = None) -> Notification:
        try:
            title, template = _TEMPLATES[(type, subject.role)]
        except KeyError:
            raise ValueError(f"No {type.value} notification is defined for role {subject.role.value}")

        fields = NotificationSubject(
            account_id=subject.id,
            name=subject.name,
            email=subject.email,
            college_name=subject.college_name,
            college_id=subject.college_id,
            department=subject.department,
            section=subject.section,
            year=subject.year,
            roll_number=subject.roll_number,
        )
        # Signup goes to whoever can approve; outcomes go to the subject.
        if type is NotificationType.SIGNUP:
            audience_role, recipient_id = approver_for(subject.role), None
        else:
            audience_role, recipient_id = None, subject.id

        return Notification(
            type=type,
            subject_role=subject.role,
            title=title,
            message=template.format(**fields.model_dump()),
            subject=fields,
            audience_role=audience_role,
            recipient_id=recipient_id,
            created_at=created_at or utcnow(),
        )
