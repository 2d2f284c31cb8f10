"""
Account Service — Account model

Persisted as one element of the `accounts` JSON array. Field names are
camelCase on the wire to stay compatible with the dashboard that reads the
same store.
"""
import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class Status(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Account(BaseModel):
    """
    Identity + profile + lifecycle state.
    Immutable: every change goes through `model_copy(update=...)`, and only
    ApprovalStateMachine produces copies with a different `status`.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    id: str = Field(default_factory=new_id)
    email: str
    name: str
    role: Role
    status: Status

    college_name: str | None = None
    college_id: str | None = None
    department: str | None = None
    section: str | None = None
    year: str | None = None
    roll_number: str | None = None

    assigned_teacher_id: str | None = None
    assigned_teacher_name: str | None = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def __repr__(self) -> str:
        return f"<Account email={self.email} role={self.role.value} status={self.status.value}>"
