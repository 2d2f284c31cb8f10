"""
Account Service — Pydantic schemas
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from nexus_accounts.core.errors import AccountError, AuthError
from nexus_accounts.models.account import Role

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# Profile fields a signup must carry, beyond name and email.
REQUIRED_PROFILE_FIELDS: dict[Role, tuple[str, ...]] = {
    Role.SUPER_ADMIN: (),
    Role.ADMIN: ("college_name",),
    Role.TEACHER: ("college_name", "department"),
    Role.STUDENT: ("college_name", "department", "roll_number"),
}


class SignupRequest(BaseModel):
    model_config = _CAMEL

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    role: Role
    college_name: str | None = Field(None, max_length=255, examples=["Tech University"])
    college_id: str | None = None
    department: str | None = Field(None, max_length=255, examples=["Computer Science"])
    section: str | None = None
    year: str | None = None
    roll_number: str | None = Field(None, max_length=64, examples=["CS001"])

    def missing_fields(self) -> list[str]:
        return [
            f for f in REQUIRED_PROFILE_FIELDS[self.role]
            if not (getattr(self, f) or "").strip()
        ]


class SigninRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)


class PruneRequest(BaseModel):
    model_config = _CAMEL

    older_than_days: int | None = Field(None, ge=0)


class ErrorInfo(BaseModel):
    code: str
    message: str
    reason: str | None = None


class OperationResult(BaseModel):
    """What every AccountService operation returns instead of raising."""

    success: bool
    data: Any = None
    error: ErrorInfo | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: AccountError) -> "OperationResult":
        reason = exc.reason.value if isinstance(exc, AuthError) else None
        return cls(success=False, error=ErrorInfo(code=exc.code, message=exc.message, reason=reason))

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    dependencies: dict[str, str]
