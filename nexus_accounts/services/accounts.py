"""
Account Service — public operations

Flow:
  signup:       validate → initial status → (students) match teacher → persist → notify
  approve etc.: load → permission check → state machine → persist → notify
  authenticate: load → sign-in gate → session

Every operation returns an OperationResult. Taxonomy errors are reported
in the result, never raised to the caller.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Callable

from nexus_accounts.core.config import Settings, get_settings
from nexus_accounts.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from nexus_accounts.core.results import returns_result
from nexus_accounts.db.account_store import AccountStore, normalize_email
from nexus_accounts.db.kv import KeyValueStore
from nexus_accounts.models.account import Account, Role, Status, utcnow
from nexus_accounts.schemas.accounts import SignupRequest
from nexus_accounts.services.approval import ApprovalStateMachine
from nexus_accounts.services.notification_bus import NotificationBus
from nexus_accounts.services.session import SessionManager
from nexus_accounts.services.teacher_matcher import TeacherMatcher

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(
        self,
        kv: KeyValueStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.settings = settings or get_settings()
        self.kv = kv
        self.store = AccountStore(kv)
        self.notification_bus = NotificationBus(kv, clock=clock)
        self.session = SessionManager(kv)
        self.matcher = TeacherMatcher()
        self.machine = ApprovalStateMachine(self.store, self.notification_bus, clock=clock)
        self._clock = clock

    def _actor(self, actor_id: str | None) -> Account | None:
        """Explicit actor if given, otherwise whoever holds the session."""
        if actor_id is None:
            return self.session.get_current()
        actor = self.store.find_by_id(actor_id)
        if actor is None:
            raise PermissionDeniedError(f"Acting account '{actor_id}' not found.")
        return actor

    # ── Signup / sign-in ──────────────────────────────────────────────────

    @returns_result
    def signup(self, request: SignupRequest | dict[str, Any], actor_id: str | None = None, approved: bool = False) -> Account:
        if not isinstance(request, SignupRequest):
            request = SignupRequest.model_validate(request)

        missing = request.missing_fields()
        if missing:
            raise ValidationError(
                f"{request.role.value.replace('_', ' ').title()} signup requires: {', '.join(missing)}."
            )
        if self.store.find_by_email(request.email) is not None:
            raise ValidationError("User with this email already exists.")

        if approved:
            self.machine.authorize(self._actor(actor_id), request.role, "create")

        now = self._clock()
        profile = request.model_dump(exclude={"email", "role"})
        account = Account(
            **profile,
            email=normalize_email(request.email),
            role=request.role,
            status=self.machine.initial_status(request.role, force_approved=approved),
            created_at=now,
            updated_at=now,
        )

        if account.role is Role.STUDENT:
            teacher = self.matcher.match(
                account.college_name, account.department, self.store.list_by_role(Role.TEACHER),
            )
            if teacher is not None:
                account = account.model_copy(update={
                    "assigned_teacher_id": teacher.id,
                    "assigned_teacher_name": teacher.name,
                })

        self.machine.register(account)

        if account.status is Status.APPROVED and not approved:
            self.session.set_current(account)
        return account

    @returns_result
    def authenticate(self, email: str) -> Account:
        account = self.machine.authenticate(email)
        self.session.set_current(account)
        logger.info("Account %s signed in", account.id)
        return account

    @returns_result
    def sign_out(self) -> None:
        self.session.teardown()

    @returns_result
    def current_account(self) -> Account | None:
        """The signed-in account as currently stored, or None if it was deleted."""
        current = self.session.get_current()
        if current is None:
            return None
        return self.store.find_by_id(current.id)

    # ── Transitions ───────────────────────────────────────────────────────

    @returns_result
    def approve(self, account_id: str, actor_id: str | None = None) -> Account:
        return self.machine.approve(account_id, self._actor(actor_id))

    @returns_result
    def reject(self, account_id: str, actor_id: str | None = None) -> Account:
        return self.machine.reject(account_id, self._actor(actor_id))

    @returns_result
    def suspend(self, account_id: str, actor_id: str | None = None) -> Account:
        return self.machine.suspend(account_id, self._actor(actor_id))

    @returns_result
    def reactivate(self, account_id: str, actor_id: str | None = None) -> Account:
        return self.machine.reactivate(account_id, self._actor(actor_id))

    @returns_result
    def delete(self, account_id: str, actor_id: str | None = None) -> Account:
        removed = self.machine.delete(account_id, self._actor(actor_id))
        current = self.session.get_current()
        if current is not None and current.id == removed.id:
            self.session.teardown()
        return removed

    # ── Queries ───────────────────────────────────────────────────────────

    @returns_result
    def list_accounts(self, role: Role | None = None, status: Status | None = None) -> list[Account]:
        return [
            a for a in self.store.list()
            if (role is None or a.role is role) and (status is None or a.status is status)
        ]

    @returns_result
    def pending_accounts(self, role: Role | None = None) -> list[Account]:
        return [
            a for a in self.store.list()
            if a.status is Status.PENDING and (role is None or a.role is role)
        ]

    @returns_result
    def get_account(self, account_id: str) -> Account:
        account = self.store.find_by_id(account_id)
        if account is None:
            raise NotFoundError(f"Account '{account_id}' not found.")
        return account

    @returns_result
    def students_for_teacher(self, teacher_id: str, status: Status | None = None) -> list[Account]:
        teacher = self.store.find_by_id(teacher_id)
        if teacher is None or teacher.role is not Role.TEACHER:
            raise NotFoundError(f"Teacher '{teacher_id}' not found.")
        return [
            s for s in self.store.list_by_role(Role.STUDENT, status)
            if s.assigned_teacher_id == teacher.id
        ]

    @returns_result
    def ensure_default_super_admin(self) -> Account:
        existing = self.store.list_by_role(Role.SUPER_ADMIN)
        if existing:
            return existing[0]
        if self.store.find_by_email(self.settings.DEFAULT_SUPER_ADMIN_EMAIL) is not None:
            raise ValidationError(
                f"Default super admin email {self.settings.DEFAULT_SUPER_ADMIN_EMAIL} is already registered."
            )

        now = self._clock()
        account = Account(
            email=normalize_email(self.settings.DEFAULT_SUPER_ADMIN_EMAIL),
            name=self.settings.DEFAULT_SUPER_ADMIN_NAME,
            role=Role.SUPER_ADMIN,
            status=self.machine.initial_status(Role.SUPER_ADMIN),
            created_at=now,
            updated_at=now,
        )
        self.machine.register(account)
        logger.info("Default super admin %s created", account.email)
        return account

    # ── Notifications ─────────────────────────────────────────────────────

    @returns_result
    def notifications(self, role: Role | None = None, account_id: str | None = None):
        if role is not None and account_id is not None:
            raise ValidationError("Filter notifications by role or by account, not both.")
        if role is not None:
            return self.notification_bus.list_for_role(role)
        if account_id is not None:
            return self.notification_bus.list_for_account(account_id)
        return self.notification_bus.list()

    @returns_result
    def unread_notifications_count(self) -> int:
        return self.notification_bus.unread_count()

    @returns_result
    def mark_notification_read(self, notification_id: str):
        return self.notification_bus.mark_read(notification_id)

    @returns_result
    def mark_all_notifications_read(self) -> int:
        return self.notification_bus.mark_all_read()

    @returns_result
    def clear_notifications(self) -> None:
        self.notification_bus.clear_all()

    @returns_result
    def prune_notifications(self, older_than_days: int | None = None) -> int:
        days = self.settings.NOTIFICATION_RETENTION_DAYS if older_than_days is None else older_than_days
        return self.notification_bus.prune(timedelta(days=days))
