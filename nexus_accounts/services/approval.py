"""
Account Service — ApprovalStateMachine

The only component allowed to change an Account's status.

State transitions:
  approve:    PENDING | REJECTED   → APPROVED   (APPROVED: no-op)
  reject:     PENDING | APPROVED   → REJECTED   (REJECTED: no-op)
  suspend:    APPROVED             → SUSPENDED
  reactivate: REJECTED | SUSPENDED → APPROVED
  delete:     any                  → removed from the store

Every transition needs an Approved acting principal whose role strictly
outranks the target's role. Each change stamps `updated_at` and is written
through immediately; approve, reject and reactivate also emit a notification.
"""
import logging
from datetime import datetime
from typing import Callable

from nexus_accounts.core.errors import (
    AuthError,
    AuthFailureReason,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
)
from nexus_accounts.db.account_store import AccountStore
from nexus_accounts.models.account import Account, Role, Status, utcnow
from nexus_accounts.models.notification import NotificationType
from nexus_accounts.services import roles
from nexus_accounts.services.notification_bus import NotificationBus

logger = logging.getLogger(__name__)

# transition -> (allowed sources, target, notification emitted)
TRANSITIONS: dict[str, tuple[frozenset[Status], Status, NotificationType | None]] = {
    "approve": (frozenset({Status.PENDING, Status.REJECTED}), Status.APPROVED, NotificationType.APPROVED),
    "reject": (frozenset({Status.PENDING, Status.APPROVED}), Status.REJECTED, NotificationType.REJECTED),
    "suspend": (frozenset({Status.APPROVED}), Status.SUSPENDED, None),
    "reactivate": (frozenset({Status.REJECTED, Status.SUSPENDED}), Status.APPROVED, NotificationType.APPROVED),
}

# Repeating these on an account already in the target state succeeds silently.
IDEMPOTENT = frozenset({"approve", "reject"})


class ApprovalStateMachine:
    def __init__(
        self,
        store: AccountStore,
        notifications: NotificationBus,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._store = store
        self._notifications = notifications
        self._clock = clock

    # ── Creation ──────────────────────────────────────────────────────────

    @staticmethod
    def initial_status(role: Role, force_approved: bool = False) -> Status:
        if role is Role.SUPER_ADMIN or force_approved:
            return Status.APPROVED
        return Status.PENDING

    def register(self, account: Account) -> Account:
        """Persist a freshly built account and announce it to its approvers."""
        self._store.upsert(account)
        logger.info("Account %s registered as %s (%s)", account.id, account.role.value, account.status.value)
        if account.role is not Role.SUPER_ADMIN:
            self._announce(NotificationType.SIGNUP, account)
        return account

    # ── Transitions ───────────────────────────────────────────────────────

    def approve(self, account_id: str, actor: Account | None) -> Account:
        return self._apply("approve", account_id, actor)

    def reject(self, account_id: str, actor: Account | None) -> Account:
        return self._apply("reject", account_id, actor)

    def suspend(self, account_id: str, actor: Account | None) -> Account:
        return self._apply("suspend", account_id, actor)

    def reactivate(self, account_id: str, actor: Account | None) -> Account:
        return self._apply("reactivate", account_id, actor)

    def delete(self, account_id: str, actor: Account | None) -> Account:
        account = self._get(account_id)
        principal = self.authorize(actor, account.role, "delete")
        self._store.remove(account.id)
        logger.info("Account %s deleted by %s", account.id, principal.id)
        return account

    def _apply(self, transition: str, account_id: str, actor: Account | None) -> Account:
        sources, target, event = TRANSITIONS[transition]
        account = self._get(account_id)
        principal = self.authorize(actor, account.role, transition)

        if account.status is target and transition in IDEMPOTENT:
            return account
        if account.status not in sources:
            raise InvalidTransitionError(
                f"Cannot {transition} an account that is {account.status.value}."
            )

        updated = account.model_copy(update={"status": target, "updated_at": self._clock()})
        self._store.upsert(updated)
        logger.info(
            "Account %s: %s → %s by %s", account.id, account.status.value, target.value, principal.id,
        )
        if event is not None:
            self._announce(event, updated)
        return updated

    def _announce(self, event: NotificationType, account: Account) -> None:
        # The account write already landed, so the operation still succeeds.
        try:
            self._notifications.notify(event, account)
        except StorageError as exc:
            logger.warning("%s notification for account %s not recorded: %s", event.value, account.id, exc)

    # ── Permissions ───────────────────────────────────────────────────────

    def authorize(self, actor: Account | None, target_role: Role, action: str) -> Account:
        """
        Check that `actor` may perform `action` on an account of `target_role`.
        The actor is re-read from the store so a stale session copy of a
        since-suspended or deleted account does not keep its powers.
        """
        if actor is None:
            raise PermissionDeniedError("Sign in to manage accounts.")
        current = self._store.find_by_id(actor.id)
        if current is None or current.status is not Status.APPROVED:
            raise PermissionDeniedError("Only approved accounts can manage other accounts.")
        if not roles.outranks(current.role, target_role):
            raise PermissionDeniedError(
                f"{roles.display_name(current.role).capitalize()} accounts cannot {action} "
                f"{roles.display_name(target_role)} accounts."
            )
        return current

    # ── Sign-in gate ──────────────────────────────────────────────────────

    def authenticate(self, email: str) -> Account:
        account = self._store.find_by_email(email)
        if account is None:
            raise AuthError("invalid credentials", AuthFailureReason.INVALID_CREDENTIALS)

        if account.status is Status.APPROVED:
            return account

        role_text = roles.display_name(account.role)
        approver = roles.approver_for(account.role)
        approver_text = roles.display_name(approver) if approver else "support"
        contact = f"your {approver_text} or support" if approver else "support"

        if account.status is Status.PENDING:
            raise AuthError(
                f"Your {role_text} account is pending approval. Please wait for {approver_text} approval.",
                AuthFailureReason.PENDING,
            )
        reason = AuthFailureReason(account.status.value)
        raise AuthError(
            f"Your {role_text} account has been {account.status.value}. "
            f"Please contact {contact}.",
            reason,
        )

    def _get(self, account_id: str) -> Account:
        account = self._store.find_by_id(account_id)
        if account is None:
            raise NotFoundError(f"Account '{account_id}' not found.")
        return account
