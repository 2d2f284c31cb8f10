"""
Account Service — Notification routes
"""
from fastapi import APIRouter, Depends, Query

from nexus_accounts.api.deps import get_account_service, to_response
from nexus_accounts.models.account import Role
from nexus_accounts.schemas.accounts import PruneRequest
from nexus_accounts.services.accounts import AccountService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
def list_notifications(
    role: Role | None = Query(None, description="Signup notifications awaiting this approver role"),
    account_id: str | None = Query(None, alias="accountId", description="Outcome notifications for one account"),
    service: AccountService = Depends(get_account_service),
):
    return to_response(service.notifications(role=role, account_id=account_id))


@router.get("/unread-count")
def unread_count(service: AccountService = Depends(get_account_service)):
    return to_response(service.unread_notifications_count())


@router.post("/read-all")
def mark_all_read(service: AccountService = Depends(get_account_service)):
    return to_response(service.mark_all_notifications_read())


@router.post("/prune")
def prune(payload: PruneRequest, service: AccountService = Depends(get_account_service)):
    """Delete notifications older than N days (default: configured retention)."""
    return to_response(service.prune_notifications(payload.older_than_days))


@router.post("/{notification_id}/read")
def mark_read(notification_id: str, service: AccountService = Depends(get_account_service)):
    return to_response(service.mark_notification_read(notification_id))


@router.delete("")
def clear_all(service: AccountService = Depends(get_account_service)):
    return to_response(service.clear_notifications())
