"""
Account Service — Account administration routes

The acting principal is always the current session.
"""
from fastapi import APIRouter, Depends, Query

from nexus_accounts.api.deps import get_account_service, to_response
from nexus_accounts.models.account import Role, Status
from nexus_accounts.services.accounts import AccountService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("")
def list_accounts(
    role: Role | None = Query(None, description="Filter by role (SUPER_ADMIN, ADMIN, TEACHER, STUDENT)"),
    status: Status | None = Query(None, description="Filter by status (pending, approved, rejected, suspended)"),
    service: AccountService = Depends(get_account_service),
):
    return to_response(service.list_accounts(role=role, status=status))


@router.get("/pending")
def pending_accounts(
    role: Role | None = Query(None),
    service: AccountService = Depends(get_account_service),
):
    """Approval queue, oldest registration first."""
    return to_response(service.pending_accounts(role=role))


@router.get("/{account_id}")
def get_account(account_id: str, service: AccountService = Depends(get_account_service)):
    return to_response(service.get_account(account_id))


@router.get("/{account_id}/students")
def students_for_teacher(
    account_id: str,
    status: Status | None = Query(None),
    service: AccountService = Depends(get_account_service),
):
    """Students assigned to a teacher at signup."""
    return to_response(service.students_for_teacher(account_id, status=status))


@router.post("/{account_id}/approve")
def approve(account_id: str, service: AccountService = Depends(get_account_service)):
    return to_response(service.approve(account_id))


@router.post("/{account_id}/reject")
def reject(account_id: str, service: AccountService = Depends(get_account_service)):
    return to_response(service.reject(account_id))


@router.post("/{account_id}/suspend")
def suspend(account_id: str, service: AccountService = Depends(get_account_service)):
    return to_response(service.suspend(account_id))


@router.post("/{account_id}/reactivate")
def reactivate(account_id: str, service: AccountService = Depends(get_account_service)):
    return to_response(service.reactivate(account_id))


@router.delete("/{account_id}")
def delete_account(account_id: str, service: AccountService = Depends(get_account_service)):
    """Hard delete. There is no tombstone and no undo."""
    return to_response(service.delete(account_id))
