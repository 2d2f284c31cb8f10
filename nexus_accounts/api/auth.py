"""
Account Service — Auth API routes

Password checks are out of scope: sign-in is gated on account status only.
"""
from fastapi import APIRouter, Depends, status

from nexus_accounts.api.deps import get_account_service, to_response
from nexus_accounts.schemas.accounts import SigninRequest, SignupRequest
from nexus_accounts.services.accounts import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup")
def signup(payload: SignupRequest, service: AccountService = Depends(get_account_service)):
    """Register an account. Non-super-admin accounts start pending approval."""
    return to_response(service.signup(payload), success_status=status.HTTP_201_CREATED)


@router.post("/signin")
def signin(payload: SigninRequest, service: AccountService = Depends(get_account_service)):
    """Sign in an approved account and make it the current session."""
    return to_response(service.authenticate(payload.email))


@router.post("/signout")
def signout(service: AccountService = Depends(get_account_service)):
    return to_response(service.sign_out())


@router.get("/me")
def me(service: AccountService = Depends(get_account_service)):
    return to_response(service.current_account())
