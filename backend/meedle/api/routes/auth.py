"""Auth Routes — login through the access gate and registration confirmation.

Invariants:
    - 401 for unknown login or wrong password (identical body)
    - 403 ACCOUNT_BLOCKED with the rendered block explanation for blocked accounts
    - An expired block is lifted as part of the login call, before password check
    - 403 ACCOUNT_NOT_CONFIRMED for registrations the administrator has not confirmed
    - Registration answers 201 with the inactive profile, 409 on duplicate login/email

Design Decisions:
    - No token in the response: session issuance is handled outside this service
    - Errors raised as MeedleError subclasses; global handlers shape the JSON
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, status

from meedle.api.dependencies import (
    get_account_admin, get_login_service, get_now, get_registration_service,
)
from meedle.core.domain_types import GroupId
from meedle.core.repository_protocols import AccountRecord
from meedle.schemas.auth import (
    AccountProfile, LoginRequest, LoginResponse, RegisterRequest, RegisterResponse,
)
from meedle.services.account_admin import AccountAdministration
from meedle.services.login import LoginService
from meedle.services.registration import RegistrationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def to_profile(account: AccountRecord) -> AccountProfile:
    return AccountProfile(
        id=account.id,
        full_name=account.full_name,
        login=account.login,
        email=account.email,
        role=account.role,
        group_id=account.group_id,
        is_active=account.block.is_active,
    )


@router.post(
    "/register", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """Create an inactive account; an administrator confirms it later."""
    registration = await service.register(
        full_name=body.full_name,
        login=body.login,
        email=body.email,
        password=body.password,
        birth_date=body.birth_date,
        group_id=GroupId(body.group_id) if body.group_id else None,
    )
    return RegisterResponse(
        message="Реєстрація успішна! Чекайте на активацію акаунта адміністратором.",
        user=to_profile(registration.account),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    service: LoginService = Depends(get_login_service),
    now: datetime = Depends(get_now),
):
    """Authenticate by login and password."""
    account = await service.login(body.login, body.password, now)
    logger.info("Login succeeded", extra={"account_id": str(account.id)})
    return LoginResponse(message="Вхід успішний", user=to_profile(account))


@router.get("/confirm/{token}")
async def confirm_registration(
    token: str, admin: AccountAdministration = Depends(get_account_admin),
):
    """Activate a freshly registered account (link sent to the administrator)."""
    account = await admin.confirm_registration(token)
    return {
        "message": "Акаунт активовано",
        "user": to_profile(account).model_dump(mode="json"),
    }
