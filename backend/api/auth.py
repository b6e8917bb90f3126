"""
Authentication API router (email login + bearer JWT)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repository
from config import get_settings
from middleware.auth import get_current_user
from middleware.jwt_session import create_access_token
from models.api.user import LoginRequest, TokenClaims
from repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["authentication"])


def _is_bootstrap_login(email: str, password: str) -> bool:
    settings = get_settings()
    return (
        settings.bootstrap_allowed
        and email.lower() == settings.bootstrap_admin_email.lower()
        and password == settings.bootstrap_admin_password
    )


@router.post("/login")
async def login(
    credentials: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
):
    """
    Log in by email and issue a 7-day bearer token

    Unknown emails are rejected, except the development bootstrap pair,
    which creates the demo company and its admin on first use.
    """
    settings = get_settings()

    # TODO: verify credentials.password against a stored hash once users
    # carry one; until then the only guard is this flag.
    if not settings.allow_unverified_passwords:
        raise HTTPException(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail="Password verification is not configured",
        )

    email = str(credentials.email)
    user = await users.get_by_email(email)

    if user is None:
        if not _is_bootstrap_login(email, credentials.password):
            logger.warning(f"Login rejected for unknown email {email}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

        logger.warning(f"Bootstrapping development admin {email}")
        user = await users.bootstrap_admin(email, settings.bootstrap_company_name)

    token = create_access_token(user)
    return {"user": user.to_dict(), "token": token}


@router.get("/me")
async def get_current_user_info(
    current_user: TokenClaims = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Return the authenticated caller's user record"""
    user = await users.get_by_id(current_user.id)

    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return user.to_dict()
