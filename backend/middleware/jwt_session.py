"""
JWT session management
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from config import get_settings
from models.api.user import TokenClaims


def create_access_token(user, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token for user

    Args:
        user: User model with id, email, role, company_id
        expires_delta: Lifetime override (defaults to JWT_EXPIRE_MINUTES, 7 days)

    Returns:
        JWT token string carrying {id, email, role, companyId}
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))

    claims = TokenClaims(
        id=user.id,
        email=user.email,
        role=user.role,
        company_id=user.company_id,
    )
    payload = {
        **claims.to_payload(),
        "exp": expire,
        "iat": now,
    }

    return jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> TokenClaims:
    """
    Decode and validate JWT token

    Returns:
        Token claims

    Raises:
        jose.JWTError if token invalid/expired or missing claims
    """
    settings = get_settings()
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )

    try:
        return TokenClaims.model_validate(payload)
    except ValueError as e:
        raise JWTError(f"Token claims incomplete: {e}") from e
