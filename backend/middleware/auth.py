"""
Bearer-token authentication dependencies

- no Authorization header / no token   -> 401
- token present but invalid or expired -> 403
- valid token                          -> claims attached to request.state.user
"""

import logging
from typing import Optional

from fastapi import HTTPException, Request, status
from jose import JWTError

from models.api.user import TokenClaims
from .jwt_session import decode_access_token

logger = logging.getLogger(__name__)


def extract_bearer_token(request: Request) -> Optional[str]:
    """Token part of an `Authorization: Bearer <token>` header, if any"""
    header = request.headers.get("authorization")
    if not header:
        return None
    parts = header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


async def get_current_user(request: Request) -> TokenClaims:
    """
    Get current user from the bearer token (required)

    Returns:
        TokenClaims

    Raises:
        HTTPException 401 if no token, 403 if the token does not verify
    """
    token = extract_bearer_token(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access denied")

    try:
        claims = decode_access_token(token)
    except JWTError as e:
        logger.warning(f"Rejected bearer token on {request.url.path}: {e}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")

    request.state.user = claims
    return claims
