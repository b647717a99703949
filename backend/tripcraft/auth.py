import logging
from typing import Annotated, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from tripcraft import config

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


class AuthUser(BaseModel):
    id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def verify_token(token: str, secret_key: str) -> dict:
    """Verify a JWT and return its payload."""
    if token.startswith("Bearer "):
        token = token.split(" ", 1)[1]
    try:
        return jwt.decode(token, secret_key, algorithms=[config.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired, please login again")
    except jwt.InvalidTokenError as e:
        logger.info(f"Token verification error: {e}")
        raise HTTPException(status_code=401, detail="Invalid token, please login again")


def extract_user(payload: dict) -> AuthUser:
    user_id = payload.get("id") or payload.get("sub") or payload.get("user_id")
    if not user_id:
        logger.info(f"Available claims in payload: {list(payload.keys())}")
        raise HTTPException(status_code=401, detail="Could not extract user ID from token")
    return AuthUser(id=str(user_id), role=payload.get("role") or "user")


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer)],
) -> Optional[AuthUser]:
    """The caller's identity, or None for anonymous requests. A bad token is still a 401."""
    if credentials is None:
        return None
    if not config.JWT_SECRET:
        raise HTTPException(status_code=401, detail="Authentication is not configured")
    return extract_user(verify_token(credentials.credentials, config.JWT_SECRET))


async def get_current_user(
    user: Annotated[Optional[AuthUser], Depends(get_optional_user)],
) -> AuthUser:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authorized, no token")
    return user
