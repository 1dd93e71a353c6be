"""
Authentication for the ArtVerse backend
Issues JWTs in an HTTP-only cookie and resolves the current user from them
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy.orm import Session

from artverse.core.config import settings
from artverse.core.database import get_db
from artverse.models import User

logger = logging.getLogger(__name__)

COOKIE_NAME = "token"

# Bearer header is accepted as a fallback for non-browser clients
security = HTTPBearer(auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class TokenUser(BaseModel):
    """User data resolved from a valid token"""
    id: str
    email: str
    role: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(user: User) -> str:
    expires = datetime.now(timezone.utc) + timedelta(days=settings.JWT_EXPIRES_DAYS)
    claims = {
        "sub": user.id,
        "role": user.role,
        "email": user.email,
        "exp": expires,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a token issued by create_access_token.

    Raises:
        HTTPException 401 with "Token expired" or "Invalid token"
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=settings.COOKIE_EXPIRES_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(COOKIE_NAME)


def _resolve_user(db: Session, token: str) -> TokenUser:
    payload = decode_access_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    # Role and email come from the database, not the token, so role changes apply immediately
    user = db.get(User, user_id)
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User no longer exists")

    return TokenUser(id=user.id, email=user.email, role=user.role)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> TokenUser:
    """
    Dependency that resolves the authenticated user.

    Usage:
        @router.get("/protected")
        def protected_route(user: TokenUser = Depends(get_current_user)):
            return {"message": f"Hello {user.email}"}
    """
    token = _extract_token(request, credentials)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return _resolve_user(db, token)


def get_current_user_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[TokenUser]:
    """Same as get_current_user but returns None for anonymous or invalid tokens."""
    token = _extract_token(request, credentials)
    if not token:
        return None
    try:
        return _resolve_user(db, token)
    except HTTPException:
        return None


def require_roles(*roles: str):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.patch("/{artwork_id}/approve")
        def approve(artwork_id: str, user: TokenUser = Depends(require_roles("admin"))):
            ...
    """
    async def role_checker(user: TokenUser = Depends(get_current_user)) -> TokenUser:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Forbidden - Required roles: {', '.join(roles)}",
            )
        return user

    return role_checker


# Convenience dependencies for common role requirements
require_admin = require_roles("admin")
require_artist = require_roles("artist")
require_buyer = require_roles("buyer")
