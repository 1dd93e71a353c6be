"""
Authentication API Endpoints
- Registration and login (JWT issued in an HTTP-only cookie)
- Logout and current user
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import (
    TokenUser,
    clear_auth_cookie,
    create_access_token,
    get_current_user,
    hash_password,
    set_auth_cookie,
    verify_password,
)
from artverse.core.config import settings
from artverse.core.database import get_db
from artverse.core.rate_limit import rate_limit
from artverse.domain.user import LoginRequest, RegisterRequest, UserView
from artverse.repositories import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()

SELF_REGISTER_ROLES = ("buyer", "artist")


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    """
    Create a buyer or artist account and sign it in

    Admin accounts cannot be self-registered.
    """
    role = body.role or "buyer"
    if role not in SELF_REGISTER_ROLES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role")

    users = UserRepository(db)
    if users.find_by_email(body.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    try:
        user = users.create(
            email=body.email,
            password_hash=hash_password(body.password),
            role=role,
            profile={"name": body.name},
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    token = create_access_token(user)
    set_auth_cookie(response, token)
    logger.info(f"Registered {role} {user.id}")

    return success(
        data={"user": UserView.model_validate(user).to_dict(), "token": token},
        message="Registration successful",
    )


@router.post("/login", dependencies=[Depends(rate_limit(settings.LOGIN_RATE_LIMIT))])
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = UserRepository(db).find_by_email(body.email)
    if not user or not verify_password(body.password, user.password_hash):
        logger.info(f"Failed login for {body.email}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is deactivated")

    token = create_access_token(user)
    set_auth_cookie(response, token)

    return success(
        data={"user": UserView.model_validate(user).to_dict(), "token": token},
        message="Login successful",
    )


@router.post("/logout")
def logout(response: Response):
    clear_auth_cookie(response)
    return success(message="Logged out successfully")


@router.get("/me")
def me(user: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    account = UserRepository(db).find_by_id(user.id)
    if not account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return success(data=UserView.model_validate(account).to_dict())
