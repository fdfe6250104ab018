"""Auth routes: register, login, current user. Stateless JWT bearer tokens."""
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from typetester.core.config import Settings, get_settings
from typetester.core.security import create_access_token
from typetester.db.session import get_db
from typetester.dependencies import get_current_user_id
from typetester.models.user import User
from typetester.schemas.auth import (
    AuthResponseSchema,
    LoginSchema,
    MeResponseSchema,
    RegisterSchema,
    UserDetailSchema,
    UserOutSchema,
)
from typetester.services.accounts import authenticate_user, get_user, register_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User, settings: Settings) -> AuthResponseSchema:
    token = create_access_token(
        user.id,
        settings.secret_key,
        algorithm=settings.algorithm,
        expires_delta=timedelta(days=settings.access_token_expire_days),
    )
    return AuthResponseSchema(token=token, user=UserOutSchema.model_validate(user))


@router.post("/register", response_model=AuthResponseSchema, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterSchema,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Create an account and log it in."""
    user = register_user(db, body.email, body.username, body.password)
    return _auth_response(user, settings)


@router.post("/login", response_model=AuthResponseSchema)
def login(
    body: LoginSchema,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    user = authenticate_user(db, body.email, body.password)
    return _auth_response(user, settings)


@router.get("/me", response_model=MeResponseSchema)
def me(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Current user; 404 if the token outlived the account."""
    user = get_user(db, user_id)
    return MeResponseSchema(user=UserDetailSchema.model_validate(user))
