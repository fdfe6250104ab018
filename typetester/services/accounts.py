"""Account lifecycle: registration, login, lookup and deletion."""
import logging
import re
from functools import lru_cache

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from typetester.core.errors import (
    EmailConflictError,
    InternalError,
    InvalidCredentialsError,
    InvalidUsernameCharsetError,
    InvalidUsernameLengthError,
    MissingFieldsError,
    NotFoundError,
    PasswordTooLongError,
    UsernameConflictError,
    WeakPasswordError,
)
from typetester.core.security import hash_password, verify_password
from typetester.models.test_result import TestResult
from typetester.models.user import User

logger = logging.getLogger(__name__)

USERNAME_RE = re.compile(r"[a-z0-9_]+")
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 20
PASSWORD_MIN_LEN = 6
# bcrypt hard limit: 72 bytes (UTF-8)
PASSWORD_MAX_BYTES = 72


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Stand-in hash so a login for a missing account still runs bcrypt."""
    return hash_password("typetester-no-such-account")


def _email_taken(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def _username_taken(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is not None


def validate_registration(email: str | None, username: str | None, password: str | None) -> None:
    """Raise the first validation error for the registration fields, in order."""
    if not email or not username or not password:
        raise MissingFieldsError()
    if not USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN:
        raise InvalidUsernameLengthError()
    if not USERNAME_RE.fullmatch(username):
        raise InvalidUsernameCharsetError()
    if len(password) < PASSWORD_MIN_LEN:
        raise WeakPasswordError()
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise PasswordTooLongError()


def register_user(db: Session, email: str | None, username: str | None, password: str | None) -> User:
    """Validate, check uniqueness, then create exactly one user."""
    validate_registration(email, username, password)

    try:
        if _email_taken(db, email):
            raise EmailConflictError()
        if _username_taken(db, username):
            raise UsernameConflictError()

        user = User(email=email, username=username, password_hash=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        if db.query(User.id).filter(User.email == email).first() is not None:
            raise EmailConflictError()
        raise UsernameConflictError()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Register error")
        raise InternalError()

    logger.info("Registered user id=%s", user.id)
    return user


def authenticate_user(db: Session, email: str | None, password: str | None) -> User:
    """Return the user for valid credentials.

    Unknown email, password-less account and wrong password all raise the
    same InvalidCredentialsError.
    """
    if not email or not password:
        raise MissingFieldsError("Email and password are required")

    try:
        user = db.query(User).filter(User.email == email).first()
    except SQLAlchemyError:
        logger.exception("Login error")
        raise InternalError()

    if user is None or not user.password_hash:
        verify_password(password, _dummy_hash())
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()

    logger.info("Login user id=%s", user.id)
    return user


def get_user(db: Session, user_id: int) -> User:
    try:
        user = db.get(User, user_id)
    except SQLAlchemyError:
        logger.exception("Me error")
        raise InternalError()
    if user is None:
        raise NotFoundError("User not found")
    return user


def delete_user(db: Session, user_id: int) -> None:
    """Delete a user; their results are kept with user_id set to NULL."""
    try:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        db.execute(
            update(TestResult)
            .where(TestResult.user_id == user_id)
            .values(user_id=None)
            .execution_options(synchronize_session=False)
        )
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete user error")
        raise InternalError()

    logger.info("Deleted user id=%s", user_id)
