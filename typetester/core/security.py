"""Password hashing and JWT session tokens."""
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

BCRYPT_ROUNDS = 12
ACCESS_TOKEN_EXPIRE = timedelta(days=30)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def verify_password(plain: str, hashed: str | None) -> bool:
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # unknown or malformed hash
        return False


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    user_id: int,
    secret_key: str,
    *,
    algorithm: str = "HS256",
    expires_delta: timedelta = ACCESS_TOKEN_EXPIRE,
) -> str:
    """Sign a token whose only identity claim is the user id."""
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str | None, secret_key: str, *, algorithm: str = "HS256") -> int | None:
    """Return the user id for a valid token; None if bad signature, malformed or expired."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
