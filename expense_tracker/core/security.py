import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from expense_tracker.core.config import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_SECRET, TOKEN_EXPIRE_DAYS
from expense_tracker.core.errors import AuthenticationError

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


def _pw_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_pw_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_pw_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # stored hash is not a bcrypt hash
        return False


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=TOKEN_EXPIRE_DAYS))
    claims = {
        "sub": str(user_id),
        "jti": uuid.uuid4().hex,
        "exp": expire,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry; raises AuthenticationError on any failure."""
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        raise AuthenticationError("Not authorized, token failed") from e

    if not claims.get("sub") or not claims.get("jti") or "exp" not in claims:
        raise AuthenticationError("Not authorized, token failed")
    return claims
