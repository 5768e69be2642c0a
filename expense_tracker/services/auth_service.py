import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from expense_tracker.core import security
from expense_tracker.core.errors import AuthenticationError, ValidationError
from expense_tracker.db import crud
from expense_tracker.db.models import User

logger = logging.getLogger(__name__)


@dataclass
class AuthContext:
    """The caller of a protected request: who they are and which token they used."""

    user: User
    token_id: str
    expires_at: datetime


def register(db: Session, name: str, email: str, password: str):
    email = email.strip().lower()
    if crud.get_user_by_email(db, email):
        raise ValidationError("User with this email already exists")

    user = crud.create_user(db, name=name, email=email, password_hash=security.hash_password(password))
    logger.info("registered user %s", user.id)
    return user, security.create_access_token(user.id)


def login(db: Session, email: str, password: str):
    user = crud.get_user_by_email(db, email.strip().lower())
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    logger.info("user %s logged in", user.id)
    return user, security.create_access_token(user.id)


def authenticate(db: Session, token: str) -> AuthContext:
    claims = security.decode_access_token(token)

    if crud.is_token_revoked(db, claims["jti"]):
        raise AuthenticationError("Not authorized, token revoked")

    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError) as e:
        raise AuthenticationError("Not authorized, token failed") from e

    user = crud.get_user(db, user_id)
    if user is None:
        raise AuthenticationError("Not authorized, user not found")

    expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc).replace(tzinfo=None)
    return AuthContext(user=user, token_id=claims["jti"], expires_at=expires_at)


def logout(db: Session, ctx: AuthContext) -> None:
    crud.revoke_token(db, ctx.token_id, ctx.expires_at)
    logger.info("user %s logged out", ctx.user.id)
