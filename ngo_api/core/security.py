"""Session tokens and password hashes for dashboard users."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from ngo_api.core.config import settings

ALGORITHM = "HS256"


def create_session_token(user_id: UUID, role: str, token_version: int) -> str:
    """
    Sign a session for a user.

    The role name rides along for the client; authorization always re-reads
    the user row. ``token_version`` must match the row for the token to stay
    valid, so bumping it revokes every outstanding session.
    """
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "role": role,
        "token_version": token_version,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.JWT_EXPIRES_HOURS),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_session_token(token: str) -> dict:
    """Return the claims of a session token, trying each configured secret.

    Raises jwt.InvalidTokenError when no secret verifies the token.
    """
    error: jwt.InvalidTokenError = jwt.InvalidTokenError("No signing secret configured")
    for secret in settings.jwt_secrets:
        try:
            return jwt.decode(token, secret, algorithms=[ALGORITHM])
        except jwt.InvalidTokenError as exc:
            error = exc
    raise error


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    return bool(password_hash) and check_password_hash(password_hash, password)
