"""JWT access/refresh tokens for marketplace accounts (HS256, shared JWT_SECRET).

Tokens are stateless; the bearer's account is re-read on every request so a
disabled account or a reset password takes effect through the repository,
not through token revocation.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.cm_common.errors import InvalidCredentialsError, InvalidRefreshTokenError

_ALGORITHM = settings.JWT_ALGORITHM
_TTL = {
    "access": timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    "refresh": timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS),
}


def _issue(user_id: str, token_type: str) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "type": token_type,
        "iat": now,
        "exp": now + _TTL[token_type],
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def create_access_token(user_id: str) -> str:
    return _issue(user_id, "access")


def create_refresh_token(user_id: str) -> str:
    return _issue(user_id, "refresh")


def decode_token(token: str, expected_type: str) -> dict[str, str]:
    """Decode and validate a JWT token.

    Args:
        token: Raw JWT string.
        expected_type: "access" or "refresh". A token of the other type is
                       rejected even if its signature is valid.

    Raises:
        InvalidCredentialsError: invalid/expired token when expecting "access".
        InvalidRefreshTokenError: invalid/expired token when expecting "refresh".
    """
    error = InvalidCredentialsError if expected_type == "access" else InvalidRefreshTokenError
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],
        )
    except JWTError:
        raise error() from None

    if payload.get("type") != expected_type:
        raise error()
    return payload
