"""User service: register, login, refresh, first-admin bootstrap."""

import logging

from src.cm_common.errors import (
    AccountDisabledError,
    ForbiddenError,
    InvalidCredentialsError,
)
from src.cm_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.cm_gateway.auth.password import hash_password, verify_password
from src.cm_gateway.user.models import User
from src.cm_gateway.user.repository import InMemoryUserRepository
from src.cm_verification.domain.phone import normalize_mobile_number

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: InMemoryUserRepository) -> None:
        self._users = users

    def register(
        self,
        username: str,
        email: str,
        password: str,
        mobile_number: str | None = None,
    ) -> User:
        """Create an account. The mobile number stays unverified until the OTP flow."""
        user = self._users.create(
            username=username,
            email=email,
            password_hash=hash_password(password),
            mobile_number=normalize_mobile_number(mobile_number) if mobile_number else None,
        )
        logger.info("Registered user=%s", user.id)
        return user

    def login(self, username: str, password: str) -> tuple[User, str, str]:
        """Authenticate and return (user, access_token, refresh_token).

        "User not found" and "wrong password" both raise InvalidCredentialsError
        so usernames cannot be enumerated.
        """
        user = self._users.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountDisabledError()
        return user, create_access_token(user.id), create_refresh_token(user.id)

    def refresh(self, refresh_token: str) -> str:
        payload = decode_token(refresh_token, expected_type="refresh")
        return create_access_token(str(payload["sub"]))

    def bootstrap_admin(self, user: User) -> User:
        """Promote the caller to admin, allowed only while no admin exists."""
        if self._users.has_admin():
            raise ForbiddenError("An admin account already exists")
        logger.warning("Bootstrapping first admin: user=%s", user.id)
        return self._users.set_admin(user.id)

    def make_admin(self, granted_by: User, user_id: str) -> User:
        """Grant admin rights to another account. Idempotent."""
        user = self._users.set_admin(user_id)
        logger.warning("Admin granted: user=%s by=%s", user_id, granted_by.id)
        return user
