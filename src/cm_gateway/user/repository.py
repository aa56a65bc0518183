"""In-memory account directory.

Also serves as the credential store for the password-reset flow
(`set_password_hash`) and as the target of the mobile-verification
success callback (`mark_mobile_verified`).
"""

import uuid
from dataclasses import replace

from src.cm_common.datetime_utils import Clock, utc_now
from src.cm_common.errors import AccountNotFoundError, EmailExistsError, UsernameExistsError
from src.cm_gateway.user.models import User


class InMemoryUserRepository:
    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._users: dict[str, User] = {}

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        mobile_number: str | None = None,
    ) -> User:
        if self.get_by_username(username) is not None:
            raise UsernameExistsError()
        if self.get_by_email(email) is not None:
            raise EmailExistsError()

        user = User(
            id=str(uuid.uuid4()),
            username=username,
            email=email.lower(),
            password_hash=password_hash,
            mobile_number=mobile_number,
            created_at=self._clock(),
        )
        self._users[user.id] = user
        return replace(user)

    def get(self, user_id: str) -> User | None:
        user = self._users.get(user_id)
        return replace(user) if user else None

    def get_by_username(self, username: str) -> User | None:
        for user in self._users.values():
            if user.username == username:
                return replace(user)
        return None

    def get_by_email(self, email: str) -> User | None:
        email = email.lower()
        for user in self._users.values():
            if user.email == email:
                return replace(user)
        return None

    def list_all(self) -> list[User]:
        """Every account, oldest first."""
        return [replace(u) for u in sorted(self._users.values(), key=lambda u: u.created_at)]

    def has_admin(self) -> bool:
        return any(u.is_admin for u in self._users.values())

    def set_admin(self, user_id: str) -> User:
        return self._update(user_id, is_admin=True)

    def set_password_hash(self, user_id: str, password_hash: str) -> User:
        return self._update(user_id, password_hash=password_hash)

    def mark_mobile_verified(self, user_id: str, mobile_number: str) -> User:
        return self._update(user_id, mobile_number=mobile_number, mobile_verified=True)

    def _update(self, user_id: str, **changes: object) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)
        updated = replace(user, **changes)  # type: ignore[arg-type]
        self._users[user_id] = updated
        return replace(updated)
