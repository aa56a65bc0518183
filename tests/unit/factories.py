"""Builders shared by unit tests."""

from datetime import UTC, datetime

from src.cm_ads.infrastructure.memory_store import InMemoryAdRepository
from src.cm_gateway.user.models import User
from src.cm_gateway.user.repository import InMemoryUserRepository

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

# Pre-computed bcrypt hash; tests here never log in
FAKE_HASH = "$2b$12$abcdefghijklmnopqrstuuabcdefghijklmnopqrstuvwxyz01234"


def make_user(
    users: InMemoryUserRepository,
    username: str = "seller",
    verified: bool = True,
    mobile_number: str = "9876543210",
) -> User:
    user = users.create(
        username=username,
        email=f"{username}@example.com",
        password_hash=FAKE_HASH,
        mobile_number=mobile_number,
    )
    if verified:
        user = users.mark_mobile_verified(user.id, mobile_number)
    return user


def make_ad(ads: InMemoryAdRepository, user: User, title: str = "Bicycle", location: str = "Pune"):
    return ads.create(user_id=user.id, title=title, location=location, is_verified=user.mobile_verified)
