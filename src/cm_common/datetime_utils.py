"""UTC datetime utilities."""

from collections.abc import Callable
from datetime import datetime, timezone

# Injected into every store/service that evaluates expiry; tests pass a fake.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)
