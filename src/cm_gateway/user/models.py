"""Account record for the in-memory user repository."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    id: str
    username: str
    email: str            # stored lower-cased
    password_hash: str
    created_at: datetime
    mobile_number: str | None = None
    mobile_verified: bool = False
    is_admin: bool = False
    is_active: bool = True
