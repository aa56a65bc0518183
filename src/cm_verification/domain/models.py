"""Domain models for cm_verification — pure dataclasses."""

import string
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class CodePolicy:
    """Parameters of one verification namespace."""

    namespace: str
    ttl: timedelta
    code_length: int = 6
    alphabet: str = string.digits


@dataclass(frozen=True)
class Challenge:
    subject: str             # phone number or lower-cased email
    code: str
    expires_at: datetime
    owner_id: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class ResetToken:
    token: str
    email: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class IssueResult:
    code: str
    expires_at: datetime
    delivered: bool
