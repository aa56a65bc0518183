"""In-memory challenge and reset-token stores.

Short-lived, single-process caches. Callers hold the per-subject lock from
the engine around every read-then-write sequence. Expired entries are purged
lazily whenever a new one is stored; no timer runs.
"""

from datetime import datetime

from src.cm_verification.domain.models import Challenge, ResetToken


class InMemoryChallengeStore:
    """One live challenge per subject; put() replaces any previous one."""

    def __init__(self) -> None:
        self._challenges: dict[str, Challenge] = {}

    def put(self, challenge: Challenge) -> None:
        self._challenges[challenge.subject] = challenge

    def get(self, subject: str) -> Challenge | None:
        return self._challenges.get(subject)

    def delete(self, subject: str) -> None:
        self._challenges.pop(subject, None)

    def purge_expired(self, now: datetime) -> int:
        """Drop every challenge past its expiry; returns how many were removed."""
        stale = [s for s, c in self._challenges.items() if c.is_expired(now)]
        for subject in stale:
            del self._challenges[subject]
        return len(stale)

    def __len__(self) -> int:
        return len(self._challenges)


class InMemoryResetTokenStore:
    """Tokens by value, with one live token per email."""

    def __init__(self) -> None:
        self._tokens: dict[str, ResetToken] = {}
        self._by_email: dict[str, str] = {}

    def put(self, token: ResetToken) -> None:
        previous = self._by_email.get(token.email)
        if previous is not None:
            self._tokens.pop(previous, None)
        self._tokens[token.token] = token
        self._by_email[token.email] = token.token

    def get(self, token: str) -> ResetToken | None:
        return self._tokens.get(token)

    def delete(self, token: str) -> None:
        removed = self._tokens.pop(token, None)
        if removed is not None and self._by_email.get(removed.email) == token:
            del self._by_email[removed.email]

    def purge_expired(self, now: datetime) -> int:
        stale = [t.token for t in self._tokens.values() if t.is_expired(now)]
        for token in stale:
            self.delete(token)
        return len(stale)

    def __len__(self) -> int:
        return len(self._tokens)
