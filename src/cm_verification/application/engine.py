"""Generic one-time code state machine.

Per subject:  NoChallenge -> Issued(code, expires_at) -> Verified | Expired | Replaced

One engine instance per namespace (mobile-verify, password-reset), each with
its own store, locks, validity window and success callback.
"""

import hmac
import logging
import secrets
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from src.cm_common.datetime_utils import Clock, utc_now
from src.cm_common.errors import CodeExpiredError, CodeMismatchError, NoChallengeError
from src.cm_common.locks import KeyedLocks
from src.cm_verification.domain.models import Challenge, CodePolicy, IssueResult
from src.cm_verification.infrastructure.memory_store import InMemoryChallengeStore

logger = logging.getLogger(__name__)

R = TypeVar("R")

# (subject, code) -> delivered
Deliver = Callable[[str, str], Awaitable[bool]]


class VerificationCodeEngine(Generic[R]):
    def __init__(
        self,
        policy: CodePolicy,
        on_success: Callable[[Challenge], Awaitable[R]],
        store: InMemoryChallengeStore | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.policy = policy
        self._on_success = on_success
        self._store = store if store is not None else InMemoryChallengeStore()
        self._clock = clock
        self._locks = KeyedLocks()

    def generate_code(self) -> str:
        alphabet = self.policy.alphabet
        return "".join(secrets.choice(alphabet) for _ in range(self.policy.code_length))

    async def issue(
        self,
        subject: str,
        deliver: Deliver | None = None,
        owner_id: str | None = None,
    ) -> IssueResult:
        """Store a fresh code for `subject`, replacing any pending one, then deliver it.

        Delivery runs after the subject lock is released; its outcome is
        reported in IssueResult.delivered and never affects the stored challenge.
        """
        code = self.generate_code()
        now = self._clock()
        expires_at = now + self.policy.ttl
        purged = self._store.purge_expired(now)
        if purged:
            logger.debug("Purged %d expired %s codes", purged, self.policy.namespace)
        async with self._locks.get(subject):
            replaced = self._store.get(subject) is not None
            self._store.put(
                Challenge(subject=subject, code=code, expires_at=expires_at, owner_id=owner_id)
            )

        delivered = await deliver(subject, code) if deliver is not None else False
        logger.info(
            "Issued %s code: subject=%s replaced=%s delivered=%s",
            self.policy.namespace, _hint(subject), replaced, delivered,
        )
        return IssueResult(code=code, expires_at=expires_at, delivered=delivered)

    async def verify(self, subject: str, code: str) -> R:
        """Consume the pending challenge if `code` matches, then run the success callback.

        Raises:
            NoChallengeError: nothing pending (never issued, already used, or replaced
                and then used).
            CodeExpiredError: past expires_at; the stale challenge is deleted.
            CodeMismatchError: wrong code; the challenge stays for a retry.
        """
        async with self._locks.get(subject):
            challenge = self._store.get(subject)
            if challenge is None:
                raise NoChallengeError()
            if challenge.is_expired(self._clock()):
                self._store.delete(subject)
                logger.info("Expired %s code: subject=%s", self.policy.namespace, _hint(subject))
                raise CodeExpiredError()
            if not hmac.compare_digest(challenge.code.encode(), code.encode()):
                raise CodeMismatchError()
            self._store.delete(subject)

        logger.info("Verified %s code: subject=%s", self.policy.namespace, _hint(subject))
        return await self._on_success(challenge)

    def pending(self, subject: str) -> Challenge | None:
        return self._store.get(subject)


def _hint(subject: str) -> str:
    return f"{subject[:2]}***{subject[-2:]}" if len(subject) > 4 else "***"
