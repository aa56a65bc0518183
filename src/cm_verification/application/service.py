"""Mobile-number verification and password reset.

Both flows are thin wrappers around one VerificationCodeEngine each; they
differ only in subject normalization, delivery channel and success callback.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta

from src.cm_ads.infrastructure.memory_store import InMemoryAdRepository
from src.cm_common.datetime_utils import Clock, utc_now
from src.cm_common.enums import VerificationNamespace
from src.cm_common.errors import AppError, InvalidResetTokenError, NoChallengeError
from src.cm_common.locks import KeyedLocks
from src.cm_gateway.auth.password import hash_password
from src.cm_gateway.user.repository import InMemoryUserRepository
from src.cm_verification.application.engine import VerificationCodeEngine
from src.cm_verification.application.schemas import (
    ResetTokenResponse,
    SendOtpResponse,
    VerifyOtpResponse,
)
from src.cm_verification.domain.models import Challenge, CodePolicy, ResetToken
from src.cm_verification.domain.phone import mask_mobile_number, normalize_mobile_number
from src.cm_verification.infrastructure.delivery import EmailSender, SmsSender
from src.cm_verification.infrastructure.memory_store import InMemoryResetTokenStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MobileVerificationResult:
    user_id: str
    mobile_number: str
    ads_verified: int
    ads_failed: int


class MobileVerificationService:
    def __init__(
        self,
        users: InMemoryUserRepository,
        ads: InMemoryAdRepository,
        sms: SmsSender,
        ttl: timedelta = timedelta(minutes=10),
        code_length: int = 6,
        disclose_undelivered_codes: bool = False,
        clock: Clock = utc_now,
    ) -> None:
        self._users = users
        self._ads = ads
        self._sms = sms
        self._disclose = disclose_undelivered_codes
        self.engine: VerificationCodeEngine[MobileVerificationResult] = VerificationCodeEngine(
            CodePolicy(
                namespace=VerificationNamespace.MOBILE_VERIFY.value,
                ttl=ttl,
                code_length=code_length,
            ),
            on_success=self._on_verified,
            clock=clock,
        )

    async def send_code(self, user_id: str, raw_number: str) -> SendOtpResponse:
        number = normalize_mobile_number(raw_number)
        result = await self.engine.issue(number, deliver=self._deliver, owner_id=user_id)

        dev_code = None
        if not result.delivered and self._disclose:
            logger.warning("SMS undelivered; disclosing code locally for %s", mask_mobile_number(number))
            dev_code = result.code

        return SendOtpResponse(
            mobile_number=mask_mobile_number(number),
            expires_in=int(self.engine.policy.ttl.total_seconds()),
            delivered=result.delivered,
            dev_code=dev_code,
        )

    async def verify_code(self, user_id: str, raw_number: str, otp: str) -> VerifyOtpResponse:
        number = normalize_mobile_number(raw_number)
        pending = self.engine.pending(number)
        if pending is not None and pending.owner_id != user_id:
            # A code sent for another account is invisible to this caller
            raise NoChallengeError()
        result = await self.engine.verify(number, otp)
        return VerifyOtpResponse(
            mobile_number=mask_mobile_number(result.mobile_number),
            mobile_verified=True,
            ads_verified=result.ads_verified,
            ads_failed=result.ads_failed,
        )

    async def _deliver(self, number: str, code: str) -> bool:
        minutes = int(self.engine.policy.ttl.total_seconds() // 60)
        return await self._sms.send(
            number, f"Your verification code is {code}. It expires in {minutes} minutes."
        )

    async def _on_verified(self, challenge: Challenge) -> MobileVerificationResult:
        if challenge.owner_id is None:
            raise NoChallengeError()
        user = self._users.mark_mobile_verified(challenge.owner_id, challenge.subject)

        # Best-effort cascade: a failing ad never undoes the account verification
        verified = failed = 0
        for ad in self._ads.list_by_owner(user.id):
            if ad.is_verified:
                continue
            try:
                self._ads.set_verified(ad.id)
                verified += 1
            except AppError as exc:
                failed += 1
                logger.warning("Could not verify ad=%d for user=%s: %s", ad.id, user.id, exc.message)

        logger.info(
            "Mobile verified: user=%s ads_verified=%d ads_failed=%d", user.id, verified, failed
        )
        return MobileVerificationResult(
            user_id=user.id,
            mobile_number=challenge.subject,
            ads_verified=verified,
            ads_failed=failed,
        )


class PasswordResetService:
    def __init__(
        self,
        users: InMemoryUserRepository,
        email: EmailSender,
        code_ttl: timedelta = timedelta(minutes=15),
        token_ttl: timedelta = timedelta(minutes=15),
        code_length: int = 6,
        tokens: InMemoryResetTokenStore | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._users = users
        self._email = email
        self._token_ttl = token_ttl
        self._tokens = tokens if tokens is not None else InMemoryResetTokenStore()
        self._token_locks = KeyedLocks()
        self._clock = clock
        self.engine: VerificationCodeEngine[ResetToken] = VerificationCodeEngine(
            CodePolicy(
                namespace=VerificationNamespace.PASSWORD_RESET.value,
                ttl=code_ttl,
                code_length=code_length,
            ),
            on_success=self._mint_token,
            clock=clock,
        )

    async def request_reset(self, email: str) -> None:
        """Issue and email a reset code if the account exists.

        Returns nothing either way, so callers cannot learn whether the
        email is registered.
        """
        email = email.lower()
        user = self._users.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return
        await self.engine.issue(email, deliver=self._deliver, owner_id=user.id)

    async def verify_reset_code(self, email: str, otp: str) -> ResetTokenResponse:
        token = await self.engine.verify(email.lower(), otp)
        return ResetTokenResponse(
            reset_token=token.token,
            expires_in=int(self._token_ttl.total_seconds()),
        )

    async def complete_reset(self, email: str, token: str, new_password: str) -> None:
        email = email.lower()
        async with self._token_locks.get(email):
            reset = self._tokens.get(token)
            if reset is None or reset.email != email:
                raise InvalidResetTokenError()
            if reset.is_expired(self._clock()):
                self._tokens.delete(token)
                raise InvalidResetTokenError()

            user = self._users.get_by_email(email)
            if user is None:
                self._tokens.delete(token)
                raise InvalidResetTokenError()

            self._users.set_password_hash(user.id, hash_password(new_password))
            self._tokens.delete(token)

        logger.info("Password reset completed: user=%s", user.id)

    async def _deliver(self, email: str, code: str) -> bool:
        minutes = int(self.engine.policy.ttl.total_seconds() // 60)
        return await self._email.send(
            email,
            "Your password reset code",
            f"Use code {code} to reset your password. It expires in {minutes} minutes.\n"
            "If you did not request a reset, you can ignore this email.",
        )

    async def _mint_token(self, challenge: Challenge) -> ResetToken:
        token = ResetToken(
            token=secrets.token_urlsafe(32),
            email=challenge.subject,
            expires_at=self._clock() + self._token_ttl,
        )
        async with self._token_locks.get(challenge.subject):
            self._tokens.purge_expired(self._clock())
            self._tokens.put(token)
        return token
