"""Outbound delivery of one-time codes.

Both senders are best-effort: they return False instead of raising when the
provider is not configured, unreachable, or rejects the request. The engine
treats False as "not delivered" and never rolls back the stored challenge.
"""

import logging
from typing import Protocol

import httpx

from src.cm_verification.domain.phone import mask_mobile_number

logger = logging.getLogger(__name__)


class SmsSender(Protocol):
    async def send(self, number: str, message: str) -> bool: ...


class EmailSender(Protocol):
    async def send(self, to_email: str, subject: str, body: str) -> bool: ...


class Fast2SmsSender:
    """Fast2SMS bulk API ("quick" route)."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def send(self, number: str, message: str) -> bool:
        if not self.enabled:
            logger.warning("SMS not sent to %s: FAST2SMS_API_KEY not set", mask_mobile_number(number))
            return False

        payload = {
            "route": "q",
            "message": message,
            "language": "english",
            "flash": 0,
            "numbers": number,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self._api_url,
                    json=payload,
                    headers={"authorization": self._api_key},
                )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("SMS delivery to %s failed: %s", mask_mobile_number(number), exc)
            return False

        if isinstance(body, dict) and body.get("return"):
            return True
        logger.warning("SMS provider rejected message to %s: %s", mask_mobile_number(number), body)
        return False


class SendGridEmailSender:
    def __init__(
        self,
        api_url: str,
        api_key: str,
        from_email: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._from_email = from_email
        self._timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def send(self, to_email: str, subject: str, body: str) -> bool:
        if not self.enabled:
            logger.warning("Email not sent: SENDGRID_API_KEY not set")
            return False

        payload = {
            "personalizations": [{"to": [{"email": to_email}], "subject": subject}],
            "from": {"email": self._from_email},
            "content": [{"type": "text/plain", "value": body}],
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._api_url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Email delivery failed: %s", exc)
            return False
        return True
