"""Unit tests for SMS and email senders, using httpx.MockTransport."""

import json

import httpx

from src.cm_verification.infrastructure.delivery import Fast2SmsSender, SendGridEmailSender

SMS_URL = "https://sms.test/bulk"
MAIL_URL = "https://mail.test/send"


def _transport(status: int, body: object, seen: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


class TestFast2Sms:
    async def test_success(self) -> None:
        seen: list[httpx.Request] = []
        sender = Fast2SmsSender(
            SMS_URL, "key-123", transport=_transport(200, {"return": True}, seen)
        )
        assert await sender.send("9876543210", "code 123456") is True

        request = seen[0]
        assert request.headers["authorization"] == "key-123"
        payload = json.loads(request.content)
        assert payload["numbers"] == "9876543210"
        assert payload["route"] == "q"

    async def test_provider_rejection(self) -> None:
        seen: list[httpx.Request] = []
        sender = Fast2SmsSender(
            SMS_URL, "key-123", transport=_transport(200, {"return": False, "message": "bad"}, seen)
        )
        assert await sender.send("9876543210", "code") is False

    async def test_http_error(self) -> None:
        seen: list[httpx.Request] = []
        sender = Fast2SmsSender(SMS_URL, "key-123", transport=_transport(500, {}, seen))
        assert await sender.send("9876543210", "code") is False

    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        sender = Fast2SmsSender(SMS_URL, "key-123", transport=httpx.MockTransport(handler))
        assert await sender.send("9876543210", "code") is False

    async def test_disabled_without_key(self) -> None:
        seen: list[httpx.Request] = []
        sender = Fast2SmsSender(SMS_URL, "", transport=_transport(200, {"return": True}, seen))
        assert sender.enabled is False
        assert await sender.send("9876543210", "code") is False
        assert seen == []


class TestSendGrid:
    async def test_success(self) -> None:
        seen: list[httpx.Request] = []
        sender = SendGridEmailSender(
            MAIL_URL, "sg-key", "noreply@test", transport=_transport(202, {}, seen)
        )
        assert await sender.send("a@example.com", "Reset", "Use 123456") is True

        request = seen[0]
        assert request.headers["Authorization"] == "Bearer sg-key"
        payload = json.loads(request.content)
        assert payload["personalizations"][0]["to"][0]["email"] == "a@example.com"
        assert payload["from"]["email"] == "noreply@test"

    async def test_failure(self) -> None:
        seen: list[httpx.Request] = []
        sender = SendGridEmailSender(
            MAIL_URL, "sg-key", "noreply@test", transport=_transport(401, {}, seen)
        )
        assert await sender.send("a@example.com", "Reset", "body") is False

    async def test_disabled_without_key(self) -> None:
        sender = SendGridEmailSender(MAIL_URL, "", "noreply@test")
        assert await sender.send("a@example.com", "Reset", "body") is False
